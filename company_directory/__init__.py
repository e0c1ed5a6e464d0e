"""Company directory for a job board."""

__version__ = "1.3.0"
