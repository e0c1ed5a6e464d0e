"""
Alphabetical grouper - partitions companies into letter buckets.

Only the ASCII letters get their own bucket. Anything else, whether a digit,
a symbol or a non-Latin script, lands in the catch-all "0-9" bucket.
"""
import string
from typing import Callable, Dict, Iterable, List, Optional

from company_directory.core.exceptions import EmptyCompanyNameException
from company_directory.core.logging import get_logger
from company_directory.services.company_aggregator import CompanyEntry

logger = get_logger(__name__)

CATCH_ALL_BUCKET = "0-9"
BUCKET_LABELS: List[str] = list(string.ascii_uppercase) + [CATCH_ALL_BUCKET]

BucketKeyFn = Callable[[str], str]


def bucket_key(name: str) -> str:
    """
    Bucket label for a company name.

    Raises:
        EmptyCompanyNameException: If name is empty.
    """
    if not name:
        raise EmptyCompanyNameException()

    first = name[0]
    if first in string.ascii_letters:
        return first.upper()
    return CATCH_ALL_BUCKET


class AlphabeticalGrouper:
    """Groups name-sorted companies under A..Z and 0-9."""

    def __init__(self, bucket_key_fn: Optional[BucketKeyFn] = None):
        self.bucket_key_fn = bucket_key_fn or bucket_key

    @property
    def letters(self) -> List[str]:
        """Navigation labels, always the full fixed sequence."""
        return list(BUCKET_LABELS)

    def group(self, companies: Iterable[CompanyEntry]) -> Dict[str, List[CompanyEntry]]:
        """
        Partition companies into buckets.

        Every fixed label is present in the result, in navigation order, even
        when empty. Members keep their input order.
        """
        buckets: Dict[str, List[CompanyEntry]] = {label: [] for label in BUCKET_LABELS}

        for company in companies:
            try:
                key = self.bucket_key_fn(company.name)
            except EmptyCompanyNameException:
                logger.warning("company_skipped_empty_name", stage="group")
                continue
            buckets.setdefault(key, []).append(company)

        return buckets
