"""
Namecheap Input Validation

Checks applied to caller arguments before any request is sent.
"""

import logging
import re
from typing import List, Sequence, Tuple

from namecheap_client.exceptions import NamecheapParameterError

logger = logging.getLogger("namecheap.validation")

# API limit for namecheap.domains.check
MAX_CHECK_DOMAINS = 50

MIN_DOMAIN_LENGTH = 3
MAX_DOMAIN_LENGTH = 253

# Dot-separated labels of letters, digits and inner hyphens, 63 chars max each
DOMAIN_PATTERN = re.compile(
    r'^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?(\.[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)*$',
    re.IGNORECASE | re.ASCII
)


def is_valid_domain_name(domain: str) -> bool:
    """Basic hostname syntax check."""
    if not domain or not domain.strip():
        return False

    if len(domain) < MIN_DOMAIN_LENGTH or len(domain) > MAX_DOMAIN_LENGTH:
        return False

    return DOMAIN_PATTERN.fullmatch(domain) is not None


def filter_domain_names(domains: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Split a check batch into valid and invalid names.

    Args:
        domains: Names to check, at most MAX_CHECK_DOMAINS

    Returns:
        Tuple of (valid names, invalid names), both in input order

    Raises:
        NamecheapParameterError: If the batch is empty or too large
    """
    if not domains:
        raise NamecheapParameterError("At least one domain name is required")

    if len(domains) > MAX_CHECK_DOMAINS:
        raise NamecheapParameterError(
            f"Only {MAX_CHECK_DOMAINS} domains are allowed in a single check command",
            value=str(len(domains)),
        )

    valid = []
    invalid = []
    for domain in domains:
        if is_valid_domain_name(domain):
            valid.append(domain)
        else:
            invalid.append(domain)

    if invalid:
        logger.warning(f"{len(invalid)} invalid domain names were filtered out")

    return valid, invalid


def require_domain_name(domain: str) -> str:
    """Reject blank domain arguments."""
    if domain is None or not domain.strip():
        raise NamecheapParameterError("Domain cannot be null or empty")
    return domain


def require_positive(value: int, name: str) -> int:
    """Reject zero or negative counts."""
    if value is None or value <= 0:
        raise NamecheapParameterError(f"{name} must be greater than zero", value=str(value))
    return value
