"""
Namecheap Client

A Python client for the Namecheap domain registrar API.
Sync and asyncio clients over HTTPS with typed results.
"""

__version__ = "1.0.0"

from namecheap_client.client import NamecheapClient
from namecheap_client.async_client import AsyncNamecheapClient
from namecheap_client.models import (
    Credentials,
    ContactInfo,
    DomainCheckItem,
    DomainCheckResult,
    DomainContactsRequest,
    DomainContactsResult,
    DomainCreateRequest,
    DomainCreateResult,
    DomainInfo,
    DomainListItem,
    DomainListResult,
    DomainPricingResult,
    DomainReactivateResult,
    DomainRenewResult,
    PriceTier,
    Product,
    ProductAction,
    Tld,
    TldListResult,
)
from namecheap_client.exceptions import (
    NamecheapError,
    NamecheapConnectionError,
    NamecheapXMLError,
    NamecheapResponseError,
    NamecheapAPIError,
    NamecheapParameterError,
)

__all__ = [
    # Clients
    "NamecheapClient",
    "AsyncNamecheapClient",
    # Models
    "Credentials",
    "ContactInfo",
    "DomainCheckItem",
    "DomainCheckResult",
    "DomainContactsRequest",
    "DomainContactsResult",
    "DomainCreateRequest",
    "DomainCreateResult",
    "DomainInfo",
    "DomainListItem",
    "DomainListResult",
    "DomainPricingResult",
    "DomainReactivateResult",
    "DomainRenewResult",
    "PriceTier",
    "Product",
    "ProductAction",
    "Tld",
    "TldListResult",
    # Exceptions
    "NamecheapError",
    "NamecheapConnectionError",
    "NamecheapXMLError",
    "NamecheapResponseError",
    "NamecheapAPIError",
    "NamecheapParameterError",
]
