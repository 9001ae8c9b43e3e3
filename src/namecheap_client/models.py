"""
Namecheap Client Models

Data classes for Namecheap API requests and responses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

SANDBOX_URL = "https://api.sandbox.namecheap.com/xml.response"
PRODUCTION_URL = "https://api.namecheap.com/xml.response"

Params = List[Tuple[str, str]]


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class Credentials:
    """API credentials and endpoint selection.

    Namecheap whitelists API access per client IP, so client_ip must be
    the public address the requests originate from.
    """
    api_user: str
    api_key: str
    client_ip: str
    username: str = ""  # Defaults to api_user
    sandbox: bool = False

    def __post_init__(self):
        if not self.username:
            self.username = self.api_user

    @property
    def endpoint(self) -> str:
        """Base URL for the selected environment."""
        return SANDBOX_URL if self.sandbox else PRODUCTION_URL


# =============================================================================
# Response Models
# =============================================================================

@dataclass
class APIResponse:
    """Parsed response envelope."""
    status: str
    command: str = ""
    server: str = ""
    execution_time: float = 0.0
    warnings: List[str] = field(default_factory=list)
    root: Any = None  # lxml element

    @property
    def success(self) -> bool:
        """Check if response indicates success."""
        return self.status.upper() == "OK"


# -----------------------------------------------------------------------------
# Domain Response Models
# -----------------------------------------------------------------------------

@dataclass
class DomainCheckItem:
    """Single domain availability result."""
    domain: str
    available: bool = False
    is_premium_name: bool = False
    icann_fee: float = 0.0
    premium_registration_price: float = 0.0
    premium_renewal_price: float = 0.0
    eap_fee: float = 0.0
    error_no: int = 0
    message: Optional[str] = None


@dataclass
class DomainCheckResult:
    """Domain check response.

    invalid_names holds the names dropped by the syntax check before the
    request was sent; they have no entry in results.
    """
    results: List[DomainCheckItem] = field(default_factory=list)
    invalid_names: List[str] = field(default_factory=list)

    def is_available(self, name: str) -> bool:
        """Check if specific domain is available."""
        for item in self.results:
            if item.domain.lower() == name.lower():
                return item.available
        return False


@dataclass
class DomainInfo:
    """Domain info response."""
    id: int
    domain_name: str = ""
    owner_name: str = ""
    is_owner: bool = False
    status: str = ""
    created_date: Optional[datetime] = None
    expired_date: Optional[datetime] = None
    dns_provider_type: str = ""
    nameservers: List[str] = field(default_factory=list)


@dataclass
class DomainListItem:
    """Single domain in the account listing."""
    id: int
    name: str
    user: str = ""
    created: Optional[datetime] = None
    expires: Optional[datetime] = None
    is_expired: bool = False
    is_locked: bool = False
    auto_renew: bool = False
    whois_guard: str = ""
    is_premium: bool = False
    is_our_dns: bool = False


@dataclass
class DomainListResult:
    """Domain list response."""
    domains: List[DomainListItem] = field(default_factory=list)
    total_items: int = 0
    current_page: int = 0
    page_size: int = 0


@dataclass
class DomainCreateResult:
    """Domain create response."""
    domain: str
    registered: bool = False
    charged_amount: float = 0.0
    domain_id: int = 0
    order_id: int = 0
    transaction_id: int = 0
    whoisguard_enabled: bool = False
    non_real_time_domain: bool = False


@dataclass
class DomainRenewResult:
    """Domain renew response."""
    domain_name: str
    domain_id: int = 0
    renewed: bool = False
    charged_amount: float = 0.0
    order_id: int = 0
    transaction_id: int = 0
    expired_date: Optional[datetime] = None


@dataclass
class DomainReactivateResult:
    """Domain reactivate response."""
    domain: str
    is_success: bool = False
    charged_amount: float = 0.0
    order_id: int = 0
    transaction_id: int = 0


# -----------------------------------------------------------------------------
# Contact Models
# -----------------------------------------------------------------------------

# Wire names in the order Namecheap documents them
CONTACT_FIELDS = [
    ("organization_name", "OrganizationName"),
    ("job_title", "JobTitle"),
    ("first_name", "FirstName"),
    ("last_name", "LastName"),
    ("address1", "Address1"),
    ("address2", "Address2"),
    ("city", "City"),
    ("state_province", "StateProvince"),
    ("state_province_choice", "StateProvinceChoice"),
    ("postal_code", "PostalCode"),
    ("country", "Country"),
    ("phone", "Phone"),
    ("phone_ext", "PhoneExt"),
    ("fax", "Fax"),
    ("email_address", "EmailAddress"),
]

# Contact roles as (attribute name, wire prefix)
CONTACT_ROLES = [
    ("registrant", "Registrant"),
    ("tech", "Tech"),
    ("admin", "Admin"),
    ("aux_billing", "AuxBilling"),
]


@dataclass
class ContactInfo:
    """Contact record for one role.

    Namecheap requires first_name, last_name, address1, city,
    state_province, postal_code, country, phone (+NNN.NNNNNNNNNN) and
    email_address when setting contacts.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email_address: Optional[str] = None
    organization_name: Optional[str] = None
    job_title: Optional[str] = None
    address2: Optional[str] = None
    state_province_choice: Optional[str] = None
    phone_ext: Optional[str] = None
    fax: Optional[str] = None
    read_only: bool = False

    def to_params(self, prefix: str) -> Params:
        """Serialize as <prefix><Field> parameters, skipping unset fields."""
        params = []
        for attr, wire_name in CONTACT_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                params.append((prefix + wire_name, str(value)))
        return params


def _contacts_to_params(contacts: Dict[str, Optional[ContactInfo]]) -> Params:
    params = []
    for attr, prefix in CONTACT_ROLES:
        contact = contacts.get(attr)
        if contact is not None:
            params.extend(contact.to_params(prefix))
    return params


@dataclass
class DomainContactsResult:
    """Domain contacts response."""
    domain: str
    domain_name_id: int = 0
    registrant: Optional[ContactInfo] = None
    tech: Optional[ContactInfo] = None
    admin: Optional[ContactInfo] = None
    aux_billing: Optional[ContactInfo] = None


# -----------------------------------------------------------------------------
# Pricing Models
# -----------------------------------------------------------------------------

@dataclass
class PriceTier:
    """Price for one duration of a product."""
    duration: int
    duration_type: str
    price: float
    regular_price: float
    your_price: float
    currency: str = ""
    additional_cost: float = 0.0
    promotion_price: float = 0.0


@dataclass
class Product:
    """Priced product, e.g. a TLD."""
    product_name: str
    prices: List[PriceTier] = field(default_factory=list)


@dataclass
class ProductAction:
    """Products priced for one action (register, renew, transfer...)."""
    action_name: str
    products: List[Product] = field(default_factory=list)


@dataclass
class DomainPricingResult:
    """Pricing catalog response."""
    product_type: str
    timestamp: datetime
    actions: List[ProductAction] = field(default_factory=list)


# -----------------------------------------------------------------------------
# TLD Models
# -----------------------------------------------------------------------------

@dataclass
class Tld:
    """Supported top-level domain."""
    name: str
    description: str = ""
    non_real_time: bool = False
    min_register_years: int = 0
    max_register_years: int = 0
    min_renew_years: int = 0
    max_renew_years: int = 0
    min_transfer_years: int = 0
    max_transfer_years: int = 0
    is_api_registerable: bool = False
    is_api_renewable: bool = False
    is_api_transferable: bool = False
    is_epp_required: bool = False
    is_disable_mod_contact: bool = False
    is_disable_wg_allot: bool = False
    is_include_in_extended_search_only: bool = False
    sequence_number: int = 0
    type: str = ""
    is_supports_idn: bool = False
    category: str = ""


@dataclass
class TldListResult:
    """TLD list response."""
    timestamp: datetime
    tlds: List[Tld] = field(default_factory=list)


# =============================================================================
# Request Models
# =============================================================================

def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


@dataclass
class DomainCreateRequest:
    """Domain create request."""
    domain_name: str
    registrant: ContactInfo
    years: int = 1
    tech: Optional[ContactInfo] = None  # Falls back to registrant
    admin: Optional[ContactInfo] = None  # Falls back to registrant
    aux_billing: Optional[ContactInfo] = None  # Falls back to registrant
    nameservers: List[str] = field(default_factory=list)
    promotion_code: Optional[str] = None
    add_free_whoisguard: bool = True
    wg_enabled: bool = True
    is_premium_domain: bool = False
    premium_price: Optional[float] = None
    eap_fee: Optional[float] = None

    def to_params(self) -> Params:
        """Serialize as ordered query parameters."""
        params = [
            ("DomainName", self.domain_name),
            ("Years", str(self.years)),
        ]
        if self.promotion_code:
            params.append(("PromotionCode", self.promotion_code))

        params.extend(_contacts_to_params({
            "registrant": self.registrant,
            "tech": self.tech or self.registrant,
            "admin": self.admin or self.registrant,
            "aux_billing": self.aux_billing or self.registrant,
        }))

        if self.nameservers:
            params.append(("Nameservers", ",".join(self.nameservers)))
        params.append(("AddFreeWhoisguard", _yes_no(self.add_free_whoisguard)))
        params.append(("WGEnabled", _yes_no(self.wg_enabled)))

        if self.is_premium_domain:
            params.append(("IsPremiumDomain", "True"))
            if self.premium_price is not None:
                params.append(("PremiumPrice", f"{self.premium_price:.2f}"))
        if self.eap_fee is not None:
            params.append(("EapFee", f"{self.eap_fee:.2f}"))
        return params


@dataclass
class DomainContactsRequest:
    """Set-contacts request. All four roles are required by the API."""
    domain_name: str
    registrant: ContactInfo
    tech: ContactInfo
    admin: ContactInfo
    aux_billing: ContactInfo

    def to_params(self) -> Params:
        """Serialize as ordered query parameters."""
        contacts = {attr: getattr(self, attr) for attr, _ in CONTACT_ROLES}
        return [("DomainName", self.domain_name)] + _contacts_to_params(contacts)
