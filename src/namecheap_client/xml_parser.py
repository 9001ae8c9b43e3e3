"""
Namecheap XML Parser

Parses Namecheap API XML responses.

Every parse_* method validates the response envelope first, so a
Status="ERROR" response raises NamecheapAPIError from any of them.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from lxml import etree

from namecheap_client.exceptions import (
    NamecheapAPIError,
    NamecheapResponseError,
    NamecheapXMLError,
)
from namecheap_client.models import (
    CONTACT_FIELDS,
    APIResponse,
    ContactInfo,
    DomainCheckItem,
    DomainCheckResult,
    DomainContactsResult,
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

logger = logging.getLogger("namecheap.parser")

# Namespaces
NS = {
    "nc": "http://api.namecheap.com/xml.response",
}

# Namecheap dates, e.g. 11/04/2014 or 3/1/2013 11:42:09 AM
DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %I:%M:%S %p",
)

# Secure parser
_parser = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_blank_text=True,
)


def _parse_date(text: Optional[str]) -> Optional[datetime]:
    """Parse Namecheap date string."""
    if not text or not text.strip():
        return None
    text = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise NamecheapXMLError(f"Invalid date: {text}")


def _try_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _try_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None


def _attr(elem: etree._Element, name: str, default: str = "") -> str:
    """Return attribute value or default."""
    value = elem.get(name)
    return value if value is not None else default


def _attr_bool(elem: etree._Element, name: str, default: bool = False) -> bool:
    """Return attribute as bool; only "true" (any case) is true."""
    value = elem.get(name)
    if not value:
        return default
    return value.strip().lower() == "true"


def _attr_int(elem: etree._Element, name: str, default: int = 0) -> int:
    value = _try_int(elem.get(name))
    return default if value is None else value


def _attr_float(elem: etree._Element, name: str, default: float = 0.0) -> float:
    value = _try_float(elem.get(name))
    return default if value is None else value


def _find_text(elem: etree._Element, path: str, default: str = None) -> Optional[str]:
    """Find element and return text."""
    found = elem.find(path, NS)
    if found is not None and found.text:
        return found.text.strip()
    return default


def _find_all_text(elem: etree._Element, path: str) -> List[str]:
    """Find all elements and return their text."""
    return [e.text.strip() for e in elem.findall(path, NS) if e.text]


def _find_int(elem: etree._Element, path: str, default: int = 0) -> int:
    value = _try_int(_find_text(elem, path))
    return default if value is None else value


def _require(parent: etree._Element, tag: str) -> etree._Element:
    """Find a child element that must be present."""
    found = parent.find(f"nc:{tag}", NS)
    if found is None:
        raise NamecheapResponseError(f"Invalid response structure: {tag} element not found")
    return found


def _parse_xml(xml_data: Union[bytes, str]) -> etree._Element:
    """Parse XML with secure parser."""
    if isinstance(xml_data, str):
        xml_data = xml_data.encode("utf-8")
    try:
        return etree.fromstring(xml_data, _parser)
    except etree.XMLSyntaxError as e:
        raise NamecheapXMLError(f"XML parse error: {e}") from e


def _command_response(xml_data: Union[bytes, str]) -> etree._Element:
    """Validate the envelope and return its CommandResponse element."""
    response = XMLParser.parse_response(xml_data)
    return _require(response.root, "CommandResponse")


def _parse_contact(elem: Optional[etree._Element]) -> Optional[ContactInfo]:
    if elem is None:
        return None
    fields = {attr: _find_text(elem, f"nc:{wire_name}") for attr, wire_name in CONTACT_FIELDS}
    return ContactInfo(read_only=_attr_bool(elem, "ReadOnly"), **fields)


def _parse_price(elem: etree._Element) -> Optional[PriceTier]:
    duration = _try_int(elem.get("Duration"))
    price = _try_float(elem.get("Price"))
    regular_price = _try_float(elem.get("RegularPrice"))
    your_price = _try_float(elem.get("YourPrice"))

    if None in (duration, price, regular_price, your_price):
        return None

    return PriceTier(
        duration=duration,
        duration_type=_attr(elem, "DurationType"),
        price=price,
        regular_price=regular_price,
        your_price=your_price,
        currency=_attr(elem, "Currency"),
        additional_cost=_attr_float(elem, "AdditionalCost"),
        promotion_price=_attr_float(elem, "PromotionPrice"),
    )


class XMLParser:
    """
    Parses Namecheap XML responses.

    All methods are static and return structured response objects.
    """

    @staticmethod
    def parse_response(xml_data: Union[bytes, str]) -> APIResponse:
        """
        Parse the response envelope.

        Args:
            xml_data: Raw XML

        Returns:
            APIResponse object

        Raises:
            NamecheapXMLError: If the body is not well-formed XML
            NamecheapResponseError: If the Status attribute is missing
            NamecheapAPIError: If Status is ERROR
        """
        root = _parse_xml(xml_data)

        status = root.get("Status")
        if status is None:
            raise NamecheapResponseError("Invalid response structure: Status attribute not found")

        if status.strip().upper() == "ERROR":
            errors = []
            for error in root.findall("nc:Errors/nc:Error", NS):
                number = _try_int(error.get("Number"))
                errors.append((number, (error.text or "").strip()))
            raise NamecheapAPIError(errors)

        warnings = _find_all_text(root, "nc:Warnings/nc:Warning")
        for warning in warnings:
            logger.warning(f"API warning: {warning}")

        return APIResponse(
            status=status,
            command=_find_text(root, "nc:RequestedCommand", ""),
            server=_find_text(root, "nc:Server", ""),
            execution_time=_try_float(_find_text(root, "nc:ExecutionTime")) or 0.0,
            warnings=warnings,
            root=root,
        )

    # =========================================================================
    # Domain Responses
    # =========================================================================

    @staticmethod
    def parse_domain_check(xml_data: Union[bytes, str]) -> DomainCheckResult:
        """
        Parse namecheap.domains.check response.

        Returns:
            DomainCheckResult with one item per DomainCheckResult element
        """
        command_response = _command_response(xml_data)

        results = []
        for elem in command_response.findall("nc:DomainCheckResult", NS):
            description = _attr(elem, "Description").strip()
            results.append(DomainCheckItem(
                domain=_attr(elem, "Domain"),
                available=_attr_bool(elem, "Available"),
                is_premium_name=_attr_bool(elem, "IsPremiumName"),
                icann_fee=_attr_float(elem, "IcannFee"),
                premium_registration_price=_attr_float(elem, "PremiumRegistrationPrice"),
                premium_renewal_price=_attr_float(elem, "PremiumRenewalPrice"),
                eap_fee=_attr_float(elem, "EapFee"),
                error_no=_attr_int(elem, "ErrorNo"),
                message=description or None,
            ))

        return DomainCheckResult(results=results)

    @staticmethod
    def parse_domain_create(xml_data: Union[bytes, str]) -> DomainCreateResult:
        """Parse namecheap.domains.create response."""
        elem = _require(_command_response(xml_data), "DomainCreateResult")

        return DomainCreateResult(
            domain=_attr(elem, "Domain"),
            registered=_attr_bool(elem, "Registered"),
            charged_amount=_attr_float(elem, "ChargedAmount"),
            domain_id=_attr_int(elem, "DomainID"),
            order_id=_attr_int(elem, "OrderID"),
            transaction_id=_attr_int(elem, "TransactionID"),
            whoisguard_enabled=_attr_bool(elem, "WhoisguardEnable"),
            non_real_time_domain=_attr_bool(elem, "NonRealTimeDomain"),
        )

    @staticmethod
    def parse_domain_info(xml_data: Union[bytes, str]) -> DomainInfo:
        """
        Parse namecheap.domains.getInfo response.

        Missing DomainDetails or DnsDetails leave the related fields at
        their defaults; only DomainGetInfoResult itself is required.
        """
        elem = _require(_command_response(xml_data), "DomainGetInfoResult")

        created_date = None
        expired_date = None
        details = elem.find("nc:DomainDetails", NS)
        if details is not None:
            created_date = _parse_date(_find_text(details, "nc:CreatedDate"))
            expired_date = _parse_date(_find_text(details, "nc:ExpiredDate"))

        dns_provider_type = ""
        nameservers = []
        dns = elem.find("nc:DnsDetails", NS)
        if dns is not None:
            dns_provider_type = _attr(dns, "ProviderType")
            nameservers = _find_all_text(dns, "nc:Nameserver")

        return DomainInfo(
            id=_attr_int(elem, "ID"),
            domain_name=_attr(elem, "DomainName"),
            owner_name=_attr(elem, "OwnerName"),
            is_owner=_attr_bool(elem, "IsOwner"),
            status=_attr(elem, "Status"),
            created_date=created_date,
            expired_date=expired_date,
            dns_provider_type=dns_provider_type,
            nameservers=nameservers,
        )

    @staticmethod
    def parse_domain_list(xml_data: Union[bytes, str]) -> DomainListResult:
        """Parse namecheap.domains.getList response."""
        command_response = _command_response(xml_data)
        list_elem = _require(command_response, "DomainGetListResult")

        domains = []
        for elem in list_elem.findall("nc:Domain", NS):
            domains.append(DomainListItem(
                id=_attr_int(elem, "ID"),
                name=_attr(elem, "Name"),
                user=_attr(elem, "User"),
                created=_parse_date(elem.get("Created")),
                expires=_parse_date(elem.get("Expires")),
                is_expired=_attr_bool(elem, "IsExpired"),
                is_locked=_attr_bool(elem, "IsLocked"),
                auto_renew=_attr_bool(elem, "AutoRenew"),
                whois_guard=_attr(elem, "WhoisGuard"),
                is_premium=_attr_bool(elem, "IsPremium"),
                is_our_dns=_attr_bool(elem, "IsOurDNS"),
            ))

        paging_fields = {}
        paging = command_response.find("nc:Paging", NS)
        if paging is not None:
            paging_fields = dict(
                total_items=_find_int(paging, "nc:TotalItems"),
                current_page=_find_int(paging, "nc:CurrentPage"),
                page_size=_find_int(paging, "nc:PageSize"),
            )

        return DomainListResult(domains=domains, **paging_fields)

    @staticmethod
    def parse_domain_contacts(xml_data: Union[bytes, str]) -> DomainContactsResult:
        """Parse namecheap.domains.getContacts response."""
        elem = _require(_command_response(xml_data), "DomainContactsResult")

        return DomainContactsResult(
            domain=_attr(elem, "Domain"),
            domain_name_id=_attr_int(elem, "domainnameid"),
            registrant=_parse_contact(elem.find("nc:Registrant", NS)),
            tech=_parse_contact(elem.find("nc:Tech", NS)),
            admin=_parse_contact(elem.find("nc:Admin", NS)),
            aux_billing=_parse_contact(elem.find("nc:AuxBilling", NS)),
        )

    @staticmethod
    def parse_domain_set_contacts(xml_data: Union[bytes, str]) -> bool:
        """Parse namecheap.domains.setContacts response. Returns IsSuccess."""
        elem = _require(_command_response(xml_data), "DomainSetContactResult")
        return _attr_bool(elem, "IsSuccess")

    @staticmethod
    def parse_registrar_lock(xml_data: Union[bytes, str]) -> bool:
        """
        Parse namecheap.domains.getRegistrarLock response.

        Returns:
            True if the domain is locked for registrar transfer

        Raises:
            NamecheapResponseError: If RegistrarLockStatus is missing or not a boolean
        """
        elem = _require(_command_response(xml_data), "DomainGetRegistrarLockResult")

        status = (elem.get("RegistrarLockStatus") or "").strip().lower()
        if status not in ("true", "false"):
            raise NamecheapResponseError("Invalid or missing RegistrarLockStatus attribute")

        return status == "true"

    @staticmethod
    def parse_set_registrar_lock(xml_data: Union[bytes, str]) -> bool:
        """Parse namecheap.domains.setRegistrarLock response. Returns IsSuccess."""
        elem = _require(_command_response(xml_data), "DomainSetRegistrarLockResult")
        return _attr_bool(elem, "IsSuccess")

    @staticmethod
    def parse_tld_list(xml_data: Union[bytes, str]) -> TldListResult:
        """Parse namecheap.domains.getTldList response."""
        tlds_elem = _require(_command_response(xml_data), "Tlds")

        tlds = []
        for elem in tlds_elem.findall("nc:Tld", NS):
            tlds.append(Tld(
                name=_attr(elem, "Name"),
                description=(elem.text or "").strip(),
                non_real_time=_attr_bool(elem, "NonRealTime"),
                min_register_years=_attr_int(elem, "MinRegisterYears"),
                max_register_years=_attr_int(elem, "MaxRegisterYears"),
                min_renew_years=_attr_int(elem, "MinRenewYears"),
                max_renew_years=_attr_int(elem, "MaxRenewYears"),
                min_transfer_years=_attr_int(elem, "MinTransferYears"),
                max_transfer_years=_attr_int(elem, "MaxTransferYears"),
                is_api_registerable=_attr_bool(elem, "IsApiRegisterable"),
                is_api_renewable=_attr_bool(elem, "IsApiRenewable"),
                is_api_transferable=_attr_bool(elem, "IsApiTransferable"),
                is_epp_required=_attr_bool(elem, "IsEppRequired"),
                is_disable_mod_contact=_attr_bool(elem, "IsDisableModContact"),
                is_disable_wg_allot=_attr_bool(elem, "IsDisableWGAllot"),
                is_include_in_extended_search_only=_attr_bool(elem, "IsIncludeInExtendedSearchOnly"),
                sequence_number=_attr_int(elem, "SequenceNumber"),
                type=_attr(elem, "Type"),
                is_supports_idn=_attr_bool(elem, "IsSupportsIDN"),
                category=_attr(elem, "Category"),
            ))

        return TldListResult(timestamp=datetime.now(timezone.utc), tlds=tlds)

    @staticmethod
    def parse_domain_renew(xml_data: Union[bytes, str]) -> DomainRenewResult:
        """Parse namecheap.domains.renew response."""
        elem = _require(_command_response(xml_data), "DomainRenewResult")

        expired_date = None
        details = elem.find("nc:DomainDetails", NS)
        if details is not None:
            expired_date = _parse_date(_find_text(details, "nc:ExpiredDate"))

        return DomainRenewResult(
            domain_name=_attr(elem, "DomainName"),
            domain_id=_attr_int(elem, "DomainID"),
            renewed=_attr_bool(elem, "Renew"),
            charged_amount=_attr_float(elem, "ChargedAmount"),
            order_id=_attr_int(elem, "OrderID"),
            transaction_id=_attr_int(elem, "TransactionID"),
            expired_date=expired_date,
        )

    @staticmethod
    def parse_domain_reactivate(xml_data: Union[bytes, str]) -> DomainReactivateResult:
        """Parse namecheap.domains.reActivate response."""
        elem = _require(_command_response(xml_data), "DomainReactivateResult")

        return DomainReactivateResult(
            domain=_attr(elem, "Domain"),
            is_success=_attr_bool(elem, "IsSuccess"),
            charged_amount=_attr_float(elem, "ChargedAmount"),
            order_id=_attr_int(elem, "OrderID"),
            transaction_id=_attr_int(elem, "TransactionID"),
        )

    # =========================================================================
    # User Responses
    # =========================================================================

    @staticmethod
    def parse_pricing(xml_data: Union[bytes, str]) -> DomainPricingResult:
        """
        Parse namecheap.users.getPricing response.

        Catalog layout:
            ProductType > ProductCategory (action) > Product > Price

        Price elements lacking a numeric Duration, Price, RegularPrice or
        YourPrice are skipped.
        """
        pricing = _require(_command_response(xml_data), "UserGetPricingResult")
        product_type = _require(pricing, "ProductType")

        actions = []
        for category in product_type.findall("nc:ProductCategory", NS):
            products = []

            for product_elem in category.findall("nc:Product", NS):
                product_name = _attr(product_elem, "Name")

                prices = []
                for price_elem in product_elem.findall("nc:Price", NS):
                    tier = _parse_price(price_elem)
                    if tier is None:
                        logger.debug(f"Skipping malformed price for {product_name}")
                        continue
                    prices.append(tier)

                products.append(Product(product_name=product_name, prices=prices))

            actions.append(ProductAction(action_name=_attr(category, "Name"), products=products))

        return DomainPricingResult(
            product_type=_attr(product_type, "Name"),
            timestamp=datetime.now(timezone.utc),
            actions=actions,
        )
