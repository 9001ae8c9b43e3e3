"""
Namecheap Client

High-level client for the Namecheap domain API.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Union

import httpx

from namecheap_client.connection import APIConnection
from namecheap_client.exceptions import NamecheapParameterError
from namecheap_client.models import (
    Credentials,
    DomainCheckResult,
    DomainContactsRequest,
    DomainContactsResult,
    DomainCreateRequest,
    DomainCreateResult,
    DomainInfo,
    DomainListResult,
    DomainPricingResult,
    DomainReactivateResult,
    DomainRenewResult,
    TldListResult,
)
from namecheap_client.query import (
    CMD_DOMAINS_CHECK,
    CMD_DOMAINS_CREATE,
    CMD_DOMAINS_GET_CONTACTS,
    CMD_DOMAINS_GET_INFO,
    CMD_DOMAINS_GET_LIST,
    CMD_DOMAINS_GET_REGISTRAR_LOCK,
    CMD_DOMAINS_GET_TLD_LIST,
    CMD_DOMAINS_REACTIVATE,
    CMD_DOMAINS_RENEW,
    CMD_DOMAINS_SET_CONTACTS,
    CMD_DOMAINS_SET_REGISTRAR_LOCK,
    CMD_USERS_GET_PRICING,
    Query,
)
from namecheap_client.validation import (
    filter_domain_names,
    require_domain_name,
    require_positive,
)
from namecheap_client.xml_parser import XMLParser

logger = logging.getLogger("namecheap.client")


def build_list_query(
    query: Query,
    list_type: Optional[str] = None,
    search_term: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    sort_by: Optional[str] = None,
) -> Query:
    """Add the optional getList filters that were supplied."""
    if list_type:
        query.add_parameter("ListType", list_type)
    if search_term:
        query.add_parameter("SearchTerm", search_term)
    if page is not None:
        query.add_parameter("Page", str(require_positive(page, "Page")))
    if page_size is not None:
        query.add_parameter("PageSize", str(require_positive(page_size, "PageSize")))
    if sort_by:
        query.add_parameter("SortBy", sort_by)
    return query


def build_pricing_query(
    query: Query,
    product_type: str = "DOMAIN",
    product_category: Optional[str] = None,
    action_name: Optional[str] = None,
    product_name: Optional[str] = None,
) -> Query:
    """Add getPricing filters; ProductType is always sent."""
    query.add_parameter("ProductType", product_type)
    if product_category:
        query.add_parameter("ProductCategory", product_category)
    if action_name:
        query.add_parameter("ActionName", action_name)
    if product_name:
        query.add_parameter("ProductName", product_name)
    return query


class NamecheapClient:
    """
    High-level Namecheap API client.

    Provides a clean API for the domain commands:
    - Availability: check
    - Lifecycle: create, renew, reactivate
    - Info: getInfo, getList, getTldList, getPricing
    - Contacts: getContacts, setContacts
    - Registrar lock: get, lock, unlock

    Every method performs exactly one HTTP request (or none when the
    arguments are rejected) and keeps no state between calls, so one
    instance can be shared across threads.

    Example:
        client = NamecheapClient(
            api_user="myuser",
            api_key="0123456789abcdef",
            client_ip="203.0.113.10",
            sandbox=True,
        )

        result = client.domain_check(["example.com", "example.net"])
        for item in result.results:
            print(f"{item.domain}: {'available' if item.available else 'taken'}")
    """

    def __init__(
        self,
        api_user: str,
        api_key: str,
        client_ip: str,
        username: str = None,
        sandbox: bool = False,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.BaseTransport = None,
    ):
        """
        Initialize client.

        Args:
            api_user: API user name
            api_key: API key from the Namecheap profile
            client_ip: Whitelisted public IP of the caller
            username: Account the commands act on (default: api_user)
            sandbox: Use the sandbox endpoint
            timeout: Request timeout in seconds
            verify: Whether to verify the server certificate
            transport: Optional httpx transport (used by tests)
        """
        self._credentials = Credentials(
            api_user=api_user,
            api_key=api_key,
            client_ip=client_ip,
            username=username or "",
            sandbox=sandbox,
        )
        self._connection = APIConnection(timeout=timeout, verify=verify, transport=transport)

    @property
    def credentials(self) -> Credentials:
        """Credentials used for every request."""
        return self._credentials

    @property
    def sandbox(self) -> bool:
        """Check if the sandbox endpoint is used."""
        return self._credentials.sandbox

    def _query(self) -> Query:
        return Query(self._credentials)

    def _send_command(self, query: Query, command: str) -> bytes:
        """
        Send command and return the raw response.

        Raises:
            NamecheapConnectionError: If the request fails
        """
        logger.debug(f"GET {query.build_url(command, redact=True)}")
        return self._connection.get(query.build_url(command))

    # =========================================================================
    # Domain Commands
    # =========================================================================

    def domain_check(self, names: Union[str, List[str]]) -> DomainCheckResult:
        """
        Check domain availability.

        Names failing the syntax check are dropped and reported in
        invalid_names. If none remain, no request is sent.

        Args:
            names: Domain name(s) to check, at most 50

        Returns:
            Domain check result. Order is not guaranteed to match the input.

        Raises:
            NamecheapParameterError: If no names or more than 50 are given
            NamecheapAPIError: If the API reports an error
        """
        if isinstance(names, str):
            names = [names]

        valid, invalid = filter_domain_names(names)
        if not valid:
            return DomainCheckResult(invalid_names=invalid)

        query = self._query().add_parameter("DomainList", ",".join(valid))
        response_xml = self._send_command(query, CMD_DOMAINS_CHECK)

        result = XMLParser.parse_domain_check(response_xml)
        return replace(result, invalid_names=invalid)

    def domain_create(self, request: DomainCreateRequest) -> DomainCreateResult:
        """
        Register a new domain.

        Args:
            request: Domain, period and contacts to register with

        Returns:
            Domain create result with charged amount and order IDs

        Raises:
            NamecheapParameterError: If request is None
            NamecheapAPIError: If the API reports an error
        """
        if request is None:
            raise NamecheapParameterError("Domain create request is required")
        require_domain_name(request.domain_name)
        require_positive(request.years, "Years")

        query = self._query().add_parameters(request.to_params())
        response_xml = self._send_command(query, CMD_DOMAINS_CREATE)

        result = XMLParser.parse_domain_create(response_xml)
        logger.info(f"Created domain {result.domain} (order {result.order_id})")
        return result

    def domain_info(self, name: str) -> DomainInfo:
        """
        Get domain information.

        Args:
            name: Domain name

        Returns:
            Domain info

        Raises:
            NamecheapAPIError: If the domain is unknown or not in the account
        """
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = self._send_command(query, CMD_DOMAINS_GET_INFO)
        return XMLParser.parse_domain_info(response_xml)

    def domain_list(
        self,
        list_type: str = None,
        search_term: str = None,
        page: int = None,
        page_size: int = None,
        sort_by: str = None,
    ) -> DomainListResult:
        """
        List domains in the account.

        Args:
            list_type: ALL, EXPIRING or EXPIRED
            search_term: Keyword filter
            page: Page number (1-based)
            page_size: Domains per page (20-100)
            sort_by: NAME, NAME_DESC, EXPIREDATE, EXPIREDATE_DESC, CREATEDATE, CREATEDATE_DESC

        Returns:
            Domain list with paging info
        """
        query = build_list_query(self._query(), list_type, search_term, page, page_size, sort_by)
        response_xml = self._send_command(query, CMD_DOMAINS_GET_LIST)
        return XMLParser.parse_domain_list(response_xml)

    def domain_get_contacts(self, name: str) -> DomainContactsResult:
        """
        Get the Registrant, Tech, Admin and AuxBilling contacts of a domain.

        Args:
            name: Domain name

        Returns:
            Domain contacts
        """
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = self._send_command(query, CMD_DOMAINS_GET_CONTACTS)
        return XMLParser.parse_domain_contacts(response_xml)

    def domain_set_contacts(self, request: DomainContactsRequest) -> bool:
        """
        Replace all four contacts of a domain.

        Args:
            request: Domain name and the Registrant, Tech, Admin and AuxBilling contacts

        Returns:
            True if the API reports success
        """
        if request is None:
            raise NamecheapParameterError("Domain contacts request is required")
        require_domain_name(request.domain_name)

        query = self._query().add_parameters(request.to_params())
        response_xml = self._send_command(query, CMD_DOMAINS_SET_CONTACTS)
        return XMLParser.parse_domain_set_contacts(response_xml)

    def domain_get_registrar_lock(self, name: str) -> bool:
        """
        Get registrar lock status.

        Args:
            name: Domain name

        Returns:
            True if the domain is locked for registrar transfer

        Raises:
            NamecheapResponseError: If the lock status is missing from the response
        """
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = self._send_command(query, CMD_DOMAINS_GET_REGISTRAR_LOCK)
        return XMLParser.parse_registrar_lock(response_xml)

    def domain_set_registrar_lock(self, name: str) -> bool:
        """
        Lock a domain for registrar transfer.

        Args:
            name: Domain name

        Returns:
            True if the API reports success
        """
        return self._set_registrar_lock(name, "LOCK")

    def domain_set_registrar_unlock(self, name: str) -> bool:
        """
        Unlock a domain for registrar transfer.

        Args:
            name: Domain name

        Returns:
            True if the API reports success
        """
        return self._set_registrar_lock(name, "UNLOCK")

    def _set_registrar_lock(self, name: str, action: str) -> bool:
        require_domain_name(name)

        query = (
            self._query()
            .add_parameter("DomainName", name)
            .add_parameter("LockAction", action)
        )
        response_xml = self._send_command(query, CMD_DOMAINS_SET_REGISTRAR_LOCK)
        success = XMLParser.parse_set_registrar_lock(response_xml)

        logger.info(f"Registrar {action.lower()} {name}: {'ok' if success else 'failed'}")
        return success

    def domain_tld_list(self) -> TldListResult:
        """
        Get the TLDs supported by Namecheap.

        Returns:
            TLD list in the order returned by the API
        """
        response_xml = self._send_command(self._query(), CMD_DOMAINS_GET_TLD_LIST)
        return XMLParser.parse_tld_list(response_xml)

    def domain_renew(self, name: str, years: int = 1, promotion_code: str = None) -> DomainRenewResult:
        """
        Renew an expiring domain.

        Args:
            name: Domain name
            years: Number of years to renew
            promotion_code: Optional promotion code

        Returns:
            Renewal result with charged amount and order IDs

        Raises:
            NamecheapParameterError: If years is not positive
        """
        require_domain_name(name)
        require_positive(years, "Years")

        query = (
            self._query()
            .add_parameter("DomainName", name)
            .add_parameter("Years", str(years))
        )
        if promotion_code:
            query.add_parameter("PromotionCode", promotion_code)

        response_xml = self._send_command(query, CMD_DOMAINS_RENEW)
        result = XMLParser.parse_domain_renew(response_xml)
        logger.info(f"Renewed {name} for {years} year(s) (order {result.order_id})")
        return result

    def domain_reactivate(self, name: str) -> DomainReactivateResult:
        """
        Reactivate an expired domain.

        Args:
            name: Domain name

        Returns:
            Reactivation result with charged amount and order IDs
        """
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = self._send_command(query, CMD_DOMAINS_REACTIVATE)
        return XMLParser.parse_domain_reactivate(response_xml)

    # =========================================================================
    # User Commands
    # =========================================================================

    def user_pricing(
        self,
        product_type: str = "DOMAIN",
        product_category: str = None,
        action_name: str = None,
        product_name: str = None,
    ) -> DomainPricingResult:
        """
        Get the pricing catalog.

        Args:
            product_type: DOMAIN, SSLCERTIFICATE or WHOISGUARD
            product_category: e.g. DOMAINS
            action_name: REGISTER, RENEW, REACTIVATE or TRANSFER
            product_name: e.g. COM

        Returns:
            Nested pricing catalog
        """
        query = build_pricing_query(
            self._query(), product_type, product_category, action_name, product_name
        )
        response_xml = self._send_command(query, CMD_USERS_GET_PRICING)
        return XMLParser.parse_pricing(response_xml)
