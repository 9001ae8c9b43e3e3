"""
Async Namecheap Client

Asynchronous client for non-blocking API calls.
"""

import logging
from dataclasses import replace
from typing import List, Union

import httpx

from namecheap_client.client import build_list_query, build_pricing_query
from namecheap_client.connection import AsyncAPIConnection
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

logger = logging.getLogger("namecheap.async_client")


class AsyncNamecheapClient:
    """
    Asynchronous Namecheap API client.

    Provides the same API as NamecheapClient but with async/await support.
    Calls share no state, so they can run concurrently with asyncio.gather.

    Example:
        client = AsyncNamecheapClient(
            api_user="myuser",
            api_key="0123456789abcdef",
            client_ip="203.0.113.10",
        )
        info, locked = await asyncio.gather(
            client.domain_info("example.com"),
            client.domain_get_registrar_lock("example.com"),
        )
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
        transport: httpx.AsyncBaseTransport = None,
    ):
        """
        Initialize async client.

        Args:
            api_user: API user name
            api_key: API key from the Namecheap profile
            client_ip: Whitelisted public IP of the caller
            username: Account the commands act on (default: api_user)
            sandbox: Use the sandbox endpoint
            timeout: Request timeout in seconds
            verify: Whether to verify the server certificate
            transport: Optional httpx async transport (used by tests)
        """
        self._credentials = Credentials(
            api_user=api_user,
            api_key=api_key,
            client_ip=client_ip,
            username=username or "",
            sandbox=sandbox,
        )
        self._connection = AsyncAPIConnection(timeout=timeout, verify=verify, transport=transport)

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

    async def _send_command(self, query: Query, command: str) -> bytes:
        """Send command and return the raw response."""
        logger.debug(f"GET {query.build_url(command, redact=True)}")
        return await self._connection.get(query.build_url(command))

    # =========================================================================
    # Domain Commands
    # =========================================================================

    async def domain_check(self, names: Union[str, List[str]]) -> DomainCheckResult:
        """Check domain availability. See NamecheapClient.domain_check."""
        if isinstance(names, str):
            names = [names]

        valid, invalid = filter_domain_names(names)
        if not valid:
            return DomainCheckResult(invalid_names=invalid)

        query = self._query().add_parameter("DomainList", ",".join(valid))
        response_xml = await self._send_command(query, CMD_DOMAINS_CHECK)

        result = XMLParser.parse_domain_check(response_xml)
        return replace(result, invalid_names=invalid)

    async def domain_create(self, request: DomainCreateRequest) -> DomainCreateResult:
        """Register a new domain."""
        if request is None:
            raise NamecheapParameterError("Domain create request is required")
        require_domain_name(request.domain_name)
        require_positive(request.years, "Years")

        query = self._query().add_parameters(request.to_params())
        response_xml = await self._send_command(query, CMD_DOMAINS_CREATE)

        result = XMLParser.parse_domain_create(response_xml)
        logger.info(f"Created domain {result.domain} (order {result.order_id})")
        return result

    async def domain_info(self, name: str) -> DomainInfo:
        """Get domain information."""
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = await self._send_command(query, CMD_DOMAINS_GET_INFO)
        return XMLParser.parse_domain_info(response_xml)

    async def domain_list(
        self,
        list_type: str = None,
        search_term: str = None,
        page: int = None,
        page_size: int = None,
        sort_by: str = None,
    ) -> DomainListResult:
        """List domains in the account."""
        query = build_list_query(self._query(), list_type, search_term, page, page_size, sort_by)
        response_xml = await self._send_command(query, CMD_DOMAINS_GET_LIST)
        return XMLParser.parse_domain_list(response_xml)

    async def domain_get_contacts(self, name: str) -> DomainContactsResult:
        """Get domain contacts."""
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = await self._send_command(query, CMD_DOMAINS_GET_CONTACTS)
        return XMLParser.parse_domain_contacts(response_xml)

    async def domain_set_contacts(self, request: DomainContactsRequest) -> bool:
        """Replace all four contacts of a domain."""
        if request is None:
            raise NamecheapParameterError("Domain contacts request is required")
        require_domain_name(request.domain_name)

        query = self._query().add_parameters(request.to_params())
        response_xml = await self._send_command(query, CMD_DOMAINS_SET_CONTACTS)
        return XMLParser.parse_domain_set_contacts(response_xml)

    async def domain_get_registrar_lock(self, name: str) -> bool:
        """Get registrar lock status."""
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = await self._send_command(query, CMD_DOMAINS_GET_REGISTRAR_LOCK)
        return XMLParser.parse_registrar_lock(response_xml)

    async def domain_set_registrar_lock(self, name: str) -> bool:
        """Lock a domain for registrar transfer."""
        return await self._set_registrar_lock(name, "LOCK")

    async def domain_set_registrar_unlock(self, name: str) -> bool:
        """Unlock a domain for registrar transfer."""
        return await self._set_registrar_lock(name, "UNLOCK")

    async def _set_registrar_lock(self, name: str, action: str) -> bool:
        require_domain_name(name)

        query = (
            self._query()
            .add_parameter("DomainName", name)
            .add_parameter("LockAction", action)
        )
        response_xml = await self._send_command(query, CMD_DOMAINS_SET_REGISTRAR_LOCK)
        success = XMLParser.parse_set_registrar_lock(response_xml)

        logger.info(f"Registrar {action.lower()} {name}: {'ok' if success else 'failed'}")
        return success

    async def domain_tld_list(self) -> TldListResult:
        """Get the TLDs supported by Namecheap."""
        response_xml = await self._send_command(self._query(), CMD_DOMAINS_GET_TLD_LIST)
        return XMLParser.parse_tld_list(response_xml)

    async def domain_renew(self, name: str, years: int = 1, promotion_code: str = None) -> DomainRenewResult:
        """Renew an expiring domain."""
        require_domain_name(name)
        require_positive(years, "Years")

        query = (
            self._query()
            .add_parameter("DomainName", name)
            .add_parameter("Years", str(years))
        )
        if promotion_code:
            query.add_parameter("PromotionCode", promotion_code)

        response_xml = await self._send_command(query, CMD_DOMAINS_RENEW)
        result = XMLParser.parse_domain_renew(response_xml)
        logger.info(f"Renewed {name} for {years} year(s) (order {result.order_id})")
        return result

    async def domain_reactivate(self, name: str) -> DomainReactivateResult:
        """Reactivate an expired domain."""
        require_domain_name(name)

        query = self._query().add_parameter("DomainName", name)
        response_xml = await self._send_command(query, CMD_DOMAINS_REACTIVATE)
        return XMLParser.parse_domain_reactivate(response_xml)

    # =========================================================================
    # User Commands
    # =========================================================================

    async def user_pricing(
        self,
        product_type: str = "DOMAIN",
        product_category: str = None,
        action_name: str = None,
        product_name: str = None,
    ) -> DomainPricingResult:
        """Get the pricing catalog."""
        query = build_pricing_query(
            self._query(), product_type, product_category, action_name, product_name
        )
        response_xml = await self._send_command(query, CMD_USERS_GET_PRICING)
        return XMLParser.parse_pricing(response_xml)
