"""
Namecheap Query Builder

Builds Namecheap API request URLs.
"""

from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote

from namecheap_client.exceptions import NamecheapParameterError
from namecheap_client.models import Credentials

# Commands
CMD_DOMAINS_CHECK = "namecheap.domains.check"
CMD_DOMAINS_CREATE = "namecheap.domains.create"
CMD_DOMAINS_GET_INFO = "namecheap.domains.getInfo"
CMD_DOMAINS_GET_LIST = "namecheap.domains.getList"
CMD_DOMAINS_GET_CONTACTS = "namecheap.domains.getContacts"
CMD_DOMAINS_SET_CONTACTS = "namecheap.domains.setContacts"
CMD_DOMAINS_GET_REGISTRAR_LOCK = "namecheap.domains.getRegistrarLock"
CMD_DOMAINS_SET_REGISTRAR_LOCK = "namecheap.domains.setRegistrarLock"
CMD_DOMAINS_GET_TLD_LIST = "namecheap.domains.getTldList"
CMD_DOMAINS_RENEW = "namecheap.domains.renew"
CMD_DOMAINS_REACTIVATE = "namecheap.domains.reActivate"
CMD_USERS_GET_PRICING = "namecheap.users.getPricing"


def _escape(value: Optional[str]) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set."""
    return quote(value or "", safe="")


class Query:
    """
    Query parameters for a single API command.

    Example:
        url = (
            Query(credentials)
            .add_parameter("DomainName", "example.com")
            .build_url("namecheap.domains.getInfo")
        )
    """

    def __init__(self, credentials: Credentials):
        if credentials is None:
            raise NamecheapParameterError("credentials are required")

        self._credentials = credentials
        self._parameters: List[Tuple[str, str]] = []

    @property
    def parameters(self) -> List[Tuple[str, str]]:
        """Command parameters in insertion order."""
        return list(self._parameters)

    def add_parameter(self, key: str, value: Optional[str]) -> "Query":
        """Append a parameter. Returns self for chaining."""
        self._parameters.append((key, value))
        return self

    def add_parameters(self, pairs: Iterable[Tuple[str, str]]) -> "Query":
        """Append several parameters in order."""
        for key, value in pairs:
            self.add_parameter(key, value)
        return self

    def build_url(self, command: str, redact: bool = False) -> str:
        """
        Build the GET URL for a command.

        Args:
            command: API command, e.g. namecheap.domains.check
            redact: Replace the API key with REDACTED (for logging)

        Returns:
            Full request URL
        """
        creds = self._credentials
        api_key = "REDACTED" if redact else creds.api_key

        pairs = [
            ("Command", command),
            ("ApiUser", creds.api_user),
            ("UserName", creds.username),
            ("ApiKey", api_key),
            ("ClientIp", creds.client_ip),
        ]
        pairs.extend(self._parameters)

        query = "&".join(f"{_escape(key)}={_escape(value)}" for key, value in pairs)
        return f"{creds.endpoint}?{query}"
