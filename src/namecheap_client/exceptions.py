"""
Namecheap Client Exceptions

Custom exception hierarchy for Namecheap API operations.

Every failure a call can produce maps to exactly one subclass, so callers
can branch on the kind of failure:

- NamecheapConnectionError: network error, timeout or non-2xx HTTP status
- NamecheapXMLError: response body (or a date inside it) cannot be parsed
- NamecheapAPIError: the API answered with Status="ERROR"
- NamecheapResponseError: a required response element is missing
- NamecheapParameterError: invalid arguments, rejected before any request
"""

from typing import List, Optional, Tuple


class NamecheapError(Exception):
    """Base Namecheap exception."""

    def __init__(self, message: str, code: int = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class NamecheapConnectionError(NamecheapError):
    """HTTP request to the API failed."""

    def __init__(self, message: str = "Connection failed", status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class NamecheapXMLError(NamecheapError):
    """Response could not be parsed."""

    def __init__(self, message: str = "XML error"):
        super().__init__(message)


class NamecheapResponseError(NamecheapError):
    """Response is well-formed but lacks a required element."""

    def __init__(self, message: str = "Invalid response structure"):
        super().__init__(message)


class NamecheapAPIError(NamecheapError):
    """
    Error reported by the API in the response envelope.

    Attributes:
        errors: (number, text) pairs in document order. Numbers are
            assigned by Namecheap and may be None when absent.
    """

    def __init__(self, errors: List[Tuple[Optional[int], str]]):
        message = ",".join(text for _, text in errors) or "Unknown API error"
        code = errors[0][0] if errors else None
        super().__init__(message, code)
        self.errors = errors


class NamecheapParameterError(NamecheapError):
    """Invalid argument supplied by the caller."""

    def __init__(self, message: str = "Parameter value error", value: str = None):
        super().__init__(message)
        self.value = value
