"""
Shared test helpers.
"""

import os
import sys
from urllib.parse import parse_qsl

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import httpx
import pytest


NS = "http://api.namecheap.com/xml.response"


def envelope(command: str, body: str, status: str = "OK", warnings: str = "") -> bytes:
    """Wrap a CommandResponse body in an ApiResponse envelope."""
    return f'''<?xml version="1.0" encoding="utf-8"?>
<ApiResponse Status="{status}" xmlns="{NS}">
  <Errors />
  <Warnings>{warnings}</Warnings>
  <RequestedCommand>{command}</RequestedCommand>
  <CommandResponse Type="{command}">
    {body}
  </CommandResponse>
  <Server>PHX01SBAPI01</Server>
  <GMTTimeDifference>--5:00</GMTTimeDifference>
  <ExecutionTime>0.032</ExecutionTime>
</ApiResponse>'''.encode("utf-8")


def error_envelope(*errors) -> bytes:
    """Build a Status="ERROR" envelope from (number, text) pairs."""
    items = "".join(f'<Error Number="{number}">{text}</Error>' for number, text in errors)
    return f'''<?xml version="1.0" encoding="utf-8"?>
<ApiResponse Status="ERROR" xmlns="{NS}">
  <Errors>{items}</Errors>
  <Warnings />
  <RequestedCommand />
  <Server>PHX01SBAPI01</Server>
  <GMTTimeDifference>--5:00</GMTTimeDifference>
  <ExecutionTime>0.01</ExecutionTime>
</ApiResponse>'''.encode("utf-8")


class RecordingTransport:
    """
    Canned HTTP responses for httpx.MockTransport.

    Every request is recorded so tests can inspect the query parameters.
    """

    def __init__(self, body: bytes = b"", status_code: int = 200):
        self.body = body
        self.status_code = status_code
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def last_params(self) -> list:
        """Query parameters of the last request as ordered (key, value) pairs."""
        return parse_qsl(self.requests[-1].url.query.decode("ascii"), keep_blank_values=True)

    def sync(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def asynchronous(self) -> httpx.MockTransport:
        async def handler(request):
            return self.handler(request)
        return httpx.MockTransport(handler)


@pytest.fixture
def recorder():
    return RecordingTransport()
