"""
Transport — диспетчер аутентифицированных запросов и HTTP transport.
"""

from .dispatcher import AuthenticatedRequestDispatcher, extract_reason
from .headers import create_l1_headers, create_l2_headers
from .http import RequestsTransport, Transport, TransportResponse

__all__ = [
    "AuthenticatedRequestDispatcher",
    "extract_reason",
    "create_l1_headers",
    "create_l2_headers",
    "Transport",
    "TransportResponse",
    "RequestsTransport",
]
