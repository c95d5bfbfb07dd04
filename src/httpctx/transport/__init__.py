"""Transport implementations exposed to users."""

from .base import Transport, TransportFactory
from .http import HttpxTransport, default_transport_factory

__all__ = [
    "HttpxTransport",
    "Transport",
    "TransportFactory",
    "default_transport_factory",
]
