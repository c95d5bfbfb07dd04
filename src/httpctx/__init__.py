"""Public surface for the httpctx client."""

from .auth import AuthFunc, basic_auth, bearer_token, hmac_signature
from .cancellation import Signal, background, with_cancel, with_deadline, with_timeout
from .client import DEFAULT_USER_AGENT, Client, ClientOptions, new_client, with_auth_func
from .errors import (
    AuthenticationError,
    CancelledError,
    DeadlineExceededError,
    DecodeError,
    EmptyTargetError,
    EncodingError,
    HttpCtxError,
    NetworkError,
    StatusError,
)
from .executor import Executor
from .transport import HttpxTransport, Transport
from .types import HttpClient
from .version import __version__

__all__ = [
    "__version__",
    "AuthFunc",
    "AuthenticationError",
    "CancelledError",
    "Client",
    "ClientOptions",
    "DEFAULT_USER_AGENT",
    "DeadlineExceededError",
    "DecodeError",
    "EmptyTargetError",
    "EncodingError",
    "Executor",
    "HttpClient",
    "HttpCtxError",
    "HttpxTransport",
    "NetworkError",
    "Signal",
    "StatusError",
    "Transport",
    "background",
    "basic_auth",
    "bearer_token",
    "hmac_signature",
    "new_client",
    "with_auth_func",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]
