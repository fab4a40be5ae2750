"""
luxor_sdk
─────────
Async client for the FX Luminaire Luxor ZD lighting controller's
JSON-over-HTTP protocol. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from luxor_sdk.tier0_core.logging import get_logger
from luxor_sdk.tier0_core.errors import (
    LuxorError,
    Canceled,
    DeadlineExceeded,
    RequestEncodingError,
    InvalidRequestError,
    UnknownMethodError,
    TransportError,
    UnexpectedHTTPStatus,
    UnexpectedContentType,
    MalformedResponse,
    ApplicationStatusError,
    UnknownStatusError,
    configure_sentry,
)
from luxor_sdk.tier0_core.config import get_config, LuxorConfig
from luxor_sdk.tier0_core.status import Status, error_for_status

from luxor_sdk.tier1_runtime.cancel import CancellationToken
from luxor_sdk.tier1_runtime.clock import Clock
from luxor_sdk.tier1_runtime.executor import RequestExecutor

from luxor_sdk.tier2_protocol.controller import Controller
from luxor_sdk.tier2_protocol.messages import *  # noqa: F401,F403
from luxor_sdk.tier2_protocol import messages as _messages

from luxor_sdk._registry import MethodSpec, METHODS, get_method, method_names

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "LuxorError", "Canceled", "DeadlineExceeded", "RequestEncodingError",
    "InvalidRequestError", "UnknownMethodError", "TransportError",
    "UnexpectedHTTPStatus", "UnexpectedContentType", "MalformedResponse",
    "ApplicationStatusError", "UnknownStatusError", "configure_sentry",
    # config
    "get_config", "LuxorConfig",
    # status
    "Status", "error_for_status",
    # cancellation
    "CancellationToken", "Clock",
    # execution
    "RequestExecutor", "Controller",
    # registry
    "MethodSpec", "METHODS", "get_method", "method_names",
]
__all__ += _messages.__all__
