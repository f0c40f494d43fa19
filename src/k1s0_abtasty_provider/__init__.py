"""k1s0 abtasty provider library."""

from .adapter_logger import AdapterLogger, HostLogger
from .backend import (
    FetchStatus,
    FlagProtocol,
    FlagshipClientProtocol,
    LogLevel,
    SdkStatus,
    VisitorProtocol,
)
from .config import (
    DecisionMode,
    FlagshipOptions,
    ProviderConfig,
    load_config,
)
from .context import EvaluationContext, VisitorInfo, to_primitive_record
from .events import (
    ProviderEvent,
    ProviderEventDetails,
    ProviderEventEmitter,
    ProviderEventHandler,
)
from .exceptions import ProviderError, ProviderErrorCodes
from .interfaces import FeatureProvider
from .memory import InMemoryFlag, InMemoryFlagshipClient, InMemoryVisitor
from .models import ProviderMetadata, ProviderStatus, ResolutionDetails
from .provider import ABTastyProvider
from .reconciler import VisitorReconciler

__all__ = [
    "ABTastyProvider",
    "AdapterLogger",
    "DecisionMode",
    "EvaluationContext",
    "FeatureProvider",
    "FetchStatus",
    "FlagProtocol",
    "FlagshipClientProtocol",
    "FlagshipOptions",
    "HostLogger",
    "InMemoryFlag",
    "InMemoryFlagshipClient",
    "InMemoryVisitor",
    "LogLevel",
    "ProviderConfig",
    "ProviderError",
    "ProviderErrorCodes",
    "ProviderEvent",
    "ProviderEventDetails",
    "ProviderEventEmitter",
    "ProviderEventHandler",
    "ProviderMetadata",
    "ProviderStatus",
    "ResolutionDetails",
    "SdkStatus",
    "VisitorInfo",
    "VisitorProtocol",
    "VisitorReconciler",
    "load_config",
    "to_primitive_record",
]
