"""Monitor core — declarations, constructor registry, services, manager."""

from .definitions import AlertDef, BoardConfig, ProbeDef, load_config, parse_config
from .errors import (
    AlertInitError,
    BoardError,
    ConfigurationError,
    ProbeInitError,
    ServiceNotFoundError,
    UnknownAlertTypeError,
    UnknownProbeTypeError,
)
from .manager import Manager, build_manager
from .registry import ConstructorRegistry, default_registry
from .service import Service, ServiceState
from .transitions import is_alert_worthy
