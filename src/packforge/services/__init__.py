"""Service layer exports."""

from .diagnostics import CollectingSink, DiagnosticSink, SpawnDiagnostic, logging_sink
from .errors import FactoryError, SpawnError
from .spawn_service import SpawnService, generate_pack

__all__ = [
    "CollectingSink",
    "DiagnosticSink",
    "FactoryError",
    "SpawnDiagnostic",
    "SpawnError",
    "SpawnService",
    "generate_pack",
    "logging_sink",
]
