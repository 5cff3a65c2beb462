"""Service-layer exceptions."""


class SpawnError(Exception):
    """Raised when a pack cannot be generated for the requested inputs."""


class FactoryError(SpawnError):
    """Raised when a unit instance cannot be created."""
