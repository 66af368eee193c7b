"""Exceptions related to helm-resource."""

__all__ = [
    "HelmResourceException",
    "InputException",
    "ConfigInvariantViolation",
    "UrlConstructionFailure",
    "CommandException",
    "NetworkOrApiFailure",
    "SerializationFailure",
]


class HelmResourceException(Exception):
    """Generic base exception used for this library."""


class InputException(HelmResourceException):
    """Raised when the request payload is not formatted as expected."""


class ConfigInvariantViolation(InputException):
    """Raised when the source has no ca_data and skip_tls_verify is not set."""


class UrlConstructionFailure(InputException):
    """Raised when the cluster url cannot have api path segments appended."""


class CommandException(HelmResourceException):
    """Raised when there is a failure running a subcommand."""

    def __init__(self, command: str, message: str | None = None) -> None:
        super().__init__(message or f"Command `{command}` failed")
        self.command = command


class NetworkOrApiFailure(HelmResourceException):
    """Raised when the cluster api can't be reached or returns an unusable response."""


class SerializationFailure(HelmResourceException):
    """Raised when chart value overrides can't be written out."""
