"""
Error taxonomy shared by the API, the services and the display client.
"""


class VowsiteError(Exception):
    """Base class for all application errors."""


class ConfigurationError(VowsiteError):
    """Required configuration is missing or invalid. Fatal at startup."""


class StorageError(VowsiteError):
    """A query or transaction failed; the transaction has been rolled back."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(message or f"{operation} failed")


class AuthError(VowsiteError):
    """Missing or invalid admin credential."""


class NetworkError(VowsiteError):
    """The display client could not reach the API or parse its answer."""
