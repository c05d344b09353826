"""Custom exception classes for the proposal store.

Not-found outcomes are reported through ``None``/``False`` return values and
never through these exceptions.
"""


class RFPEngineError(Exception):
    """Base exception for all store errors."""

    pass


class StoreError(RFPEngineError):
    """Raised when a store operation cannot be carried out."""

    pass


class PersistenceError(StoreError):
    """Raised when the snapshot cannot be written to its storage slot."""

    def __init__(self, message: str, storage_key: str = None):
        super().__init__(message)
        self.storage_key = storage_key


class ConfigurationError(RFPEngineError):
    """Raised when a configuration value is invalid."""

    pass


class DuplicateEmailError(StoreError):
    """Raised when an email address is already registered."""

    pass
