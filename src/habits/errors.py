"""Exceptions raised by the habits core."""


class CosmosError(Exception):
    """Base class for habit tracker errors."""


class StateImportError(CosmosError):
    """Serialized state could not be parsed or failed validation."""


class DecryptionError(CosmosError):
    """Encrypted backup could not be opened (wrong passphrase or corrupt data)."""
