"""Exception hierarchy for scratchctl.

Structural failures (cannot create a directory, cannot walk a tree,
cannot compute a fingerprint) are raised as FatalSetupError subclasses
and abort the requesting call. Best-effort deletion failures are never
raised; they are logged and recorded in a DeletionReport instead.
"""


class ScratchError(RuntimeError):
    """Base exception for all scratchctl errors."""


class FatalSetupError(ScratchError):
    """Raised when a call cannot produce its result at all."""


class RuntimeCreationError(FatalSetupError):
    """Raised when a directory or temp file cannot be created."""


class TreeWalkError(FatalSetupError):
    """Raised when a directory walk cannot be completed."""


class FingerprintError(FatalSetupError):
    """Raised when an input fingerprint cannot be computed."""


class HashAlgorithmError(FatalSetupError):
    """Raised when the requested digest algorithm is unavailable."""


class ConfigError(ScratchError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""
