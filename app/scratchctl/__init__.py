"""scratchctl - Temporary workspace management, tree deletion and input fingerprints."""

__version__ = "0.1.0"
