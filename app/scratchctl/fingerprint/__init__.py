"""Input fingerprinting for build-output reuse.

This module provides timestamp-based fingerprints of input file sets
and a small named store for remembering them between runs.
"""

from scratchctl.fingerprint.inputs import build_inputs_fingerprint, expand_paths, mtime_millis
from scratchctl.fingerprint.store import is_reusable, load_fingerprint, save_fingerprint

__all__ = [
    "build_inputs_fingerprint",
    "expand_paths",
    "is_reusable",
    "load_fingerprint",
    "mtime_millis",
    "save_fingerprint",
]
