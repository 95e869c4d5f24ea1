"""
Analysis cache and the freshness gate every top-level command consults.
"""

from .fingerprint import Fingerprint, compute_fingerprint
from .store import (
    MIN_SCHEMA_VERSION,
    SCHEMA_VERSION,
    AnalysisCache,
    CacheMeta,
    register_invalidation_hook,
    unregister_invalidation_hook,
)

__all__ = [
    "Fingerprint",
    "compute_fingerprint",
    "MIN_SCHEMA_VERSION",
    "SCHEMA_VERSION",
    "AnalysisCache",
    "CacheMeta",
    "register_invalidation_hook",
    "unregister_invalidation_hook",
]
