"""
Data access layer: one async function per entity per operation.

Functions return the record(s) or a `StoreFailure` for expected failures
(not found, constraint violation) and raise `StoreUnavailable` for faults
below this layer.
"""

from campus_events.stores.base import FailureKind, StoreFailure

__all__ = ["FailureKind", "StoreFailure"]
