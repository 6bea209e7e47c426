"""
Admission gate factory.
Configures which admission serialization strategy to use.
"""

from typing import Optional

from campus_events.core.config import get_settings
from campus_events.services.interfaces.admission import AdmissionGate
from campus_events.services.interfaces.local_admission import InProcessAdmissionGate
from campus_events.services.admission_gate import RedisAdmissionGate


def get_admission_strategy() -> AdmissionGate:
    """
    Build the configured admission gate.

    - local: InProcessAdmissionGate (single process, default)
    - redis: RedisAdmissionGate (multiple processes)

    Selected via the ADMISSION_STRATEGY env var.
    """
    strategy = get_settings().ADMISSION_STRATEGY

    if strategy == 'redis':
        return RedisAdmissionGate()
    else:
        return InProcessAdmissionGate()


# Singleton instance
_gate: Optional[AdmissionGate] = None


def get_admission_gate() -> AdmissionGate:
    """Get admission gate singleton (FastAPI dependency)."""
    global _gate
    if _gate is None:
        _gate = get_admission_strategy()
    return _gate
