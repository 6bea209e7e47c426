"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .admission import AdmissionGate
from .local_admission import InProcessAdmissionGate

__all__ = ['AdmissionGate', 'InProcessAdmissionGate']
