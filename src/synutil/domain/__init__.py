"""Domain models for synutil.

This package contains the core value objects and enumerations used
throughout the system. All models use Pydantic v2 for validation.
"""

from synutil.domain.models import (
    DEFAULT_PORT,
    ErrorKind,
    FingerprintEnrollMode,
    FingerprintThreshold,
    FingerprintUnitMode,
    HelpRequest,
    InvocationDescriptor,
    ListenInvocation,
    NotificationType,
    Outcome,
    ProgressEvent,
    TextAlignment,
)

__all__ = [
    "DEFAULT_PORT",
    "ErrorKind",
    "FingerprintEnrollMode",
    "FingerprintThreshold",
    "FingerprintUnitMode",
    "HelpRequest",
    "InvocationDescriptor",
    "ListenInvocation",
    "NotificationType",
    "Outcome",
    "ProgressEvent",
    "TextAlignment",
]
