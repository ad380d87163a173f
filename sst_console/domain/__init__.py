"""
Domain layer: entities, value enums and ports (Protocols).

No I/O here; infrastructure implements the ports.
"""

from .entities import (
    AuditAction,
    CreateUserData,
    Language,
    Report,
    Role,
    Session,
    Toast,
    ToastSeverity,
    UpdateUserData,
    UserProfile,
)
from .ports import (
    ActionLogSink,
    IdentityBackend,
    KeyValueStore,
    ProfileBackend,
    ReportSource,
)

__all__ = [
    "AuditAction",
    "CreateUserData",
    "Language",
    "Report",
    "Role",
    "Session",
    "Toast",
    "ToastSeverity",
    "UpdateUserData",
    "UserProfile",
    "ActionLogSink",
    "IdentityBackend",
    "KeyValueStore",
    "ProfileBackend",
    "ReportSource",
]
