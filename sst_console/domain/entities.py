"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (UserProfile, Session, Report, Toast)

Responsabilidades:
    - Definir estructuras centrales de la consola (sin infraestructura).
    - Traducir literales externos de reportes a enums de dos variantes UNA vez.
    - Aislar el parseo de fechas dd/mm/yyyy embebidas en texto libre.

Colaboradores:
    - infrastructure.*: construyen estas entidades desde el wire.
    - application.*: filtran, paginan y agregan sobre estas entidades.
    - api.*: serializan con to_dict()/to_wire().

Principios:
    - Sin dependencias a HTTP/FastAPI.
    - Los literales de los reportes son contrato externo: carácter por carácter.
===============================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional


# ---------------------------------------------------------------------------
# Enums cerrados
# ---------------------------------------------------------------------------


class Role(str, Enum):
    """Nivel de autorización adjunto a un perfil."""

    ADMIN = "admin"
    COORDINATOR = "coordinator"
    SST_SPECIALIST = "sst_specialist"
    NURSE = "nurse"
    EMPLOYEE = "employee"

    @classmethod
    def parse(cls, value: Any, default: "Role | None" = None) -> "Role":
        """Convierte el texto del backend; valores desconocidos -> default."""
        try:
            return cls(value)
        except ValueError:
            if default is None:
                raise
            return default


class Language(str, Enum):
    ES = "es"
    EN = "en"
    ZH = "zh"


DEFAULT_LANGUAGE = Language.ES


class ToastSeverity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class AuditAction(str, Enum):
    """Acciones aceptadas por el endpoint externo de auditoría."""

    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    SYNC_USERS = "SYNC_USERS"
    VIEW_REPORTS = "VIEW_REPORTS"
    VIEW_REPORT_PDF = "VIEW_REPORT_PDF"


# ---------------------------------------------------------------------------
# Usuarios
# ---------------------------------------------------------------------------


@dataclass
class UserProfile:
    """
    Registro de usuario a nivel aplicación (perfil + email del join).

    Importante:
      - `is_active=False` es el "borrado" lógico: el registro sigue existiendo.
      - `email` puede ser un placeholder sintetizado si el backend no lo trae.
    """

    id: str
    name: str
    role: Role
    company: str
    department: str = ""
    phone: str = ""
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    email: Optional[str] = None
    last_sign_in_at: Optional[str] = None

    @property
    def status(self) -> str:
        return "active" if self.is_active else "inactive"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        data["status"] = self.status
        return data

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "UserProfile":
        """Perfil tal cual lo devuelve la tabla `profiles` (sin normalizar)."""
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            role=Role.parse(row.get("role"), Role.EMPLOYEE),
            company=row.get("company") or "",
            department=row.get("department") or "",
            phone=row.get("phone") or "",
            is_active=row.get("is_active") is not False,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            email=row.get("email"),
            last_sign_in_at=row.get("last_sign_in_at"),
        )


@dataclass
class CreateUserData:
    """Datos de alta. La contraseña solo existe en la creación."""

    name: str
    email: str
    password: str
    company: str
    role: Role = Role.EMPLOYEE
    department: str = ""
    phone: str = ""


@dataclass
class UpdateUserData:
    """
    Edición parcial. `None` significa "no provisto".

    department/phone vacíos ("") son valores explícitos válidos;
    is_active es tri-estado (None / True / False).
    """

    name: Optional[str] = None
    role: Optional[Role] = None
    company: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None

    def provided_fields(self) -> list[str]:
        return [k for k, v in asdict(self).items() if v is not None]


# ---------------------------------------------------------------------------
# Sesión
# ---------------------------------------------------------------------------


@dataclass
class Session:
    """Identidad autenticada + perfil derivado (propiedad del SessionGateway)."""

    access_token: str
    user_id: str
    email: str
    refresh_token: str = ""
    profile: Optional[UserProfile] = None

    @property
    def role(self) -> Optional[Role]:
        return self.profile.role if self.profile else None

    def to_public_dict(self) -> Dict[str, Any]:
        # Sin tokens: esto se expone por HTTP.
        return {
            "user_id": self.user_id,
            "email": self.email,
            "profile": self.profile.to_dict() if self.profile else None,
        }


# ---------------------------------------------------------------------------
# Reportes
# ---------------------------------------------------------------------------

LABEL_ID = "ID"
LABEL_VERIFICATION_DATE = "Fecha de verificación 验证日期"
LABEL_WORK_CENTER = "Centro de trabajo 地点"
LABEL_TASK = "Proceso/tarea verificada 流程/任务已验证"
LABEL_RESULT = "Resultado Final 底線"
LABEL_CLOSURE = "Estado del cierre"
LABEL_PDF_LINK = "Link_PDF 連結_PDF"

ACCEPTABLE_LITERAL = "ACEPTABLE 可接受"
CLOSED_LITERAL = "CERRADO"


class ReportResult(str, Enum):
    ACCEPTABLE = "acceptable"
    NOT_ACCEPTABLE = "not_acceptable"

    @classmethod
    def from_raw(cls, raw: Any) -> "ReportResult":
        # Match exacto: mayúsculas distintas o typos caen en NOT_ACCEPTABLE.
        return cls.ACCEPTABLE if raw == ACCEPTABLE_LITERAL else cls.NOT_ACCEPTABLE


class ClosureStatus(str, Enum):
    CLOSED = "closed"
    PENDING = "pending"

    @classmethod
    def from_raw(cls, raw: Any) -> "ClosureStatus":
        return cls.CLOSED if raw == CLOSED_LITERAL else cls.PENDING


def parse_report_date(raw: Any) -> Optional[date]:
    """
    Extrae la fecha dd/mm/yyyy del primer token (separado por espacio).

    "05/03/2024 14:30:00" -> date(2024, 3, 5). Cualquier entrada malformada
    devuelve None; nunca lanza.
    """
    if not isinstance(raw, str):
        return None
    token = raw.strip().split(" ")[0] if raw.strip() else ""
    parts = token.split("/")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p) for p in parts)
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class Report:
    """Registro de verificación externo (solo lectura)."""

    id: str
    verification_date_raw: str
    work_center: str
    task: str
    result: ReportResult
    result_raw: str
    closure: ClosureStatus
    closure_raw: str
    pdf_link: str
    verification_date: Optional[date] = None

    @property
    def is_acceptable(self) -> bool:
        return self.result is ReportResult.ACCEPTABLE

    @property
    def is_closed(self) -> bool:
        return self.closure is ClosureStatus.CLOSED

    @classmethod
    def from_wire(cls, row: Mapping[str, Any]) -> "Report":
        result_raw = _text(row.get(LABEL_RESULT))
        closure_raw = _text(row.get(LABEL_CLOSURE))
        date_raw = _text(row.get(LABEL_VERIFICATION_DATE))
        return cls(
            id=_text(row.get(LABEL_ID)),
            verification_date_raw=date_raw,
            verification_date=parse_report_date(date_raw),
            work_center=_text(row.get(LABEL_WORK_CENTER)),
            task=_text(row.get(LABEL_TASK)),
            result=ReportResult.from_raw(row.get(LABEL_RESULT)),
            result_raw=result_raw,
            closure=ClosureStatus.from_raw(row.get(LABEL_CLOSURE)),
            closure_raw=closure_raw,
            pdf_link=_text(row.get(LABEL_PDF_LINK)),
        )

    def to_wire(self) -> Dict[str, str]:
        return {
            LABEL_ID: self.id,
            LABEL_VERIFICATION_DATE: self.verification_date_raw,
            LABEL_WORK_CENTER: self.work_center,
            LABEL_TASK: self.task,
            LABEL_RESULT: self.result_raw,
            LABEL_CLOSURE: self.closure_raw,
            LABEL_PDF_LINK: self.pdf_link,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "verification_date": (
                self.verification_date.isoformat() if self.verification_date else None
            ),
            "verification_date_raw": self.verification_date_raw,
            "work_center": self.work_center,
            "task": self.task,
            "result": self.result.value,
            "closure": self.closure.value,
            "pdf_link": self.pdf_link,
        }


# ---------------------------------------------------------------------------
# Toasts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Toast:
    id: int
    message: str
    severity: ToastSeverity = ToastSeverity.INFO

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "message": self.message, "severity": self.severity.value}


@dataclass
class ActionScriptResult:
    """Resultado de un envío al endpoint de auditoría."""

    success: bool
    data: Any = None
    message: Optional[str] = None
    fallback: bool = False
    attempts: int = 0
