"""
===============================================================================
TARJETA CRC — application/user_directory.py
===============================================================================

Responsabilidades:
  - Listar usuarios (procedimiento `get_users_with_emails`) normalizando filas.
  - Validar el alta ANTES de cualquier llamada de red.
  - Alta vía procedimiento `admin_create_user`.
  - Edición parcial (sparse) y baja lógica (is_active=false) sobre `profiles`.
  - Envolver errores del backend con los prefijos históricos y clasificarlos.

Colaboradores:
  - domain.ports.ProfileBackend
  - application.error_classification
  - crosscutting.exceptions
===============================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

from ..crosscutting.exceptions import (
    BackendCallError,
    NetworkError,
    UnknownBackendError,
    UpdateFailedError,
    UserNotFoundError,
    ValidationFailed,
)
from ..crosscutting.logger import logger
from ..domain.entities import (
    CreateUserData,
    Role,
    UpdateUserData,
    UserProfile,
)
from ..domain.ports import ProfileBackend
from .error_classification import (
    classify_create_user_error,
    classify_fetch_users_error,
)

USERS_PROCEDURE = "get_users_with_emails"
CREATE_USER_PROCEDURE = "admin_create_user"

MIN_PASSWORD_LENGTH = 6
_EMAIL_SHAPE = re.compile(r"\S+@\S+\.\S+")

# Placeholders de filas incompletas
DEFAULT_NAME = "Sin nombre"
DEFAULT_COMPANY = "Sin empresa"


def normalize_user_row(row: Mapping[str, Any]) -> UserProfile:
    """Fila del join perfil+email -> UserProfile con defaults de la consola."""
    user_id = str(row["id"])
    return UserProfile(
        id=user_id,
        name=row.get("name") or DEFAULT_NAME,
        role=Role.parse(row.get("role") or Role.EMPLOYEE.value, Role.EMPLOYEE),
        company=row.get("company") or DEFAULT_COMPANY,
        department=row.get("department") or "",
        phone=row.get("phone") or "",
        is_active=row.get("is_active") is not False,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        email=row.get("email") or f"user_{user_id[:8]}@domain.com",
        last_sign_in_at=row.get("last_sign_in_at"),
    )


def validate_new_user(data: CreateUserData) -> Dict[str, str]:
    """Errores por campo (campo -> clave de traducción). Vacío = válido."""
    errors: Dict[str, str] = {}

    if not (data.name or "").strip():
        errors["name"] = "required"

    email = (data.email or "").strip()
    if not email:
        errors["email"] = "required"
    elif not _EMAIL_SHAPE.search(email):
        errors["email"] = "invalidEmail"

    if not data.password:
        errors["password"] = "required"
    elif len(data.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = "passwordMinLength"

    if not (data.company or "").strip():
        errors["company"] = "required"

    return errors


def validate_user_update(data: UpdateUserData) -> Dict[str, str]:
    """En edición, name/company provistos no pueden quedar en blanco."""
    errors: Dict[str, str] = {}
    if data.name is not None and not data.name.strip():
        errors["name"] = "required"
    if data.company is not None and not data.company.strip():
        errors["company"] = "required"
    return errors


def build_update(data: UpdateUserData) -> Dict[str, Any]:
    """
    Update sparse: solo campos provistos explícitamente.

    - name/company: solo si no están en blanco (trim)
    - role: si viene
    - department/phone: si vienen (incluido ""), con trim
    - is_active: tri-estado, solo si no es None
    """
    fields: Dict[str, Any] = {}
    if data.name and data.name.strip():
        fields["name"] = data.name.strip()
    if data.role:
        fields["role"] = Role(data.role).value
    if data.company and data.company.strip():
        fields["company"] = data.company.strip()
    if data.department is not None:
        fields["department"] = data.department.strip()
    if data.phone is not None:
        fields["phone"] = data.phone.strip()
    if data.is_active is not None:
        fields["is_active"] = data.is_active
    return fields


def _created_profile(
    result: Mapping[str, Any], params: Mapping[str, Any]
) -> UserProfile:
    """
    Perfil del usuario recién creado a partir de la respuesta del RPC.

    La respuesta puede traer `user` anidado, la fila plana o solo
    `{success, message, user_id}`; lo que falte se completa con los params.
    """
    created = result.get("user") or result
    if not isinstance(created, Mapping):
        created = {}
    row = {
        "name": params["user_name"],
        "role": params["user_role"],
        "company": params["user_company"],
        "department": params["user_department"],
        "phone": params["user_phone"],
    }
    row.update({k: v for k, v in created.items() if v is not None})
    row["id"] = created.get("id") or created.get("user_id") or result.get("user_id") or ""

    profile = UserProfile.from_row(row)
    if not profile.email:
        profile.email = params["user_email"]
    return profile


class UserDirectory:
    def __init__(self, profiles: ProfileBackend):
        self._profiles = profiles

    async def fetch_users(self) -> List[UserProfile]:
        logger.info("Obteniendo usuarios")
        try:
            data = await self._profiles.rpc(USERS_PROCEDURE)
        except (BackendCallError, NetworkError) as exc:
            raise classify_fetch_users_error(
                f"Error de base de datos: {exc.message}"
            ) from exc

        if not data:
            logger.warning("No se recibieron datos de usuarios")
            return []

        users = [normalize_user_row(row) for row in data]
        logger.info("Usuarios obtenidos", extra={"count": len(users)})
        return users

    async def create_user(self, data: CreateUserData) -> UserProfile:
        errors = validate_new_user(data)
        if errors:
            raise ValidationFailed(errors)

        params = {
            "user_email": data.email.strip(),
            "user_password": data.password,
            "user_name": data.name.strip(),
            "user_role": Role(data.role or Role.EMPLOYEE).value,
            "user_company": data.company.strip(),
            "user_department": (data.department or "").strip(),
            "user_phone": (data.phone or "").strip(),
        }
        logger.info(
            "Creando usuario",
            extra={"email": params["user_email"], "role": params["user_role"]},
        )

        try:
            result = await self._provision(params)
        except UnknownBackendError as exc:
            classified = classify_create_user_error(exc.message)
            if classified is None:
                raise
            raise classified from exc

        profile = _created_profile(result, params)
        logger.info("Usuario creado", extra={"user_id": profile.id})
        return profile

    async def _provision(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = await self._profiles.rpc(CREATE_USER_PROCEDURE, params)
        except (BackendCallError, NetworkError) as exc:
            raise UnknownBackendError(f"Error de función: {exc.message}") from exc

        if isinstance(result, list):
            result = result[0] if result else None
        if not result:
            raise UnknownBackendError("No se recibió respuesta del servidor")
        if not isinstance(result, dict):
            raise UnknownBackendError("Respuesta inesperada del servidor")
        if result.get("success") is False:
            raise UnknownBackendError(
                result.get("message") or "Error desconocido al crear usuario"
            )
        return result

    async def update_user(self, user_id: str, data: UpdateUserData) -> UserProfile:
        errors = validate_user_update(data)
        if errors:
            raise ValidationFailed(errors)

        fields = build_update(data)
        logger.info(
            "Actualizando usuario",
            extra={"user_id": user_id, "fields": sorted(fields)},
        )
        try:
            row = await self._profiles.update_profile(user_id, fields)
        except (BackendCallError, NetworkError) as exc:
            raise UpdateFailedError(f"Error al actualizar: {exc.message}") from exc

        if not row:
            raise UserNotFoundError("No se pudo actualizar el usuario")
        return UserProfile.from_row(row)

    async def deactivate_user(self, user_id: str) -> UserProfile:
        logger.info("Eliminando usuario (baja lógica)", extra={"user_id": user_id})
        try:
            row = await self._profiles.update_profile(user_id, {"is_active": False})
        except (BackendCallError, NetworkError) as exc:
            raise UpdateFailedError(f"Error al eliminar: {exc.message}") from exc

        if not row:
            raise UserNotFoundError("No se pudo eliminar el usuario")
        return UserProfile.from_row(row)
