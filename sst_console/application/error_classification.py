"""
===============================================================================
TARJETA CRC — application/error_classification.py
===============================================================================

Responsabilidades:
  - Traducir el texto libre de error del backend a un tipo de error cerrado.
  - Ser el ÚNICO lugar con matching por substring contra el wording del
    backend (frágil: cualquier cambio de texto del backend se arregla acá).

Colaboradores:
  - crosscutting.exceptions (tipos destino)
  - application.user_directory (consumidor)

Casos (exhaustivos, evaluados en orden):

  classify_fetch_users_error(text)
    "ambiguous"              -> AmbiguousIdentifierError   (supabaseAmbiguousIdError)
    "get_users_with_emails"  -> MissingProcedureError      (databaseFunctionError)
    "permission"             -> PermissionDeniedError      (permissionDenied)
    cualquier otro           -> UnknownBackendError        (texto crudo)

  classify_create_user_error(text)
    "Ya existe un usuario"   -> DuplicateEmailError
    "admin_create_user"      -> ProvisioningUnavailableError
    "permission"/"permisos"  -> PermissionDeniedError      (createPermissionDenied)
    cualquier otro           -> None (el llamador propaga el error original)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ..crosscutting.exceptions import (
    AmbiguousIdentifierError,
    ConsoleError,
    DuplicateEmailError,
    MissingProcedureError,
    PermissionDeniedError,
    ProvisioningUnavailableError,
    UnknownBackendError,
)

DUPLICATE_EMAIL_MESSAGE = "Ya existe un usuario con este email. Usa un email diferente."
PROVISIONING_UNAVAILABLE_MESSAGE = (
    "La función de creación no está disponible. Contacta al administrador."
)
CREATE_PERMISSION_MESSAGE = "No tienes permisos suficientes para crear usuarios."


def classify_fetch_users_error(text: str) -> ConsoleError:
    text = text or ""
    if "ambiguous" in text:
        return AmbiguousIdentifierError(text)
    if "get_users_with_emails" in text:
        return MissingProcedureError(text)
    if "permission" in text:
        return PermissionDeniedError(text)
    return UnknownBackendError(text or "unknownError")


def classify_create_user_error(text: str) -> Optional[ConsoleError]:
    text = text or ""
    if "Ya existe un usuario" in text:
        return DuplicateEmailError(DUPLICATE_EMAIL_MESSAGE)
    if "admin_create_user" in text:
        return ProvisioningUnavailableError(PROVISIONING_UNAVAILABLE_MESSAGE)
    if "permission" in text or "permisos" in text:
        return PermissionDeniedError(
            CREATE_PERMISSION_MESSAGE, key="createPermissionDenied"
        )
    return None
