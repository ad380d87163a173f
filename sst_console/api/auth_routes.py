"""
===============================================================================
TARJETA CRC — api/auth_routes.py (Sesión del operador)
===============================================================================

Responsabilidades:
  - Exponer login / logout / estado de sesión del operador de la consola.
  - Releer el perfil del operador (cambios de rol) sin nuevo login.
  - Pasar el User-Agent del request como contexto de cliente para auditoría.
  - No exponer tokens: la respuesta usa Session.to_public_dict().

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ SessionGateway.
  - Fail-safe security: credenciales inválidas => 401 (vía exception handler).

Colaboradores:
  - identity.session.SessionGateway
  - container.get_session_gateway
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, field_validator

from ..container import get_session_gateway
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.session import SessionGateway

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip()


class SessionStatus(BaseModel):
    authenticated: bool
    loading: bool
    is_admin: bool
    session: dict[str, Any] | None = None


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _status(gateway: SessionGateway) -> SessionStatus:
    session = gateway.current_session
    return SessionStatus(
        authenticated=gateway.is_authenticated,
        loading=gateway.is_loading,
        is_admin=gateway.is_admin,
        session=session.to_public_dict() if session else None,
    )


def _user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "")


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.get("/auth/session", response_model=SessionStatus, tags=["auth"])
def get_session_status(
    gateway: SessionGateway = Depends(get_session_gateway),
) -> SessionStatus:
    return _status(gateway)


@router.post("/auth/login", response_model=SessionStatus, tags=["auth"])
async def login(
    req: LoginRequest,
    request: Request,
    gateway: SessionGateway = Depends(get_session_gateway),
) -> SessionStatus:
    """
    Login con email/contraseña.

    Éxito: toast "loginSuccessful" + auditoría LOGIN.
    Fallo: toast "loginError" y 401.
    """
    await gateway.sign_in(req.email, req.password, user_agent=_user_agent(request))
    return _status(gateway)


@router.post("/auth/refresh", response_model=SessionStatus, tags=["auth"])
async def refresh_profile(
    gateway: SessionGateway = Depends(get_session_gateway),
) -> SessionStatus:
    """Relee el perfil del operador (rol, empresa) sin volver a autenticar."""
    await gateway.refresh_profile()
    return _status(gateway)


@router.post("/auth/logout", response_model=SessionStatus, tags=["auth"])
async def logout(
    request: Request,
    gateway: SessionGateway = Depends(get_session_gateway),
) -> SessionStatus:
    # R: El logout siempre limpia la sesión local, aun si el backend falla.
    await gateway.sign_out(user_agent=_user_agent(request))
    return _status(gateway)


__all__ = ["router"]
