"""
===============================================================================
TARJETA CRC — api/dependencies.py
===============================================================================

Responsabilidades:
  - Dependencias FastAPI de autorización: sesión requerida / rol admin.
  - Setear el actor (email del operador) en el contexto de logs del request.

Colaboradores:
  - container.get_session_gateway
  - identity.session.SessionGateway (require_session / require_admin)
===============================================================================
"""

from __future__ import annotations

from fastapi import Depends

from ..container import get_session_gateway
from ..context import set_actor
from ..domain.entities import Session
from ..identity.session import SessionGateway


def require_session(
    gateway: SessionGateway = Depends(get_session_gateway),
) -> Session:
    """R: Sin sesión => NotAuthenticated (401 vía exception handler)."""
    session = gateway.require_session()
    set_actor(session.email)
    return session


def require_admin(
    gateway: SessionGateway = Depends(get_session_gateway),
) -> Session:
    """R: Sesión sin rol admin => AdminRequired (403)."""
    session = gateway.require_admin()
    set_actor(session.email)
    return session
