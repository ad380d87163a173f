"""
===============================================================================
TARJETA CRC — api/user_routes.py (Gestión de Usuarios)
===============================================================================

Responsabilidades:
  - Exponer la vista de usuarios: lista paginada, filtros, estadísticas.
  - Exponer alta / edición / baja lógica (solo admin).
  - Traducir filtros inválidos a 422 (RFC7807).

Patrones aplicados:
  - Adapter / Presentation Layer: HTTP ↔ UserManagementView.
  - Autorización por dependencia (require_session / require_admin).

Colaboradores:
  - application.console.UserManagementView
  - api.dependencies: require_session, require_admin
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..application.console import UserManagementView
from ..container import get_user_management_view
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, validation_error
from ..domain.entities import CreateUserData, Role, Session, UpdateUserData
from .dependencies import require_admin, require_session

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class UserViewRequest(BaseModel):
    """Cambios de filtros/página. Campos ausentes no se modifican."""

    search: str | None = Field(default=None, max_length=200)
    role: str | None = None
    company: str | None = None
    status: str | None = None
    page: int | None = Field(default=None, ge=1)


class CreateUserRequest(BaseModel):
    # R: Obligatoriedad/formato se validan en dominio (errores por campo).
    name: str = ""
    email: str = ""
    password: str = ""
    company: str = ""
    role: Role = Role.EMPLOYEE
    department: str = ""
    phone: str = ""


class UpdateUserRequest(BaseModel):
    name: str | None = None
    role: Role | None = None
    company: str | None = None
    department: str | None = None
    phone: str | None = None
    is_active: bool | None = None


class SavedUserResponse(BaseModel):
    user: dict[str, Any]
    view: dict[str, Any]


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.get("/users", tags=["users"])
async def get_users_view(
    _session: Session = Depends(require_session),
    view: UserManagementView = Depends(get_user_management_view),
) -> dict[str, Any]:
    await view.ensure_loaded()
    return view.snapshot()


@router.patch("/users/view", tags=["users"])
def update_users_view(
    req: UserViewRequest,
    _session: Session = Depends(require_session),
    view: UserManagementView = Depends(get_user_management_view),
) -> dict[str, Any]:
    try:
        view.update_filters(
            search=req.search, role=req.role, company=req.company, status=req.status
        )
    except ValueError as exc:
        raise validation_error(f"Filtro inválido: {exc}")
    if req.page is not None:
        view.go_to_page(req.page)
    return view.snapshot()


@router.post("/users/refresh", tags=["users"])
async def refresh_users(
    _session: Session = Depends(require_session),
    view: UserManagementView = Depends(get_user_management_view),
) -> dict[str, Any]:
    await view.load(refresh=True)
    return view.snapshot()


@router.post(
    "/users", response_model=SavedUserResponse, status_code=201, tags=["users"]
)
async def create_user(
    req: CreateUserRequest,
    _admin: Session = Depends(require_admin),
    view: UserManagementView = Depends(get_user_management_view),
) -> SavedUserResponse:
    created = await view.save_user(CreateUserData(**req.model_dump()))
    return SavedUserResponse(user=created.to_dict(), view=view.snapshot())


@router.patch("/users/{user_id}", response_model=SavedUserResponse, tags=["users"])
async def update_user(
    user_id: str,
    req: UpdateUserRequest,
    _admin: Session = Depends(require_admin),
    view: UserManagementView = Depends(get_user_management_view),
) -> SavedUserResponse:
    updated = await view.save_user(
        UpdateUserData(**req.model_dump()), editing_id=user_id
    )
    return SavedUserResponse(user=updated.to_dict(), view=view.snapshot())


@router.delete("/users/{user_id}", response_model=SavedUserResponse, tags=["users"])
async def delete_user(
    user_id: str,
    _admin: Session = Depends(require_admin),
    view: UserManagementView = Depends(get_user_management_view),
) -> SavedUserResponse:
    """Baja lógica: el perfil queda con is_active=False."""
    deactivated = await view.delete_user(user_id)
    return SavedUserResponse(user=deactivated.to_dict(), view=view.snapshot())


__all__ = ["router"]
