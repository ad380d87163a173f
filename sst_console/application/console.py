"""
===============================================================================
TARJETA CRC — application/console.py
===============================================================================

Módulo:
    Controladores de presentación (vista de usuarios y vista de reportes)

Responsabilidades:
    - Mantener el estado visible de cada vista (lista, filtros, página, flags
      de carga, banner de error).
    - Traducir intents del operador (cargar, refrescar, guardar, eliminar,
      cambiar filtros) en llamadas a la capa de datos.
    - Convertir errores en exactamente UN toast de error.
    - Registrar auditoría externa junto a la operación principal (best-effort).

Colaboradores:
    - application.user_directory.UserDirectory / report_catalog.ReportCatalog
    - application.user_views / report_views / crosscutting.pagination
    - identity.session.SessionGateway (operador + permisos)
    - application.toasts.ToastCenter, i18n.resolver.Translator
    - audit.log_to_action_script

Comportamiento fijado:
    - Una carga fallida deja la lista VACÍA (no conserva la anterior).
    - Los errores de reportes además dejan un banner persistente hasta la
      próxima carga exitosa.
===============================================================================
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Union

from ..audit import log_to_action_script
from ..crosscutting.exceptions import (
    ConsoleError,
    CorsOrNetworkError,
    ReportNotFoundError,
    ValidationFailed,
)
from ..crosscutting.logger import logger
from ..crosscutting.pagination import paginate
from ..domain.entities import (
    AuditAction,
    CreateUserData,
    Report,
    UpdateUserData,
    UserProfile,
)
from .report_catalog import ReportCatalog
from .report_views import ReportFilters, filter_reports, report_statistics
from .user_directory import UserDirectory
from .user_views import UserFilters, company_options, filter_users, user_statistics

# Errores de listado que tienen texto propio (el resto va con prefijo genérico).
_KNOWN_FETCH_KEYS = frozenset(
    {"databaseFunctionError", "permissionDenied", "supabaseAmbiguousIdError"}
)


class _ConsoleViewBase:
    def __init__(self, session, toasts, translator, action_log):
        self._session = session
        self._toasts = toasts
        self._translator = translator
        self._action_log = action_log

    def t(self, key: str, params: Optional[Dict[str, Any]] = None) -> str:
        return self._translator.t(key, params)

    async def _audit(self, action: AuditAction, data: Dict[str, Any]) -> None:
        session = self._session.current_session
        if session is None:
            return
        await log_to_action_script(self._action_log, action, session.email, data)

    def _message_for(self, exc: ConsoleError) -> str:
        if exc.key and self._translator.has(exc.key):
            return self.t(exc.key, exc.params)
        return exc.message


class UserManagementView(_ConsoleViewBase):
    def __init__(
        self,
        directory: UserDirectory,
        session,
        toasts,
        translator,
        action_log=None,
        *,
        page_size: int = 10,
    ):
        super().__init__(session, toasts, translator, action_log)
        self._directory = directory
        self.page_size = page_size
        self.users: List[UserProfile] = []
        self.filters = UserFilters()
        self.current_page = 1
        self.loading = False
        self.refreshing = False
        self.loaded = False

    async def load(self, refresh: bool = False) -> List[UserProfile]:
        if refresh:
            self.refreshing = True
        else:
            self.loading = True

        try:
            users = await self._directory.fetch_users()
        except ConsoleError as exc:
            logger.error(
                "Error fetching users",
                extra={"error_code": exc.error_code, "error": exc.message},
            )
            self._toasts.error(self._fetch_error_message(exc))
            self.users = []
        else:
            self.users = users
            if refresh:
                self._toasts.success(self.t("dataRefreshed"))
                await self._audit(AuditAction.SYNC_USERS, {"userCount": len(users)})
        finally:
            self.loading = False
            self.refreshing = False
            self.loaded = True

        return self.users

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.load()

    def _fetch_error_message(self, exc: ConsoleError) -> str:
        if exc.key in _KNOWN_FETCH_KEYS:
            return self.t(exc.key)
        return f"{self.t('fetchUsersError')}: {exc.message}"

    def update_filters(self, **changes: Any) -> UserFilters:
        changes = {k: v for k, v in changes.items() if v is not None}
        updated = self.filters.with_changes(**changes)
        if updated != self.filters:
            self.filters = updated
            self.current_page = 1
        return self.filters

    def go_to_page(self, page: int) -> int:
        self.current_page = int(page)
        return self.current_page

    def snapshot(self) -> Dict[str, Any]:
        filtered = filter_users(self.users, self.filters)
        page = paginate(filtered, self.current_page, self.page_size)
        page_data = page.model_dump(exclude={"items"})
        page_data["items"] = [u.to_dict() for u in page.items]
        return {
            "loading": self.loading,
            "refreshing": self.refreshing,
            "filters": asdict(self.filters),
            "company_options": company_options(self.users),
            "page": page_data,
            "statistics": asdict(user_statistics(self.users, self._translator)),
            "can_manage": self._session.is_admin,
        }

    async def save_user(
        self,
        data: Union[CreateUserData, UpdateUserData],
        editing_id: Optional[str] = None,
    ) -> UserProfile:
        """
        Alta (editing_id=None) o edición de un usuario. Solo admin.

        Raises:
            AdminRequired, ValidationFailed (sin toast: se muestra inline),
            ConsoleError (con un toast de error).
        """
        self._session.require_admin()
        try:
            if editing_id:
                saved = await self._directory.update_user(editing_id, data)
                await self._audit(
                    AuditAction.UPDATE_USER,
                    {"userId": saved.id, "updates": data.provided_fields()},
                )
                self._toasts.success(self.t("userUpdated"))
            else:
                saved = await self._directory.create_user(data)
                await self._audit(
                    AuditAction.CREATE_USER, {"userId": saved.id, "email": saved.email}
                )
                self._toasts.success(self.t("userCreated"))
        except ValidationFailed:
            raise
        except ConsoleError as exc:
            self._toasts.error(self._message_for(exc))
            raise

        await self.load()
        return saved

    async def delete_user(self, user_id: str) -> UserProfile:
        self._session.require_admin()
        target = next((u for u in self.users if u.id == user_id), None)
        try:
            deactivated = await self._directory.deactivate_user(user_id)
        except ConsoleError as exc:
            self._toasts.error(f"{self.t('userDeleteError')}: {exc.message}")
            raise

        email = target.email if target else deactivated.email
        await self._audit(AuditAction.DELETE_USER, {"userId": user_id, "email": email})
        self._toasts.success(self.t("userDeleted"))
        await self.load()
        return deactivated


class ReportsView(_ConsoleViewBase):
    def __init__(
        self,
        catalog: ReportCatalog,
        session,
        toasts,
        translator,
        action_log=None,
        *,
        clock: Callable[[], date] = date.today,
    ):
        super().__init__(session, toasts, translator, action_log)
        self._catalog = catalog
        self._clock = clock
        self.reports: List[Report] = []
        self.filters = ReportFilters()
        self.error: Optional[str] = None
        self.loading = False
        self.refreshing = False
        self.loaded = False

    async def load(self, refresh: bool = False) -> List[Report]:
        if refresh:
            self.refreshing = True
        else:
            self.loading = True
        self.error = None

        try:
            reports = await self._catalog.fetch_reports()
        except ConsoleError as exc:
            message = (
                self.t("appsScriptCorsError")
                if isinstance(exc, CorsOrNetworkError)
                else f"{self.t('fetchReportsError')}: {exc.message}"
            )
            logger.error(
                "Error obteniendo reportes",
                extra={"error_code": exc.error_code, "error": exc.message},
            )
            self.error = message
            self._toasts.error(message)
            self.reports = []
        else:
            self.reports = reports
            if refresh:
                self._toasts.success(self.t("reportsRefreshed"))
            await self._audit(AuditAction.VIEW_REPORTS, {"reportCount": len(reports)})
        finally:
            self.loading = False
            self.refreshing = False
            self.loaded = True

        return self.reports

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.load()

    def update_filters(self, **changes: Any) -> ReportFilters:
        changes = {k: v for k, v in changes.items() if v is not None}
        self.filters = self.filters.with_changes(**changes)
        return self.filters

    def visible_reports(self) -> List[Report]:
        return filter_reports(self.reports, self.filters, today=self._clock())

    def snapshot(self) -> Dict[str, Any]:
        visible = self.visible_reports()
        empty_message = None
        if not visible:
            empty_message = self.t("errorLoadingReports" if self.error else "noReportsFound")
        return {
            "loading": self.loading,
            "refreshing": self.refreshing,
            "error": self.error,
            "filters": asdict(self.filters),
            "reports": [r.to_dict() for r in visible],
            "statistics": asdict(report_statistics(visible)),
            "empty_message": empty_message,
        }

    async def open_pdf(self, report_id: str) -> str:
        report = next((r for r in self.reports if r.id == report_id), None)
        if report is None or not report.pdf_link:
            raise ReportNotFoundError(f"Reporte '{report_id}' sin PDF disponible")
        await self._audit(AuditAction.VIEW_REPORT_PDF, {"reportId": report_id})
        return report.pdf_link
