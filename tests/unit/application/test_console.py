"""
Name: Console View Tests

Responsibilities:
  - Validate load/refresh behavior and error toasts for both views
  - Validate admin gating and audit of write operations
  - Pin the "failed refresh empties the table" behavior
"""

from datetime import date

import pytest
import pytest_asyncio
from sst_console.application.console import ReportsView, UserManagementView
from sst_console.application.report_catalog import ReportCatalog
from sst_console.application.user_directory import (
    CREATE_USER_PROCEDURE,
    USERS_PROCEDURE,
    UserDirectory,
)
from sst_console.crosscutting.exceptions import (
    AdminRequired,
    BackendCallError,
    CorsOrNetworkError,
    DuplicateEmailError,
    ReportNotFoundError,
    UserNotFoundError,
    ValidationFailed,
)
from sst_console.domain.entities import (
    LABEL_PDF_LINK,
    CreateUserData,
    UpdateUserData,
)
from sst_console.identity.session import SessionGateway

pytestmark = pytest.mark.unit


def _rows(count: int):
    return [
        {"id": f"user-{i:03d}", "name": f"User {i}", "email": f"u{i}@acme.test", "role": "employee", "company": "Acme"}
        for i in range(count)
    ]


class FakeReportSource:
    def __init__(self, body=None, error=None, configured=True):
        self.body = body
        self.error = error
        self._configured = configured

    @property
    def configured(self):
        return self._configured

    async def fetch(self):
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def gateway(fake_identity, fake_profiles, action_log, toasts, translator):
    return SessionGateway(fake_identity, fake_profiles, action_log, toasts, translator)


@pytest_asyncio.fixture
async def admin_gateway(gateway, action_log, toasts):
    await gateway.sign_in("admin@acme.test", "secret1")
    action_log.calls.clear()
    toasts.clear()
    return gateway


@pytest.fixture
def user_view(fake_profiles, toasts, translator, action_log):
    def _make(gateway):
        return UserManagementView(
            UserDirectory(fake_profiles), gateway, toasts, translator, action_log
        )

    return _make


class TestUserManagementLoad:
    @pytest.mark.asyncio
    async def test_load_and_paginate(self, admin_gateway, fake_profiles, user_view):
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(25)
        view = user_view(admin_gateway)

        await view.load()
        view.go_to_page(3)
        snapshot = view.snapshot()

        assert snapshot["page"]["total_items"] == 25
        assert snapshot["page"]["total_pages"] == 3
        assert len(snapshot["page"]["items"]) == 5
        assert snapshot["page"]["start_index"] == 21
        assert snapshot["can_manage"] is True
        assert snapshot["statistics"]["total"] == 25

    @pytest.mark.asyncio
    async def test_refresh_toast_and_sync_audit(
        self, admin_gateway, fake_profiles, user_view, toasts, action_log
    ):
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(2)
        view = user_view(admin_gateway)

        await view.load(refresh=True)

        assert toasts.toasts[0].message == "Datos actualizados"
        assert action_log.calls[-1]["action"] == "SYNC_USERS"
        assert action_log.calls[-1]["data"] == {"userCount": 2}

    @pytest.mark.asyncio
    async def test_failed_refresh_empties_the_table(
        self, admin_gateway, fake_profiles, user_view, toasts
    ):
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(3)
        view = user_view(admin_gateway)
        await view.load()
        fake_profiles.rpc_errors[USERS_PROCEDURE] = BackendCallError("permission denied for function")

        await view.load(refresh=True)

        assert view.users == []
        assert view.refreshing is False
        assert toasts.toasts[0].message == "No tienes permisos para realizar esta acción"

    @pytest.mark.asyncio
    async def test_unknown_error_uses_generic_prefix(
        self, admin_gateway, fake_profiles, user_view, toasts
    ):
        fake_profiles.rpc_errors[USERS_PROCEDURE] = BackendCallError("timeout")

        await user_view(admin_gateway).load()

        assert toasts.toasts[0].message == (
            "Error al obtener usuarios: Error de base de datos: timeout"
        )

    @pytest.mark.asyncio
    async def test_filter_change_resets_page(self, admin_gateway, fake_profiles, user_view):
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(25)
        view = user_view(admin_gateway)
        await view.load()
        view.go_to_page(3)

        view.update_filters(search="User 1")

        assert view.current_page == 1

    @pytest.mark.asyncio
    async def test_unchanged_filters_keep_page(self, admin_gateway, fake_profiles, user_view):
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(25)
        view = user_view(admin_gateway)
        await view.load()
        view.go_to_page(2)

        view.update_filters(search=None, role="all")

        assert view.current_page == 2

    @pytest.mark.asyncio
    async def test_ensure_loaded_only_once(self, admin_gateway, fake_profiles, user_view):
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(1)
        view = user_view(admin_gateway)

        await view.ensure_loaded()
        await view.ensure_loaded()

        assert [c[0] for c in fake_profiles.rpc_calls].count(USERS_PROCEDURE) == 1


class TestUserManagementWrites:
    @pytest.mark.asyncio
    async def test_create_audits_once_and_reloads(
        self, admin_gateway, fake_profiles, user_view, toasts, action_log
    ):
        fake_profiles.rpc_results[CREATE_USER_PROCEDURE] = {
            "success": True,
            "user": {"id": "new-1", "name": "Carla", "company": "Acme", "role": "nurse"},
        }
        fake_profiles.rpc_results[USERS_PROCEDURE] = _rows(1)
        view = user_view(admin_gateway)

        created = await view.save_user(
            CreateUserData(name="Carla", email="carla@acme.test", password="secret1", company="Acme")
        )

        assert created.id == "new-1"
        assert action_log.actions() == ["CREATE_USER"]
        assert action_log.calls[0]["data"] == {"userId": "new-1", "email": "carla@acme.test"}
        assert toasts.toasts[0].message == "Usuario creado exitosamente"
        assert len(view.users) == 1

    @pytest.mark.asyncio
    async def test_validation_error_has_no_toast(self, admin_gateway, user_view, toasts, action_log):
        with pytest.raises(ValidationFailed):
            await user_view(admin_gateway).save_user(
                CreateUserData(name="Carla", email="carla@acme.test", password="123", company="Acme")
            )

        assert toasts.toasts == []
        assert action_log.calls == []

    @pytest.mark.asyncio
    async def test_duplicate_email_toast(self, admin_gateway, fake_profiles, user_view, toasts):
        fake_profiles.rpc_results[CREATE_USER_PROCEDURE] = {
            "success": False,
            "message": "Ya existe un usuario con este email",
        }

        with pytest.raises(DuplicateEmailError):
            await user_view(admin_gateway).save_user(
                CreateUserData(name="Carla", email="ana@acme.test", password="secret1", company="Acme")
            )

        assert [t.message for t in toasts.toasts] == [
            "Ya existe un usuario con este email. Usa un email diferente."
        ]

    @pytest.mark.asyncio
    async def test_update_audits_provided_fields(
        self, admin_gateway, fake_profiles, user_view, action_log, toasts
    ):
        fake_profiles.rpc_results[USERS_PROCEDURE] = []

        await user_view(admin_gateway).save_user(
            UpdateUserData(phone="", is_active=True), editing_id="nurse-1"
        )

        assert action_log.calls[0]["action"] == "UPDATE_USER"
        assert action_log.calls[0]["data"] == {
            "userId": "nurse-1",
            "updates": ["phone", "is_active"],
        }
        assert toasts.toasts[0].message == "Usuario actualizado exitosamente"

    @pytest.mark.asyncio
    async def test_delete_is_logical_and_audited(
        self, admin_gateway, fake_profiles, user_view, action_log
    ):
        fake_profiles.rpc_results[USERS_PROCEDURE] = []

        deactivated = await user_view(admin_gateway).delete_user("nurse-1")

        assert deactivated.is_active is False
        assert action_log.calls[0]["action"] == "DELETE_USER"
        assert action_log.calls[0]["data"]["userId"] == "nurse-1"

    @pytest.mark.asyncio
    async def test_delete_error_toast(self, admin_gateway, fake_profiles, user_view, toasts):
        fake_profiles.rpc_results[USERS_PROCEDURE] = []

        with pytest.raises(UserNotFoundError):
            await user_view(admin_gateway).delete_user("ghost")

        assert toasts.toasts[0].message == (
            "Error al eliminar usuario: No se pudo eliminar el usuario"
        )

    @pytest.mark.asyncio
    async def test_non_admin_cannot_write(self, gateway, fake_profiles, user_view):
        await gateway.sign_in("nurse@acme.test", "secret2")

        with pytest.raises(AdminRequired):
            await user_view(gateway).delete_user("admin-1")

        assert fake_profiles.updates == []


class TestReportsView:
    def _view(self, gateway, source, toasts, translator, action_log):
        return ReportsView(
            ReportCatalog(source),
            gateway,
            toasts,
            translator,
            action_log,
            clock=lambda: date(2024, 3, 31),
        )

    @pytest.mark.asyncio
    async def test_load_audits_view(
        self, admin_gateway, toasts, translator, action_log, make_report_row
    ):
        source = FakeReportSource({"success": True, "data": [make_report_row("R-1")]})
        view = self._view(admin_gateway, source, toasts, translator, action_log)

        await view.load()
        snapshot = view.snapshot()

        assert [r["id"] for r in snapshot["reports"]] == ["R-1"]
        assert snapshot["statistics"]["acceptable_percentage"] == 100
        assert snapshot["empty_message"] is None
        assert action_log.calls[-1] == {
            "action": "VIEW_REPORTS",
            "user": "admin@acme.test",
            "data": {"reportCount": 1},
        }
        assert toasts.toasts == []

    @pytest.mark.asyncio
    async def test_unreachable_sets_banner_and_toast(
        self, admin_gateway, toasts, translator, action_log
    ):
        source = FakeReportSource(error=CorsOrNetworkError("Failed to fetch"))
        view = self._view(admin_gateway, source, toasts, translator, action_log)

        await view.load()

        expected = "No se pudo contactar el servicio de reportes (CORS o red)"
        assert view.error == expected
        assert toasts.toasts[0].message == expected
        assert view.snapshot()["empty_message"] == "Error al cargar los reportes"

    @pytest.mark.asyncio
    async def test_api_error_message(self, admin_gateway, toasts, translator, action_log):
        source = FakeReportSource({"success": False, "message": "Hoja vacía"})
        view = self._view(admin_gateway, source, toasts, translator, action_log)

        await view.load()

        assert view.error == "Error al obtener reportes: Hoja vacía"
        assert view.reports == []

    @pytest.mark.asyncio
    async def test_refresh_success_clears_banner(
        self, admin_gateway, toasts, translator, action_log, make_report_row
    ):
        source = FakeReportSource(error=CorsOrNetworkError("down"))
        view = self._view(admin_gateway, source, toasts, translator, action_log)
        await view.load()
        source.error = None
        source.body = {"success": True, "data": [make_report_row()]}

        await view.load(refresh=True)

        assert view.error is None
        assert toasts.toasts[0].message == "Reportes actualizados"

    @pytest.mark.asyncio
    async def test_unconfigured_shows_empty_state(self, admin_gateway, toasts, translator, action_log):
        view = self._view(
            admin_gateway, FakeReportSource(configured=False), toasts, translator, action_log
        )

        await view.load()

        assert view.snapshot()["empty_message"] == "No se encontraron reportes"
        assert view.error is None

    @pytest.mark.asyncio
    async def test_open_pdf(self, admin_gateway, toasts, translator, action_log, make_report_row):
        rows = [make_report_row("R-1"), make_report_row("R-2", **{LABEL_PDF_LINK: ""})]
        view = self._view(
            admin_gateway, FakeReportSource({"success": True, "data": rows}), toasts, translator, action_log
        )
        await view.load()

        link = await view.open_pdf("R-1")

        assert link == "https://files.test/R-1.pdf"
        assert action_log.calls[-1]["action"] == "VIEW_REPORT_PDF"
        with pytest.raises(ReportNotFoundError):
            await view.open_pdf("R-2")
