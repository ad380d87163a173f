"""
===============================================================================
TARJETA CRC — sst_console/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (clientes HTTP, stores, gateway, vistas) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache): UNA instancia por proceso de
    ToastCenter y SessionGateway (estado compartido de la consola).
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - sst_console.crosscutting.config.get_settings
  - sst_console.infrastructure.* (implementaciones)
  - sst_console.application.* / identity.session

Patrones aplicados:
  - Composition Root
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

import httpx

from .application.console import ReportsView, UserManagementView
from .application.preferences import LanguagePreference
from .application.report_catalog import ReportCatalog
from .application.toasts import ToastCenter
from .application.user_directory import UserDirectory
from .crosscutting.config import get_settings
from .domain.entities import Language
from .i18n.resolver import Translator
from .identity.session import SessionGateway
from .infrastructure.action_script import ActionScriptClient
from .infrastructure.identity_client import HttpIdentityClient
from .infrastructure.preference_store import JsonFileStore
from .infrastructure.profiles_client import HttpProfilesClient
from .infrastructure.reports_client import HttpReportsClient
from .infrastructure.retry import RetryPolicy


@lru_cache(maxsize=1)
def get_http_client() -> httpx.AsyncClient:
    # Sin timeout global: solo el POST de auditoría tiene timeout duro propio.
    return httpx.AsyncClient(timeout=None, follow_redirects=True)


async def close_http_client() -> None:
    """Cierra el AsyncClient compartido y descarta todo lo que lo referencia."""
    if get_http_client.cache_info().currsize:
        await get_http_client().aclose()
    for factory in _HTTP_DEPENDENTS:
        factory.cache_clear()
    get_http_client.cache_clear()


# ---------------------------------------------------------------------------
# Infraestructura
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_identity_client() -> HttpIdentityClient:
    settings = get_settings()
    return HttpIdentityClient(
        settings.identity_backend_url,
        settings.identity_backend_anon_key,
        client=get_http_client(),
        session_file=settings.session_file,
    )


@lru_cache(maxsize=1)
def get_profiles_client() -> HttpProfilesClient:
    settings = get_settings()
    return HttpProfilesClient(
        settings.identity_backend_url,
        settings.identity_backend_anon_key,
        client=get_http_client(),
    )


@lru_cache(maxsize=1)
def get_reports_client() -> HttpReportsClient:
    return HttpReportsClient(get_settings().reports_api_url, client=get_http_client())


@lru_cache(maxsize=1)
def get_action_script_client() -> ActionScriptClient:
    settings = get_settings()
    return ActionScriptClient(
        settings.action_script_url,
        RetryPolicy.from_settings(settings),
        client=get_http_client(),
    )


@lru_cache(maxsize=1)
def get_language_preference() -> LanguagePreference:
    settings = get_settings()
    return LanguagePreference(
        JsonFileStore(settings.preferences_file),
        key=settings.language_storage_key,
        default=Language(settings.default_language),
    )


# ---------------------------------------------------------------------------
# Estado de la consola (singletons)
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_translator() -> Translator:
    return Translator(get_language_preference())


@lru_cache(maxsize=1)
def get_toast_center() -> ToastCenter:
    return ToastCenter(duration_ms=get_settings().toast_duration_ms)


@lru_cache(maxsize=1)
def get_session_gateway() -> SessionGateway:
    return SessionGateway(
        get_identity_client(),
        get_profiles_client(),
        get_action_script_client(),
        get_toast_center(),
        get_translator(),
    )


@lru_cache(maxsize=1)
def get_user_management_view() -> UserManagementView:
    return UserManagementView(
        UserDirectory(get_profiles_client()),
        get_session_gateway(),
        get_toast_center(),
        get_translator(),
        get_action_script_client(),
        page_size=get_settings().users_per_page,
    )


@lru_cache(maxsize=1)
def get_reports_view() -> ReportsView:
    return ReportsView(
        ReportCatalog(get_reports_client()),
        get_session_gateway(),
        get_toast_center(),
        get_translator(),
        get_action_script_client(),
    )


# R: Singletons que retienen (directa o indirectamente) el AsyncClient.
_HTTP_DEPENDENTS = (
    get_identity_client,
    get_profiles_client,
    get_reports_client,
    get_action_script_client,
    get_session_gateway,
    get_user_management_view,
    get_reports_view,
)
