"""
===============================================================================
TARJETA CRC — identity/session.py
===============================================================================

Módulo:
    Gateway de sesión del operador (sign-in / sign-out / restore)

Responsabilidades:
    - Único dueño del estado de sesión del proceso.
    - Sign-in con email + password; derivar perfil y rol.
    - Sign-out: registrar LOGOUT ANTES de invalidar; el logging nunca bloquea.
    - Resolver al arrancar una sesión persistida (flag is_loading mientras tanto).
    - Exponer capacidades derivadas: is_authenticated, is_admin.

Colaboradores:
    - domain.ports.IdentityBackend / ProfileBackend / ActionLogSink
    - application.toasts.ToastCenter (loginSuccessful / loginError)
    - i18n.resolver.Translator
    - audit.log_to_action_script (LOGIN / LOGOUT)

Decisiones de diseño:
    - La capa de presentación solo OBSERVA la sesión (current_session).
    - No loguear secretos ni tokens; solo email/user_id.
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ..audit import log_to_action_script
from ..context import set_actor
from ..crosscutting.exceptions import (
    AdminRequired,
    BackendCallError,
    InvalidCredentials,
    NetworkError,
    NotAuthenticated,
)
from ..crosscutting.logger import logger
from ..domain.entities import AuditAction, Role, Session, UserProfile
from ..domain.ports import ActionLogSink, IdentityBackend, ProfileBackend


def _client_context(user_agent: str) -> dict:
    return {"sessionInfo": {"userAgent": user_agent or ""}}


class SessionGateway:
    def __init__(
        self,
        identity: IdentityBackend,
        profiles: ProfileBackend,
        action_log: ActionLogSink | None,
        toasts,
        translator,
    ):
        self._identity = identity
        self._profiles = profiles
        self._action_log = action_log
        self._toasts = toasts
        self._translator = translator
        self._session: Optional[Session] = None
        self._loading = True

    # ------------------------------------------------------------------
    # Lectura (sync)
    # ------------------------------------------------------------------

    @property
    def current_session(self) -> Optional[Session]:
        return self._session

    @property
    def profile(self) -> Optional[UserProfile]:
        return self._session.profile if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def is_admin(self) -> bool:
        profile = self.profile
        return profile is not None and profile.role is Role.ADMIN

    @property
    def is_loading(self) -> bool:
        return self._loading

    def require_session(self) -> Session:
        if self._session is None:
            raise NotAuthenticated("Sesión requerida")
        return self._session

    def require_admin(self) -> Session:
        session = self.require_session()
        if not self.is_admin:
            raise AdminRequired("Se requiere rol admin")
        return session

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------

    async def sign_in(self, email: str, password: str, user_agent: str = "") -> Session:
        try:
            session = await self._identity.sign_in_with_password(
                (email or "").strip(), password
            )
        except (InvalidCredentials, NetworkError) as exc:
            logger.warning(
                "Sign-in fallido",
                extra={"email": email, "error_code": exc.error_code},
            )
            self._toasts.error(self._translator.t("loginError"))
            raise

        session.profile = await self._load_profile(session)
        self._set_session(session)
        logger.info("Sign-in exitoso", extra={"user_id": session.user_id})

        self._toasts.success(self._translator.t("loginSuccessful"))
        await log_to_action_script(
            self._action_log,
            AuditAction.LOGIN,
            session.email,
            _client_context(user_agent),
        )
        return session

    async def sign_out(self, user_agent: str = "") -> None:
        session = self._session
        if session is None:
            return

        await log_to_action_script(
            self._action_log,
            AuditAction.LOGOUT,
            session.email,
            _client_context(user_agent),
        )
        try:
            await self._identity.sign_out(session.access_token)
        except (BackendCallError, NetworkError) as exc:
            logger.warning(
                "Sign-out remoto falló; se limpia la sesión local igual",
                extra={"error": exc.message},
            )
        finally:
            self._set_session(None)
            logger.info("Sign-out", extra={"user_id": session.user_id})

    async def restore(self) -> Optional[Session]:
        """Resuelve la sesión persistida. Inválida/expirada => sin sesión."""
        self._loading = True
        try:
            persisted = self._identity.load_persisted_session()
            if persisted is None:
                return None

            try:
                user = await self._identity.get_user(persisted.access_token)
            except (BackendCallError, NetworkError) as exc:
                logger.warning(
                    "No se pudo validar la sesión persistida",
                    extra={"error": exc.message},
                )
                return None

            if not user:
                logger.info("Sesión persistida expirada o inválida")
                self._set_session(None)
                return None

            persisted.user_id = str(user.get("id") or persisted.user_id)
            persisted.email = user.get("email") or persisted.email
            persisted.profile = await self._load_profile(persisted)
            self._set_session(persisted)
            logger.info("Sesión restaurada", extra={"user_id": persisted.user_id})
            return persisted
        finally:
            self._loading = False

    async def refresh_profile(self) -> Optional[UserProfile]:
        session = self.require_session()
        session.profile = await self._load_profile(session)
        return session.profile

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    async def _load_profile(self, session: Session) -> Optional[UserProfile]:
        self._profiles.set_access_token(session.access_token)
        try:
            row = await self._profiles.get_profile(session.user_id)
        except (BackendCallError, NetworkError) as exc:
            logger.warning(
                "No se pudo obtener el perfil del operador",
                extra={"user_id": session.user_id, "error": exc.message},
            )
            return None
        if not row:
            return None

        profile = UserProfile.from_row(row)
        profile.email = profile.email or session.email
        return profile

    def _set_session(self, session: Optional[Session]) -> None:
        self._session = session
        self._profiles.set_access_token(session.access_token if session else None)
        set_actor(session.email if session else "")
        try:
            self._identity.persist_session(session)
        except OSError as exc:
            logger.warning(
                "No se pudo persistir la sesión", extra={"error": str(exc)}
            )
