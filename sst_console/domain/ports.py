"""
TARJETA CRC — domain/ports.py

Name
- Console Ports (Protocols)

Responsibilities
- Define the contracts the console needs from remote collaborators
  (identity backend, profiles backend, reports endpoint, audit sink) and
  from durable key-value storage.
- Keep application code independent from httpx and the filesystem.

Collaborators
- infrastructure.identity_client / profiles_client / reports_client
- infrastructure.action_script / preference_store
- application.* and identity.session (consumers)

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Remote contracts are async; storage is sync (tiny local reads/writes).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .entities import ActionScriptResult, Session


class IdentityBackend(Protocol):
    """R: Hosted identity service (credential verification + session)."""

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """R: Raises InvalidCredentials / NetworkError."""
        ...

    async def get_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        """R: Returns the identity user for a token, or None if invalid/expired."""
        ...

    async def sign_out(self, access_token: str) -> None: ...

    def load_persisted_session(self) -> Optional[Session]: ...

    def persist_session(self, session: Optional[Session]) -> None: ...


class ProfileBackend(Protocol):
    """R: Relational backend exposing procedures and the `profiles` relation."""

    def set_access_token(self, access_token: Optional[str]) -> None: ...

    async def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """R: Raises BackendCallError / NetworkError."""
        ...

    async def update_profile(
        self, user_id: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """R: Returns the updated row, or None when no row matched."""
        ...

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]: ...


class ReportSource(Protocol):
    @property
    def configured(self) -> bool: ...

    async def fetch(self) -> Any:
        """R: Returns the decoded JSON envelope {success, data, message?}."""
        ...


class ActionLogSink(Protocol):
    """R: Fire-and-forget audit sink. log_user_action never raises."""

    async def send(self, payload: Dict[str, Any]) -> ActionScriptResult: ...

    async def log_user_action(
        self, action: str, user_email: str, data: Dict[str, Any]
    ) -> None: ...


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def keys(self) -> List[str]: ...
