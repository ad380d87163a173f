"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (required settings, no .env file)
  - Provide in-memory fakes for the backend ports (identity, profiles, audit)
  - Provide factories for users, sessions and report rows

Collaborators:
  - pytest / pytest-asyncio
  - sst_console.domain: entities and ports implemented by the fakes

Notes:
  - Env vars are set BEFORE importing sst_console: the logger reads settings
    at import time.
  - Toast timers are disabled (scheduler returns None) for determinism.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("IDENTITY_BACKEND_URL", "https://backend.test")
os.environ.setdefault("IDENTITY_BACKEND_ANON_KEY", "anon-test-key")
os.environ.setdefault("LOG_JSON", "false")

from sst_console.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from sst_console.application.preferences import LanguagePreference  # noqa: E402
from sst_console.application.toasts import ToastCenter  # noqa: E402
from sst_console.crosscutting.exceptions import InvalidCredentials  # noqa: E402
from sst_console.domain.entities import (  # noqa: E402
    LABEL_CLOSURE,
    LABEL_ID,
    LABEL_PDF_LINK,
    LABEL_RESULT,
    LABEL_TASK,
    LABEL_VERIFICATION_DATE,
    LABEL_WORK_CENTER,
    Role,
    Session,
    UserProfile,
)
from sst_console.i18n.resolver import Translator  # noqa: E402
from sst_console.infrastructure.preference_store import InMemoryStore  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Fakes (ports)
# ============================================================================


class FakeActionLog:
    """R: Records every audit call; optionally fails to prove best-effort."""

    def __init__(self, fail: bool = False):
        self.calls: List[Dict[str, Any]] = []
        self.fail = fail

    async def send(self, payload):
        self.calls.append(payload)

    async def log_user_action(self, action, user_email, data=None):
        self.calls.append({"action": action, "user": user_email, "data": data})
        if self.fail:
            raise RuntimeError("audit endpoint down")

    def actions(self) -> List[str]:
        return [c["action"] for c in self.calls]


class FakeIdentity:
    def __init__(self):
        self.accounts: Dict[str, str] = {}
        self.users_by_token: Dict[str, Dict[str, Any]] = {}
        self.persisted: Optional[Session] = None
        self.sign_out_error: Optional[Exception] = None
        self.signed_out: List[str] = []

    def add_account(self, email: str, password: str, user_id: str) -> None:
        self.accounts[email] = password
        self.users_by_token[f"token-{user_id}"] = {"id": user_id, "email": email}

    async def sign_in_with_password(self, email, password):
        if self.accounts.get(email) != password:
            raise InvalidCredentials("Invalid login credentials")
        token, user = next(
            (t, u) for t, u in self.users_by_token.items() if u["email"] == email
        )
        return Session(access_token=token, user_id=user["id"], email=email)

    async def get_user(self, access_token):
        return self.users_by_token.get(access_token)

    async def sign_out(self, access_token):
        self.signed_out.append(access_token)
        if self.sign_out_error is not None:
            raise self.sign_out_error

    def load_persisted_session(self):
        return self.persisted

    def persist_session(self, session):
        self.persisted = session


class FakeProfiles:
    def __init__(self):
        self.profiles: Dict[str, Dict[str, Any]] = {}
        self.rpc_calls: List[tuple] = []
        self.rpc_results: Dict[str, Any] = {}
        self.rpc_errors: Dict[str, Exception] = {}
        self.updates: List[tuple] = []
        self.access_token: Optional[str] = None

    def set_access_token(self, access_token):
        self.access_token = access_token

    async def rpc(self, name, params=None):
        self.rpc_calls.append((name, params))
        if name in self.rpc_errors:
            raise self.rpc_errors[name]
        return self.rpc_results.get(name)

    async def update_profile(self, user_id, fields):
        self.updates.append((user_id, fields))
        row = self.profiles.get(user_id)
        if row is None:
            return None
        row.update(fields)
        return dict(row)

    async def get_profile(self, user_id):
        row = self.profiles.get(user_id)
        return dict(row) if row else None


# ============================================================================
# Factories
# ============================================================================


@pytest.fixture
def make_user() -> Callable[..., UserProfile]:
    def _make(user_id: str = "u-1", **overrides: Any) -> UserProfile:
        data = {
            "id": user_id,
            "name": "Ana Pérez",
            "role": Role.EMPLOYEE,
            "company": "Acme",
            "email": f"{user_id}@acme.test",
        }
        data.update(overrides)
        return UserProfile(**data)

    return _make


@pytest.fixture
def make_report_row() -> Callable[..., Dict[str, str]]:
    def _make(report_id: str = "R-1", **overrides: str) -> Dict[str, str]:
        row = {
            LABEL_ID: report_id,
            LABEL_VERIFICATION_DATE: "05/03/2024 14:30:00",
            LABEL_WORK_CENTER: "Planta Norte",
            LABEL_TASK: "Inspección de extintores",
            LABEL_RESULT: "ACEPTABLE 可接受",
            LABEL_CLOSURE: "CERRADO",
            LABEL_PDF_LINK: f"https://files.test/{report_id}.pdf",
        }
        for label, value in overrides.items():
            row[label] = value
        return row

    return _make


# ============================================================================
# Shared collaborators
# ============================================================================


@pytest.fixture
def preference() -> LanguagePreference:
    return LanguagePreference(InMemoryStore())


@pytest.fixture
def translator(preference: LanguagePreference) -> Translator:
    return Translator(preference)


@pytest.fixture
def toasts() -> ToastCenter:
    return ToastCenter(scheduler=lambda delay, callback: None)


@pytest.fixture
def action_log() -> FakeActionLog:
    return FakeActionLog()


@pytest.fixture
def fake_identity() -> FakeIdentity:
    identity = FakeIdentity()
    identity.add_account("admin@acme.test", "secret1", "admin-1")
    identity.add_account("nurse@acme.test", "secret2", "nurse-1")
    return identity


@pytest.fixture
def fake_profiles() -> FakeProfiles:
    profiles = FakeProfiles()
    profiles.profiles["admin-1"] = {
        "id": "admin-1",
        "name": "Admin",
        "role": "admin",
        "company": "Acme",
        "is_active": True,
    }
    profiles.profiles["nurse-1"] = {
        "id": "nurse-1",
        "name": "Nora",
        "role": "nurse",
        "company": "Acme",
        "is_active": True,
    }
    return profiles
