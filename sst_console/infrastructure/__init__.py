"""
Infrastructure adapters (HTTP clients and local stores).

Each client receives an optional shared `httpx.AsyncClient` from the container.
"""

from .action_script import ActionScriptClient
from .identity_client import HttpIdentityClient
from .preference_store import InMemoryStore, JsonFileStore
from .profiles_client import HttpProfilesClient
from .reports_client import HttpReportsClient
from .retry import RetryPolicy

__all__ = [
    "ActionScriptClient",
    "HttpIdentityClient",
    "HttpProfilesClient",
    "HttpReportsClient",
    "InMemoryStore",
    "JsonFileStore",
    "RetryPolicy",
]
