"""
===============================================================================
TARJETA CRC — infrastructure/preference_store.py
===============================================================================

Responsabilidades:
  - Implementar KeyValueStore durable (archivo JSON) y en memoria (tests).
  - Escritura atómica: archivo temporal + os.replace.
  - Archivo ilegible/corrupto => se lee como vacío (con warning), nunca lanza.

Colaboradores:
  - application.preferences.LanguagePreference (único consumidor)
===============================================================================
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..crosscutting.logger import logger


class InMemoryStore:
    """Store volátil. Se pierde al reiniciar el proceso."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore:
    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(
                "Preferencias ilegibles; se usan valores por defecto",
                extra={"path": str(self._path), "error": str(exc)},
            )
            return {}
        if not isinstance(raw, dict):
            logger.warning(
                "Preferencias con formato inesperado; se ignoran",
                extra={"path": str(self._path)},
            )
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise

    def keys(self) -> List[str]:
        return list(self._read())
