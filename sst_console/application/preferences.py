"""
===============================================================================
TARJETA CRC — application/preferences.py
===============================================================================

Responsabilidades:
  - Leer el idioma guardado al arrancar (solo valores del conjunto es/en/zh).
  - Persistir el idioma en cada cambio explícito.

Colaboradores:
  - domain.ports.KeyValueStore
  - i18n.resolver.Translator (lee `current`)
===============================================================================
"""

from __future__ import annotations

from ..crosscutting.logger import logger
from ..domain.entities import DEFAULT_LANGUAGE, Language
from ..domain.ports import KeyValueStore


class LanguagePreference:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = "language",
        default: Language = DEFAULT_LANGUAGE,
    ):
        self._store = store
        self._key = key
        self._default = default
        self._current = self.load()

    @property
    def current(self) -> Language:
        return self._current

    def load(self) -> Language:
        saved = self._store.get(self._key)
        try:
            return Language(saved) if saved else self._default
        except ValueError:
            logger.warning(
                "Idioma guardado desconocido; se usa el idioma por defecto",
                extra={"saved": saved, "default": self._default.value},
            )
            return self._default

    def set(self, language: Language | str) -> Language:
        """
        Cambia y persiste el idioma.

        Raises:
            ValueError: si el código no pertenece al conjunto soportado.
        """
        lang = Language(language)
        self._store.set(self._key, lang.value)
        self._current = lang
        return lang
