"""
===============================================================================
TARJETA CRC — i18n/resolver.py
===============================================================================

Responsabilidades:
  - Resolver clave simbólica -> texto en el idioma activo.
  - Interpolar parámetros nombrados ("{userName}").

Colaboradores:
  - application.preferences.LanguagePreference (idioma activo)
  - i18n.translations.TRANSLATIONS

Reglas:
  - Clave desconocida -> se devuelve la clave misma.
  - Cada placeholder se reemplaza en su PRIMERA aparición.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..domain.entities import Language, Role
from .translations import TRANSLATIONS


class Translator:
    def __init__(self, preference):
        self._preference = preference

    @property
    def language(self) -> Language:
        return self._preference.current

    def t(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        text = TRANSLATIONS.get(self.language, {}).get(key) or key
        for name, value in (params or {}).items():
            text = text.replace("{" + name + "}", str(value), 1)
        return text

    def role_label(self, role: Role | str) -> str:
        return self.t(role.value if isinstance(role, Role) else str(role))

    def has(self, key: str) -> bool:
        return key in TRANSLATIONS.get(self.language, {})
