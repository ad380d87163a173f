"""
Preferencias del operador (idioma de la interfaz).

No requiere sesión: el selector de idioma también está en la pantalla de login.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..application.preferences import LanguagePreference
from ..container import get_language_preference
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.entities import Language

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


class LanguageRequest(BaseModel):
    language: Language


class LanguageResponse(BaseModel):
    language: Language
    supported: list[Language]


def _response(preference: LanguagePreference) -> LanguageResponse:
    return LanguageResponse(language=preference.current, supported=list(Language))


@router.get("/preferences/language", response_model=LanguageResponse, tags=["preferences"])
def get_language(
    preference: LanguagePreference = Depends(get_language_preference),
) -> LanguageResponse:
    return _response(preference)


@router.put("/preferences/language", response_model=LanguageResponse, tags=["preferences"])
def set_language(
    req: LanguageRequest,
    preference: LanguagePreference = Depends(get_language_preference),
) -> LanguageResponse:
    preference.set(req.language)
    return _response(preference)


__all__ = ["router"]
