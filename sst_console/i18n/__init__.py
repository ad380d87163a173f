"""Interface translations (es / en / zh)."""

from .resolver import Translator
from .translations import TRANSLATIONS

__all__ = ["Translator", "TRANSLATIONS"]
