"""
UI Module - Theme, narratives and screens
"""
from .theme import get_theme, Colors, Fonts
from .base_screen import BaseScreen
from .narratives import NARRATIVES, Narrative, narrative_for

__all__ = [
    "get_theme", "Colors", "Fonts",
    "BaseScreen",
    "NARRATIVES", "Narrative", "narrative_for",
]
