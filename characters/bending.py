"""
Bending styles - Bending Chronicles

A bending style is purely cosmetic: it decides which line of text is shown
when a character bends. It never touches power points.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class BendingStyle(Enum):
    """Known bending styles. Anything unrecognized falls back to DEFAULT."""

    DEFAULT = 'default'
    AIR = 'air'


# Lower-cased bending-type label -> style. Add new styles here.
BENDING_STYLES: Dict[str, BendingStyle] = {
    'air': BendingStyle.AIR,
}

BENDING_TEXT: Dict[BendingStyle, str] = {
    BendingStyle.DEFAULT: "Performing Default Bending!",
    BendingStyle.AIR: "Performing Air Bending!",
}


def resolve_bending_style(bending_type: str) -> Tuple[BendingStyle, bool]:
    """
    Map a free-form bending-type label to a style.

    Returns:
        (style, recognized). Unknown labels give (DEFAULT, False).
    """
    style = BENDING_STYLES.get((bending_type or '').strip().lower())
    if style is None:
        return BendingStyle.DEFAULT, False
    return style, True


def is_known_bending_type(bending_type: str) -> bool:
    return resolve_bending_style(bending_type)[1]


def bending_text(style: Optional[BendingStyle]) -> Optional[str]:
    """Display line for a style, or None when there is no style at all."""
    if style is None:
        return None
    return BENDING_TEXT[style]
