"""
Character Profiles - Bending Chronicles

The player and the opponents they meet. A Character is the only mutable
entity in the game; power points change only through world events, spirit
connection and the initial random roll made here.
"""

import logging
import random
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Any, Tuple

from .bending import BendingStyle, resolve_bending_style, bending_text

logger = logging.getLogger(__name__)


# =============================================================================
# ROSTER CONSTANTS
# =============================================================================

PLAYER_POWER_RANGE: Tuple[int, int] = (50, 100)
OPPONENT_POWER_RANGE: Tuple[int, int] = (40, 130)

OPPONENT_NAME = 'Opponent'
OPPONENT_NATION = 'Unknown'

NATIONS: List[str] = ['Air', 'Water', 'Earth', 'Fire']
OPPONENT_TYPES: List[str] = ['Air Mage', 'Water Mage', 'Earth Mage', 'Fire Mage']


@dataclass
class Character:
    """A participant in the world: the player or a one-off opponent."""

    name: str
    nation: str
    bending_type: str
    power_points: int
    bending_style: Optional[BendingStyle] = None  # None for opponents

    @property
    def can_bend(self) -> bool:
        return self.bending_style is not None

    def to_dict(self) -> Dict[str, Any]:
        """Plain snapshot for display and reports."""
        data = asdict(self)
        data['bending_style'] = self.bending_style.value if self.bending_style else None
        return data


def apply_delta(character: Character, delta: int) -> int:
    """Add delta to the character's power in place. No clamping."""
    character.power_points += int(delta)
    return character.power_points


def perform_bending(character: Character) -> Optional[str]:
    """Display line for a bending action; opponents cannot bend."""
    return bending_text(character.bending_style)


# =============================================================================
# FACTORIES
# =============================================================================

def create_player(
    name: str,
    nation: str,
    bending_type: str,
    rng: Optional[random.Random] = None,
    power_range: Tuple[int, int] = PLAYER_POWER_RANGE,
) -> Character:
    """
    Create the player character.

    Unknown bending types fall back to the default style; the caller can
    check is_known_bending_type() to tell the player about it.
    """
    rng = rng or random.Random()
    style, recognized = resolve_bending_style(bending_type)
    if not recognized:
        logger.info(f"Unknown bending type {bending_type!r}, using default style")

    player = Character(
        name=name,
        nation=nation,
        bending_type=bending_type,
        power_points=rng.randint(*power_range),
        bending_style=style,
    )
    logger.info(f"Created player {player.name!r} with {player.power_points} power points")
    return player


def create_opponent(
    bending_type: str,
    rng: Optional[random.Random] = None,
    power_range: Tuple[int, int] = OPPONENT_POWER_RANGE,
    name: str = OPPONENT_NAME,
    nation: str = OPPONENT_NATION,
) -> Character:
    """Create a fresh opponent. Nothing is cached between calls."""
    rng = rng or random.Random()
    opponent = Character(
        name=name,
        nation=nation,
        bending_type=bending_type,
        power_points=rng.randint(*power_range),
        bending_style=None,
    )
    logger.debug(f"Created opponent ({bending_type!r}) with {opponent.power_points} power points")
    return opponent
