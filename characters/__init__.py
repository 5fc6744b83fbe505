"""
Character system for Bending Chronicles.

Character state, player/opponent creation, and bending styles.
"""

from .profiles import (
    Character,
    NATIONS,
    OPPONENT_TYPES,
    PLAYER_POWER_RANGE,
    OPPONENT_POWER_RANGE,
    OPPONENT_NAME,
    OPPONENT_NATION,
    apply_delta,
    perform_bending,
    create_player,
    create_opponent,
)

from .bending import BendingStyle, resolve_bending_style, is_known_bending_type

__all__ = [
    'Character',
    'NATIONS',
    'OPPONENT_TYPES',
    'PLAYER_POWER_RANGE',
    'OPPONENT_POWER_RANGE',
    'OPPONENT_NAME',
    'OPPONENT_NATION',
    'apply_delta',
    'perform_bending',
    'create_player',
    'create_opponent',
    'BendingStyle',
    'resolve_bending_style',
    'is_known_bending_type',
]
