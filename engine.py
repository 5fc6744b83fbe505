"""
Bending Chronicles - Turn Engine

Core turn resolution. The engine never prints or reads input: the console
shell feeds it choices and renders the reports it returns.

This module is the single source of truth for:
- The world event catalog and the power effect of each event
- Spirit connection (random power perturbation)
- Battle resolution
- The turn state machine (Event -> Spirit -> Battle phases)
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Tuple, Union
from enum import Enum
import logging
import random

from characters import (
    Character,
    PLAYER_POWER_RANGE,
    OPPONENT_POWER_RANGE,
    OPPONENT_NAME,
    OPPONENT_NATION,
    apply_delta,
    create_player,
    create_opponent,
)

logger = logging.getLogger(__name__)


# =============================================================================
# WORLD CONSTANTS - THE LAWS OF THE GAME UNIVERSE
# =============================================================================

SPIRIT_MODIFIER_RANGE: Tuple[int, int] = (-5, 5)

EVENT_CATALOG: Tuple[str, ...] = (
    "A festival is happening in the Water Tribe!",
    "Political tension rises in the Earth Kingdom.",
    "Fire Nation discovers a new bending technique.",
    "Air Nomads organize a peaceful meditation event.",
)

# Keyed by lower-cased description. Must stay aligned with EVENT_CATALOG:
# a description missing here silently has no effect.
EVENT_EFFECTS: Dict[str, int] = {
    "a festival is happening in the water tribe!": 10,
    "political tension rises in the earth kingdom.": -5,
    "fire nation discovers a new bending technique.": 8,
    "air nomads organize a peaceful meditation event.": 7,
}


# =============================================================================
# EVENTS & EFFECTS
# =============================================================================

@dataclass(frozen=True)
class Event:
    """A world event. Identity is the description text."""

    description: str


def random_event(rng: Optional[random.Random] = None) -> Event:
    """Pick one catalog event uniformly at random."""
    rng = rng or random.Random()
    return Event(rng.choice(EVENT_CATALOG))


def effect_for(description: str) -> int:
    """Power delta for an event description (case-insensitive), 0 if unknown."""
    delta = EVENT_EFFECTS.get(description.lower())
    if delta is None:
        logger.debug(f"No effect registered for event {description!r}")
        return 0
    return delta


def apply_spirit_connection(
    character: Character,
    rng: Optional[random.Random] = None,
    modifier_range: Tuple[int, int] = SPIRIT_MODIFIER_RANGE,
) -> int:
    """Nudge the character's power by a random modifier and return it."""
    rng = rng or random.Random()
    modifier = rng.randint(*modifier_range)
    apply_delta(character, modifier)
    logger.info(f"Spirit connection modified {character.name!r} by {modifier}")
    return modifier


# =============================================================================
# BATTLE
# =============================================================================

class BattleOutcome(Enum):
    A_WINS = 'a_wins'
    B_WINS = 'b_wins'
    TIE = 'tie'


def resolve_battle(a: Character, b: Character) -> BattleOutcome:
    """Compare power points. Pure: neither character is modified."""
    if a.power_points > b.power_points:
        return BattleOutcome.A_WINS
    if a.power_points < b.power_points:
        return BattleOutcome.B_WINS
    return BattleOutcome.TIE


# =============================================================================
# PLAYER CHOICES
# =============================================================================

class Choice(Enum):
    YES = 'yes'
    NO = 'no'
    UNRECOGNIZED = 'unrecognized'


ChoiceLike = Union[Choice, bool, str]


def parse_choice(text: Optional[str]) -> Choice:
    """Map a free-form answer to a Choice. Never raises."""
    answer = (text or '').strip().lower()
    if answer == 'yes':
        return Choice.YES
    if answer == 'no':
        return Choice.NO
    return Choice.UNRECOGNIZED


def _coerce_choice(value: ChoiceLike) -> Choice:
    if isinstance(value, Choice):
        return value
    if isinstance(value, bool):
        return Choice.YES if value else Choice.NO
    return parse_choice(value)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class GameConfig:
    """
    Run context handed to the engine.

    Every range is an inclusive (low, high) pair.
    """

    player_power_range: Tuple[int, int] = PLAYER_POWER_RANGE
    opponent_power_range: Tuple[int, int] = OPPONENT_POWER_RANGE
    spirit_modifier_range: Tuple[int, int] = SPIRIT_MODIFIER_RANGE
    opponent_name: str = OPPONENT_NAME
    opponent_nation: str = OPPONENT_NATION

    def __post_init__(self):
        """Normalize every range so that low <= high."""
        self.player_power_range = _ordered(self.player_power_range)
        self.opponent_power_range = _ordered(self.opponent_power_range)
        self.spirit_modifier_range = _ordered(self.spirit_modifier_range)


def _ordered(pair: Tuple[int, int]) -> Tuple[int, int]:
    low, high = int(pair[0]), int(pair[1])
    return (low, high) if low <= high else (high, low)


# =============================================================================
# TURN REPORTS
# Plain values handed back to the shell for display.
# =============================================================================

class TurnPhase(Enum):
    AWAITING_EVENT = 'awaiting_event'
    SPIRIT_PROMPT = 'spirit_prompt'
    BATTLE_PROMPT = 'battle_prompt'
    STOPPED = 'stopped'


@dataclass
class EventReport:
    turn: int
    description: str
    delta: int
    power_before: int
    power_after: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SpiritReport:
    choice: Choice
    applied: bool
    modifier: Optional[int]
    power_after: int
    session_over: bool

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['choice'] = self.choice.value
        return data


@dataclass
class BattleReport:
    """
    Outcome of the battle prompt.

    When engaged is False every opponent field is None; the opponent
    itself is never kept, only this snapshot of it.
    """

    choice: Choice
    engaged: bool
    player_name: str
    player_power: int
    opponent_name: Optional[str] = None
    opponent_bending_type: Optional[str] = None
    opponent_power: Optional[int] = None
    outcome: Optional[BattleOutcome] = None
    winner: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['choice'] = self.choice.value
        data['outcome'] = self.outcome.value if self.outcome else None
        return data


@dataclass
class TurnReport:
    turn: int
    event: EventReport
    spirit: SpiritReport
    battle: Optional[BattleReport] = None
    stopped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'turn': self.turn,
            'event': self.event.to_dict(),
            'spirit': self.spirit.to_dict(),
            'battle': self.battle.to_dict() if self.battle else None,
            'stopped': self.stopped,
        }


# =============================================================================
# TURN ENGINE
# =============================================================================

class TurnEngine:
    """
    Drives one player through repeated turns.

    Each turn moves through the phases AWAITING_EVENT -> SPIRIT_PROMPT ->
    BATTLE_PROMPT and back to AWAITING_EVENT. Declining the spirit
    connection ends the whole session (STOPPED) before any battle is
    offered.
    """

    def __init__(
        self,
        player: Character,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.player = player
        self.config = config or GameConfig()
        self._rng = rng or random.Random()
        self._phase = TurnPhase.AWAITING_EVENT
        self.turn_number = 0

    # -------------------------------------------------------------------------
    # PHASES
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    def is_stopped(self) -> bool:
        return self._phase is TurnPhase.STOPPED

    def _require_phase(self, expected: TurnPhase):
        if self._phase is TurnPhase.STOPPED:
            raise SessionEndedError("The session has ended")
        if self._phase is not expected:
            raise PhaseError(
                f"Expected phase {expected.value}, engine is in {self._phase.value}"
            )

    def draw_event(self) -> EventReport:
        """Phase 1: draw a world event and apply its effect to the player."""
        self._require_phase(TurnPhase.AWAITING_EVENT)
        self.turn_number += 1

        event = random_event(self._rng)
        logger.info(f"Turn {self.turn_number}: {event.description}")

        power_before = self.player.power_points
        delta = effect_for(event.description)
        apply_delta(self.player, delta)

        self._phase = TurnPhase.SPIRIT_PROMPT
        return EventReport(
            turn=self.turn_number,
            description=event.description,
            delta=delta,
            power_before=power_before,
            power_after=self.player.power_points,
        )

    def answer_spirit(self, choice: ChoiceLike) -> SpiritReport:
        """
        Phase 2: the player's answer to the spirit connection prompt.

        YES applies a connection, NO stops the session, anything else
        does nothing and moves on to the battle prompt.
        """
        self._require_phase(TurnPhase.SPIRIT_PROMPT)
        choice = _coerce_choice(choice)

        modifier = None
        if choice is Choice.YES:
            modifier = apply_spirit_connection(
                self.player, self._rng, self.config.spirit_modifier_range
            )
            self._phase = TurnPhase.BATTLE_PROMPT
        elif choice is Choice.NO:
            logger.info("Spirit connection declined, ending session")
            self._phase = TurnPhase.STOPPED
        else:
            logger.debug("Unrecognized spirit answer, skipping connection")
            self._phase = TurnPhase.BATTLE_PROMPT

        return SpiritReport(
            choice=choice,
            applied=modifier is not None,
            modifier=modifier,
            power_after=self.player.power_points,
            session_over=self.is_stopped(),
        )

    def answer_battle(self, choice: ChoiceLike, opponent_type: str = '') -> BattleReport:
        """
        Phase 3: the player's answer to the battle prompt.

        Only YES creates an opponent. The opponent is compared once and
        dropped; the player's power is never changed by a battle.
        """
        self._require_phase(TurnPhase.BATTLE_PROMPT)
        choice = _coerce_choice(choice)
        self._phase = TurnPhase.AWAITING_EVENT

        if choice is not Choice.YES:
            return BattleReport(
                choice=choice,
                engaged=False,
                player_name=self.player.name,
                player_power=self.player.power_points,
            )

        opponent = create_opponent(
            opponent_type,
            self._rng,
            power_range=self.config.opponent_power_range,
            name=self.config.opponent_name,
            nation=self.config.opponent_nation,
        )
        outcome = resolve_battle(self.player, opponent)
        winner = {
            BattleOutcome.A_WINS: self.player.name,
            BattleOutcome.B_WINS: opponent.name,
        }.get(outcome)
        logger.info(
            f"Battle {self.player.name!r} ({self.player.power_points}) vs "
            f"{opponent.name!r} ({opponent.power_points}): {outcome.value}"
        )

        return BattleReport(
            choice=choice,
            engaged=True,
            player_name=self.player.name,
            player_power=self.player.power_points,
            opponent_name=opponent.name,
            opponent_bending_type=opponent.bending_type,
            opponent_power=opponent.power_points,
            outcome=outcome,
            winner=winner,
        )

    # -------------------------------------------------------------------------
    # TURN LOOP
    # -------------------------------------------------------------------------

    def take_turn(
        self,
        spirit_choice: ChoiceLike,
        battle_choice: ChoiceLike = Choice.NO,
        opponent_type: str = '',
    ) -> TurnReport:
        """
        Execute one complete turn with answers supplied up front.

        The battle answer is ignored when the spirit answer ends the session.
        """
        event = self.draw_event()
        spirit = self.answer_spirit(spirit_choice)

        battle = None
        if not self.is_stopped():
            battle = self.answer_battle(battle_choice, opponent_type)

        return TurnReport(
            turn=event.turn,
            event=event,
            spirit=spirit,
            battle=battle,
            stopped=self.is_stopped(),
        )

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def get_summary(self) -> Dict[str, Any]:
        """Current player snapshot plus turn/phase info."""
        return {
            'turn': self.turn_number,
            'phase': self._phase.value,
            **self.player.to_dict(),
        }


# =============================================================================
# EXCEPTIONS
# Sequencing mistakes by the caller. Player input never raises.
# =============================================================================

class EngineError(Exception):
    """Base exception for turn engine misuse."""
    pass


class SessionEndedError(EngineError):
    """Raised when a step is attempted after the session stopped."""
    pass


class PhaseError(EngineError):
    """Raised when a step is called out of order."""
    pass


# =============================================================================
# NEW GAME FACTORY
# =============================================================================

def new_game(
    name: str,
    nation: str,
    bending_type: str,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
) -> TurnEngine:
    """Create the player and an engine ready for the first event."""
    config = config or GameConfig()
    rng = rng or random.Random()
    player = create_player(
        name, nation, bending_type, rng, power_range=config.player_power_range
    )
    return TurnEngine(player, config=config, rng=rng)
