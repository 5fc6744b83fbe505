"""
Console shell for Bending Chronicles.

Reads the player's answers, feeds them to the TurnEngine and prints the
narrative for each report. All game rules live in engine.py.
"""

import argparse
import logging
import random
import sys
from typing import Callable, List, Optional

from characters import is_known_bending_type
from engine import Choice, GameConfig, TurnEngine, new_game, parse_choice
from narrative import NarrativeEngine

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


class ConsoleShell:
    """Synchronous question/answer loop around one TurnEngine."""

    def __init__(
        self,
        narrative: Optional[NarrativeEngine] = None,
        input_fn: Optional[Callable[[], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.narrative = narrative or NarrativeEngine()
        self._input = input_fn or input
        self._output = output_fn or print
        self.config = config or GameConfig()
        self.rng = rng

    def _say(self, text: Optional[str]):
        if text:
            self._output(text)

    def _ask(self, question: str) -> str:
        self._say(question)
        return self._input()

    def create_game(self) -> TurnEngine:
        """Ask for name, nation and bending type, then show the new character."""
        name = self._ask(self.narrative.name_prompt())
        nation = self._ask(self.narrative.nation_prompt())
        bending_type = self._ask(self.narrative.bending_prompt())

        if not is_known_bending_type(bending_type):
            self._say(self.narrative.invalid_bending_notice())

        engine = new_game(name, nation, bending_type, config=self.config, rng=self.rng)
        self._say(self.narrative.describe_character(engine.player))
        self._say(self.narrative.describe_bending(engine.player))
        return engine

    def play_turn(self, engine: TurnEngine):
        """One pass through the event, spirit and battle phases."""
        self._say(self.narrative.describe_event(engine.draw_event()))

        spirit = engine.answer_spirit(self._ask(self.narrative.spirit_prompt()))
        self._say(self.narrative.describe_spirit(spirit))
        if engine.is_stopped():
            return

        choice = parse_choice(self._ask(self.narrative.battle_prompt()))
        opponent_type = ''
        if choice is Choice.YES:
            opponent_type = self._ask(self.narrative.opponent_prompt())
        self._say(self.narrative.describe_battle(engine.answer_battle(choice, opponent_type)))

    def run(self) -> TurnEngine:
        """Play until the player declines the spirit connection."""
        engine = self.create_game()
        while not engine.is_stopped():
            self.play_turn(engine)
        logger.info(f"Session ended after {engine.turn_number} turns")
        self._say(self.narrative.farewell(engine.player))
        return engine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bending-chronicles',
        description='A turn-based text adventure across the four nations.',
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=LOG_LEVELS,
        type=str.upper,
        help='Logging verbosity (default: WARNING)',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s %(name)s: %(message)s',
    )

    shell = ConsoleShell()
    try:
        shell.run()
    except (EOFError, KeyboardInterrupt):
        print()
        logger.info("Input closed, leaving the game")
    return 0


if __name__ == '__main__':
    sys.exit(main())
