"""
Narrative layer for Bending Chronicles.

Turns engine reports and character state into the lines the console
shows. Holds no game state and never changes any.
"""

from typing import Dict, Any, List, Optional

from characters import Character, NATIONS, OPPONENT_TYPES, perform_bending
from engine import BattleReport, EventReport, SpiritReport, TurnReport
from prompts import PromptEngine, get_prompt_engine


class NarrativeEngine:
    """
    Central narrative coordinator.

    Bridges engine reports -> templates -> display text.
    """

    def __init__(self, prompts: Optional[PromptEngine] = None):
        self.prompts = prompts or get_prompt_engine()

    def _render(self, template_name: str, context: Optional[Dict[str, Any]] = None) -> str:
        return self.prompts.render(template_name, context)

    # -------------------------------------------------------------------------
    # QUESTIONS
    # -------------------------------------------------------------------------

    def name_prompt(self) -> str:
        return self._render('setup/name.txt')

    def nation_prompt(self) -> str:
        return self._render('setup/nation.txt', {'nations': NATIONS})

    def bending_prompt(self) -> str:
        return self._render('setup/bending.txt')

    def spirit_prompt(self) -> str:
        return self._render('turn/spirit_prompt.txt')

    def battle_prompt(self) -> str:
        return self._render('turn/battle_prompt.txt')

    def opponent_prompt(self) -> str:
        return self._render('turn/opponent_prompt.txt', {'opponent_types': OPPONENT_TYPES})

    # -------------------------------------------------------------------------
    # CHARACTERS
    # -------------------------------------------------------------------------

    def invalid_bending_notice(self) -> str:
        return self._render('setup/invalid_bending.txt')

    def describe_character(self, character: Character) -> str:
        """The character info panel."""
        return self._render('character/info.txt', character.to_dict())

    def describe_bending(self, character: Character) -> Optional[str]:
        """Bending performance line; None for characters that cannot bend."""
        return perform_bending(character)

    def farewell(self, character: Character) -> str:
        return self._render('session/farewell.txt', character.to_dict())

    # -------------------------------------------------------------------------
    # TURN REPORTS
    # -------------------------------------------------------------------------

    def describe_event(self, report: EventReport) -> str:
        return self._render('turn/event.txt', report.to_dict())

    def describe_spirit(self, report: SpiritReport) -> Optional[str]:
        """Text for an applied spirit connection, None when nothing happened."""
        if not report.applied:
            return None
        return self._render('turn/spirit_result.txt', report.to_dict())

    def describe_battle(self, report: BattleReport) -> str:
        if not report.engaged:
            return self._render('battle/declined.txt', report.to_dict())
        return self._render('battle/result.txt', report.to_dict())

    def describe_turn(self, report: TurnReport) -> List[str]:
        """All lines for a turn played through TurnEngine.take_turn."""
        lines = [self.describe_event(report.event)]

        spirit_text = self.describe_spirit(report.spirit)
        if spirit_text:
            lines.append(spirit_text)

        if report.battle is not None:
            lines.append(self.describe_battle(report.battle))

        return lines
