"""
Tests for the turn engine - events, effects, spirit connection, battles
and the turn state machine.
"""

import random

import pytest
from engine import (
    EVENT_CATALOG, EVENT_EFFECTS, SPIRIT_MODIFIER_RANGE,
    Event, BattleOutcome, Choice, GameConfig, TurnEngine, TurnPhase,
    random_event, effect_for, apply_spirit_connection, resolve_battle,
    parse_choice, new_game,
    EngineError, SessionEndedError, PhaseError,
)
from characters import BendingStyle, Character, apply_delta, create_opponent

FESTIVAL = "A festival is happening in the Water Tribe!"
TENSION = "Political tension rises in the Earth Kingdom."


def make_player(power=60):
    return Character(
        name='Aang',
        nation='Air',
        bending_type='Air',
        power_points=power,
        bending_style=BendingStyle.AIR,
    )


class TestEffectTable:
    """Event descriptions map to fixed power deltas."""

    @pytest.mark.parametrize('description,expected', [
        ("A festival is happening in the Water Tribe!", 10),
        ("Political tension rises in the Earth Kingdom.", -5),
        ("Fire Nation discovers a new bending technique.", 8),
        ("Air Nomads organize a peaceful meditation event.", 7),
    ])
    def test_known_events(self, description, expected):
        assert effect_for(description) == expected

    def test_lookup_is_case_insensitive(self):
        assert effect_for(FESTIVAL.upper()) == 10
        assert effect_for(TENSION.lower()) == -5

    def test_unknown_event_has_no_effect(self):
        assert effect_for("The Earth King throws a tea party.") == 0
        assert effect_for("") == 0

    def test_no_fuzzy_matching(self):
        """Trailing punctuation or whitespace differences are not forgiven."""
        assert effect_for(FESTIVAL.rstrip('!')) == 0
        assert effect_for(FESTIVAL + ' ') == 0

    def test_catalog_and_table_stay_aligned(self):
        assert len(EVENT_CATALOG) == 4
        for description in EVENT_CATALOG:
            assert description.lower() in EVENT_EFFECTS


class TestRandomEvents:
    def test_events_come_from_catalog(self):
        rng = random.Random(7)
        for _ in range(200):
            event = random_event(rng)
            assert isinstance(event, Event)
            assert event.description in EVENT_CATALOG

    def test_every_event_eventually_drawn(self):
        rng = random.Random(11)
        seen = {random_event(rng).description for _ in range(500)}
        assert seen == set(EVENT_CATALOG)

    def test_events_are_immutable(self):
        event = random_event(random.Random(1))
        with pytest.raises(AttributeError):
            event.description = "changed"


class TestPowerMutation:
    @pytest.mark.parametrize('delta', [0, 1, -5, 10, 250, -1000])
    def test_additive_inverse_restores_power(self, delta):
        player = make_player(60)
        apply_delta(player, delta)
        apply_delta(player, -delta)
        assert player.power_points == 60

    def test_power_may_go_negative(self):
        player = make_player(3)
        assert apply_delta(player, -10) == -7
        assert player.power_points == -7


class TestSpiritConnection:
    def test_modifier_bounds_and_effect(self):
        """Modifier stays in [-5, 5] and is applied exactly."""
        rng = random.Random(3)
        player = make_player(60)
        low, high = SPIRIT_MODIFIER_RANGE
        seen = set()
        for _ in range(1000):
            before = player.power_points
            modifier = apply_spirit_connection(player, rng)
            assert low <= modifier <= high
            assert player.power_points == before + modifier
            seen.add(modifier)
        assert min(seen) == -5
        assert max(seen) == 5


class TestOpponentFactory:
    def test_power_always_within_bounds(self):
        rng = random.Random(5)
        powers = [create_opponent('Fire Mage', rng).power_points for _ in range(1000)]
        assert all(40 <= p <= 130 for p in powers)
        assert min(powers) == 40
        assert max(powers) == 130

    def test_opponent_identity(self):
        opponent = create_opponent('Water Mage', random.Random(1))
        assert opponent.name == 'Opponent'
        assert opponent.nation == 'Unknown'
        assert opponent.bending_type == 'Water Mage'
        assert opponent.bending_style is None
        assert not opponent.can_bend

    def test_each_call_is_a_new_character(self):
        rng = random.Random(2)
        assert create_opponent('Air Mage', rng) is not create_opponent('Air Mage', rng)


class TestBattleResolver:
    def test_equal_power_is_a_tie(self):
        assert resolve_battle(make_player(70), make_player(70)) is BattleOutcome.TIE

    def test_outcomes_mirror_when_swapped(self):
        strong, weak = make_player(100), make_player(40)
        assert resolve_battle(strong, weak) is BattleOutcome.A_WINS
        assert resolve_battle(weak, strong) is BattleOutcome.B_WINS

    def test_resolution_does_not_mutate(self):
        a, b = make_player(55), make_player(66)
        resolve_battle(a, b)
        assert (a.power_points, b.power_points) == (55, 66)


class TestChoices:
    @pytest.mark.parametrize('text,expected', [
        ('yes', Choice.YES),
        ('YES', Choice.YES),
        ('  Yes ', Choice.YES),
        ('no', Choice.NO),
        ('No', Choice.NO),
        ('maybe', Choice.UNRECOGNIZED),
        ('y', Choice.UNRECOGNIZED),
        ('', Choice.UNRECOGNIZED),
        (None, Choice.UNRECOGNIZED),
    ])
    def test_parse_choice(self, text, expected):
        assert parse_choice(text) is expected


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.player_power_range == (50, 100)
        assert config.opponent_power_range == (40, 130)
        assert config.spirit_modifier_range == (-5, 5)

    def test_reversed_ranges_are_ordered(self):
        config = GameConfig(opponent_power_range=(130, 40))
        assert config.opponent_power_range == (40, 130)


class TestTurnEngine:
    """Test the turn state machine."""

    def test_event_applies_effect(self, scripted):
        """Festival at 60 power leaves the player at 70."""
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL]))

        report = engine.draw_event()

        assert report.description == FESTIVAL
        assert report.delta == 10
        assert report.power_before == 60
        assert report.power_after == 70
        assert engine.player.power_points == 70
        assert engine.phase is TurnPhase.SPIRIT_PROMPT

    def test_declining_spirit_stops_session(self, scripted):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL]))
        engine.draw_event()

        report = engine.answer_spirit('no')

        assert report.session_over is True
        assert report.applied is False
        assert engine.is_stopped()
        assert engine.player.power_points == 70
        with pytest.raises(SessionEndedError):
            engine.answer_battle('yes', 'Fire Mage')
        with pytest.raises(SessionEndedError):
            engine.draw_event()

    def test_tie_after_neutral_spirit_connection(self, scripted):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL], ints=[0, 70]))
        engine.draw_event()

        spirit = engine.answer_spirit(Choice.YES)
        assert spirit.modifier == 0
        assert spirit.power_after == 70

        battle = engine.answer_battle(Choice.YES, 'Earth Mage')
        assert battle.engaged is True
        assert battle.player_power == 70
        assert battle.opponent_power == 70
        assert battle.outcome is BattleOutcome.TIE
        assert battle.winner is None

    def test_player_beats_weak_opponent(self, scripted):
        engine = TurnEngine(make_player(105), rng=scripted(choices=[TENSION], ints=[0, 40]))

        report = engine.take_turn('yes', 'yes', 'Air Mage')

        assert report.event.power_after == 100
        assert report.battle.outcome is BattleOutcome.A_WINS
        assert report.battle.winner == 'Aang'
        assert report.battle.opponent_bending_type == 'Air Mage'
        assert report.stopped is False

    def test_battle_never_changes_player_power(self, scripted):
        engine = TurnEngine(make_player(50), rng=scripted(choices=[TENSION], ints=[2, 130]))

        report = engine.take_turn(True, True, 'Fire Mage')

        assert report.battle.outcome is BattleOutcome.B_WINS
        assert report.battle.winner == 'Opponent'
        assert engine.player.power_points == 47

    def test_unrecognized_spirit_answer_skips_to_battle(self, scripted):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL]))
        engine.draw_event()

        report = engine.answer_spirit('perhaps')

        assert report.choice is Choice.UNRECOGNIZED
        assert report.applied is False
        assert report.modifier is None
        assert engine.phase is TurnPhase.BATTLE_PROMPT
        assert engine.player.power_points == 70

    @pytest.mark.parametrize('answer', ['no', 'later', Choice.NO, False])
    def test_no_battle_returns_to_next_event(self, scripted, answer):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL], ints=[1]))
        engine.draw_event()
        engine.answer_spirit('yes')

        report = engine.answer_battle(answer)

        assert report.engaged is False
        assert report.opponent_power is None
        assert report.outcome is None
        assert engine.phase is TurnPhase.AWAITING_EVENT

    def test_take_turn_skips_battle_after_decline(self, scripted):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL]))

        report = engine.take_turn('no', 'yes', 'Fire Mage')

        assert report.battle is None
        assert report.stopped is True
        assert engine.phase is TurnPhase.STOPPED

    def test_loop_continues_until_decline(self):
        engine = TurnEngine(make_player(60), rng=random.Random(42))
        for _ in range(5):
            report = engine.take_turn('yes', 'yes', 'Water Mage')
            assert report.stopped is False
        engine.take_turn('no')
        assert engine.turn_number == 6
        assert engine.is_stopped()

    def test_out_of_order_steps_raise(self):
        engine = TurnEngine(make_player(60), rng=random.Random(1))

        with pytest.raises(PhaseError):
            engine.answer_spirit('yes')
        with pytest.raises(PhaseError):
            engine.answer_battle('yes')

        engine.draw_event()
        with pytest.raises(PhaseError):
            engine.draw_event()
        with pytest.raises(EngineError):
            engine.answer_battle('no')

    def test_turn_report_serializes(self, scripted):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL], ints=[3, 90]))

        data = engine.take_turn('yes', 'yes', 'Fire Mage').to_dict()

        assert data['turn'] == 1
        assert data['event']['delta'] == 10
        assert data['spirit']['choice'] == 'yes'
        assert data['spirit']['modifier'] == 3
        assert data['battle']['outcome'] == 'b_wins'
        assert data['battle']['opponent_power'] == 90
        assert data['stopped'] is False

    def test_custom_config_ranges(self, scripted):
        config = GameConfig(spirit_modifier_range=(0, 0), opponent_power_range=(1, 1))
        engine = TurnEngine(make_player(60), config=config, rng=random.Random(9))

        report = engine.take_turn('yes', 'yes', 'Earth Mage')

        assert report.spirit.modifier == 0
        assert report.battle.opponent_power == 1
        assert report.battle.outcome is BattleOutcome.A_WINS

    def test_summary(self, scripted):
        engine = TurnEngine(make_player(60), rng=scripted(choices=[FESTIVAL]))
        engine.draw_event()

        summary = engine.get_summary()

        assert summary['turn'] == 1
        assert summary['phase'] == 'spirit_prompt'
        assert summary['power_points'] == 70
        assert summary['bending_style'] == 'air'


class TestNewGame:
    def test_new_game_power_in_starting_range(self):
        rng = random.Random(4)
        for _ in range(200):
            engine = new_game('Korra', 'Water', 'Water', rng=rng)
            assert 50 <= engine.player.power_points <= 100
            assert engine.phase is TurnPhase.AWAITING_EVENT
            assert engine.turn_number == 0

    def test_unknown_bending_uses_default_style(self):
        engine = new_game('Zuko', 'Fire', 'lightning', rng=random.Random(1))
        assert engine.player.bending_style is BendingStyle.DEFAULT
        assert engine.player.bending_type == 'lightning'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
