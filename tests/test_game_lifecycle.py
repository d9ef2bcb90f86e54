import pytest

from uno_engine.cards import Card, Color, Kind
from uno_engine.events import EventRecorder, EventType
from uno_engine.game import GameSession
from uno_engine.player import CardNotInHand
from uno_engine.rng import RandomSource
from uno_engine.rules_schema import RuleSet
from uno_engine.stacks import SourceStack
from uno_engine.state import GamePhase, InvalidGameState
from uno_engine.turn_order import Direction

from conftest import blue, green, make_session, red, rig_table


def test_start_requires_two_players():
    session = make_session(1)
    with pytest.raises(InvalidGameState):
        session.start_game()
    assert session.phase is GamePhase.INITIALIZED


def test_table_holds_at_most_four():
    session = make_session(4)
    with pytest.raises(InvalidGameState):
        session.add_player("P5")


def test_no_players_after_start():
    session = make_session(2)
    session.start_game()
    with pytest.raises(InvalidGameState):
        session.add_player("Late")


def test_turns_only_while_in_progress():
    session = make_session(2)
    with pytest.raises(InvalidGameState):
        session.handle_turn(session.players[0])
    with pytest.raises(InvalidGameState):
        session.end_round(session.players[0])


def test_out_of_turn_play_rejected():
    session = make_session(2)
    session.start_game()
    waiting = session.next_player()
    with pytest.raises(InvalidGameState):
        session.handle_turn(waiting)


def test_playing_card_not_in_hand_fails_loudly():
    session = make_session(2)
    session.start_game()
    rig_table(session, [[red(1)], [blue(1)]], red(7))
    with pytest.raises(CardNotInHand):
        session.play_card(session.players[0], red(2))


def test_dealer_is_first_seat_with_highest_card():
    session = make_session(3)
    source = SourceStack([red(5), blue(9), green(9), red(1)])
    dealer = session.determine_dealer(source)
    assert dealer == 1
    assert len(source) == 4


def test_wild_beats_numbers_in_dealer_draw():
    session = make_session(2)
    source = SourceStack([red(9), Card(Kind.WILD)])
    assert session.determine_dealer(source) == 1


def test_deal_is_round_robin_from_left_of_dealer():
    # Unshuffled deck: the dealer draw takes Red 0 and Red 1, so seat 1 deals.
    session = make_session(2)
    session.start_game()
    first, second = session.players

    assert session.dealer is second
    assert second.is_dealer and not first.is_dealer
    assert first.hand == tuple(red(n) for n in range(1, 8))
    assert second.hand == tuple(red(n) for n in range(2, 9))
    assert session.state.active_card == red(8)
    assert session.current_player is second
    assert session.state.card_count() == 108


def test_wild_draw_four_never_seeds_discard():
    session = make_session(2)
    session.start_game()
    state = session.state
    rig_table(session, [[red(1)], [blue(1)]], red(7))
    state.dealer = 0
    session._setup_piles(SourceStack([Card(Kind.WILD_DRAW_FOUR), green(4), blue(2)]))

    assert state.active_card == green(4)
    assert state.draw_stack.cards() == (blue(2), Card(Kind.WILD_DRAW_FOUR))


def test_skip_seed_passes_over_the_dealer():
    session = make_session(3)
    session.start_game()
    rig_table(session, [[red(1)], [blue(1)], [green(1)]], red(7))
    session.state.dealer = 0
    session._setup_piles(SourceStack([Card(Kind.SKIP, Color.BLUE), red(3)]))
    assert session.current_player is session.players[1]


def test_reverse_seed_turns_back_with_dealer_starting():
    session = make_session(3)
    session.start_game()
    rig_table(session, [[red(1)], [blue(1)], [green(1)]], red(7))
    session.state.dealer = 0
    session._setup_piles(SourceStack([Card(Kind.REVERSE, Color.BLUE), red(3)]))
    assert session.direction is Direction.COUNTER_CLOCKWISE
    assert session.current_player is session.players[0]
    assert session.next_player() is session.players[2]


def test_reverse_seed_with_two_players_skips_the_dealer():
    session = make_session(2)
    session.start_game()
    rig_table(session, [[red(1)], [blue(1)]], red(7))
    session.state.dealer = 0
    session._setup_piles(SourceStack([Card(Kind.REVERSE, Color.BLUE), red(3)]))
    assert session.direction is Direction.COUNTER_CLOCKWISE
    assert session.current_player is session.players[1]


def test_draw_two_seed_hits_the_dealer():
    session = make_session(3)
    session.start_game()
    rig_table(session, [[red(1)], [blue(1)], [green(1)]], red(7))
    session.state.dealer = 0
    session._setup_piles(SourceStack([Card(Kind.DRAW_TWO, Color.BLUE), red(3), red(4), red(5)]))
    dealer = session.players[0]
    assert dealer.hand == (red(1), red(3), red(4))
    assert session.current_player is session.players[1]


def test_wild_seed_takes_dealers_color():
    session = make_session(2)
    session.start_game()
    rig_table(session, [[blue(1), blue(4), red(2)], [green(1)]], red(7))
    session.state.dealer = 0
    session._setup_piles(SourceStack([Card(Kind.WILD), red(3)]))
    assert session.state.active_color is Color.BLUE
    assert session.current_player is session.players[0]


def test_round_over_then_next_round_rotates_dealer():
    session = make_session(4)
    session.start_game()
    old_dealer = session.state.dealer
    rig_table(session, [[red(5)], [blue(1), blue(2)], [green(3)], [green(4)]], red(7))
    session.handle_turn(session.players[0])
    assert session.phase is GamePhase.ROUND_OVER

    with pytest.raises(InvalidGameState):
        session.handle_turn(session.current_player)

    session.start_next_round()
    assert session.phase is GamePhase.IN_PROGRESS
    assert session.state.round_number == 2
    assert session.state.dealer == (old_dealer + 1) % 4
    assert session.direction is Direction.CLOCKWISE
    assert all(player.hand_size() == 7 for player in session.players)
    assert session.ledger.score(0) == 10


def test_dealer_rotates_clockwise_after_counter_clockwise_round():
    session = make_session(3)
    session.start_game()
    old_dealer = session.state.dealer
    rig_table(session, [[red(5)], [blue(1)], [green(3)]], red(7))
    session.state.turn_order.direction = Direction.COUNTER_CLOCKWISE
    session.handle_turn(session.players[0])

    session.start_next_round()
    assert session.state.dealer == (old_dealer + 1) % 3
    assert session.dealer.is_dealer


def test_draw_dealer_selection_each_round():
    session = make_session(2, dealer_selection="draw")
    recorder = EventRecorder()
    session.subscribe(recorder)
    session.start_game()
    rig_table(session, [[red(5)], [blue(1)]], red(7))
    session.handle_turn(session.players[0])
    session.start_next_round()
    selections = recorder.of_type(EventType.DEALER_SELECTED)
    assert [event.data["rotated"] for event in selections] == [False, False]


def test_game_over_is_terminal():
    session = make_session(2, winning_score=5)
    session.start_game()
    rig_table(session, [[red(5)], [blue(9)]], red(7))
    result = session.handle_turn(session.players[0])

    assert result is not None and result.points == 9
    assert session.is_game_over()
    assert session.ledger.winner() == 0
    with pytest.raises(InvalidGameState):
        session.start_next_round()


def test_full_game_is_reproducible_and_conserves_cards():
    def run(seed):
        session = GameSession(rules=RuleSet(seed=seed))
        for name in ("Ann", "Ben", "Cy", "Dee"):
            session.add_player(name)
        broken = []

        def check(event):
            if event.event_type in (EventType.TURN_STARTED, EventType.CARD_DRAWN, EventType.EFFECT_APPLIED):
                if session.state.card_count() != session.expected_card_count():
                    broken.append(event)

        session.subscribe(check)
        ledger = session.play_game()
        assert not broken
        return ledger

    first = run(2024)
    second = run(2024)
    assert first.scores == second.scores
    assert [result.winner for result in first.history] == [result.winner for result in second.history]
    assert max(first.scores.values()) >= 500


def test_every_accepted_play_is_legal():
    from uno_engine.mechanics import is_legal
    from uno_engine.policy import HeuristicPolicy

    decisions = []

    class Spy(HeuristicPolicy):
        def choose_card(self, hand, active, active_color, rng):
            choice = super().choose_card(hand, active, active_color, rng)
            decisions.append((tuple(hand), active, active_color, choice))
            return choice

    session = GameSession(rules=RuleSet(seed=5))
    for name in ("A", "B", "C"):
        session.add_player(name, Spy())
    session.start_game()
    session.play_round()

    assert decisions
    for hand, active, color, choice in decisions:
        if choice is not None:
            assert is_legal(choice, hand, active, color)


def test_random_source_is_shared_for_reproducibility():
    rng = RandomSource(3)
    session = GameSession(rng=rng)
    assert session.rng is rng
