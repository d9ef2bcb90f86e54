from uno_engine.cards import Card, Color, Kind, matches
from uno_engine.mechanics import is_legal, legal_moves, wild_draw_four_allowed

from conftest import blue, green, red


def test_match_by_color_number_or_kind():
    active = red(7)
    assert matches(red(2), active, Color.RED)
    assert matches(blue(7), active, Color.RED)
    assert not matches(blue(2), active, Color.RED)

    skip = Card(Kind.SKIP, Color.GREEN)
    assert matches(Card(Kind.SKIP, Color.BLUE), skip, Color.GREEN)
    assert not matches(Card(Kind.REVERSE, Color.BLUE), skip, Color.GREEN)


def test_number_does_not_match_action_of_other_color():
    assert not matches(blue(2), Card(Kind.DRAW_TWO, Color.RED), Color.RED)


def test_played_wild_matches_by_chosen_color():
    active = Card(Kind.WILD)
    assert matches(blue(4), active, Color.BLUE)
    assert not matches(red(4), active, Color.BLUE)
    assert matches(Card(Kind.WILD), active, Color.BLUE)


def test_wild_draw_four_only_without_active_color():
    wd4 = Card(Kind.WILD_DRAW_FOUR)
    assert wild_draw_four_allowed([wd4, blue(3)], Color.RED)
    assert not wild_draw_four_allowed([wd4, red(3)], Color.RED)
    assert not is_legal(wd4, [wd4, red(3)], red(7), Color.RED)
    assert is_legal(wd4, [wd4, blue(3)], red(7), Color.RED)


def test_legal_moves_keep_hand_order():
    hand = [green(1), red(2), Card(Kind.WILD), blue(7), Card(Kind.WILD_DRAW_FOUR)]
    moves = legal_moves(hand, red(7), Color.RED)
    assert moves == [red(2), Card(Kind.WILD), blue(7)]
