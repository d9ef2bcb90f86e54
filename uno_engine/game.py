"""High-level game orchestration for UNO.

:class:`GameSession` owns the :class:`GameState` and is the only thing that
mutates it: dealer selection, dealing, turns, effects, scoring and the
round-to-game lifecycle all run through here.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .cards import Card, Kind, card_label
from .deck import DECK_SIZE
from .effects import EffectOutcome, IllegalPlay, check_play, resolve_effect
from .events import EventBus, EventType, Listener
from .mechanics import is_legal
from .player import CardNotInHand, Player
from .policy import HeuristicPolicy, SelectionPolicy
from .rng import RandomSource
from .rules_schema import RuleSet
from .scoring import RoundResult, ScoreLedger
from .stacks import DiscardStack, DrawStack, SourceStack
from .state import GamePhase, GameState, InvalidGameState
from .turn_order import Direction, TurnOrder

logger = logging.getLogger(__name__)

MAX_TURNS_PER_ROUND = 10_000


class RoundStalled(RuntimeError):
    """Raised when a round fails to finish within the turn limit."""


class GameSession:
    """Run a game of UNO for 2-4 automated players."""

    def __init__(self, rules: Optional[RuleSet] = None, rng: Optional[RandomSource] = None) -> None:
        self.rules = rules or RuleSet()
        self.rng = rng or RandomSource(self.rules.seed)
        self.state = GameState(rules=self.rules)
        self.events = EventBus()
        self.ledger: Optional[ScoreLedger] = None

    # Setup -------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self.events.subscribe(listener)

    def add_player(self, name: str, policy: Optional[SelectionPolicy] = None) -> Player:
        if self.state.phase is not GamePhase.INITIALIZED:
            raise InvalidGameState("Cannot add players after the game has started.")
        if len(self.state.players) >= self.rules.max_players:
            raise InvalidGameState(f"The table is full ({self.rules.max_players} players).")
        player = Player(
            id=len(self.state.players),
            name=name,
            policy=policy or HeuristicPolicy(self.rules.wild_opportunism),
        )
        self.state.players.append(player)
        return player

    def start_game(self) -> None:
        self.state.ensure_phase(GamePhase.INITIALIZED)
        if len(self.state.players) < self.rules.min_players:
            raise InvalidGameState(f"At least {self.rules.min_players} players are required to start.")
        self.ledger = ScoreLedger(
            [player.id for player in self.state.players],
            winning_score=self.rules.winning_score,
        )
        self._start_round(dealer=None)

    def start_next_round(self) -> None:
        self.state.ensure_phase(GamePhase.ROUND_OVER)
        dealer = None
        if self.rules.dealer_selection == "rotate":
            assert self.state.dealer is not None
            # Dealing always passes clockwise, whatever direction the last round ended in.
            dealer = TurnOrder(len(self.state.players)).next(self.state.dealer)
        self._start_round(dealer=dealer)

    def _start_round(self, dealer: Optional[int]) -> None:
        state = self.state
        state.round_number += 1
        state.phase = GamePhase.IN_PROGRESS
        state.turn_order = TurnOrder(len(state.players))
        state.draw_stack = DrawStack()
        state.discard = DiscardStack()
        state.cards_played = 0
        for player in state.players:
            player.clear_hand()
        self._emit(EventType.ROUND_STARTED, players=[player.name for player in state.players])

        source = SourceStack.assemble(self.rng)
        if dealer is None:
            dealer = self.determine_dealer(source)
        else:
            self._emit(EventType.DEALER_SELECTED, dealer, drawn={}, rotated=True)
        state.dealer = dealer
        for seat, player in enumerate(state.players):
            player.is_dealer = seat == dealer

        self._deal(source)
        self._setup_piles(source)
        logger.debug("Round %d ready: dealer=%s, active=%s", state.round_number, dealer, state.active_card)

    def determine_dealer(self, source: SourceStack) -> int:
        """Each player draws one card; the highest point value deals and starts.

        Ties go to the first seat that reached the maximum. The drawn cards go
        back into the source, which is then reshuffled.
        """
        drawn: Dict[int, Card] = {}
        for seat in range(len(self.state.players)):
            drawn[seat] = source.deal_one()
        best = max(card.points for card in drawn.values())
        dealer = next(seat for seat, card in drawn.items() if card.points == best)
        source.give_back(drawn.values())
        self.rng.shuffle(source.cards)
        self._emit(
            EventType.DEALER_SELECTED,
            dealer,
            drawn={self.state.players[seat].name: card_label(card) for seat, card in drawn.items()},
            rotated=False,
        )
        return dealer

    def _deal(self, source: SourceStack) -> None:
        """Deal one card at a time, starting left of the dealer."""
        state = self.state
        assert state.dealer is not None
        order = state.ring().cycle(state.next_seat(state.dealer))
        for _ in range(self.rules.hand_size):
            for seat in order:
                state.players[seat].add_card(source.deal_one())
        self._emit(EventType.CARDS_DEALT, state.dealer, hand_sizes={p.name: p.hand_size() for p in state.players})

    def _setup_piles(self, source: SourceStack) -> None:
        state = self.state
        assert state.dealer is not None
        state.draw_stack = DrawStack(source.take_all())
        seed = state.draw_stack.draw()
        while seed.kind is Kind.WILD_DRAW_FOUR:
            state.draw_stack.put_back(seed)
            state.draw_stack.shuffle(self.rng)
            seed = state.draw_stack.draw()

        starter = state.dealer
        state.current_player = starter
        outcome = resolve_effect(seed, state.players[starter].hand, None, self.rng)
        state.discard.push(seed, outcome.chosen_color)
        if outcome.is_noop():
            return

        # The seed card acts on the starting player.
        skip_starter = outcome.skip_next
        if outcome.reverse and state.ring().reverse(starter):
            skip_starter = True
        for _ in range(outcome.draw_penalty):
            self._draw_card(starter)
        if skip_starter:
            state.current_player = state.next_seat(starter)
        self._emit_effect(starter, seed, outcome, target=starter)

    # Turns -------------------------------------------------------------

    def handle_turn(self, player: Player) -> Optional[RoundResult]:
        """Play one turn for ``player``; returns the round result if it ended the round."""
        state = self.state
        state.ensure_phase(GamePhase.IN_PROGRESS)
        seat = self._require_turn(player)
        active, color = state.active_card, state.active_color
        self._emit(EventType.TURN_STARTED, seat, active=card_label(active, color), hand_size=player.hand_size())

        choice = player.policy.choose_card(player.hand, active, color, self.rng)
        played = False
        if choice is not None:
            try:
                self.play_card(player, choice)
                played = True
            except IllegalPlay as exc:
                self._emit(EventType.PLAY_REJECTED, seat, card=card_label(choice), reason=str(exc))

        if not played:
            drawn = self._draw_card(seat)
            if is_legal(drawn, player.hand, active, color):
                self.play_card(player, drawn)
            else:
                state.current_player = state.next_seat(seat)

        if player.has_won_round():
            return self.end_round(player)
        return None

    def play_card(self, player: Player, card: Card) -> EffectOutcome:
        """Lay ``card`` from the current player's hand and apply its effect.

        Raises :class:`IllegalPlay` without touching any state when the card
        cannot be played. On success the turn passes on according to the
        effect.
        """
        state = self.state
        state.ensure_phase(GamePhase.IN_PROGRESS)
        seat = self._require_turn(player)
        if card not in player.hand:
            raise CardNotInHand(f"{player.name} does not hold {card}.")

        hand = player.hand
        active_color = state.active_color
        check_play(card, hand, state.active_card, active_color)
        outcome = resolve_effect(card, hand, active_color, self.rng)

        player.remove_card(card)
        state.discard.push(card, outcome.chosen_color)
        state.cards_played += 1
        self._emit(EventType.CARD_PLAYED, seat, card=card_label(card, outcome.chosen_color))

        steps = 1
        if outcome.reverse and state.ring().reverse(seat):
            steps = 2
        if outcome.skip_next:
            steps = 2
        if outcome.draw_penalty:
            victim = state.next_seat(seat)
            for _ in range(outcome.draw_penalty):
                self._draw_card(victim)
        else:
            victim = state.next_seat(seat) if steps == 2 else None
        if not outcome.is_noop():
            self._emit_effect(seat, card, outcome, target=victim)

        state.current_player = state.ring().next(seat, steps)
        return outcome

    def _require_turn(self, player: Player) -> int:
        seat = self.state.seat_of(player)
        if seat != self.state.current_player:
            raise InvalidGameState(f"It is not {player.name}'s turn.")
        return seat

    # Stacks ------------------------------------------------------------

    def _draw_card(self, seat: int) -> Card:
        """Draw for ``seat``, replenishing from the discard stack when needed."""
        state = self.state
        if state.draw_stack.is_empty():
            self._replenish()
        if state.draw_stack.is_empty():
            card = Card(Kind.WILD)
            state.fallback_cards += 1
            logger.warning(
                "Round %d: draw and discard stacks exhausted; minted a fallback Wild (%d so far).",
                state.round_number,
                state.fallback_cards,
            )
            self._emit(EventType.FALLBACK_CARD_MINTED, seat, total=state.fallback_cards)
        else:
            card = state.draw_stack.draw()
        state.players[seat].add_card(card)
        self._emit(EventType.CARD_DRAWN, seat, hand_size=state.players[seat].hand_size())
        return card

    def _replenish(self) -> None:
        state = self.state
        if len(state.discard) <= 1:
            return
        cards = state.discard.take_under_top()
        state.draw_stack.refill(cards, self.rng)
        logger.debug("Round %d: reshuffled %d discards into the draw stack.", state.round_number, len(cards))
        self._emit(EventType.PILE_REPLENISHED, None, cards=len(cards))

    # Round and game end ------------------------------------------------

    def end_round(self, winner: Player) -> RoundResult:
        state = self.state
        state.ensure_phase(GamePhase.IN_PROGRESS)
        assert self.ledger is not None
        result = self.ledger.record_round(
            state.round_number,
            winner.id,
            {player.id: player.hand_value() for player in state.players},
            cards_played=state.cards_played,
        )
        state.phase = GamePhase.ROUND_OVER
        self._emit(
            EventType.ROUND_WON,
            winner.id,
            points=result.points,
            scores={player.name: self.ledger.score(player.id) for player in state.players},
            cards_played=result.cards_played,
        )
        if self.ledger.has_winner():
            state.phase = GamePhase.GAME_OVER
            self._emit(EventType.GAME_WON, winner.id, score=self.ledger.score(winner.id))
        return result

    def play_round(self, max_turns: int = MAX_TURNS_PER_ROUND) -> RoundResult:
        self.state.ensure_phase(GamePhase.IN_PROGRESS)
        for _ in range(max_turns):
            result = self.handle_turn(self.current_player)
            if result is not None:
                return result
        raise RoundStalled(f"Round {self.state.round_number} did not finish within {max_turns} turns.")

    def play_game(self, max_rounds: Optional[int] = None) -> ScoreLedger:
        """Play rounds until someone reaches the winning score (or ``max_rounds``)."""
        if self.state.phase is GamePhase.INITIALIZED:
            self.start_game()
        rounds = 0
        while True:
            if self.state.phase is GamePhase.ROUND_OVER:
                self.start_next_round()
            self.play_round()
            rounds += 1
            if self.state.phase is GamePhase.GAME_OVER:
                break
            if max_rounds is not None and rounds >= max_rounds:
                break
        assert self.ledger is not None
        return self.ledger

    # Views -------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def players(self) -> List[Player]:
        return list(self.state.players)

    @property
    def current_player(self) -> Player:
        return self.state.players[self.state.current_player]

    @property
    def direction(self) -> Direction:
        return self.state.direction

    @property
    def dealer(self) -> Optional[Player]:
        if self.state.dealer is None:
            return None
        return self.state.players[self.state.dealer]

    def next_player(self) -> Player:
        return self.state.players[self.state.next_seat()]

    def is_game_over(self) -> bool:
        return self.state.phase is GamePhase.GAME_OVER

    def expected_card_count(self) -> int:
        return DECK_SIZE + self.state.fallback_cards

    # Events ------------------------------------------------------------

    def _emit(self, event_type: EventType, player_id: Optional[int] = None, **data) -> None:
        self.events.emit(event_type, self.state.round_number, player_id, **data)

    def _emit_effect(self, seat: int, card: Card, outcome: EffectOutcome, *, target: Optional[int]) -> None:
        self._emit(
            EventType.EFFECT_APPLIED,
            seat,
            kind=card.kind.name.lower(),
            target=target,
            skip=outcome.skip_next,
            reverse=outcome.reverse,
            draw_penalty=outcome.draw_penalty,
            color=str(outcome.chosen_color) if outcome.chosen_color else None,
            direction=str(self.state.direction),
        )
