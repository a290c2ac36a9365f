"""A single UNO round: dealing, turn order, card effects and the uno window."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, assert_never

from unomatch.engine.card import (
    Card,
    Color,
    DrawTwoCard,
    NumberedCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawFourCard,
    card_score,
    card_to_record,
    is_wild,
)
from unomatch.engine.deck import DECK_SIZE, Deck, create_initial_deck
from unomatch.engine.discard_pile import DiscardPile
from unomatch.engine.errors import ConfigurationError, IllegalActionError
from unomatch.engine.memento import parse_round_memento
from unomatch.engine.random_utils import Shuffler, standard_shuffler
from unomatch.engine.rules import (
    CLOCKWISE,
    COUNTERCLOCKWISE,
    DEFAULT_CARDS_PER_PLAYER,
    MAX_PLAYERS,
    MIN_PLAYERS,
    UNO_PENALTY_CARDS,
    direction_from_label,
    direction_label,
    is_legal_play,
    seat_after,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundResult:
    """Passed to `on_end` subscribers when a hand empties."""

    winner: int
    score: int


@dataclass
class RoundState:
    """Typed, already validated state a Round is built from."""

    players: List[str]
    dealer: int
    current_player: int
    direction: int
    hands: List[List[Card]]
    draw_pile: Deck
    discard_pile: DiscardPile


@dataclass(frozen=True)
class _UnoMark:
    player: int
    action_id: int


class Round:
    """Turn-based state machine for one hand of UNO.

    Build it with `create_round` or `create_round_from_memento`. Every
    mutating call validates first and leaves the round untouched when it
    raises. Each `play`/`draw` advances an action counter; a player who is
    brought down to one card without declaring stays exposed to
    `catch_uno_failure` until the next play or draw, whoever makes it.
    """

    def __init__(self, state: RoundState, shuffler: Shuffler) -> None:
        self._players = list(state.players)
        self._dealer = state.dealer
        self._current = state.current_player
        self._direction = state.direction
        self._hands = [list(hand) for hand in state.hands]
        self._draw_pile = state.draw_pile
        self._discard_pile = state.discard_pile
        self._shuffler = shuffler

        self._action_counter = 0
        self._pending_uno: Optional[_UnoMark] = None
        self._pre_uno: Optional[_UnoMark] = None
        self._end_callbacks: List[Callable[[RoundResult], None]] = []

        self._finished = any(not hand for hand in self._hands)
        self._score = self._calculate_score() if self._finished else None

    # -- reads -------------------------------------------------------------

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def dealer(self) -> int:
        return self._dealer

    @property
    def direction(self) -> int:
        """1 for clockwise, -1 for counter-clockwise."""
        return self._direction

    def player(self, index: int) -> str:
        self._check_player(index)
        return self._players[index]

    def players(self) -> Tuple[str, ...]:
        return tuple(self._players)

    def player_hand(self, index: int) -> Tuple[Card, ...]:
        self._check_player(index)
        return tuple(self._hands[index])

    def player_in_turn(self) -> Optional[int]:
        return None if self._finished else self._current

    def draw_pile(self) -> Deck:
        return Deck(self._draw_pile.cards)

    def discard_pile(self) -> DiscardPile:
        return self._discard_pile.copy()

    def current_color(self) -> Optional[Color]:
        return self._discard_pile.current_color

    def accusable_player(self) -> Optional[int]:
        """The player currently exposed to `catch_uno_failure`, if any."""
        if self._finished or self._pending_uno is None:
            return None
        return self._pending_uno.player

    def can_play(self, card_index: int) -> bool:
        if self._finished:
            return False
        return is_legal_play(
            self._hands[self._current],
            card_index,
            self._discard_pile.top(),
            self._discard_pile.current_color,
        )

    def can_play_any(self) -> bool:
        if self._finished:
            return False
        return any(self.can_play(i) for i in range(len(self._hands[self._current])))

    def can_draw(self) -> bool:
        if self._finished:
            return False
        return self._draw_pile.size > 0 or self._discard_pile.size > 1

    def has_ended(self) -> bool:
        return self._finished

    def winner(self) -> Optional[int]:
        for i, hand in enumerate(self._hands):
            if not hand:
                return i
        return None

    def score(self) -> Optional[int]:
        return self._score

    # -- actions -----------------------------------------------------------

    def play(self, card_index: int, color: Optional[Color] = None) -> Card:
        """Play a card from the current player's hand.

        Wilds need a color; any other card must be played without one.
        Returns the played card.
        """
        if self._finished:
            raise IllegalActionError("Round has ended")
        hand = self._hands[self._current]
        if not 0 <= card_index < len(hand):
            raise IllegalActionError(f"Card index {card_index} out of range")
        if not self.can_play(card_index):
            raise IllegalActionError(f"Illegal play: {hand[card_index]}")
        card = hand[card_index]
        if is_wild(card):
            if color is None:
                raise IllegalActionError("Wild card requires a color")
            color = _coerce_color(color)
        elif color is not None:
            raise IllegalActionError("Color can only be named on wild cards")

        actor = self._current
        self._start_action(actor)
        hand.pop(card_index)
        self._discard_pile.add(card, color)
        logger.debug("%s played %s", self._players[actor], card)

        if len(hand) == 1:
            if self._pre_uno == _UnoMark(actor, self._action_counter):
                self._pre_uno = None
            else:
                self._pending_uno = _UnoMark(actor, self._action_counter)

        self._apply_effect(card)
        self._advance()

        if not hand:
            self._finish()
        return card

    def draw(self) -> Card:
        """Draw one card for the current player.

        The turn passes unless the drawn card can be played right away.
        """
        if self._finished:
            raise IllegalActionError("Round has ended")
        if not self.can_draw():
            raise IllegalActionError("No cards left to draw")

        actor = self._current
        self._start_action(actor)
        if self._draw_pile.size == 0:
            self._reshuffle_discard_pile()
        card = self._draw_pile.deal()
        if card is None:
            raise IllegalActionError("No cards left to draw")

        hand = self._hands[actor]
        hand.append(card)
        logger.debug("%s drew %s", self._players[actor], card)
        if not self.can_play(len(hand) - 1):
            self._advance()
        return card

    def say_uno(self, player: int) -> None:
        """Declare uno.

        Closes the player's own open window, or, for the player in turn,
        pre-declares for their next action. Anything else is ignored.
        """
        self._check_player(player)
        if self._finished:
            raise IllegalActionError("Round has ended")

        pending = self._pending_uno
        if pending is not None and pending == _UnoMark(player, self._action_counter):
            self._pending_uno = None
            logger.debug("%s declared uno", self._players[player])
            return
        if player == self._current:
            self._pre_uno = _UnoMark(player, self._action_counter + 1)
            logger.debug("%s declared uno ahead of their play", self._players[player])

    def catch_uno_failure(self, accuser: int, accused: int) -> bool:
        """Accuse `accused` of holding one card without declaring.

        On success the accused draws four penalty cards and True is returned;
        otherwise nothing changes.
        """
        self._check_player(accuser)
        self._check_player(accused)
        if self._finished:
            return False
        pending = self._pending_uno
        if pending is None or pending.player != accused:
            return False
        if len(self._hands[accused]) != 1:
            return False

        self._draw_cards_for(accused, UNO_PENALTY_CARDS)
        self._pending_uno = None
        logger.debug(
            "%s caught %s without uno",
            self._players[accuser],
            self._players[accused],
        )
        return True

    def on_end(self, callback: Callable[[RoundResult], None]) -> None:
        self._end_callbacks.append(callback)

    # -- serialization -----------------------------------------------------

    def to_memento(self) -> Dict[str, Any]:
        memento: Dict[str, Any] = {
            "players": list(self._players),
            "hands": [[card_to_record(card) for card in hand] for hand in self._hands],
            "drawPile": self._draw_pile.to_memento(),
            "discardPile": list(reversed(self._discard_pile.to_memento())),
        }
        color = self._discard_pile.current_color
        if color is not None:
            memento["currentColor"] = color.value
        memento["currentDirection"] = direction_label(self._direction)
        memento["dealer"] = self._dealer
        if not self._finished:
            memento["playerInTurn"] = self._current
        return memento

    # -- internals ---------------------------------------------------------

    def _check_player(self, index: int) -> None:
        if not 0 <= index < len(self._players):
            raise IllegalActionError(f"Player index {index} out of bounds")

    def _advance(self) -> None:
        self._current = seat_after(self._current, self._direction, self.player_count)

    def _start_action(self, actor: int) -> None:
        # Any play or draw ends the open window, including the accused's own.
        if self._pending_uno is not None:
            logger.debug("Uno window for %s closed", self._players[self._pending_uno.player])
            self._pending_uno = None
        self._action_counter += 1

    def _apply_effect(self, card: Card) -> None:
        if isinstance(card, SkipCard):
            self._advance()
        elif isinstance(card, ReverseCard):
            self._direction = -self._direction
            if self.player_count == 2:
                self._advance()
        elif isinstance(card, DrawTwoCard):
            self._advance()
            self._draw_cards_for(self._current, 2)
        elif isinstance(card, WildDrawFourCard):
            self._advance()
            self._draw_cards_for(self._current, 4)
        elif isinstance(card, (NumberedCard, WildCard)):
            pass
        else:
            assert_never(card)

    def _draw_cards_for(self, player: int, count: int) -> None:
        for drawn in range(count):
            if self._draw_pile.size == 0:
                self._reshuffle_discard_pile()
            card = self._draw_pile.deal()
            if card is None:
                logger.warning(
                    "Draw pile exhausted: %s drew %d of %d cards",
                    self._players[player],
                    drawn,
                    count,
                )
                return
            self._hands[player].append(card)

    def _reshuffle_discard_pile(self) -> None:
        # The top card and the active color stay on the discard pile.
        if self._discard_pile.size <= 1:
            logger.debug("Discard pile too small to reshuffle")
            return
        moved = self._discard_pile.take_under_top()
        self._shuffler(moved)
        for card in moved:
            self._draw_pile.add(card)
        logger.debug("Reshuffled %d cards into the draw pile", len(moved))

    def _calculate_score(self) -> int:
        return sum(card_score(card) for hand in self._hands for card in hand)

    def _finish(self) -> None:
        self._finished = True
        self._score = self._calculate_score()
        winner = self.winner()
        if winner is None:
            return
        logger.info("%s won the round for %d points", self._players[winner], self._score)
        result = RoundResult(winner=winner, score=self._score)
        for callback in list(self._end_callbacks):
            callback(result)


def _coerce_color(color: Any) -> Color:
    try:
        return Color(color)
    except ValueError as exc:
        raise IllegalActionError(f"Unknown color: {color!r}") from exc


def _deal(deck: Deck) -> Card:
    card = deck.deal()
    if card is None:
        raise ConfigurationError("Ran out of cards while dealing")
    return card


def _turn_up_starting_card(deck: Deck, shuffler: Shuffler) -> Card:
    """Deal the first discard, sending wilds back into the deck."""
    if all(is_wild(card) for card in deck.cards):
        raise ConfigurationError("No non-wild card left to start the discard pile")
    card = _deal(deck)
    while is_wild(card):
        deck.add(card)
        deck.shuffle(shuffler)
        card = _deal(deck)
    return card


def create_round(
    players: Sequence[str],
    dealer: int,
    shuffler: Optional[Shuffler] = None,
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
) -> Round:
    """Shuffle a fresh deck, deal and turn up the starting card.

    Cards are dealt one at a time, round-robin from seat 0.
    The starting card takes effect as if the dealer had played it.
    """
    players = list(players)
    count = len(players)
    if count < MIN_PLAYERS:
        raise ConfigurationError(f"At least {MIN_PLAYERS} players are required")
    if count > MAX_PLAYERS:
        raise ConfigurationError(f"At most {MAX_PLAYERS} players are allowed")
    if cards_per_player <= 0:
        raise ConfigurationError("cards_per_player must be positive")
    if count * cards_per_player >= DECK_SIZE:
        raise ConfigurationError(
            f"Cannot deal {cards_per_player} cards to each of {count} players"
        )
    shuffler = shuffler or standard_shuffler
    dealer = dealer % count

    deck = create_initial_deck()
    deck.shuffle(shuffler)

    hands: List[List[Card]] = [[] for _ in players]
    for i in range(count * cards_per_player):
        hands[i % count].append(_deal(deck))

    top = _turn_up_starting_card(deck, shuffler)
    discard = DiscardPile()
    discard.add(top)

    direction = CLOCKWISE
    current = seat_after(dealer, CLOCKWISE, count)
    if isinstance(top, ReverseCard):
        direction = COUNTERCLOCKWISE
        current = seat_after(dealer, COUNTERCLOCKWISE, count)
    elif isinstance(top, SkipCard):
        current = seat_after(dealer, CLOCKWISE, count, 2)
    elif isinstance(top, DrawTwoCard):
        # Falls short only when the deck is nearly dealt out.
        for _ in range(2):
            card = deck.deal()
            if card is not None:
                hands[current].append(card)
        current = seat_after(dealer, CLOCKWISE, count, 2)
    elif isinstance(top, (NumberedCard, WildCard, WildDrawFourCard)):
        pass
    else:
        assert_never(top)

    logger.debug("Dealt round: dealer=%s, starting card=%s", players[dealer], top)
    state = RoundState(
        players=players,
        dealer=dealer,
        current_player=current,
        direction=direction,
        hands=hands,
        draw_pile=deck,
        discard_pile=discard,
    )
    return Round(state, shuffler)


def create_round_from_memento(data: Any, shuffler: Optional[Shuffler] = None) -> Round:
    """Rebuild a round from `Round.to_memento()` output.

    Raises MementoError when the memento is inconsistent. Whether the round
    has finished, and its score, are derived from the hands.
    """
    memento = parse_round_memento(data)
    current = memento.player_in_turn
    state = RoundState(
        players=list(memento.players),
        dealer=memento.dealer,
        current_player=current if current is not None else memento.dealer,
        direction=direction_from_label(memento.current_direction),
        hands=memento.hand_cards(),
        draw_pile=Deck(memento.draw_cards()),
        discard_pile=DiscardPile.from_cards(
            memento.discard_cards_oldest_first(), memento.current_color
        ),
    )
    return Round(state, shuffler or standard_shuffler)
