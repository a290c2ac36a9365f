"""A match: a sequence of rounds played toward a target score."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from unomatch.engine.errors import ConfigurationError, IllegalActionError
from unomatch.engine.memento import parse_game_memento
from unomatch.engine.random_utils import (
    Randomizer,
    Shuffler,
    standard_randomizer,
    standard_shuffler,
)
from unomatch.engine.round import (
    Round,
    RoundResult,
    create_round,
    create_round_from_memento,
)
from unomatch.engine.rules import (
    DEFAULT_CARDS_PER_PLAYER,
    DEFAULT_PLAYERS,
    DEFAULT_TARGET_SCORE,
    MAX_PLAYERS,
    MIN_PLAYERS,
)

logger = logging.getLogger(__name__)


class Game:
    """Scores rounds and starts the next one until someone reaches the target.

    Use `create_game` or `create_game_from_memento` rather than the
    constructor. Once created, a game has either a current round or a winner.
    """

    def __init__(
        self,
        players: Sequence[str],
        target_score: int,
        cards_per_player: int,
        shuffler: Shuffler,
        scores: Sequence[int],
        dealer: int,
        winner: Optional[int] = None,
        current_round: Optional[Round] = None,
    ) -> None:
        self._players = list(players)
        self._target_score = target_score
        self._cards_per_player = cards_per_player
        self._shuffler = shuffler
        self._scores = list(scores)
        self._dealer = dealer % len(self._players)
        self._winner = winner
        self._current_round: Optional[Round] = None

        if current_round is not None:
            self._attach(current_round)
        elif winner is None:
            self._start_round()

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def target_score(self) -> int:
        return self._target_score

    @property
    def cards_per_player(self) -> int:
        return self._cards_per_player

    @property
    def dealer(self) -> int:
        return self._dealer

    def player(self, index: int) -> str:
        self._check_player(index)
        return self._players[index]

    def players(self) -> Tuple[str, ...]:
        return tuple(self._players)

    def score(self, index: int) -> int:
        self._check_player(index)
        return self._scores[index]

    def scores(self) -> Tuple[int, ...]:
        return tuple(self._scores)

    def winner(self) -> Optional[int]:
        return self._winner

    def current_round(self) -> Optional[Round]:
        return self._current_round

    def to_memento(self) -> Dict[str, Any]:
        memento: Dict[str, Any] = {
            "players": list(self._players),
            "targetScore": self._target_score,
            "scores": list(self._scores),
            "cardsPerPlayer": self._cards_per_player,
        }
        if self._current_round is not None:
            memento["currentRound"] = self._current_round.to_memento()
        return memento

    def _check_player(self, index: int) -> None:
        if not 0 <= index < len(self._players):
            raise IllegalActionError(f"Player index {index} out of bounds")

    def _start_round(self) -> None:
        round_ = create_round(
            self._players,
            self._dealer,
            shuffler=self._shuffler,
            cards_per_player=self._cards_per_player,
        )
        logger.debug("Starting round with %s dealing", self._players[self._dealer])
        self._attach(round_)

    def _attach(self, round_: Round) -> None:
        self._current_round = round_
        round_.on_end(lambda result: self._handle_round_end(round_, result))

    def _handle_round_end(self, round_: Round, result: RoundResult) -> None:
        if round_ is not self._current_round:
            return
        winner = result.winner
        self._scores[winner] += result.score

        if self._scores[winner] >= self._target_score:
            self._winner = winner
            self._current_round = None
            logger.info(
                "%s won the game with %d points",
                self._players[winner],
                self._scores[winner],
            )
            return

        self._dealer = winner
        self._start_round()


def _normalise_players(players: Optional[Sequence[str]]) -> List[str]:
    result = list(players) if players else list(DEFAULT_PLAYERS)
    if len(result) < MIN_PLAYERS:
        raise ConfigurationError("A game requires at least two players")
    if len(result) > MAX_PLAYERS:
        raise ConfigurationError("A game supports at most ten players")
    return result


def create_game(
    players: Optional[Sequence[str]] = None,
    target_score: int = DEFAULT_TARGET_SCORE,
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
    randomizer: Optional[Randomizer] = None,
    shuffler: Optional[Shuffler] = None,
) -> Game:
    """Start a new match. The first dealer is picked with `randomizer`."""
    player_list = _normalise_players(players)
    if target_score <= 0:
        raise ConfigurationError("target_score must be greater than 0")
    if cards_per_player <= 0:
        raise ConfigurationError("cards_per_player must be positive")

    randomizer = randomizer or standard_randomizer
    dealer = randomizer(len(player_list)) % len(player_list)
    logger.info("New game: %s, playing to %d", ", ".join(player_list), target_score)

    return Game(
        players=player_list,
        target_score=target_score,
        cards_per_player=cards_per_player,
        shuffler=shuffler or standard_shuffler,
        scores=[0] * len(player_list),
        dealer=dealer,
    )


def create_game_from_memento(
    data: Any,
    randomizer: Optional[Randomizer] = None,
    shuffler: Optional[Shuffler] = None,
) -> Game:
    """Rebuild a game from `Game.to_memento()` output.

    The dealer comes from the stored round, so `randomizer` is only accepted
    to mirror `create_game`. Raises MementoError on inconsistent data.
    """
    memento = parse_game_memento(data)
    shuffler = shuffler or standard_shuffler
    winner = memento.winner()

    current_round: Optional[Round] = None
    if memento.current_round is not None:
        current_round = create_round_from_memento(memento.current_round, shuffler)
        dealer = current_round.dealer
    else:
        # Seat that would deal if another round were started.
        dealer = (winner or 0) + 1

    return Game(
        players=memento.players,
        target_score=memento.target_score,
        cards_per_player=memento.cards_per_player,
        shuffler=shuffler,
        scores=memento.scores,
        dealer=dealer,
        winner=winner,
        current_round=current_round,
    )
