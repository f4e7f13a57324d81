# doozbot/game.py

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum

from .history import History

logger = logging.getLogger(__name__)

X = "X"
O = "O"
EMPTY = None
SIZE = 3

EMPTY_BOARD = (EMPTY,) * (SIZE * SIZE)

# rows, columns, main diagonal, anti-diagonal
LINES = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


class Status(Enum):
    PLAYING = "playing"
    WON = "won"
    DRAW = "draw"


def other(player):
    return O if player == X else X


def cell_index(row, col):
    return row * SIZE + col


@dataclass(frozen=True)
class MatchState:
    board: tuple = EMPTY_BOARD
    current_player: str = X
    status: Status = Status.PLAYING
    winner: str | None = None
    moves: int = 0
    winning_line: tuple | None = None
    number: int = 0
    starter: str = X
    next_starter: str = X

    @property
    def finished(self):
        return self.status is not Status.PLAYING

    def cell(self, row, col):
        return self.board[cell_index(row, col)]


@dataclass(frozen=True)
class MatchRecord:
    winner: str | None
    moves: int
    finished_at: datetime
    board: tuple
    winning_line: tuple | None
    starter: str


@dataclass(frozen=True)
class SelectCell:
    row: int
    col: int


@dataclass(frozen=True)
class NewMatch:
    pass


def initial_state(default_starter=X):
    """State before the first match; ``start_match`` turns it into match 1."""
    return MatchState(current_player=default_starter, starter=default_starter,
                      next_starter=default_starter)


def winning_line(board):
    for line in LINES:
        a, b, c = (board[cell_index(r, col)] for r, col in line)
        if a is not EMPTY and a == b == c:
            return line
    return None


def is_full(board):
    return EMPTY not in board


def start_match(state):
    starter = state.next_starter
    return MatchState(
        board=EMPTY_BOARD,
        current_player=starter,
        status=Status.PLAYING,
        winner=None,
        moves=0,
        winning_line=None,
        number=state.number + 1,
        starter=starter,
        # provisional; overwritten when this match ends
        next_starter=other(starter),
    )


def place_mark(state, row, col, now=None):
    """
    Put the current player's mark on (row, col).

    Returns ``(new_state, record)``. ``record`` is a ``MatchRecord`` when the
    move ends the match and ``None`` otherwise. Moves on a finished match, on
    an occupied cell or outside the grid leave the state untouched.
    """
    if state.finished:
        return state, None
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        return state, None
    index = cell_index(row, col)
    if state.board[index] is not EMPTY:
        return state, None

    player = state.current_player
    board = state.board[:index] + (player,) + state.board[index + 1:]
    moves = state.moves + 1
    line = winning_line(board)

    if line is not None:
        new_state = replace(state, board=board, moves=moves, status=Status.WON,
                            winner=player, winning_line=line,
                            next_starter=other(player))
    elif is_full(board):
        new_state = replace(state, board=board, moves=moves, status=Status.DRAW,
                            next_starter=other(player))
    else:
        return replace(state, board=board, moves=moves,
                       current_player=other(player)), None

    record = MatchRecord(
        winner=new_state.winner,
        moves=moves,
        finished_at=now or datetime.now(timezone.utc),
        board=board,
        winning_line=new_state.winning_line,
        starter=state.starter,
    )
    return new_state, record


def apply_event(state, event, now=None):
    """Single entry point for user events: ``SelectCell`` or ``NewMatch``."""
    if isinstance(event, NewMatch):
        return start_match(state), None
    if isinstance(event, SelectCell):
        # any cell press after the end of a match starts the next one
        if state.finished:
            return start_match(state), None
        return place_mark(state, event.row, event.col, now=now)
    raise TypeError(f"unknown event: {event!r}")


class DoozGame:
    def __init__(self, chat_id=None, default_starter=X):
        self.chat_id = chat_id
        self.history = History()
        self.state = initial_state(default_starter)
        self._apply(NewMatch())

    def _apply(self, event, now=None):
        before = self.state
        self.state, record = apply_event(before, event, now=now)
        if self.state.number != before.number:
            logger.info("Chat %s: match %d started by %s",
                        self.chat_id, self.state.number, self.state.starter)
        if record is not None:
            self.history.record(record)
            logger.info("Chat %s: match %d ended, winner=%s moves=%d",
                        self.chat_id, self.state.number, record.winner or "draw", record.moves)
        return self.state is not before

    def select_cell(self, row, col, now=None):
        """Returns True when the press changed the state."""
        return self._apply(SelectCell(row, col), now=now)

    def new_match(self):
        self._apply(NewMatch())

    def clear_history(self):
        cleared = len(self.history)
        self.history.clear()
        logger.info("Chat %s: cleared %d history records", self.chat_id, cleared)
        return cleared


# global state
GAMES = {}


def get_game(chat_id):
    return GAMES.get(chat_id)


def get_or_create_game(chat_id, default_starter=X):
    game = GAMES.get(chat_id)
    if game is None:
        game = DoozGame(chat_id, default_starter=default_starter)
        GAMES[chat_id] = game
        logger.info("Created session for chat %s", chat_id)
    return game
