from datetime import datetime, timezone

import pytest

from doozbot.game import LINES, MatchRecord
from doozbot.history import (
    ANTI_DIAGONAL, COLUMN, MAIN_DIAGONAL, ROW,
    History, LinePattern, classify_line, summarize,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_record(winner, starter, moves=5, line=None):
    return MatchRecord(
        winner=winner,
        moves=moves,
        finished_at=NOW,
        board=(None,) * 9,
        winning_line=line,
        starter=starter,
    )


def test_scenario_d_statistics():
    history = History()
    for winner, starter in [("X", "X"), ("O", "O"), (None, "X")]:
        history.record(make_record(winner, starter))

    stats = history.stats()
    assert stats.total == 3
    assert stats.wins == {"X": 1, "O": 1}
    assert stats.draws == 1
    assert stats.starts == {"X": 2, "O": 1}
    assert stats.start_wins == {"X": 1, "O": 1}
    assert stats.start_win_rate("X") == pytest.approx(0.5)
    assert stats.start_win_rate("O") == pytest.approx(1.0)


def test_empty_history():
    stats = summarize([])
    assert stats.total == 0
    assert stats.draws == 0
    assert stats.wins == {"X": 0, "O": 0}
    assert stats.start_win_rate("X") == 0.0


def test_win_by_non_starter_is_not_a_start_win():
    stats = summarize([make_record("O", "X")])
    assert stats.start_wins == {"X": 0, "O": 0}
    assert stats.wins["O"] == 1


def test_length_and_clear():
    history = History()
    for i in range(7):
        history.record(make_record("X", "X", moves=i))
    assert len(history) == 7

    history.clear()
    assert len(history) == 0
    assert list(history) == []

    history.clear()
    assert len(history) == 0


def test_recent_is_newest_first_and_limited():
    history = History()
    for moves in range(5, 12):
        history.record(make_record(None, "X", moves=moves))

    assert [r.moves for r in history.recent()] == [11, 10, 9, 8, 7]
    assert [r.moves for r in history.recent(2)] == [11, 10]
    assert history.recent(0) == []
    # the log itself stays in chronological order
    assert [r.moves for r in history] == list(range(5, 12))


@pytest.mark.parametrize("line, expected", [
    (LINES[0], LinePattern(ROW, 0)),
    (LINES[1], LinePattern(ROW, 1)),
    (LINES[2], LinePattern(ROW, 2)),
    (LINES[3], LinePattern(COLUMN, 0)),
    (LINES[4], LinePattern(COLUMN, 1)),
    (LINES[5], LinePattern(COLUMN, 2)),
    (LINES[6], LinePattern(MAIN_DIAGONAL)),
    (LINES[7], LinePattern(ANTI_DIAGONAL)),
])
def test_classify_line(line, expected):
    assert classify_line(line) == expected
    assert classify_line(tuple(reversed(line))) == expected


def test_classify_missing_line():
    assert classify_line(None) is None
