# doozbot/history.py

from dataclasses import dataclass

ROW = "row"
COLUMN = "column"
MAIN_DIAGONAL = "main_diagonal"
ANTI_DIAGONAL = "anti_diagonal"

PLAYERS = ("X", "O")


class History:
    """Append-only log of finished matches, oldest first."""

    def __init__(self):
        self._records = []

    def record(self, match_record):
        self._records.append(match_record)

    def clear(self):
        self._records = []

    def recent(self, limit=5):
        """Last ``limit`` records, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._records[-limit:]))

    def stats(self):
        return summarize(self._records)

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))


@dataclass(frozen=True)
class HistoryStats:
    total: int
    wins: dict
    draws: int
    starts: dict
    start_wins: dict

    def start_win_rate(self, player):
        starts = self.starts.get(player, 0)
        if not starts:
            return 0.0
        return self.start_wins.get(player, 0) / starts


def summarize(records):
    records = list(records)
    return HistoryStats(
        total=len(records),
        wins={p: sum(1 for r in records if r.winner == p) for p in PLAYERS},
        draws=sum(1 for r in records if r.winner is None),
        starts={p: sum(1 for r in records if r.starter == p) for p in PLAYERS},
        start_wins={
            p: sum(1 for r in records if r.starter == p and r.winner == p)
            for p in PLAYERS
        },
    )


@dataclass(frozen=True)
class LinePattern:
    kind: str
    index: int | None = None


def classify_line(line):
    if not line:
        return None
    cells = sorted(line)
    rows = [r for r, _ in cells]
    cols = [c for _, c in cells]

    if rows[0] == rows[1] == rows[2]:
        return LinePattern(ROW, rows[0])
    if cols[0] == cols[1] == cols[2]:
        return LinePattern(COLUMN, cols[0])
    if cells == [(0, 0), (1, 1), (2, 2)]:
        return LinePattern(MAIN_DIAGONAL)
    # only the anti-diagonal is left among the eight lines
    return LinePattern(ANTI_DIAGONAL)
