# doozbot/utils.py

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from .game import SIZE, Status, X, cell_index
from .history import ANTI_DIAGONAL, COLUMN, MAIN_DIAGONAL, ROW, classify_line

SYMBOLS = {"X": "❌", "O": "⭕", None: "⬜"}
WIN_MARK = "⭐"

_PERSIAN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")

RULES_TEXT = (
    "قوانین بازی:\n"
    "• اولین بازی با {starter} شروع می‌شود\n"
    "• بازی بعدی با بازیکن مخالف برنده شروع می‌شود\n"
    "• در صورت مساوی، بازی بعدی با بازیکن مخالف آخرین بازیکن شروع می‌شود\n"
    "• اولین بازیکنی که ۳ مهره خود را در یک ردیف قرار دهد برنده می‌شود\n"
    "• بعد از پایان بازی، روی صفحه کلیک کنید تا بازی جدید شروع شود"
)


def to_persian_number(value):
    return str(value).translate(_PERSIAN_DIGITS)


def build_board(game):
    state = game.state
    highlighted = set(state.winning_line or ())

    buttons = []
    for row in range(SIZE):
        buttons.append([
            InlineKeyboardButton(
                _cell_text(state.cell(row, col), (row, col) in highlighted),
                callback_data=f"move_{cell_index(row, col)}",
            )
            for col in range(SIZE)
        ])

    buttons.append([
        InlineKeyboardButton("بازی مجدد 🔄", callback_data="new"),
        InlineKeyboardButton("آمار 📊", callback_data="stats"),
        InlineKeyboardButton("پاک کردن تاریخچه 🗑", callback_data="clear"),
    ])
    return InlineKeyboardMarkup(buttons)


def _cell_text(mark, highlighted):
    text = SYMBOLS[mark]
    return f"{WIN_MARK}{text}" if highlighted else text


def status_text(state):
    lines = [
        f"🎮 بازی شماره {to_persian_number(state.number)}",
        f"بازیکن فعلی: {state.current_player}",
        f"تعداد حرکات: {to_persian_number(state.moves)}/۹",
        f"شروع بازی بعد با: {state.next_starter}",
    ]
    if state.status is Status.WON:
        lines += ["", f"{state.winner} برنده شد! 🎉"]
    elif state.status is Status.DRAW:
        lines += ["", "مساوی شد! 🤝"]

    if state.finished:
        lines.append(f"بازی با {state.starter} شروع شده بود")
        lines.append("برای شروع بازی جدید روی هر خانه کلیک کنید.")
    return "\n".join(lines)


def pattern_label(line):
    pattern = classify_line(line)
    if pattern is None:
        return ""
    if pattern.kind == ROW:
        return f"ردیف {to_persian_number(pattern.index + 1)}"
    if pattern.kind == COLUMN:
        return f"ستون {to_persian_number(pattern.index + 1)}"
    if pattern.kind == MAIN_DIAGONAL:
        return "مورب اصلی"
    if pattern.kind == ANTI_DIAGONAL:
        return "مورب فرعی"
    return ""


def record_text(record):
    if record.winner:
        outcome = f"{record.winner} برنده شد"
    else:
        outcome = "مساوی"
    finished = record.finished_at.astimezone().strftime("%H:%M")
    text = (
        f"{outcome} | {to_persian_number(record.moves)} حرکت | "
        f"شروع: {record.starter} | {to_persian_number(finished)}"
    )
    if record.winning_line:
        text += f"\n   {pattern_label(record.winning_line)}"
    return text


def stats_text(history, recent_limit=5):
    stats = history.stats()
    n = to_persian_number
    lines = [
        "📊 آمار بازی",
        "",
        "آمار شروع کننده‌ها:",
        f"شروع با X: {n(stats.starts['X'])} ({n(stats.start_wins['X'])} برد)",
        f"شروع با O: {n(stats.starts['O'])} ({n(stats.start_wins['O'])} برد)",
        "",
        "آمار کلی:",
        f"بردهای X: {n(stats.wins['X'])}",
        f"بردهای O: {n(stats.wins['O'])}",
        f"مساوی: {n(stats.draws)}",
        f"تعداد کل بازی‌ها: {n(stats.total)}",
    ]

    recent = history.recent(recent_limit)
    if recent:
        lines += ["", "بازی‌های اخیر:"]
        lines += [f"• {record_text(record)}" for record in recent]
    return "\n".join(lines)


def rules_text(default_starter=X):
    return RULES_TEXT.format(starter=default_starter)
