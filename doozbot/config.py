# doozbot/config.py
import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

BOT_TOKEN = os.getenv("BOT_TOKEN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _default_starter(value):
    value = (value or "X").strip().upper()
    if value not in ("X", "O"):
        logger.warning("Invalid DOOZ_DEFAULT_STARTER %r, using X", value)
        return "X"
    return value


def _recent_limit(value):
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        logger.warning("Invalid DOOZ_RECENT_LIMIT %r, using 5", value)
        return 5


DEFAULT_STARTER = _default_starter(os.getenv("DOOZ_DEFAULT_STARTER"))
RECENT_LIMIT = _recent_limit(os.getenv("DOOZ_RECENT_LIMIT", "5"))


def require_token():
    if not BOT_TOKEN:
        raise ValueError("❌ BOT_TOKEN not found! Add it to your .env file.")
    return BOT_TOKEN
