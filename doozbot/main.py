# doozbot/main.py
import logging
from telegram import Update
from telegram.ext import Application, CommandHandler, CallbackQueryHandler
from . import config
from .handlers import (
    start, new_game, show_stats, clear_history, show_help,
    on_move, on_new_game, on_clear_history, on_stats, on_error,
)

logger = logging.getLogger(__name__)


def build_application(token):
    app = Application.builder().token(token).build()

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("new", new_game))
    app.add_handler(CommandHandler("stats", show_stats))
    app.add_handler(CommandHandler("clear", clear_history))
    app.add_handler(CommandHandler("help", show_help))
    app.add_handler(CallbackQueryHandler(on_move, pattern=r"^move_"))
    app.add_handler(CallbackQueryHandler(on_new_game, pattern=r"^new$"))
    app.add_handler(CallbackQueryHandler(on_clear_history, pattern=r"^clear$"))
    app.add_handler(CallbackQueryHandler(on_stats, pattern=r"^stats$"))
    app.add_error_handler(on_error)
    return app


def main():
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.LOG_LEVEL,
    )
    # httpx logs every long-poll request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    app = build_application(config.require_token())

    logger.info("Bot started!")
    app.run_polling(allowed_updates=Update.ALL_TYPES, drop_pending_updates=True)


if __name__ == "__main__":
    main()
