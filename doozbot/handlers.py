# doozbot/handlers.py

import logging

from telegram import Update
from telegram.error import BadRequest
from telegram.ext import CallbackContext

from . import config
from .game import SIZE, get_game, get_or_create_game
from .utils import build_board, rules_text, stats_text, status_text

logger = logging.getLogger(__name__)

NO_GAME_TEXT = "بازی فعالی نیست. برای شروع /start را بفرستید."


async def _send_board(message, game):
    await message.reply_text(status_text(game.state), reply_markup=build_board(game))


async def _edit_board(query, game):
    try:
        await query.edit_message_text(
            text=status_text(game.state),
            reply_markup=build_board(game),
        )
    except BadRequest as e:
        if "not modified" not in str(e).lower():
            raise
        logger.debug("Board message unchanged in chat %s", game.chat_id)


async def start(update: Update, context: CallbackContext):
    chat_id = update.message.chat_id
    game = get_or_create_game(chat_id, default_starter=config.DEFAULT_STARTER)
    await _send_board(update.message, game)


async def new_game(update: Update, context: CallbackContext):
    chat_id = update.message.chat_id
    game = get_game(chat_id)
    if game is None:
        game = get_or_create_game(chat_id, default_starter=config.DEFAULT_STARTER)
    else:
        game.new_match()
    await _send_board(update.message, game)


async def show_stats(update: Update, context: CallbackContext):
    game = get_game(update.message.chat_id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    await update.message.reply_text(stats_text(game.history, config.RECENT_LIMIT))


async def clear_history(update: Update, context: CallbackContext):
    game = get_game(update.message.chat_id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    game.clear_history()
    await update.message.reply_text("تاریخچه پاک شد.")


async def show_help(update: Update, context: CallbackContext):
    await update.message.reply_text(rules_text(config.DEFAULT_STARTER))


async def on_move(update: Update, context: CallbackContext):
    query = update.callback_query

    try:
        _, index = query.data.split("_")
        index = int(index)
    except ValueError:
        logger.warning("Malformed move callback data: %r", query.data)
        await query.answer()
        return

    game = get_game(query.message.chat_id)
    if game is None:
        await query.answer(NO_GAME_TEXT)
        return

    row, col = divmod(index, SIZE)
    if not game.state.finished and 0 <= row < SIZE and game.state.cell(row, col) is not None:
        await query.answer("این خانه پر است!")
        return

    if not game.select_cell(row, col):
        await query.answer()
        return

    await query.answer()
    await _edit_board(query, game)


async def on_new_game(update: Update, context: CallbackContext):
    query = update.callback_query
    game = get_game(query.message.chat_id)
    if game is None:
        await query.answer(NO_GAME_TEXT)
        return

    game.new_match()
    await query.answer()
    await _edit_board(query, game)


async def on_clear_history(update: Update, context: CallbackContext):
    query = update.callback_query
    game = get_game(query.message.chat_id)
    if game is None:
        await query.answer(NO_GAME_TEXT)
        return

    if not len(game.history):
        await query.answer("تاریخچه خالی است.")
        return

    game.clear_history()
    await query.answer("تاریخچه پاک شد.")


async def on_stats(update: Update, context: CallbackContext):
    query = update.callback_query
    game = get_game(query.message.chat_id)
    if game is None:
        await query.answer(NO_GAME_TEXT)
        return

    await query.answer()
    await context.bot.send_message(
        chat_id=query.message.chat_id,
        text=stats_text(game.history, config.RECENT_LIMIT),
    )


async def on_error(update: object, context: CallbackContext):
    logger.error("Error while handling update %s", update, exc_info=context.error)
