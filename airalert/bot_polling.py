"""
Run bot in polling mode for local development/testing

The control API is not served in this mode; the host is treated as
foregrounded unless background mode is reported some other way.
"""
import asyncio
import logging
from aiogram import Bot, Dispatcher, F
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from airalert.core.config import get_settings
from airalert.services.engine import build_alert_engine
from airalert.bot.handlers import router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Main function to run bot in polling mode"""

    # Initialize bot and dispatcher
    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML)
    )

    engine = build_alert_engine(settings, bot)
    dp = Dispatcher(engine=engine, lang=settings.DEFAULT_LANGUAGE)

    router.message.filter(F.chat.id == settings.ALERT_CHAT_ID)
    router.edited_message.filter(F.chat.id == settings.ALERT_CHAT_ID)
    router.callback_query.filter(F.message.chat.id == settings.ALERT_CHAT_ID)
    dp.include_router(router)

    try:
        await engine.start()

        logger.info("🤖 Personal alerts bot started in polling mode!")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())

    finally:
        await engine.stop()
        await bot.session.close()
        logger.info("Bot stopped")


if __name__ == "__main__":
    asyncio.run(main())
