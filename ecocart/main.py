import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from ecocart.bot.handlers import router
from ecocart.config import settings, setup_logging
from ecocart.services.cart import build_service

logger = logging.getLogger(__name__)


async def main() -> None:
    setup_logging()

    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher(cart_service=build_service())
    dp.include_router(router)

    logger.info("bot polling started, catalog=%s", settings.catalog_url)
    await dp.start_polling(bot)

if __name__ == "__main__":
    asyncio.run(main())
