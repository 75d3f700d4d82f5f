import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from aiogram import Bot, Dispatcher, F
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import Update

from airalert.core.config import get_settings
from airalert.api.routes import router as api_router
from airalert.services.engine import build_alert_engine
from airalert.bot.handlers import router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize bot and dispatcher
bot = Bot(
    token=settings.BOT_TOKEN,
    default=DefaultBotProperties(parse_mode=ParseMode.HTML)
)

dp = Dispatcher()

# Only the configured chat controls this alert engine
router.message.filter(F.chat.id == settings.ALERT_CHAT_ID)
router.edited_message.filter(F.chat.id == settings.ALERT_CHAT_ID)
router.callback_query.filter(F.message.chat.id == settings.ALERT_CHAT_ID)

# Register routers
dp.include_router(router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events
    """
    # Startup
    logger.info("Starting personal air quality alerts")

    engine = build_alert_engine(settings, bot)
    app.state.engine = engine
    dp["engine"] = engine
    dp["lang"] = settings.DEFAULT_LANGUAGE

    await engine.start()

    # Set webhook
    if settings.WEBHOOK_URL:
        webhook_url = f"{settings.WEBHOOK_URL}{settings.WEBHOOK_PATH}"
        logger.info(f"Setting webhook: {webhook_url}")
        await bot.set_webhook(
            url=webhook_url,
            drop_pending_updates=True
        )
    else:
        logger.warning("WEBHOOK_URL not set, webhook not configured")

    yield

    # Shutdown
    logger.info("Shutting down application")

    await engine.stop()

    # Delete webhook
    if settings.WEBHOOK_URL:
        await bot.delete_webhook(drop_pending_updates=True)

    # Close bot session
    await bot.session.close()

    logger.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="airalert",
    description="Location-aware personal air quality alerts",
    version="0.1.0",
    lifespan=lifespan
)
app.include_router(api_router)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "airalert",
        "version": "0.1.0"
    }


@app.post(settings.WEBHOOK_PATH)
async def webhook(request: Request) -> Response:
    """
    Webhook endpoint for receiving Telegram updates

    Args:
        request: FastAPI request object

    Returns:
        Response with status 200
    """
    try:
        # Parse update
        update_data = await request.json()
        update = Update(**update_data)

        # Process update
        await dp.feed_update(bot, update)

        return Response(status_code=200)

    except Exception as e:
        logger.error(f"Error processing webhook update: {e}", exc_info=True)
        return Response(status_code=500)


@app.get("/health")
async def health(request: Request):
    """Detailed health check"""
    engine = request.app.state.engine
    return {
        "status": "healthy",
        "components": {
            "alerts": engine.controller.state.name.lower(),
            "background": engine.host.is_active(),
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "airalert.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
