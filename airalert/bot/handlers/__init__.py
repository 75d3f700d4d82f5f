"""Handlers package"""

from aiogram import Router
from airalert.bot.handlers import alerts

# Create main router
router = Router()

# Include sub-routers
router.include_router(alerts.router)
