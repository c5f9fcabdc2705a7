"""
Box Office FastAPI Application

In-process stores, seeded with the sample venue when SEED_SAMPLE_DATA is set.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.service.box_office.driven_adapter.seed.seed_loader import seed_sample_data


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Box Office] Starting up...')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Box Office] Dependency injection wired')

    if settings.SEED_SAMPLE_DATA:
        await seed_sample_data(
            event_store=container.event_store(), member_store=container.member_store()
        )

    Logger.base.info('✅ [Box Office] Ready to serve requests')
    yield

    Logger.base.info('🛑 [Box Office] Shutting down...')
    container.unwire()
    cleanup()
    Logger.base.info('👋 [Box Office] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Venue Box Office - seat maps, membership-aware checkout and event administration',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
