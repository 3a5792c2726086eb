import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.errors import register_exception_handlers
from .core.logging import configure_logging
from .db.pool import init_pool, close_pool
from .routers import auth as auth_router
from .routers import offers as offers_router
from .routers import skills as skills_router
from .routers import tasks as tasks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_pool()
    logger.info("Database pool ready")
    yield
    await close_pool()

app = FastAPI(title="Skill Marketplace API", version="0.1.0", lifespan=lifespan)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router, prefix=settings.API_PREFIX)
app.include_router(skills_router.router, prefix=settings.API_PREFIX)
app.include_router(tasks_router.router, prefix=settings.API_PREFIX)
app.include_router(offers_router.router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    """Serve the API with uvicorn on ``settings.HOST``/``settings.PORT``."""
    uvicorn.run("skillmarket.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
