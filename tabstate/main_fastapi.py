from contextlib import asynccontextmanager

from fastapi import FastAPI

from tabstate.routers.tabs import router as tabs_router
from tabstate.routers.history import router as history_router, close_history_repository
from tabstate.routers.health import router as health_router
from tabstate.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from tabstate.config import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_history_repository()


app = FastAPI(
    title="Tab State API",
    description="Export open tabs as a compact share token and restore them from a token or the saved history",
    version="1.0.0",
    lifespan=lifespan,
)

# Error handler is the outermost middleware so it sees every failure
app.add_middleware(ErrorHandlerMiddleware, debug=settings.DEBUG)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(health_router)  # Health checks at root level
app.include_router(tabs_router, prefix="/api")
app.include_router(history_router, prefix="/api")


def get_app() -> FastAPI:
    return app
