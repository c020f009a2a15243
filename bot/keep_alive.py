"""
Keep-alive web server.
Exposes health information for hosting platforms that ping the bot.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from bot import __version__
from bot.config import config
from utils.logger import get_logger
from utils.monitoring import Monitoring

logger = get_logger("KeepAlive")

# Track bot status
_bot_status = {
    "status": "starting",
    "discord_connected": False,
}

_monitoring: Optional[Monitoring] = None


def update_bot_status(**kwargs):
    """Update bot status for health endpoint."""
    _bot_status.update(kwargs)


def attach_monitoring(monitoring: Optional[Monitoring]) -> None:
    """Report this monitor's counters from the health endpoint."""
    global _monitoring
    _monitoring = monitoring


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    logger.info("Keep-alive server starting...")
    yield
    logger.info("Keep-alive server shutting down...")


app = FastAPI(
    title="Discord Utility Bot",
    description="Keep-alive and health server",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/")
async def root():
    return {
        "name": "Discord Utility Bot",
        "version": __version__,
        "status": _bot_status.get("status", "unknown"),
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring."""
    connected = bool(_bot_status.get("discord_connected"))
    status = "healthy" if connected else "degraded"

    content = {
        "status": status,
        "discord": "connected" if connected else "disconnected",
    }
    if _monitoring is not None:
        content.update(_monitoring.snapshot())

    return JSONResponse(status_code=200 if connected else 503, content=content)


@app.get("/ping")
async def ping():
    return {"pong": True}


async def start_server():
    """Start the keep-alive server."""
    import uvicorn

    config_uvicorn = uvicorn.Config(
        app,
        host=config.HOST,
        port=config.PORT,
        log_level="warning",
        access_log=False,
    )
    server = uvicorn.Server(config_uvicorn)

    logger.info(f"Keep-alive server listening on port {config.PORT}")
    await server.serve()


def run_server() -> asyncio.Task:
    """Run server in background task."""
    return asyncio.create_task(start_server())
