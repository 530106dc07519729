"""FastAPI application entry point with the FastMCP server mounted."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lifeup_agent.config import get_settings
from lifeup_agent.services.lifeup_client import LifeUpClient

logger = logging.getLogger(__name__)
settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
)

# FastMCP ASGI sub-app
from lifeup_agent.mcp.server import mcp  # noqa: E402

mcp_app = mcp.http_app(path="/mcp")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting LifeUp Agent (LifeUp at %s, safe mode %s)...", settings.base_url, settings.SAFE_MODE)
    if not settings.LIFEUP_API_TOKEN:
        logger.info("LIFEUP_API_TOKEN not set – requests are sent without Authorization")
    # The MCP session manager must run inside the host app's lifespan
    async with mcp_app.lifespan(app):
        yield
    logger.info("LifeUp Agent stopped")


app = FastAPI(
    title="LifeUp Agent",
    description="MCP bridge for managing LifeUp tasks, achievements and shop items",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/mcp", mcp_app)


@app.get("/health")
async def health():
    """Basic liveness probe."""
    return {"status": "ok", "service": "lifeup-agent"}


@app.get("/health/ready")
async def health_ready():
    """Readiness probe: is the LifeUp device answering?"""
    async with LifeUpClient(get_settings()) as client:
        error = await client.ensure_healthy()
    if error:
        logger.error("Health ready check failed: %s", error.message)
        return JSONResponse(
            {"status": "not_ready", "lifeup": "unreachable"},
            status_code=503,
        )
    return {"status": "ready", "lifeup": "ok"}


def run() -> None:
    uvicorn.run("lifeup_agent.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
