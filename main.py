"""
Backend entry point.

One FastAPI app serving track syllabi and lessons from the markdown content
store. Entitlements and reading progress live in Postgres; both are
optional at startup so content can be browsed without a database.

Run with: python main.py [--port PORT] [--content-dir DIR]
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")
load_dotenv()

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courseware.config import (
    check_required_env_vars,
    get_allowed_origins,
    get_api_port,
    get_content_dir,
    is_dev_mode,
)
from courseware.content import clear_syllabus_cache
from courseware.database import close_engine
from web_api.routes.progress import router as progress_router
from web_api.routes.tracks import router as tracks_router

logging.basicConfig(
    level=logging.DEBUG if is_dev_mode() else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if os.environ.get("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        environment="development" if is_dev_mode() else "production",
        traces_sample_rate=0.0,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Checks configuration on startup; on shutdown closes database
    connections and drops parsed syllabi.
    """
    ok, warnings = check_required_env_vars()
    for warning in warnings:
        logger.warning(warning)
    if not ok:
        raise RuntimeError("Missing required environment variables")

    content_dir = get_content_dir()
    if not content_dir.is_dir():
        logger.warning(f"Content directory does not exist: {content_dir}")
    else:
        logger.info(f"Serving content from {content_dir}")

    yield

    logger.info("Shutting down...")
    await close_engine()
    clear_syllabus_cache()


app = FastAPI(
    title="Courseware Tracks API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tracks_router)
app.include_router(progress_router)


@app.get("/api/status")
async def api_status():
    """API status endpoint."""
    return {"status": "ok"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Courseware Tracks API Server")
    parser.add_argument(
        "--port",
        type=int,
        default=get_api_port(),
        help="Port to run the server on (default: API_PORT or 8000)",
    )
    parser.add_argument(
        "--content-dir",
        help="Directory holding tracks/ and learn/ (default: CONTENT_DIR)",
    )
    args = parser.parse_args()

    # Set env var so it persists across uvicorn reloads
    if args.content_dir:
        os.environ["CONTENT_DIR"] = args.content_dir

    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )
