"""
FastAPI application factory for the Emberwood economy API.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from emberwood.api.sessions import SessionManager
from emberwood.api.routers import economy

# Load .env from the project root first, then CWD
_project_root = Path(__file__).resolve().parents[3]  # src/emberwood/api/app.py → project root
load_dotenv(_project_root / ".env")
load_dotenv(Path.cwd() / ".env")


def _default_seed() -> int | None:
    raw = os.environ.get("EMBERWOOD_RANDOM_SEED", "").strip()
    return int(raw) if raw.lstrip("-").isdigit() else None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Emberwood Economy API",
        description="REST API for the Emberwood village economy engine",
        version="0.1.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.session_manager = SessionManager(default_seed=_default_seed())

    application.include_router(economy.router, prefix="/api/economy", tags=["economy"])

    @application.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return application


app = create_app()
