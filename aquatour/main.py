"""Aquatour CRM API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map CRMError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Every route passes through the default rate limit (SlowAPIMiddleware)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from aquatour.api.error_handlers import register_error_handlers
from aquatour.api.routes import (
    access_logs, audit_logs, auth, clients, contacts, destinations, health,
    packages, payments, providers, quotes, reservations, system, users,
)
from aquatour.config import get_settings
from aquatour.infrastructure.database import close_db, init_db
from aquatour.infrastructure.observability import setup_logging
from aquatour.infrastructure.rate_limiter import limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Aquatour CRM API started")
    yield
    await close_db()
    logger.info("Aquatour CRM API shutting down")


app = FastAPI(
    title="Aquatour CRM API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting — default limit for every route, stricter per-route limits in routes/
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

register_error_handlers(app)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(clients.router)
app.include_router(contacts.router)
app.include_router(providers.router)
app.include_router(destinations.router)
app.include_router(packages.router)
app.include_router(reservations.router)
app.include_router(quotes.router)
app.include_router(payments.router)
app.include_router(audit_logs.router)
app.include_router(access_logs.router)
app.include_router(system.router)
