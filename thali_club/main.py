# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from .config import CORS_ORIGINS
from .catering.persistence import get_snapshot_writer
from .logging_config import setup_logging
from .routes import catering_router, content_router, relay_router
from .routes.relay import limiter
from .services.wizard_session import get_cache_stats

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Let queued snapshot writes reach the database before the process exits
    logger.info("Flushing pending order snapshots")
    get_snapshot_writer().flush()


app = FastAPI(
    title="Veg Thali Club API",
    description="Catering order configurator, email relay and site content",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Catering", "description": "Catering order configurator"},
        {"name": "Email Relay", "description": "Form-to-email endpoints"},
        {"name": "Content", "description": "Static site data"},
    ],
)


# ---------- Request ID Middleware ----------
# Tags each request with an ID for log correlation


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Stores a request ID in request.state and echoes it in X-Request-ID."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)

# Add rate limit exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS configuration
# In production, set CORS_ORIGINS to the site's origin(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Health ----------


@app.get("/health", tags=["Health"])
def health() -> Dict[str, Any]:
    """Health check endpoint. Returns ok plus wizard cache statistics."""
    return {"status": "ok", "wizard_cache": get_cache_stats()}


# ---------- Routers ----------

app.include_router(content_router)
app.include_router(relay_router)
app.include_router(catering_router)
