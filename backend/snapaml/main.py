import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snapaml import __version__
from snapaml.config import settings
from snapaml.database import engine
from snapaml.middleware.exceptions import register_exception_handlers
from snapaml.middleware.rate_limit import RateLimitMiddleware
from snapaml.routers import health, kyb, kyc, profile, requests, verify
from snapaml.utils.redis_pool import close_redis

logger = logging.getLogger("snapaml.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("SnapAML API starting (%s)", settings.environment)
    yield
    await close_redis()
    await engine.dispose()
    logger.info("SnapAML API stopped")


app = FastAPI(
    title="SnapAML",
    description="KYB / KYC onboarding and company verification",
    version=__version__,
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware (outermost first) ─────────────────────────────
if settings.rate_limit_enabled:
    app.add_middleware(
        RateLimitMiddleware,
        default_limit=100,  # 100 requests per minute (anonymous/IP)
        authenticated_limit=300,  # 300 requests per minute (JWT user)
        default_window=60,
        exempt_paths=["/health", "/health/ready", "/docs", "/openapi.json"],
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
# Public
app.include_router(health.router)
app.include_router(verify.router, prefix="/api/verify", tags=["verify"])

# Authenticated (bearer JWT from the identity provider)
app.include_router(kyb.router, prefix="/api/kyb", tags=["kyb"])
app.include_router(kyc.router, prefix="/api/kyc", tags=["kyc"])
app.include_router(requests.router, prefix="/api/requests", tags=["requests"])
app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
