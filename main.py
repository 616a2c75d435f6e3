"""
Subscription checkout backend
Stripe Checkout for payments, SQLAlchemy for the user subscription record
"""

import logging
import traceback

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from config.settings import settings, IS_PRODUCTION
from database import init_db
from routers.payment_router import payment_router
from routers.user_router import user_router
from routers.pages_router import pages_router

# ============================================================================
# LOGGING
# ============================================================================

# Write ALL events to <LOG_DIR>/app.log as well as stderr
settings.log_dir.mkdir(parents=True, exist_ok=True)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(settings.log_dir / "app.log"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP SETUP
# ============================================================================

app = FastAPI(title="Subscription Checkout")


# Uncaught exception middleware - logs all unhandled exceptions and returns 500
class UncaughtExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Uncaught exception: {e}\n{traceback.format_exc()}")
            return JSONResponse(
                status_code=500,
                content={"message": "Internal Server Error"}
            )


# Security headers middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses: HSTS, X-Frame-Options, X-Content-Type-Options"""
    async def dispatch(self, request, call_next):
        response = await call_next(request)

        # Only set in production where HTTPS is guaranteed
        if IS_PRODUCTION:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"

        return response


app.add_middleware(UncaughtExceptionMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS MUST be near the bottom
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# STARTUP CHECKS
# ============================================================================

REQUIRED_KEY_MAP = {
    "STRIPE_SECRET_KEY": settings.stripe_secret_key,
    "STRIPE_WEBHOOK_SECRET": settings.stripe_webhook_secret,
}


@app.on_event("startup")
async def check_env_keys_on_startup():
    """Check for missing environment variables on startup (non-fatal warning)"""
    missing = [key for key, value in REQUIRED_KEY_MAP.items() if not value]
    if missing:
        logger.warning(f"Startup check: Missing environment variables: {', '.join(missing)}")
    else:
        logger.info("Startup check: All Stripe keys are set")


# Initialize database on startup
@app.on_event("startup")
async def initialize_database():
    """Create the users table if it does not exist yet."""
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


@app.get("/health")
async def health():
    return {"status": "ok"}


# ============================================================================
# INCLUDE ROUTERS
# ============================================================================
app.include_router(payment_router)
app.include_router(user_router)
app.include_router(pages_router)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
