# app/main.py
"""
FastAPI application for campaign management.
Stables and campaigns are owned by the user named in the bearer token;
administrators may act on everything.
"""
import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import ALLOWED_ORIGINS, JWT_SECRET_KEY, LOG_LEVEL, LOG_TO_FILE
from app.core.exceptions import CampaignManagementError
from app.core.logging_config import setup_logging
from app.db.session import init_db, test_db_connection
from app.api.v1.router import api_router

setup_logging("campaign-management", level=LOG_LEVEL, log_to_file=LOG_TO_FILE)

log = logging.getLogger("campaigns")
log.info("="*80)
log.info("🚀 Campaign management service starting")
log.info("="*80)

# Initialize database
try:
    init_db()
    if test_db_connection():
        log.info("✅ Database initialized")
except Exception as e:
    log.error(f"❌ Database error: {e}")

# FastAPI app
app = FastAPI(
    title="Campaign Management API",
    description="Owner-scoped management of stables and marketing campaigns",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# ────────────────────────────────────────────
# CORS Configuration
# ────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Authorization", "Content-Type"],
    max_age=86400,
)

# Include API routes
app.include_router(api_router, prefix="/api")

# ────────────────────────────────────────────
# Public routes
# ────────────────────────────────────────────

@app.get("/healthz", tags=["System"])
def health():
    """Health check endpoint"""
    db_ok = test_db_connection()
    return {
        "status": "ok" if db_ok else "degraded",
        "database_ok": db_ok,
        "jwt_enabled": bool(JWT_SECRET_KEY)
    }

# ────────────────────────────────────────────
# Exception Handlers
# ────────────────────────────────────────────

@app.exception_handler(CampaignManagementError)
async def domain_exception_handler(request: Request, exc: CampaignManagementError):
    """Render domain errors with the status their category maps to"""
    log.info(f"↩️ {request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request-shape errors as a {field: message} map"""
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        errors[field] = error.get("msg", "Invalid value")
    return JSONResponse(status_code=400, content=errors)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything uncategorized is an internal error"""
    log.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=False)
