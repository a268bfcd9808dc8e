"""Main FastAPI application module.

This module initializes the FastAPI application, registers all route
handlers and renders every error as ``{"success": false, "error": ...}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mathwizard import config
from mathwizard.api.routes import admin, auth, children, parent, registration, school, topics
from mathwizard.config import API_HOST, API_PORT, CORS_ALLOWED_ORIGINS
from mathwizard.core.database import init_db
from mathwizard.core.exceptions import MathWizardError
from mathwizard.core.logging_config import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="MathWizard API",
    description="Accounts, child learners and curriculum topics for MathWizard.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route handlers
app.include_router(auth.router)
app.include_router(registration.router)
app.include_router(children.router)
app.include_router(parent.router)
app.include_router(topics.router)
app.include_router(school.router)
app.include_router(admin.router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(MathWizardError)
async def handle_domain_error(request: Request, exc: MathWizardError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return _error(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.on_event("startup")
def startup_tasks() -> None:
    """Create tables and report configuration gaps."""
    init_db()
    if not config.admin_login_enabled():
        logger.warning("ADMIN_EMAIL or ADMIN_PASSWORD not set; admin login disabled")
    if not config.smtp_configured():
        logger.warning("SMTP_HOST not set; verification emails will not be sent")


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """Return API information and documentation links."""
    return {
        "name": "MathWizard API",
        "version": "1.0.0",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/api/health",
    }


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    return {"status": "ok"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    logger.info("Starting MathWizard API on http://%s:%s", API_HOST, API_PORT)
    uvicorn.run("mathwizard.app:app", host=API_HOST, port=API_PORT)
