"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from clubhouse import __version__
from clubhouse.config import settings
from clubhouse.database import connect_db, disconnect_db
from clubhouse.errors import ClubError, InternalError, ValidationError
from clubhouse.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Membership management for a small club: roster, dues, events and bylaws",
    version=__version__,
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClubError)
async def club_error_handler(request: Request, exc: ClubError):
    """Every known failure: its kind and a message that is safe to show"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing request fields"""
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={
            "error": ValidationError.kind,
            "detail": "Invalid request",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Storage or programming errors never leak their details"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=InternalError.status_code,
        content={"error": InternalError.kind, "detail": InternalError.default_detail},
    )


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()
    logger.info("%s stopped", settings.APP_NAME)


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": __version__
    }


# Import and include routers
from clubhouse.routes import auth, members, payments, events, rules, users  # noqa: E402

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(members.router, prefix="/members", tags=["Members"])
app.include_router(payments.router, prefix="/payments", tags=["Payments"])
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(rules.router, prefix="/rules", tags=["Rules"])
app.include_router(users.router, prefix="/users", tags=["Users"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clubhouse.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Auto-reload on code changes
    )
