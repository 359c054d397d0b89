"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from sample_app.api import microposts, pages, sessions, users
from sample_app.config import get_settings
from sample_app.database import init_db
from sample_app.services.flash import set_flash
from sample_app.services.session import SignInRequired
from sample_app.services.users import ValidationFailed

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    if settings.is_development:
        init_db()
    yield


app = FastAPI(
    title="Sample App",
    description="Users, remember-me sessions and microposts",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(SignInRequired)
async def sign_in_required_handler(request: Request, exc: SignInRequired):
    """Redirect to the sign-in page with a notice."""
    redirect = RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)
    set_flash(redirect, "notice", exc.notice)
    return redirect


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    """Report field-level validation failures."""
    return JSONResponse(
        status_code=422,
        content={"detail": exc.as_dict()},
    )


# Register routers
app.include_router(pages.router)
app.include_router(sessions.router)
app.include_router(users.router)
app.include_router(microposts.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
