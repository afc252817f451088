import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from app.api.routes_admin import login_router
from app.api.routes_admin import router as admin_router
from app.api.routes_contacts import router as contacts_router
from app.core.config import Settings
from app.core.logging_config import configure_logging
from app.core.origins import combined_origin_regex, is_origin_allowed
from app.db.session import init_db, make_engine, make_session_factory
from app.services.sheets import SheetsClient

logger = logging.getLogger(__name__)

MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def _build_sheets_client(settings: Settings) -> SheetsClient | None:
    if not settings.sheets_enabled:
        return None
    try:
        return SheetsClient.from_settings(settings)
    except Exception:
        # the mirror is optional, intake keeps running without it
        logger.exception("Could not set up the Google Sheets client")
        return None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    engine = make_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info(
            "Contact store ready at %s",
            make_url(settings.database_url).render_as_string(hide_password=True),
        )
        yield
        engine.dispose()

    app = FastAPI(title="Contact Intake Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = make_session_factory(engine)
    app.state.started_at = time.monotonic()
    app.state.sheets = _build_sheets_client(settings)
    logger.info("Google Sheets mirror %s", "enabled" if app.state.sheets else "disabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_origin_regex=combined_origin_regex(settings.allowed_origin_patterns),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # registered after CORSMiddleware so it runs first
    @app.middleware("http")
    async def enforce_origin_policy(request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, settings.allowed_origins, settings.allowed_origin_patterns):
            logger.warning("Blocked request from origin %s", origin)
            return JSONResponse(status_code=403, content={"detail": "Origin not allowed by CORS"})
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        # body-level errors (no JSON, bad JSON) carry no field name
        fields = sorted({
            err["loc"][-1]
            for err in errors
            if len(err.get("loc", ())) > 1 and isinstance(err["loc"][-1], str)
        })
        if errors and all(err["type"] in MISSING_ERROR_TYPES for err in errors):
            detail = "All fields are required"
        else:
            detail = "Invalid request body"
        return JSONResponse(status_code=400, content={"detail": detail, "fields": fields})

    @app.get("/api/health")
    def health():
        return {
            "status": "OK",
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - app.state.started_at, 3),
        }

    app.include_router(contacts_router)
    app.include_router(login_router)
    app.include_router(admin_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
