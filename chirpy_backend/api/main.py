import logging
import sys
import uuid
from dataclasses import dataclass, field
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from chirpy_backend.api.config import Settings
from chirpy_backend.api.errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    ValidationError,
    register_exception_handlers,
)
from chirpy_backend.api.metrics import HitCounter, HitCounterMiddleware
from chirpy_backend.api.moderation import MatchMode, moderate
from chirpy_backend.api.schemas import ChirpCreate, ChirpOut, ChirpValidate, ChirpValidated, UserCreate, UserOut
from chirpy_database.db import get_sessionmaker
from chirpy_database.models import utcnow
from chirpy_database.repository import ChirpyRepository, DuplicateEmailError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter()

METRICS_HTML = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@dataclass
class ApiContext:
    """State shared by every request, built once per app."""

    settings: Settings
    hits: HitCounter = field(default_factory=HitCounter)

    @property
    def moderation_mode(self) -> MatchMode:
        return self.settings.moderation_mode


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# DATABASE Dependency
def get_db():
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


def get_repository(db=Depends(get_db)) -> ChirpyRepository:
    return ChirpyRepository(db)


def get_context(request: Request) -> ApiContext:
    return request.app.state.context


#####################
# API ENDPOINTS
#####################

@router.get("/api/healthz", summary="Readiness", tags=["API"])
def readiness():
    """Readiness probe; always OK."""
    return PlainTextResponse("OK", status_code=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@router.post("/api/users", response_model=UserOut, status_code=201, summary="Register a new user", tags=["API"])
def create_user(payload: UserCreate, repo: ChirpyRepository = Depends(get_repository)):
    """
    Register a new user by email.
    Returns the created user; 409 if the email is already registered.
    """
    try:
        user = repo.create_user(payload.email)
    except DuplicateEmailError:
        logger.info("Registration rejected, email already in use")
        raise ConflictError("Email already in use")
    except StorageError:
        logger.exception("Failed to create user")
        raise InternalError("Couldn't create user")
    logger.info("Created user %s", user.id)
    return user


def _moderated_body(body: str, ctx: ApiContext) -> str:
    result = moderate(body, mode=ctx.moderation_mode)
    if not result.is_valid:
        logger.info("Chirp rejected: %s", result.error_reason)
        raise ValidationError("Chirp is too long")
    return result.cleaned_body


# PUBLIC_INTERFACE
@router.post("/api/chirps", response_model=ChirpOut, status_code=201, summary="Post a chirp", tags=["API"])
def create_chirp(
    payload: ChirpCreate,
    repo: ChirpyRepository = Depends(get_repository),
    ctx: ApiContext = Depends(get_context),
):
    """
    Moderate and store a chirp for a user.
    The cleaned body is what gets persisted.
    """
    cleaned = _moderated_body(payload.body, ctx)
    now = utcnow()
    try:
        chirp = repo.create_chirp(
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            body=cleaned,
            user_id=payload.user_id,
        )
    except StorageError:
        logger.exception("Failed to create chirp")
        raise InternalError("Couldn't create chirp")
    logger.info("Created chirp %s for user %s", chirp.id, chirp.user_id)
    return chirp


# PUBLIC_INTERFACE
@router.post("/api/validate_chirp", response_model=ChirpValidated, summary="Validate and clean a chirp body", tags=["API"])
def validate_chirp(payload: ChirpValidate, ctx: ApiContext = Depends(get_context)):
    """Check a chirp body without storing it."""
    return ChirpValidated(valid=True, cleaned_body=_moderated_body(payload.body, ctx))


#####################
# ADMIN ENDPOINTS
#####################

# PUBLIC_INTERFACE
@router.get("/admin/metrics", summary="Hit counter", tags=["Admin"])
def metrics(ctx: ApiContext = Depends(get_context)):
    """Number of requests served from /app since start or last reset."""
    hits = ctx.hits.load()
    if ctx.settings.metrics_format == "text":
        return PlainTextResponse(f"Hits: {hits}")
    return HTMLResponse(METRICS_HTML.format(hits=hits))


# PUBLIC_INTERFACE
@router.post("/admin/reset", summary="Reset counter and data", tags=["Admin"])
def reset(
    repo: ChirpyRepository = Depends(get_repository),
    ctx: ApiContext = Depends(get_context),
):
    """
    Delete all users and chirps, then zero the hit counter.
    Only permitted when PLATFORM is "dev".
    """
    if not ctx.settings.is_dev:
        logger.warning("Reset refused on platform %r", ctx.settings.platform)
        raise ForbiddenError("Reset is only allowed in dev environment.")
    try:
        repo.delete_all_users()
    except StorageError:
        logger.exception("Failed to reset database")
        raise InternalError("Couldn't delete users")
    ctx.hits.reset()
    logger.info("Hits counter and database reset")
    return PlainTextResponse("Hits counter reset to 0")


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the Chirpy application with its own hit counter and settings."""
    settings = settings or Settings()
    _configure_logging(settings.log_level)

    app = FastAPI(
        title="Chirpy API",
        description="Users, moderated chirps, static assets and admin counters.",
        version="1.0.0",
        openapi_tags=[
            {"name": "API", "description": "Users and chirps"},
            {"name": "Admin", "description": "Metrics and reset"},
        ],
    )
    context = ApiContext(settings=settings)
    app.state.context = context
    register_exception_handlers(app)

    app.include_router(router)

    static = StaticFiles(directory=settings.filepath_root, html=True)
    app.mount("/app", HitCounterMiddleware(static, counter=context.hits), name="app")

    logger.info("Serving files from %s", settings.filepath_root)
    return app


def run():
    settings = Settings()
    uvicorn.run(
        "chirpy_backend.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
