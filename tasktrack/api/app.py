"""FastAPI web application for tasktrack."""

import logging
import os
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from tasktrack.api.auth_models import GoogleLoginRequest, LoginResponse, ProfileResponse
from tasktrack.api.resource_models import QTaskCreateRequest, TaskFieldsRequest
from tasktrack.auth.dependencies import get_current_user_id
from tasktrack.auth.errors import TaskTrackError
from tasktrack.auth.google_oauth import GoogleIdentityVerifier, get_identity_verifier
from tasktrack.auth.jwt import SessionTokenService, get_session_tokens
from tasktrack.auth.user_directory import UserDirectory
from tasktrack.database.database import get_db, init_db
from tasktrack.database.repository import QTaskRepository, TaskRepository
from tasktrack.database.user_repository import UserRepository
from tasktrack.models.qtask import QTask
from tasktrack.models.task import Task
from tasktrack.models.user import UserProfile

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the auth services and create the schema (or run migrations) on startup.

    Bad token or identity configuration raises here and fails the boot.
    """
    get_session_tokens()
    get_identity_verifier()
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="tasktrack API",
    description="Per-user tasks and daily quick-task logs behind Google Sign-In",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskTrackError)
async def tasktrack_error_handler(request: Request, exc: TaskTrackError):
    """Map domain errors to a status code and a generic message."""
    message = f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc}"
    if exc.status_code >= 500:
        logger.error(message)
    else:
        logger.info(message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.post("/api/auth/google-login", response_model=LoginResponse)
def google_login(
    body: GoogleLoginRequest,
    db: Session = Depends(get_db),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier),
    tokens: SessionTokenService = Depends(get_session_tokens),
):
    """Exchange a Google ID token for a session token."""
    try:
        claim = verifier.verify(body.credential)
        user = UserDirectory(UserRepository(db)).resolve_or_create(
            email=claim.email,
            name=claim.name,
            picture_url=claim.picture,
        )
        token = tokens.issue(user.id)
    except TaskTrackError as e:
        logger.error(f"Google login failed: {e.code}: {e}")
        raise HTTPException(status_code=500, detail="Login failed")
    except Exception as e:
        logger.exception(f"Google login failed: {type(e).__name__}")
        raise HTTPException(status_code=500, detail="Login failed")

    return LoginResponse(token=token)


@app.get("/api/profile", response_model=ProfileResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get the authenticated user's profile."""
    user = UserRepository(db).get(user_id)
    if not user:
        logger.warning(f"Valid session token for unknown user {user_id}")
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileResponse(
        user=UserProfile(id=user.id, name=user.name, email=user.email, picture=user.picture)
    )


@app.get("/api/tasks", response_model=List[Task])
def list_tasks(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List the authenticated user's tasks."""
    return TaskRepository(db).list_owned(user_id)


@app.get("/api/tasks/{task_id}", response_model=Task)
def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get one of the authenticated user's tasks."""
    return TaskRepository(db).get_owned(user_id, task_id)


@app.post("/api/tasks", response_model=Task, status_code=201)
def create_task(
    body: TaskFieldsRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a task owned by the authenticated user."""
    return TaskRepository(db).create(user_id, body.to_fields())


@app.put("/api/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    body: TaskFieldsRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update one of the authenticated user's tasks."""
    return TaskRepository(db).update_owned(user_id, task_id, body.to_fields())


@app.get("/api/qtasks", response_model=List[QTask])
def list_qtasks(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List the authenticated user's quick-task log entries."""
    return QTaskRepository(db).list_owned(user_id)


@app.post("/api/qtasks", response_model=QTask, status_code=201)
def create_qtask(
    body: QTaskCreateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a quick-task log entry owned by the authenticated user."""
    return QTaskRepository(db).create(user_id, body.to_fields())
