"""
FastAPI transport layer for ReviewMate.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from sse_starlette.sse import EventSourceResponse

from reviewmate import __version__
from reviewmate.analytics import build_analytics
from reviewmate.auth.tokens import decode_access_token
from reviewmate.db.engine import session_scope
from reviewmate.db.models import User
from reviewmate.db.repositories import ReviewRepository, UserRepository
from reviewmate.exceptions import (
    AuthenticationError,
    InvalidCSVError,
    ReviewMateError,
    ReviewNotFoundError,
    ReviewValidationError,
    field_errors,
)
from reviewmate.github.sync.batch_import import create_batch_job
from reviewmate.logging import get_logger
from reviewmate.realtime.events import REVIEW_DELETED
from reviewmate.schemas.batch import BatchAccepted
from reviewmate.schemas.review import ReviewFilters, ReviewRead

from .container import ServiceContainer

logger = get_logger(__name__)


class FetchPRRequest(BaseModel):
    pr_url: str = Field(min_length=1)
    github_token: str | None = None


class UpdateTokenRequest(BaseModel):
    github_token: str = Field(min_length=1)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer ") :].strip() or None
    return None


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    container = container or ServiceContainer.build()
    settings = container.settings

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await container.close()

    app = FastAPI(title="ReviewMate API", version=__version__, lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Error handling
    # -------------------------------------------------------------------------
    @app.exception_handler(ReviewMateError)
    async def handle_domain_error(_request: Request, exc: ReviewMateError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "details": field_errors(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(
            "Unhandled error", method=request.method, path=request.url.path
        )
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    async def _load_user(raw_token: str | None) -> User:
        if not raw_token:
            raise AuthenticationError("Authorization header missing")
        user_id = decode_access_token(raw_token, settings)
        async with session_scope(container.session_factory) as session:
            user = await UserRepository(session).get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user

    async def current_user(request: Request) -> User:
        return await _load_user(_bearer_token(request))

    async def stream_user(
        request: Request, token: str | None = Query(default=None)
    ) -> User:
        # EventSource cannot send headers, so the stream also accepts ?token=
        return await _load_user(_bearer_token(request) or token)

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------
    @app.get("/")
    async def health() -> dict[str, str]:
        return {"message": "ReviewMate API is running"}

    @app.put("/api/auth/token")
    async def update_github_token(
        payload: UpdateTokenRequest, user: User = Depends(current_user)
    ) -> dict[str, str]:
        await container.credentials.update_token(user, payload.github_token)
        return {"message": "GitHub token updated"}

    @app.post("/api/github/fetch-pr")
    async def fetch_pr(
        payload: FetchPRRequest, user: User = Depends(current_user)
    ) -> JSONResponse:
        result = await container.ingestion.upsert(user, payload.pr_url, payload.github_token)
        return JSONResponse(
            status_code=result.status_code,
            content=ReviewRead.from_orm(result.review).to_event(),
        )

    @app.post("/api/reviews/batch", status_code=202)
    async def import_batch(
        file: UploadFile | None = File(default=None),
        user: User = Depends(current_user),
    ) -> BatchAccepted:
        if file is None:
            raise InvalidCSVError("CSV file is required")
        raw = await file.read()
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidCSVError("Unable to parse CSV file") from e

        job = create_batch_job(user, text)
        container.tasks.submit(job)
        return BatchAccepted(batch_id=job.batch_id, total=job.total)

    @app.get("/api/reviews")
    async def list_reviews(
        status: str | None = Query(default=None),
        priority: str | None = Query(default=None),
        repository: str | None = Query(default=None),
        sort_by: str | None = Query(default=None),
        sort_dir: str | None = Query(default=None),
        user: User = Depends(current_user),
    ) -> list[dict[str, Any]]:
        raw_filters = {
            "status": status,
            "priority": priority,
            "repository": repository,
            "sort_by": sort_by,
            "sort_dir": sort_dir,
        }
        try:
            filters = ReviewFilters.model_validate(
                {key: value for key, value in raw_filters.items() if value is not None}
            )
        except ValidationError as e:
            raise ReviewValidationError(
                "Invalid review filters", details=field_errors(e.errors())
            ) from e

        async with session_scope(container.session_factory) as session:
            reviews = await ReviewRepository(session).list_for_user(user.id, filters)
        return [ReviewRead.from_orm(review).to_event() for review in reviews]

    @app.get("/api/reviews/analytics")
    async def review_analytics(user: User = Depends(current_user)) -> dict[str, Any]:
        async with session_scope(container.session_factory) as session:
            reviews = await ReviewRepository(session).list_for_user(user.id)
        return build_analytics(reviews).model_dump(mode="json")

    @app.get("/api/reviews/{identifier:path}")
    async def get_review(identifier: str, user: User = Depends(current_user)) -> dict[str, Any]:
        async with session_scope(container.session_factory) as session:
            review = await ReviewRepository(session).get_by_identifier(identifier, user.id)
        if review is None:
            raise ReviewNotFoundError(identifier)
        return ReviewRead.from_orm(review).to_event()

    @app.delete("/api/reviews/{identifier:path}")
    async def delete_review(identifier: str, user: User = Depends(current_user)) -> dict[str, str]:
        async with session_scope(container.session_factory) as session:
            deleted = await ReviewRepository(session).delete_by_identifier(identifier, user.id)
        if not deleted:
            raise ReviewNotFoundError(identifier)

        await container.emitter.emit(user.id, REVIEW_DELETED, {"identifier": identifier})
        logger.info("Review deleted", user_id=user.id, review=identifier)
        return {"message": "Review deleted", "identifier": identifier}

    @app.get("/api/events")
    async def stream_events(user: User = Depends(stream_user)) -> EventSourceResponse:
        async def event_generator() -> AsyncIterator[dict[str, str]]:
            async for message in container.emitter.subscribe(user.id):
                yield {"event": message["event"], "data": json.dumps(message["data"])}

        return EventSourceResponse(event_generator())

    return app
