"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the Classroom API. Controllers
are intentionally thin: they normalize request parameters, delegate to
services, and return JSON responses.

Endpoints implemented:
- GET /
- GET /api/v1/subjects
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session

from . import services
from .config import Settings
from .database import Database, get_session
from .logging_config import setup_logging
from .schemas import ErrorOut, SubjectListOut
from .utils.pagination import normalize_pagination

logger = logging.getLogger("classroom_api.api")

API_PREFIX = "/api/v1"
CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]

subjects_router = APIRouter(prefix=f"{API_PREFIX}/subjects", tags=["Subjects"])


@subjects_router.get(
    "",
    response_model=SubjectListOut,
    responses={500: {"model": ErrorOut}},
)
def list_subjects(
    search: Optional[str] = Query(None, description="Substring of the subject name or code"),
    department: Optional[str] = Query(None, description="Substring of the department name"),
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Rows per page, at most 100"),
    db: Session = Depends(get_session),
):
    """List subjects with their departments, newest first.

    Pagination values are corrected rather than rejected: a missing or
    non-numeric `page` becomes 1 and `pageSize` becomes 10 (capped at 100).
    Any database failure is logged and answered with an opaque 500.
    """
    params = normalize_pagination(page, page_size, search, department)
    try:
        return services.SubjectService(db).list_subjects(params)
    except Exception:
        logger.exception("GET /subjects route failed")
        return JSONResponse(status_code=500, content={"error": "Failed to get subjects"})


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application and its `Database` handle.

    `Settings()` raises when `DATABASE_URL` is missing, which makes a bad
    configuration fail at startup instead of on the first request.
    """
    setup_logging()
    settings = settings or Settings()
    db = database or Database.from_settings(settings)
    if settings.CREATE_TABLES:
        db.create_all()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.db.dispose()
        logger.info("database engine disposed")

    app = FastAPI(title="Classroom API", lifespan=lifespan)
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = req_id
        started = time.perf_counter()
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
            logger.exception(
                "request_failed %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": elapsed_ms,
                    },
                    ensure_ascii=True,
                ),
            )
            raise
        response.headers["X-Request-ID"] = req_id
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        if request.url.path.startswith(API_PREFIX):
            logger.info(
                "request_done %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "status_code": response.status_code,
                        "duration_ms": elapsed_ms,
                        "client": request.client.host if request.client else "unknown",
                    },
                    ensure_ascii=True,
                ),
            )
        return response

    @app.get("/")
    def root():
        return {"message": "Classroom API is running"}

    app.include_router(subjects_router)
    return app


def run():
    """Serve the application with uvicorn on `PORT` (default 8000)."""
    import uvicorn

    settings = Settings()
    logger.info("Server is listening on http://localhost:%s", settings.PORT)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
