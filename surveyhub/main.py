import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.endpoints import statistic, survey, survey_result
from .core.config import settings
from .core.errors import NotFoundError
from .core.logging import setup_logging
from .database import create_db_and_tables, engine

logger = logging.getLogger(__name__)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, json_logs=settings.log_json)
    logger.info("Application starting")
    await create_db_and_tables()
    yield
    logger.info("Application shutting down")
    await engine.dispose()


# --- FastAPI app ---
app = FastAPI(title="Survey Hub Backend", lifespan=lifespan)

logger.debug("CORS: allowed origins: %s", settings.allowed_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


app.include_router(survey.router, prefix="/api", tags=["surveys"])
app.include_router(survey_result.router, prefix="/api", tags=["results"])
app.include_router(statistic.router, prefix="/api", tags=["statistics"])


@app.get("/")
async def read_root():
    return {"message": "Survey Hub Backend is running"}
