import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from exceptions import NotFoundError, RatingConflictError
from logging_config import setup_logging
from routers import package, tour, tour_rating

load_dotenv()
setup_logging()

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = [
    "http://127.0.0.1:5500",
    "http://localhost:5500",
    "http://127.0.0.1:8000",
    "http://localhost:8000",
]


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS")
    if not raw:
        return DEFAULT_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(title="Explore Tours API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info(f"{request.method} {request.url.path} -> 404: {exc.message}")
    return PlainTextResponse(exc.message, status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(RatingConflictError)
async def conflict_handler(request: Request, exc: RatingConflictError):
    logger.info(f"{request.method} {request.url.path} -> 409: {exc.message}")
    return PlainTextResponse(exc.message, status_code=status.HTTP_409_CONFLICT)


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(package.router)
app.include_router(tour.router)
app.include_router(tour_rating.router)
