"""FastAPI application for the metro fare service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from metrofare.api.endpoints import router
from metrofare.config import settings
from metrofare.exceptions import MetroFareError
from metrofare.stations import get_station_directory

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # A missing or malformed station list must stop startup.
    directory = get_station_directory()
    logger.info(f"Serving {len(directory)} stations")
    yield


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Content-Length",
        "Accept-Encoding",
        "X-CSRF-Token",
        "Authorization",
        "Accept",
        "Origin",
        "Cache-Control",
        "X-Requested-With",
    ],
)


@app.exception_handler(MetroFareError)
async def metro_fare_error_handler(request: Request, exc: MetroFareError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "code": exc.code},
    )


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
