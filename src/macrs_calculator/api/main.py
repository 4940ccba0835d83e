import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from macrs_calculator.api.routes import depreciation, rates
from macrs_calculator.config.log_config import configure_logging
from macrs_calculator.config.settings import get_settings

logger = logging.getLogger("macrs_calculator.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    logger.info("Starting macrs-calculator API")
    yield
    logger.info("Shutting down macrs-calculator API")


app = FastAPI(
    title="macrs-calculator API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    elapsed = time.time() - start
    logger.info(
        "%s %s %d %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        elapsed,
    )
    return response


app.include_router(rates.router, prefix="/api/v1")
app.include_router(depreciation.router, prefix="/api/v1")


@app.get("/api/v1/health")
def health():
    """Root-level health check."""
    return {"status": "ok", "service": get_settings().app_name}
