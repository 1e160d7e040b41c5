import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedback_wall.api.v1.dashboard import router as dashboard_router
from feedback_wall.api.v1.pages import router as pages_router
from feedback_wall.api.v1.profile import router as profile_router
from feedback_wall.api.v1.public import router as public_router
from feedback_wall.config import get_settings
from feedback_wall.database import engine

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info("Public feedback URLs: %s/feedback/<slug>", settings.PUBLIC_BASE_URL)
    yield
    await engine.dispose()
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# API v1 routers
API_V1_PREFIX = "/api/v1"
app.include_router(dashboard_router, prefix=API_V1_PREFIX)
app.include_router(pages_router, prefix=API_V1_PREFIX)
app.include_router(public_router, prefix=API_V1_PREFIX)
app.include_router(profile_router, prefix=API_V1_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": settings.APP_VERSION}
