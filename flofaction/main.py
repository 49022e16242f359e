from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import calculators, intake, illustrations

logger = logging.getLogger("flofaction")
logger.setLevel(settings.LOG_LEVEL.upper())
if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_handler)

app = FastAPI(
    title="FloFaction Quoting API",
    description="Quote, premium, and lead-priority calculators for the FloFaction site",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculators.router, prefix="/api")
app.include_router(intake.router, prefix="/api")
app.include_router(illustrations.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}


@app.on_event("startup")
def log_startup():
    logger.info("%s started (log level %s)", settings.APP_NAME, settings.LOG_LEVEL)
