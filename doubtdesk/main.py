import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from doubtdesk.core.config import settings
from doubtdesk.core.exceptions import DoubtDeskError
from doubtdesk.db.base import Base
from doubtdesk.db.sessions import engine
from doubtdesk.routes import ai, auth, doubts

# Import all models to ensure they're registered with Base
import doubtdesk.models  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("doubtdesk")

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Doubt tracking for students and instructors"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DoubtDeskError)
async def doubtdesk_error_handler(request: Request, exc: DoubtDeskError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


# Register routers
app.include_router(auth.router)
app.include_router(doubts.router)
app.include_router(ai.router)


@app.on_event("startup")
async def startup_event():
    logger.info("%s v%s starting", settings.APP_NAME, settings.APP_VERSION)
    logger.info("Resolve policy: %s, lock resolved delete: %s", settings.RESOLVE_POLICY.value, settings.LOCK_RESOLVED_DELETE)


@app.get("/health")
def health():
    return {"status": "ok"}
