from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heyweb.core.env_loader import load_project_env

load_project_env()

from heyweb.api.routes_automation import router as automation_router
from heyweb.api.routes_chat import router as chat_router
from heyweb.api.routes_health import router as health_router
from heyweb.api.routes_text import router as text_router
from heyweb.core.concurrency import init_semaphore
from heyweb.core.config import get_frontend_origins
from heyweb.core.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_semaphore()
    yield


app = FastAPI(title="HeyWeb Voice Assistant", version="0.1.0", lifespan=lifespan)

_origins = get_frontend_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(text_router, prefix="/api")
app.include_router(automation_router, prefix="/api")
