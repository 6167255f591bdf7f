"""
EduNews - FastAPI Backend
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edunews.api import articles
from edunews.config.settings import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await articles.close_services()


app = FastAPI(
    title="EduNews",
    description="Cross-ledger article registration and verification",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API endpoints - all under /api/*
app.include_router(articles.router, prefix="/api", tags=["Articles"])


@app.get("/health")
async def health():
    return {"status": "ok", "network": get_settings().network}
