"""Terroir — FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from terroir.api.routes import router
from terroir.state.errors import LoadFailure
from terroir.storage.sessions import get_registry, get_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    logger.info("Loading regions and specialties ...")
    try:
        await store.load()
        logger.info("Terroir API is ready.")
    except LoadFailure:
        logger.error("Terroir API started without data; reload once the sources are reachable.")
    yield
    logger.info("Shutting down Terroir API.")
    store.close()
    get_registry().clear()


app = FastAPI(
    title="Terroir",
    description=(
        "Carte interactive des specialites culinaires francaises : cliquez un "
        "departement, devinez sa specialite, puis revelez la reponse."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/", tags=["Root"])
def root():
    return {
        "name": "Terroir",
        "version": "1.0.0",
        "docs": "/docs",
        "description": "Interactive quiz map of French regional specialties",
    }
