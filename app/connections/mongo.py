import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from fastapi import FastAPI
from mongoengine import connect, disconnect

from app.models import Favorite, Movie, User, UserActivity
from app.utils.config import settings


logger = logging.getLogger(__name__)

DOCUMENTS = (User, UserActivity, Movie, Favorite)


def ensure_indexes() -> None:
    """Create the unique indexes the auth core relies on before serving traffic."""
    for document in DOCUMENTS:
        document.ensure_indexes()


def init_mongo() -> None:
    kwargs = {"tz_aware": True}
    if settings.mongo_scheme == "mongodb+srv":
        kwargs["tlsCAFile"] = certifi.where()
    connect(host=settings.mongo_uri, alias="default", **kwargs)
    ensure_indexes()
    logger.info("Connected to MongoDB database %s", settings.mongo_db)


def close_mongo() -> None:
    disconnect(alias="default")


@asynccontextmanager
async def mongo_lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_mongo()
    try:
        yield
    finally:
        close_mongo()
