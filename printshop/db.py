from __future__ import annotations

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sync endpoints run on the threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=False, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    """Create the orders table if it does not exist yet."""
    # Register the table on the metadata before create_all
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info('"orders" table is ready.')


def get_session(request: Request) -> Iterator[Session]:
    with Session(request.app.state.engine) as session:
        yield session
