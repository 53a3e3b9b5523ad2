# database.py
"""SQLAlchemy engine and session setup for the SQL store backend."""

import logging

from sqlalchemy import NullPool, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def make_session_factory(database_url: str) -> sessionmaker:
    """Create an engine for ``database_url`` and make sure the tables exist.

    NullPool keeps no connections open between serverless invocations.
    """
    logger.info("Connecting to database...")
    engine = create_engine(database_url, poolclass=NullPool)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
