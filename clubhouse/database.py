"""
Database Connection
Async queries through `databases`, table definitions through SQLAlchemy
"""

import logging

from databases import Database
from sqlalchemy import create_engine, MetaData
from sqlalchemy.orm import declarative_base
from clubhouse.config import settings

logger = logging.getLogger(__name__)

# Database URL
DATABASE_URL = settings.DATABASE_URL

# SQLite has no connection pool options
if DATABASE_URL.startswith("sqlite"):
    db_options = {}
else:
    db_options = {"min_size": 1, "max_size": 10}

# Create database instance for async queries
database = Database(DATABASE_URL, **db_options)

# Create SQLAlchemy engine for table creation and scripts
engine = create_engine(
    DATABASE_URL.replace("postgresql://", "postgresql+psycopg2://") 
    if "postgresql://" in DATABASE_URL else DATABASE_URL
)

# Metadata for models
metadata = MetaData()

# Base class for models
Base = declarative_base(metadata=metadata)


def create_tables():
    """Create every table registered on the metadata"""
    import clubhouse.models  # noqa: F401  registers the tables

    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


async def connect_db():
    """Connect to database on startup"""
    await database.connect()
    logger.info("Database connected")


async def disconnect_db():
    """Disconnect from database on shutdown"""
    await database.disconnect()
    logger.info("Database disconnected")
