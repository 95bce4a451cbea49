from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Default to SQLite if DATABASE_URL is not set
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///db/da_records.db")


def build_engine(url: str):
    """
    Create an engine for the given URL.
    SQLite connections are shared with the worker threads the persistence layer runs on.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, future=True)


def build_session_factory(bind) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind, future=True)


# Create engine
engine = build_engine(DATABASE_URL)

# Create session factory
SessionLocal = build_session_factory(engine)

# Base class for models
Base = declarative_base()
