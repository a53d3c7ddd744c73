"""Engine creation and schema initialization"""

from sqlmodel import SQLModel, create_engine

from pageimport.crud import models  # noqa: F401  registers tables on SQLModel.metadata


def make_engine(db_url: str):
    """Create a SQLAlchemy engine; SQLite URLs allow use across threads."""
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(engine)


def reset_db(engine) -> None:
    """Drop and recreate all tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
