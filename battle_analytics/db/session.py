"""Database engine utilities.

This module centralizes database connectivity primitives so all SQLAlchemy
usage stays behind the db-layer boundary.
"""

from sqlalchemy import Engine, create_engine


def db_create_engine(database_url: str, echo_sql: bool = False) -> Engine:
    """Create the SQLAlchemy engine for analytics read access.

    Args:
        database_url: SQLAlchemy database URL.
        echo_sql: Whether SQLAlchemy should log emitted statements.

    Returns:
        Engine: Configured SQLAlchemy engine.

    Raises:
        ValueError: Raised when the database URL is blank.
    """

    if not database_url.strip():
        raise ValueError("database_url must not be blank")

    return create_engine(database_url, pool_pre_ping=True, echo=echo_sql)
