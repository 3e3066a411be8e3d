"""Pooled Postgres connections for the archive database."""

import os
from contextlib import contextmanager
from typing import Any, Dict, Generator

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from ..config.models import PostgresConfig

APPLICATION_NAME = "recarchive"

# One pool per distinct connection target.
_pools: Dict[str, ConnectionPool] = {}


def build_conninfo(config: Dict[str, Any]) -> str:
    """
    Build a libpq connection string from a ``postgres`` config section.

    An explicit password wins; otherwise it is read from ``password_env``.
    Values are quoted by psycopg, so passwords may contain any character.
    """
    settings = PostgresConfig(**config)
    password = settings.password
    if not password and settings.password_env:
        password = os.environ.get(settings.password_env)

    params: Dict[str, Any] = {
        "host": settings.host,
        "port": settings.port,
        "dbname": settings.database,
        "user": settings.user,
        "application_name": APPLICATION_NAME,
    }
    if password:
        params["password"] = password
    return make_conninfo(**params)


def get_connection_pool(config: Dict[str, Any]) -> ConnectionPool:
    """Get the pool for a database, opening it on first use."""
    conninfo = build_conninfo(config)
    pool = _pools.get(conninfo)
    if pool is None:
        pool = ConnectionPool(
            conninfo,
            min_size=1,
            max_size=4,
            kwargs={"row_factory": dict_row},
            open=True,
        )
        _pools[conninfo] = pool
    return pool


def close_connection_pool() -> None:
    """Close every pool opened by this process."""
    while _pools:
        _, pool = _pools.popitem()
        pool.close()


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """Borrow a dict-row connection from the pool for ``config``."""
    pool = get_connection_pool(config)
    with pool.connection() as conn:
        yield conn
