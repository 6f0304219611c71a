"""
Conexión a base de datos PostgreSQL

- psycopg2 con RealDictCursor para el SQL de los repositorios
- SQLAlchemy solo para declarar el esquema (scripts/init_db.py lo crea)

Author: TM3
Updated: 2026-10-19
"""
import time
import logging

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base

from .config import settings

logger = logging.getLogger(__name__)

# Base para modelos
Base = declarative_base()


def _require_database_url(database_url: str = None) -> str:
    url = database_url or settings.DATABASE_URL
    if not url:
        raise Exception("DATABASE_URL not configured")
    return url


def get_engine(database_url: str = None):
    """SQLAlchemy engine for schema management, built on demand"""
    return create_engine(_require_database_url(database_url), pool_pre_ping=True)


def get_db_connection_dict():
    """
    Open a psycopg2 connection whose cursors return dict rows

    Callers own the connection:

        conn = get_db_connection_dict()
        cursor = conn.cursor()
        try:
            cursor.execute("SELECT id, name FROM suppliers")
            rows = cursor.fetchall()
        finally:
            cursor.close()
            conn.close()
    """
    return psycopg2.connect(_require_database_url(), cursor_factory=RealDictCursor)


def get_db_connection_dict_with_retry(max_retries=3, retry_delay=1.0):
    """
    Same as get_db_connection_dict, but verified with SELECT 1 and retried

    Only psycopg2.OperationalError (dropped SSL sessions, pooler restarts)
    is retried; the wait doubles after each failed attempt.

    Args:
        max_retries: Attempts before giving up
        retry_delay: Wait after the first failure, in seconds

    Raises:
        psycopg2.OperationalError: The last failure once attempts run out
    """
    database_url = _require_database_url()

    for attempt in range(1, max_retries + 1):
        try:
            conn = psycopg2.connect(database_url, cursor_factory=RealDictCursor)
            check = conn.cursor()
            check.execute("SELECT 1")
            check.close()

            if attempt > 1:
                logger.info(f"Database reachable after {attempt} attempts")
            return conn

        except psycopg2.OperationalError as e:
            if attempt == max_retries:
                logger.error(f"Database unreachable after {max_retries} attempts: {e}")
                raise

            delay = retry_delay * (2 ** (attempt - 1))
            logger.warning(f"Database attempt {attempt}/{max_retries} failed ({e}); retrying in {delay:.1f}s")
            time.sleep(delay)
