"""
Schema bootstrap: create the posts and comments tables when they are missing.

Runs once at startup, before any request is served. Safe to run on every boot.
"""

import logging

from sqlalchemy import inspect

from blog.models import db, Post, Comment

logger = logging.getLogger(__name__)

# creation order matters: comments references posts
TABLES = (Post.__table__, Comment.__table__)


def ensure_tables():
    """
    Check the store's catalog for each table and create the ones that are absent.

    Must be called inside an application context. Errors are logged and
    swallowed so a failing table never stops startup; the next table is
    still attempted.

    Returns:
        list[str]: names of the tables created by this call
    """
    created = []
    for table in TABLES:
        try:
            if not inspect(db.engine).has_table(table.name):
                table.create(db.engine)
                created.append(table.name)
                logger.info(f"{table.name} table has been created.")
        except Exception:
            logger.exception(f"Error creating {table.name} table")
    return created
