import sqlite3 # driver connection type for the pragma hook
from datetime import datetime # date and time handling
from urllib.parse import urlparse # hostname extraction for links

from flask_sqlalchemy import SQLAlchemy # database operations
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Create SQLAlchemy instance
db = SQLAlchemy()


# SQLite only enforces FOREIGN KEY constraints when asked to, once per connection
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def link_host(link):
    """Return the hostname of ``link``, or None when there is none."""
    if not link:
        return None
    try:
        return urlparse(link).hostname
    except ValueError:
        # e.g. an unbalanced "[" in the netloc
        return None


# Define Data Model (Data Layer Interface)
# Each post has ID, title, optional link, content and creation time
class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    link = db.Column(db.String(255), nullable=False, default="", server_default="")
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def to_view(self, **extra):
        """Plain dict handed to the templates."""
        view = {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "host": link_host(self.link) or "",
            "content": self.content,
            "created_at": self.created_at or datetime.now(),
        }
        view.update(extra)
        return view


# Each comment belongs to exactly one post
class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    post_id = db.Column(db.Integer, db.ForeignKey("posts.id"), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def to_view(self):
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at or datetime.now(),
        }
