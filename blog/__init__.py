"""
Server-rendered blog: list posts, show a post with its comments, and accept
new posts and comments from HTML forms.
"""

from blog.app import create_app, main

__all__ = ["create_app", "main"]
