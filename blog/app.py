from flask import Flask, render_template, request, redirect # web framework
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from blog.models import db, Post, Comment  # Import db and data models from models.py
from blog.schema import ensure_tables
import logging
import sys
# Access environment variables
import os

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(test_config=None):
    """Build the Flask application, bind the database and bootstrap the schema."""
    # Flask(__name__) locates templates/ and static/ next to this module
    app = Flask(__name__)

    # Configure database with fallback
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///blog.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['HOST'] = os.environ.get('HOST', '0.0.0.0')
    app.config['PORT'] = int(os.environ.get('PORT', 3000))

    if test_config is not None:
        app.config.update(test_config)

    # Initialize db with app
    db.init_app(app)

    # tables exist before the first request is accepted
    with app.app_context():
        ensure_tables()

    register_routes(app)
    return app


def register_routes(app):

    # Displays all posts, newest first, with their comment counts
    @app.route("/", methods=['GET'])
    def index():
        try:
            # one query: each post joined with the number of its comments
            rows = (
                db.session.query(Post, func.count(Comment.id))
                .outerjoin(Comment, Comment.post_id == Post.id)
                .group_by(Post.id)
                .order_by(Post.created_at.desc(), Post.id.desc())
                .all()
            )
            posts = [post.to_view(comment_count=count or 0) for post, count in rows]
        except SQLAlchemyError:
            logger.exception("Error fetching posts")
            return "Internal Server Error", 500
        return render_template("index.html", posts=posts)

    # Adds a new post from the submitted form
    @app.route("/new", methods=['POST'])
    def new_post():
        # missing title/content reach the database as NULL and are rejected there
        title = request.form.get('title')
        content = request.form.get('content')
        link = request.form.get('link', '')
        try:
            post = Post(title=title, content=content, link=link)
            db.session.add(post)
            db.session.flush()
            post_id = post.id
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Error adding post")
            return "Internal Server Error", 500
        logger.info(f"Created post {post_id}: {title}")
        return redirect('/')

    # Displays a single post and its comments
    @app.route("/post/<int:post_id>", methods=['GET'])
    def post_detail(post_id):
        try:
            post = db.session.get(Post, post_id)
            if post is None:
                return "Post not found", 404
            comments = (
                Comment.query
                .filter_by(post_id=post_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
                .all()
            )
            view = post.to_view(comments=[comment.to_view() for comment in comments])
        except SQLAlchemyError:
            logger.exception("Error fetching post details")
            return "Internal Server Error", 500
        return render_template("post-detail.html", post=view)

    # Adds a comment to a post; an unknown post id fails the foreign key
    @app.route("/post/<int:post_id>/comment", methods=['POST'])
    def new_comment(post_id):
        content = request.form.get('content')
        try:
            comment = Comment(content=content, post_id=post_id)
            db.session.add(comment)
            db.session.flush()
            comment_id = comment.id
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Error adding comment")
            return "Internal Server Error", 500
        logger.info(f"Created comment {comment_id} on post {post_id}")
        return redirect(f'/post/{post_id}')


def main():
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper(), format=LOG_FORMAT)
    app = create_app()
    logger.info(f"Server is running on port {app.config['PORT']}")
    try:
        # Starts the Flask development server
        app.run(host=app.config['HOST'], port=app.config['PORT'])
    finally:
        # close pooled connections on shutdown
        with app.app_context():
            db.engine.dispose()
    return 0


# Run the app and create database
if __name__ == '__main__':
    sys.exit(main())
