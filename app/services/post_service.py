"""
Post storage and the transcript-to-blog-post generation flow.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import IntegrationError, PersistenceError
from app.integrations.blog_generation import BlogGenerator, extract_title
from app.models import Post
from app.schemas.post import GenerationResult

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 3


def get_user_blog_posts(db: Session, user_id: str, limit: int = HISTORY_LIMIT) -> str:
    """Content of the user's most recent posts, newest first, as style context."""
    try:
        rows = (
            db.query(Post.content)
            .filter(Post.user_id == user_id)
            .order_by(Post.created_at.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        logger.error(f"Error getting blog posts for user {user_id}: {exc}")
        raise PersistenceError("Could not load previous blog posts") from exc
    return "\n\n".join(row.content for row in rows)


def save_blog_post(db: Session, user_id: str, title: str, content: str) -> uuid.UUID:
    post = Post(user_id=user_id, title=title, content=content)
    try:
        db.add(post)
        db.commit()
        db.refresh(post)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Error saving blog post for user {user_id}: {exc}")
        raise PersistenceError("Could not save blog post") from exc
    return post.id


def list_user_posts(db: Session, user_id: str) -> list[Post]:
    return (
        db.query(Post)
        .filter(Post.user_id == user_id)
        .order_by(Post.created_at.desc())
        .all()
    )


def get_user_post(db: Session, user_id: str, post_id: str) -> Post | None:
    try:
        key = uuid.UUID(post_id)
    except ValueError:
        return None
    return db.query(Post).filter(Post.id == key, Post.user_id == user_id).first()


async def generate_blog_post_action(
    db: Session,
    generator: BlogGenerator,
    transcription_text: str,
    user_id: str,
) -> GenerationResult:
    """Generate a post from a transcript and persist it.

    A history lookup failure propagates as ``PersistenceError``. Every other
    failure is reported through the returned result. If the insert fails
    after a successful generation the generated text is discarded.
    """
    user_posts = get_user_blog_posts(db, user_id)

    if not transcription_text:
        logger.error("No transcription text provided to generate blog post.")
        return GenerationResult(
            success=False,
            message="Cannot generate blog post without transcription.",
        )

    try:
        blog_post = await generator.generate(transcription_text, user_posts)
    except IntegrationError:
        blog_post = None
    if not blog_post:
        return GenerationResult(
            success=False,
            message="Blog post generation failed, please try again...",
        )

    title = extract_title(blog_post)
    try:
        post_id = save_blog_post(db, user_id, title, blog_post)
    except PersistenceError:
        logger.error("Failed to save blog post to DB.")
        return GenerationResult(
            success=False,
            message="Failed to save the generated blog post.",
        )

    logger.info(f"Blog post {post_id} created for user {user_id}")
    return GenerationResult(
        success=True,
        message="Blog post created successfully!",
        post_id=str(post_id),
    )
