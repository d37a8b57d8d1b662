"""
Posts API Routes
Generate blog posts from transcripts and read them back
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.dependencies import get_blog_generator, get_current_user
from app.core.security import ensure_same_user
from app.database import get_db
from app.integrations.blog_generation import BlogGenerator
from app.models import Post
from app.schemas.post import GeneratePostRequest, GenerationResult, PostOut, PostSummary
from app.services import post_service

router = APIRouter()


def _post_out(post: Post) -> PostOut:
    return PostOut(
        id=str(post.id),
        user_id=post.user_id,
        title=post.title,
        content=post.content,
        created_at=post.created_at,
    )


@router.post("/generate", response_model=GenerationResult)
async def generate_post(
    payload: GeneratePostRequest,
    db: Session = Depends(get_db),
    generator: BlogGenerator = Depends(get_blog_generator),
    user: Dict[str, Any] = Depends(get_current_user),
) -> GenerationResult:
    """
    Turn a transcript into a saved blog post. On success the client navigates
    to ``/posts/{post_id}``.
    """
    ensure_same_user(user, payload.user_id)
    return await post_service.generate_blog_post_action(
        db,
        generator,
        transcription_text=payload.transcription_text,
        user_id=payload.user_id,
    )


@router.get("/", response_model=List[PostSummary])
async def list_posts(
    db: Session = Depends(get_db),
    user: Dict[str, Any] = Depends(get_current_user),
) -> List[PostSummary]:
    return [
        PostSummary(id=str(p.id), title=p.title, created_at=p.created_at)
        for p in post_service.list_user_posts(db, user["id"])
    ]


@router.get("/{post_id}", response_model=PostOut)
async def get_post(
    post_id: str,
    db: Session = Depends(get_db),
    user: Dict[str, Any] = Depends(get_current_user),
) -> PostOut:
    post = post_service.get_user_post(db, user["id"], post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return _post_out(post)
