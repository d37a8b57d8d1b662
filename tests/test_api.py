from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from app.api.dependencies import get_transcription_service
from app.config import settings
from app.core.security import get_current_user
from app.main import app
from app.models import Post, User
from app.schemas.upload import TranscriptionData, TranscriptionResult
from app.services import post_service


def test_generate_post_returns_post_id(client, db_session):
    response = client.post(
        "/api/v1/posts/generate",
        json={"transcription_text": "hello", "user_id": "user_1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    post = db_session.query(Post).one()
    assert body["post_id"] == str(post.id)
    assert post.title == "My Title"


def test_generate_post_for_other_user_is_forbidden(client):
    response = client.post(
        "/api/v1/posts/generate",
        json={"transcription_text": "hello", "user_id": "someone_else"},
    )
    assert response.status_code == 403


def test_list_and_get_posts(client, db_session):
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    db_session.add(Post(user_id="user_1", title="Old", content="a", created_at=start))
    db_session.add(Post(user_id="user_1", title="New", content="b", created_at=start + timedelta(days=1)))
    db_session.add(Post(user_id="user_2", title="Theirs", content="c", created_at=start))
    db_session.commit()

    listing = client.get("/api/v1/posts/")
    assert [p["title"] for p in listing.json()] == ["New", "Old"]

    post_id = listing.json()[0]["id"]
    detail = client.get(f"/api/v1/posts/{post_id}")
    assert detail.status_code == 200
    assert detail.json()["content"] == "b"

    theirs = db_session.query(Post).filter(Post.user_id == "user_2").one()
    assert client.get(f"/api/v1/posts/{theirs.id}").status_code == 404


def test_history_failure_surfaces_as_server_error(client, monkeypatch):
    def broken(*args, **kwargs):
        from app.core.exceptions import PersistenceError

        raise PersistenceError("Could not load previous blog posts")

    monkeypatch.setattr(post_service, "get_user_blog_posts", broken)
    response = client.post(
        "/api/v1/posts/generate",
        json={"transcription_text": "hello", "user_id": "user_1"},
    )
    assert response.status_code == 500


def test_transcribe_route_delegates_to_service(client):
    calls = []

    async def transcribe(payload):
        calls.append(payload)
        return TranscriptionResult(
            success=True,
            message="File uploaded successfully!",
            data=TranscriptionData(transcription_text="hi", user_id="user_1"),
        )

    app.dependency_overrides[get_transcription_service] = lambda: SimpleNamespace(
        transcribe_uploaded_file=transcribe
    )
    response = client.post(
        "/api/v1/uploads/transcribe",
        json=[{"serverData": {"userId": "user_1", "file": {"url": "https://x/f", "name": "f.mp3"}}}],
    )

    assert response.status_code == 200
    assert response.json()["data"]["transcription_text"] == "hi"
    assert calls[0][0].server_data.file.url == "https://x/f"


def test_transcribe_route_rejects_other_user(client):
    app.dependency_overrides[get_transcription_service] = lambda: SimpleNamespace()
    response = client.post(
        "/api/v1/uploads/transcribe",
        json=[{"serverData": {"userId": "intruder", "file": {"url": "https://x/f", "name": "f.mp3"}}}],
    )
    assert response.status_code == 403


def test_plans_are_public(client):
    response = client.get("/api/v1/plans/")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["basic", "pro"]


def _token(**claims):
    payload = {"sub": "user_1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}
    payload.update(claims)
    return jwt.encode(payload, settings.auth_jwt_key.get_secret_value(), algorithm="HS256")


def test_current_user_from_valid_token():
    creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials=_token(email="a@b.c"))
    assert get_current_user(creds) == {"id": "user_1", "email": "a@b.c"}


@pytest.mark.parametrize(
    "credentials",
    [
        None,
        HTTPAuthorizationCredentials(scheme="Bearer", credentials="garbage"),
        HTTPAuthorizationCredentials(
            scheme="Bearer",
            credentials=_token(exp=datetime.now(timezone.utc) - timedelta(minutes=5)),
        ),
    ],
)
def test_current_user_rejects_bad_tokens(credentials):
    with pytest.raises(HTTPException) as exc_info:
        get_current_user(credentials)
    assert exc_info.value.status_code == 401


def test_transcribe_route_defaults_user_to_token_subject(client):
    async def transcribe(payload):
        return TranscriptionResult(
            success=True,
            message="File uploaded successfully!",
            data=TranscriptionData(transcription_text="hi", user_id=None),
        )

    app.dependency_overrides[get_transcription_service] = lambda: SimpleNamespace(
        transcribe_uploaded_file=transcribe
    )
    response = client.post(
        "/api/v1/uploads/transcribe",
        json=[{"serverData": {"file": {"url": "https://x/f", "name": "f.mp3"}}}],
    )

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == "user_1"


def test_current_plan_derived_from_stored_price(client, db_session, monkeypatch):
    monkeypatch.setattr(settings, "pro_plan_price_id", "price_pro")
    db_session.add(
        User(email="writer@example.com", auth_user_id="user_1", price_id="price_pro", status="active")
    )
    db_session.commit()

    response = client.get("/api/v1/plans/current")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "active"
    assert body["price_id"] == "price_pro"
    assert body["plan"]["id"] == "pro"


def test_current_plan_unknown_price_has_no_plan(client, db_session):
    db_session.add(User(email="writer@example.com", auth_user_id="user_1", price_id="price_legacy"))
    db_session.commit()

    response = client.get("/api/v1/plans/current")

    assert response.status_code == 200
    assert response.json()["plan"] is None


def test_current_plan_requires_subscriber(client):
    assert client.get("/api/v1/plans/current").status_code == 404


def test_root_timestamp_is_timezone_aware(client):
    timestamp = client.get("/").json()["timestamp"]
    assert datetime.fromisoformat(timestamp).tzinfo is not None
