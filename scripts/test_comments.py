"""Comments on profiles."""

from fastapi.testclient import TestClient

from backend.api.limiter import limiter
from backend.db import User


def test_add_and_list_comments_newest_first(client: TestClient, make_profile, user_and_headers):
    user, headers = user_and_headers
    profile = make_profile("Omid")

    first = client.post(f"/profiles/{profile.id}/comments", json={"content": "  Strong candidate  "}, headers=headers)
    assert first.status_code == 201
    data = first.json()
    assert data["content"] == "Strong candidate"
    assert data["author_id"] == user.id
    assert data["author_name"] == "Reader"
    assert data["author_avatar"] == "https://avatars.example/reader@example.com.png"

    client.post(f"/profiles/{profile.id}/comments", json={"content": "Follow up next week"}, headers=headers)

    comments = client.get(f"/profiles/{profile.id}/comments", headers=headers).json()
    assert [c["content"] for c in comments] == ["Follow up next week", "Strong candidate"]


def test_mentors_can_read_but_not_comment(client, make_profile, user_headers, mentor_headers):
    profile = make_profile("Omid")
    client.post(f"/profiles/{profile.id}/comments", json={"content": "Hello"}, headers=user_headers)

    assert len(client.get(f"/profiles/{profile.id}/comments", headers=mentor_headers).json()) == 1
    response = client.post(f"/profiles/{profile.id}/comments", json={"content": "Hi"}, headers=mentor_headers)
    assert response.status_code == 403


def test_author_name_falls_back_to_email(client, db, make_profile, user_and_headers):
    user, headers = user_and_headers
    db.query(User).filter(User.id == user.id).update({"name": None})
    db.commit()
    profile = make_profile("Omid")

    data = client.post(f"/profiles/{profile.id}/comments", json={"content": "Nice"}, headers=headers).json()
    assert data["author_name"] == "reader@example.com"


def test_comment_validation_and_missing_profile(client, make_profile, user_headers):
    profile = make_profile("Omid")
    url = f"/profiles/{profile.id}/comments"

    assert client.post(url, json={"content": "   "}, headers=user_headers).status_code == 422
    assert client.post(url, json={"content": "x" * 5001}, headers=user_headers).status_code == 422
    assert client.post("/profiles/missing/comments", json={"content": "Hi"}, headers=user_headers).status_code == 404
    assert client.get("/profiles/missing/comments", headers=user_headers).status_code == 404
    assert client.post(url, json={"content": "Hi"}).status_code == 401


def test_length_limit_applies_after_stripping(client, make_profile, user_headers):
    profile = make_profile("Omid")
    url = f"/profiles/{profile.id}/comments"

    response = client.post(url, json={"content": "  " + "x" * 5000 + "  "}, headers=user_headers)
    assert response.status_code == 201
    assert response.json()["content"] == "x" * 5000


def test_comments_are_rate_limited(client, make_profile, user_headers):
    profile = make_profile("Omid")
    url = f"/profiles/{profile.id}/comments"
    limiter.enabled = True
    limiter.reset()
    try:
        statuses = [
            client.post(url, json={"content": f"note {i}"}, headers=user_headers).status_code
            for i in range(11)
        ]
        last = client.post(url, json={"content": "one more"}, headers=user_headers)
    finally:
        limiter.reset()

    assert statuses == [201] * 10 + [429]
    assert last.status_code == 429
    assert last.json()["detail"].startswith("Rate limit exceeded: ")
