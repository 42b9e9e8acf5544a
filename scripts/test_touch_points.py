"""Touch points from users and mentors."""

from datetime import UTC, datetime

from fastapi.testclient import TestClient

from backend.api.limiter import limiter


def test_mentor_touch_point_has_no_author_id(client: TestClient, make_profile, mentor_headers):
    profile = make_profile("Amineh")

    response = client.post(
        f"/profiles/{profile.id}/touch-points",
        json={"content": "Had a call, preparing for interview"},
        headers=mentor_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["author_id"] is None
    assert data["author_name"] == "مریم احمدی"
    assert data["author_avatar"].startswith("https://api.dicebear.com/7.x/lorelei/")


def test_user_touch_point_keeps_author_id(client, make_profile, user_and_headers):
    user, headers = user_and_headers
    profile = make_profile("Amineh")

    data = client.post(f"/profiles/{profile.id}/touch-points", json={"content": "Sent offer"}, headers=headers).json()
    assert data["author_id"] == user.id
    assert data["author_name"] == "Reader"


def test_list_and_latest(client, make_profile, make_touch_point, mentor_headers):
    profile = make_profile("Amineh")
    base = f"/profiles/{profile.id}/touch-points"

    assert client.get(f"{base}/latest", headers=mentor_headers).json() is None

    make_touch_point(profile, "first", datetime(2026, 1, 1, tzinfo=UTC))
    make_touch_point(profile, "third", datetime(2026, 1, 3, tzinfo=UTC))
    make_touch_point(profile, "second", datetime(2026, 1, 2, tzinfo=UTC))

    history = client.get(base, headers=mentor_headers).json()
    assert [tp["content"] for tp in history] == ["third", "second", "first"]
    assert client.get(f"{base}/latest", headers=mentor_headers).json()["content"] == "third"


def test_latest_for_many_profiles(client, make_profile, make_touch_point, user_headers, admin_headers):
    a = make_profile("A")
    b = make_profile("B")
    quiet = make_profile("Quiet")
    hidden = make_profile("Hidden", is_active=False)
    make_touch_point(a, "a-old", datetime(2026, 1, 1, tzinfo=UTC))
    make_touch_point(a, "a-new", datetime(2026, 1, 9, tzinfo=UTC))
    make_touch_point(b, "b-only", datetime(2026, 1, 5, tzinfo=UTC))
    make_touch_point(hidden, "secret", datetime(2026, 1, 5, tzinfo=UTC))

    ids = [a.id, b.id, quiet.id, hidden.id]
    latest = client.get("/touch-points/latest", params={"profile_id": ids}, headers=user_headers).json()
    assert {pid: tp["content"] for pid, tp in latest.items()} == {a.id: "a-new", b.id: "b-only"}

    as_admin = client.get("/touch-points/latest", params={"profile_id": ids}, headers=admin_headers).json()
    assert as_admin[hidden.id]["content"] == "secret"

    assert client.get("/touch-points/latest", headers=user_headers).json() == {}


def test_touch_points_hidden_for_inactive_profiles(client, make_profile, mentor_headers, admin_headers):
    profile = make_profile("Hidden", is_active=False)
    url = f"/profiles/{profile.id}/touch-points"

    assert client.post(url, json={"content": "hello"}, headers=mentor_headers).status_code == 404
    assert client.get(url, headers=mentor_headers).status_code == 404
    assert client.post(url, json={"content": "noted"}, headers=admin_headers).status_code == 201


def test_touch_point_validation(client, make_profile, mentor_headers):
    profile = make_profile("Amineh")
    url = f"/profiles/{profile.id}/touch-points"

    assert client.post(url, json={"content": ""}, headers=mentor_headers).status_code == 422
    assert client.post(url, json={"content": "hi"}, headers={"X-Mentor-ID": "nobody"}).status_code == 401
    assert client.post(url, json={"content": "hi"}).status_code == 401


def test_touch_points_are_rate_limited(client, make_profile, mentor_headers):
    profile = make_profile("Amineh")
    url = f"/profiles/{profile.id}/touch-points"
    limiter.enabled = True
    limiter.reset()
    try:
        statuses = [
            client.post(url, json={"content": f"call {i}"}, headers=mentor_headers).status_code
            for i in range(11)
        ]
    finally:
        limiter.reset()

    assert statuses == [201] * 10 + [429]


def test_padded_content_at_the_limit_is_accepted(client, make_profile, mentor_headers):
    profile = make_profile("Amineh")

    response = client.post(
        f"/profiles/{profile.id}/touch-points",
        json={"content": "\n" + "y" * 5000 + " "},
        headers=mentor_headers,
    )
    assert response.status_code == 201
