from amigo.extensions import db
from amigo.models.post import Post
from amigo.realtime import (
    SIGNED_IN,
    SIGNED_OUT,
    FeedCache,
    notify_auth_change,
    on_auth_change,
    subscribe,
    versions,
)


def test_commit_bumps_table_version_and_notifies(app, alice):
    seen = []
    unsubscribe = subscribe("posts", seen.append)
    before = versions.get("posts")

    post = Post(user_id=alice["id"], post_type="plain", content="hi")
    db.session.add(post)
    db.session.commit()

    unsubscribe()

    assert seen == ["posts"]
    assert versions.get("posts") == before + 1


def test_rollback_announces_nothing(app, alice):
    seen = []
    unsubscribe = subscribe("posts", seen.append)

    db.session.add(Post(user_id=alice["id"], post_type="plain", content="hi"))
    db.session.flush()
    db.session.rollback()

    unsubscribe()
    assert seen == []


def test_unsubscribe_stops_callbacks(app, alice):
    seen = []
    unsubscribe = subscribe("posts", seen.append)
    unsubscribe()

    db.session.add(Post(user_id=alice["id"], post_type="plain", content="hi"))
    db.session.commit()

    assert seen == []


def test_subscription_is_per_table(app, alice):
    seen = []
    unsubscribe = subscribe("likes", seen.append)

    db.session.add(Post(user_id=alice["id"], post_type="plain", content="hi"))
    db.session.commit()

    unsubscribe()
    assert seen == []


def test_feed_cache_drops_entries_on_change(app, alice):
    cache = FeedCache()
    cache.set("viewer:20", {"items": []})

    db.session.add(Post(user_id=alice["id"], post_type="plain", content="hi"))
    db.session.commit()

    assert cache.get("viewer:20") is None
    cache.close()


def test_auth_change_listener():
    events = []
    unsubscribe = on_auth_change(lambda event, user_id: events.append((event, user_id)))

    notify_auth_change("u1", SIGNED_IN)
    notify_auth_change("u1", SIGNED_OUT)
    unsubscribe()
    notify_auth_change("u1", SIGNED_IN)

    assert events == [(SIGNED_IN, "u1"), (SIGNED_OUT, "u1")]


def test_signup_and_logout_emit_auth_events(client):
    events = []
    unsubscribe = on_auth_change(lambda event, user_id: events.append(event))

    response = client.post("/api/v1/auth/signup", json={"email": "c@example.com", "password": "secret123"})
    token = response.get_json()["access_token"]
    client.post("/api/v1/auth/logout", headers={"Authorization": f"Bearer {token}"})

    unsubscribe()
    assert events == [SIGNED_IN, SIGNED_OUT]


def test_changes_endpoint_reports_versions(client, alice):
    client.post("/api/v1/posts", json={"content": "first"}, headers=alice["headers"])

    versions_body = client.get("/api/v1/changes").get_json()["versions"]
    assert versions_body["posts"] >= 1
    assert versions_body["users"] >= 1
