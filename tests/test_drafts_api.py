import io

import pytest


@pytest.fixture
def draft(client, alice):
    response = client.post(
        "/api/v1/drafts",
        json={"title": "Tokyo Trip", "country": "Japan", "duration": "5 days", "trip_type": "Adventure"},
        headers=alice["headers"],
    )
    assert response.status_code == 201
    return response.get_json()["draft"]


def _url(draft, suffix=""):
    return f"/api/v1/drafts/{draft['id']}{suffix}"


def _add_block(client, user, draft, block_type, **extra):
    response = client.post(_url(draft, "/blocks"), json={"type": block_type, **extra}, headers=user["headers"])
    assert response.status_code == 201, response.get_json()
    return response.get_json()["block"]


def test_open_draft_starts_empty(draft):
    assert draft["title"] == "Tokyo Trip"
    assert draft["blocks"] == []
    assert draft["pending_image"] is None


def test_drafts_are_private(client, bob, draft):
    assert client.get(_url(draft), headers=bob["headers"]).status_code == 404


def test_add_block_selects_it(client, alice, draft):
    block = _add_block(client, alice, draft, "text", subtype="title")

    body = client.get(_url(draft), headers=alice["headers"]).get_json()["draft"]
    assert block["subtype"] == "title"
    assert body["selected_id"] == block["id"]
    assert [b["id"] for b in body["blocks"]] == [block["id"]]


def test_invalid_block_type(client, alice, draft):
    response = client.post(_url(draft, "/blocks"), json={"type": "video"}, headers=alice["headers"])
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid block type"}


def test_update_block_content_and_settings(client, alice, draft):
    block = _add_block(client, alice, draft, "image")

    response = client.put(
        _url(draft, f"/blocks/{block['id']}"),
        json={"settings": {"shape": "polaroid", "rounded": True}},
        headers=alice["headers"],
    )

    settings = response.get_json()["block"]["settings"]
    assert settings["shape"] == "polaroid"
    assert settings["rounded"] is True


def test_update_unknown_block_is_noop(client, alice, draft):
    response = client.put(_url(draft, "/blocks/missing"), json={"content": "x"}, headers=alice["headers"])
    assert response.status_code == 200
    assert response.get_json()["block"] is None


def test_delete_and_reorder_blocks(client, alice, draft):
    a = _add_block(client, alice, draft, "text")
    b = _add_block(client, alice, draft, "divider")
    c = _add_block(client, alice, draft, "list")

    moved = client.post(_url(draft, "/blocks/reorder"), json={"from": 2, "to": 0}, headers=alice["headers"])
    assert moved.get_json()["moved"] is True
    assert [blk["id"] for blk in moved.get_json()["draft"]["blocks"]] == [c["id"], a["id"], b["id"]]

    out_of_range = client.post(_url(draft, "/blocks/reorder"), json={"from": 0, "to": 9}, headers=alice["headers"])
    assert out_of_range.get_json()["moved"] is False

    deleted = client.delete(_url(draft, f"/blocks/{a['id']}"), headers=alice["headers"]).get_json()
    assert deleted["deleted"] is True
    assert [blk["id"] for blk in deleted["draft"]["blocks"]] == [c["id"], b["id"]]


def test_pointer_drag_moves_block(client, alice, draft):
    block = _add_block(client, alice, draft, "image")

    def pointer(**payload):
        return client.post(_url(draft, "/pointer"), json=payload, headers=alice["headers"])

    pointer(action="down", block_id=block["id"], control="body", x=0, y=0)
    pointer(action="move", x=30, y=-20)
    body = pointer(action="up").get_json()["draft"]

    moved = body["blocks"][0]
    assert (moved["x"], moved["y"]) == (block["x"] + 30, block["y"] - 20)
    assert body["interaction"] is None


def test_pointer_requires_coordinates(client, alice, draft):
    response = client.post(_url(draft, "/pointer"), json={"action": "move"}, headers=alice["headers"])
    assert response.status_code == 400


def test_stale_write_is_rejected(client, alice, draft):
    response = client.put(
        _url(draft),
        json={"title": "Osaka Trip"},
        headers={**alice["headers"], "If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"},
    )
    assert response.status_code == 409


def test_fresh_write_passes_lock(client, alice, draft):
    current = client.get(_url(draft), headers=alice["headers"])
    response = client.put(
        _url(draft),
        json={"title": "Osaka Trip"},
        headers={**alice["headers"], "If-Unmodified-Since": current.headers["Last-Modified"]},
    )
    assert response.status_code == 200
    assert response.get_json()["changed"] == ["title"]


def test_image_upload_into_block(client, alice, draft, image_bytes):
    block = _add_block(client, alice, draft, "image")

    response = client.post(
        _url(draft, "/images"),
        data={"file": (io.BytesIO(image_bytes), "photo.png"), "block_id": block["id"]},
        content_type="multipart/form-data",
        headers=alice["headers"],
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body["draft"]["blocks"][0]["settings"]["url"] == body["url"]

    path = body["url"].split("http://testserver", 1)[1]
    served = client.get(path)
    assert served.status_code == 200
    assert served.mimetype == "image/jpeg"

    resized = client.get(path, query_string={"width": 16, "format": "png"})
    assert resized.mimetype == "image/png"


def test_image_upload_to_missing_block(client, alice, draft, image_bytes):
    response = client.post(
        _url(draft, "/images"),
        data={"file": (io.BytesIO(image_bytes), "photo.png"), "block_id": "missing"},
        content_type="multipart/form-data",
        headers=alice["headers"],
    )
    assert response.status_code == 404


def test_corrupt_upload_is_rejected(client, alice, draft):
    response = client.post(
        _url(draft, "/images"),
        data={"file": (io.BytesIO(b"not an image"), "photo.png")},
        content_type="multipart/form-data",
        headers=alice["headers"],
    )
    assert response.status_code == 400
    assert response.get_json()["field"] == "file"


def test_pending_image_flow(client, alice, draft, image_bytes):
    staged = client.post(
        _url(draft, "/images"),
        data={"file": (io.BytesIO(image_bytes), "photo.png")},
        content_type="multipart/form-data",
        headers=alice["headers"],
    ).get_json()
    assert staged["draft"]["pending_image"] == staged["url"]
    assert staged["draft"]["blocks"] == []

    committed = client.post(_url(draft, "/pending-image"), headers=alice["headers"]).get_json()
    assert committed["block"]["settings"]["url"] == staged["url"]
    assert committed["draft"]["pending_image"] is None

    nothing = client.post(_url(draft, "/pending-image"), headers=alice["headers"])
    assert nothing.status_code == 400


def test_publish_flow(client, alice, draft, image_bytes):
    text = _add_block(client, alice, draft, "text")
    client.put(_url(draft, f"/blocks/{text['id']}"), json={"content": "Day one"}, headers=alice["headers"])
    image = _add_block(client, alice, draft, "image")
    client.post(
        _url(draft, "/images"),
        data={"file": (io.BytesIO(image_bytes), "photo.png"), "block_id": image["id"]},
        content_type="multipart/form-data",
        headers=alice["headers"],
    )

    response = client.post(_url(draft, "/publish"), headers=alice["headers"])

    assert response.status_code == 201
    post = response.get_json()
    assert post["post_type"] == "blog"
    assert post["content"] == ""
    assert [b["type"] for b in post["blocks"]] == ["image", "text"]
    assert post["blocks"][0]["alt"] == "Post content"

    feed = client.get("/api/v1/posts", headers=alice["headers"]).get_json()
    assert [p["id"] for p in feed["items"]] == [post["id"]]

    assert client.post(_url(draft, "/publish"), headers=alice["headers"]).status_code == 404


def test_publish_validation_keeps_draft(client, alice):
    draft = client.post("/api/v1/drafts", json={"title": "Lima"}, headers=alice["headers"]).get_json()["draft"]

    response = client.post(_url(draft, "/publish"), headers=alice["headers"])

    assert response.status_code == 400
    assert response.get_json()["message"] == "Please add a country"
    assert client.get(_url(draft), headers=alice["headers"]).status_code == 200
    assert client.get("/api/v1/posts", headers=alice["headers"]).get_json()["items"] == []


def test_discard_draft(client, alice, draft):
    assert client.delete(_url(draft), headers=alice["headers"]).status_code == 200
    assert client.get(_url(draft), headers=alice["headers"]).status_code == 404


def test_invalid_text_subtype_is_rejected(client, alice, draft):
    response = client.post(
        _url(draft, "/blocks"), json={"type": "text", "subtype": "headline"}, headers=alice["headers"]
    )

    assert response.status_code == 400
    assert client.get(_url(draft), headers=alice["headers"]).get_json()["draft"]["blocks"] == []


def test_empty_list_items_are_rejected_and_not_stored(client, alice, draft):
    block = _add_block(client, alice, draft, "list")

    response = client.put(
        _url(draft, f"/blocks/{block['id']}"), json={"settings": {"items": []}}, headers=alice["headers"]
    )

    assert response.status_code == 400
    assert response.get_json()["field"] == "settings.items"
    assert block["id"] in response.get_json()["message"]

    stored = client.get(_url(draft), headers=alice["headers"]).get_json()["draft"]["blocks"][0]
    assert stored["settings"]["items"] == [""]


def test_unknown_image_shape_is_rejected(client, alice, draft):
    block = _add_block(client, alice, draft, "image")

    response = client.put(
        _url(draft, f"/blocks/{block['id']}"), json={"settings": {"shape": "hexagon"}}, headers=alice["headers"]
    )

    assert response.status_code == 400
    assert response.get_json()["field"] == "settings.shape"


def test_non_text_block_content_is_rejected(client, alice, draft):
    block = _add_block(client, alice, draft, "text")

    response = client.put(_url(draft, f"/blocks/{block['id']}"), json={"content": 123}, headers=alice["headers"])

    assert response.status_code == 400
    stored = client.get(_url(draft), headers=alice["headers"]).get_json()["draft"]["blocks"][0]
    assert stored["content"] == ""
