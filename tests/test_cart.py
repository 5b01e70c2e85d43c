def test_cart_add_update_remove_clear(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    resp = client.get("/v1/cart", headers=headers)
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"items": []}

    resp = client.post(
        "/v1/cart/items",
        headers=headers,
        json={"id": "intro-to-python", "title": "Intro To Python", "price": 49, "level": "Beginner", "rating": 4.5},
    )
    assert resp.status_code == 200, resp.text
    items = resp.json()["items"]
    assert len(items) == 1
    assert items[0]["courseId"] == "intro-to-python"
    assert items[0]["price"] == 49
    assert items[0]["level"] == "Beginner"
    assert items[0]["rating"] == 4.5
    assert "instructor" not in items[0]
    assert "addedAt" in items[0]

    # same course again refreshes the row instead of duplicating it
    resp = client.post(
        "/v1/cart/items",
        headers=headers,
        json={"id": "intro-to-python", "title": "Intro To Python", "price": 39},
    )
    items = resp.json()["items"]
    assert len(items) == 1
    assert items[0]["price"] == 39
    assert "level" not in items[0]

    client.post("/v1/cart/items", headers=headers, json={"id": "intro-to-rust", "title": "Intro To Rust", "price": 59})
    resp = client.get("/v1/cart", headers=headers)
    assert [item["courseId"] for item in resp.json()["items"]] == ["intro-to-rust", "intro-to-python"]

    resp = client.delete("/v1/cart/items/intro-to-python", headers=headers)
    assert resp.status_code == 200, resp.text
    assert [item["courseId"] for item in resp.json()["items"]] == ["intro-to-rust"]

    resp = client.delete("/v1/cart", headers=headers)
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"items": []}
    assert client.get("/v1/cart", headers=headers).json() == {"items": []}


def test_carts_are_per_user(client, make_user, auth_headers):
    alice = auth_headers(make_user("alice@example.com"))
    bob = auth_headers(make_user("bob@example.com"))

    client.post("/v1/cart/items", headers=alice, json={"id": "intro-to-python", "title": "Intro To Python", "price": 49})

    assert client.get("/v1/cart", headers=bob).json() == {"items": []}
    assert len(client.get("/v1/cart", headers=alice).json()["items"]) == 1


def test_cart_requires_auth_and_valid_payload(client, make_user, auth_headers):
    assert client.get("/v1/cart").status_code == 401

    resp = client.post("/v1/cart/items", headers=auth_headers(make_user()), json={"id": "", "title": "x", "price": -1})
    assert resp.status_code == 422
