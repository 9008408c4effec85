def _add(client, product_id):
    return client.post("/api/v1/cart/items", json={"product_id": product_id})


def test_empty_cart(client):
    res = client.get("/api/v1/cart")
    assert res.status_code == 200
    assert res.json() == {"items": [], "is_open": False, "total": 0.0, "item_count": 0}
    # Le panier ne doit jamais être mis en cache
    assert "no-store" in res.headers["Cache-Control"]


def test_add_items_and_total(client):
    _add(client, "posture-corrector")
    _add(client, "ergonomic-cushion")
    res = _add(client, "posture-corrector")
    assert res.status_code == 200
    data = res.json()
    assert [(i["product_id"], i["quantity"]) for i in data["items"]] == [
        ("posture-corrector", 2),
        ("ergonomic-cushion", 1),
    ]
    assert data["total"] == 109.97
    assert data["item_count"] == 3


def test_add_unknown_product(client):
    res = _add(client, "inconnu")
    assert res.status_code == 404
    assert client.get("/api/v1/cart").json()["items"] == []


def test_set_quantity_and_remove(client):
    _add(client, "posture-corrector")
    _add(client, "yoga-mat")
    res = client.put("/api/v1/cart/items/yoga-mat", json={"quantity": 3})
    assert res.json()["total"] == 209.96
    res = client.put("/api/v1/cart/items/yoga-mat", json={"quantity": 0})
    assert [i["product_id"] for i in res.json()["items"]] == ["posture-corrector"]
    res = client.delete("/api/v1/cart/items/posture-corrector")
    assert res.json()["items"] == []


def test_set_quantity_absent_does_not_create(client):
    res = client.put("/api/v1/cart/items/yoga-mat", json={"quantity": 2})
    assert res.status_code == 200
    assert res.json()["items"] == []


def test_set_quantity_requires_int(client):
    _add(client, "yoga-mat")
    res = client.put("/api/v1/cart/items/yoga-mat", json={"quantity": "beaucoup"})
    assert res.status_code == 422


def test_toggle_and_clear(client):
    _add(client, "yoga-mat")
    assert client.post("/api/v1/cart/toggle").json()["is_open"] is True
    res = client.delete("/api/v1/cart")
    assert res.json()["items"] == []
    assert res.json()["is_open"] is True
    assert client.post("/api/v1/cart/toggle").json()["is_open"] is False
