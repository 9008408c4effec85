import random
import threading
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from storefront.cart.store import CartStore
from storefront.catalog.models import Product


def _sum(snapshot):
    return sum((e.product.price * e.quantity for e in snapshot.items), Decimal("0"))


def test_add_twice_keeps_single_entry(cart, product_a):
    cart.add(product_a)
    snap = cart.add(product_a)
    assert len(snap.items) == 1
    assert snap.items[0].quantity == 2
    assert snap.total == Decimal("59.98")


def test_scenario_total_two_products(cart, product_a, product_b):
    cart.add(product_a)
    cart.add(product_b)
    snap = cart.add(product_a)
    assert [(e.product.id, e.quantity) for e in snap.items] == [("A", 2), ("B", 1)]
    assert snap.total == Decimal("109.97")
    assert snap.item_count == 3


def test_new_entries_appended_in_order(cart, product_a, product_b):
    cart.add(product_b)
    snap = cart.add(product_a)
    assert [e.product.id for e in snap.items] == ["B", "A"]


def test_entry_borrows_catalog_product(cart, product_a):
    snap = cart.add(product_a)
    assert snap.items[0].product is product_a


def test_set_quantity_zero_removes(cart, product_a, product_b):
    cart.add(product_a)
    cart.add(product_b)
    snap = cart.set_quantity("A", 0)
    assert [e.product.id for e in snap.items] == ["B"]
    assert snap.total == Decimal("49.99")


def test_set_quantity_negative_removes(cart, product_a):
    cart.add(product_a)
    snap = cart.set_quantity("A", -3)
    assert snap.is_empty
    assert snap.total == Decimal("0")


def test_set_quantity_absent_is_noop(cart, product_a):
    cart.add(product_a)
    snap = cart.set_quantity("ZZZ", 5)
    assert [(e.product.id, e.quantity) for e in snap.items] == [("A", 1)]


def test_set_quantity_updates_total(cart, product_a):
    cart.add(product_a)
    snap = cart.set_quantity("A", 4)
    assert snap.items[0].quantity == 4
    assert snap.total == Decimal("119.96")


def test_remove_absent_is_noop(cart, product_a):
    cart.add(product_a)
    snap = cart.remove("nope")
    assert len(snap.items) == 1


def test_clear_keeps_visibility(cart, product_a):
    cart.add(product_a)
    cart.toggle_visibility()
    snap = cart.clear()
    assert snap.is_empty
    assert snap.total == Decimal("0")
    assert snap.is_open is True


def test_toggle_does_not_touch_entries(cart, product_a):
    cart.add(product_a)
    before = cart.snapshot()
    after = cart.toggle_visibility()
    assert after.is_open is True
    assert after.items == before.items
    assert after.total == before.total
    assert cart.toggle_visibility().is_open is False


def test_clear_and_close(cart, product_a):
    cart.add(product_a)
    cart.toggle_visibility()
    snap = cart.clear_and_close()
    assert snap.is_empty
    assert snap.is_open is False
    assert cart.is_open is False
    assert cart.total == Decimal("0")
    # Déjà fermé: reste fermé
    assert cart.clear_and_close().is_open is False


def test_snapshot_is_immutable(cart, product_a):
    snap = cart.add(product_a)
    with pytest.raises(FrozenInstanceError):
        snap.total = Decimal("1")
    cart.add(product_a)
    # L'ancien instantané n'est pas affecté par les mutations suivantes
    assert snap.items[0].quantity == 1


def test_snapshot_to_dict(cart, product_a):
    cart.add(product_a)
    data = cart.snapshot().to_dict()
    assert data["items"][0] == {
        "product_id": "A",
        "name": "Produit A",
        "price": 29.99,
        "image": "a.jpg",
        "quantity": 1,
        "subtotal": 29.99,
    }
    assert data["total"] == 29.99
    assert data["is_open"] is False
    assert data["item_count"] == 1


def test_line_items_for_intent(cart, product_a, product_b):
    cart.add(product_a)
    cart.add(product_b)
    cart.add(product_b)
    assert cart.snapshot().line_items() == [
        {"name": "Produit A", "quantity": 1, "price": 29.99},
        {"name": "Produit B", "quantity": 2, "price": 49.99},
    ]


def test_total_always_matches_entries_random_sequence():
    rng = random.Random(1234)
    products = [
        Product(id=f"P{i}", name=f"P{i}", price=str(Decimal(rng.randint(1, 9999)) / 100), images=["x.jpg"])
        for i in range(6)
    ]
    cart = CartStore()
    for _ in range(500):
        op = rng.choice(["add", "remove", "set", "clear", "toggle"])
        p = rng.choice(products)
        if op == "add":
            snap = cart.add(p)
        elif op == "remove":
            snap = cart.remove(p.id)
        elif op == "set":
            snap = cart.set_quantity(p.id, rng.randint(-1, 5))
        elif op == "clear":
            snap = cart.clear()
        else:
            snap = cart.toggle_visibility()
        assert snap.total == _sum(snap)
        ids = [e.product.id for e in snap.items]
        assert len(ids) == len(set(ids))
        assert all(e.quantity >= 1 for e in snap.items)


def test_snapshot_consistent_under_concurrent_writers(product_a, product_b):
    cart = CartStore()
    stop = threading.Event()
    errors = []

    def writer(product):
        while not stop.is_set():
            cart.add(product)
            cart.set_quantity(product.id, 0)

    def reader():
        for _ in range(2000):
            snap = cart.snapshot()
            if snap.total != _sum(snap):
                errors.append(snap)

    threads = [threading.Thread(target=writer, args=(p,)) for p in (product_a, product_b)]
    for t in threads:
        t.start()
    try:
        reader()
    finally:
        stop.set()
        for t in threads:
            t.join()
    assert errors == []
