import pytest

from core.models import CatalogItem
from core.pricing import compute_price


def test_empty_cart_total_is_zero(cart):
    assert cart.compute_total() == 0
    assert cart.is_empty()
    assert len(cart) == 0


def test_repeat_add_merges_into_one_line(cart):
    item = CatalogItem(id=5, title="Ring", category="jewelery", price=10)
    cart.add_to_cart(item)
    cart.add_to_cart(item)

    assert len(cart) == 1
    line = cart.get_line(5)
    assert line.qty == 2


def test_repeat_add_keeps_first_size(cart, shirt):
    cart.add_to_cart(shirt, size="M")
    cart.add_to_cart(shirt, size="XL")

    line = cart.get_line(shirt.id)
    assert line.qty == 2
    assert line.size == "M"
    assert line.title == shirt.title
    assert line.category == shirt.category


def test_repeat_add_ignores_changed_catalog_fields(cart, shirt):
    cart.add_to_cart(shirt, size="S")
    renamed = CatalogItem(id=shirt.id, title="Renamed", category="electronics", price=1)
    cart.add_to_cart(renamed)

    line = cart.get_line(shirt.id)
    assert line.title == shirt.title
    assert line.category == shirt.category
    assert line.price == shirt.price


def test_lines_keep_first_add_order_and_ids_stay_unique(cart, catalog):
    sequence = [catalog[2], catalog[0], catalog[2], catalog[3], catalog[0], catalog[1]]
    for item in sequence:
        cart.add_to_cart(item)

    ids = [line.id for line in cart.lines]
    assert ids == [catalog[2].id, catalog[0].id, catalog[3].id, catalog[1].id]
    assert len(set(ids)) == len({item.id for item in sequence})


def test_size_is_none_when_not_supplied(cart, monitor):
    line = cart.add_to_cart(monitor)
    assert line.size is None
    assert line.qty == 1


def test_update_qty_replaces_quantity_only(cart, shirt):
    cart.add_to_cart(shirt, size="L")
    cart.update_qty(shirt.id, 7)

    line = cart.get_line(shirt.id)
    assert line.qty == 7
    assert line.size == "L"


def test_update_qty_on_missing_id_is_noop(cart, shirt):
    cart.add_to_cart(shirt)
    cart.update_qty(999, 3)

    assert len(cart) == 1
    assert cart.get_line(999) is None
    assert cart.get_line(shirt.id).qty == 1


@pytest.mark.parametrize("qty", [0, -2])
def test_update_qty_accepts_zero_and_negative(cart, ring, qty):
    # Quantities are not validated; the line stays and the total follows.
    cart.add_to_cart(ring)
    cart.update_qty(ring.id, qty)

    assert cart.get_line(ring.id).qty == qty
    assert cart.compute_total() == compute_price(ring) * qty


def test_remove_from_cart(cart, shirt, ring):
    cart.add_to_cart(shirt)
    cart.add_to_cart(ring)
    cart.remove_from_cart(shirt.id)

    assert cart.get_line(shirt.id) is None
    assert [line.id for line in cart] == [ring.id]


def test_remove_missing_id_leaves_cart_unchanged(cart, shirt):
    cart.add_to_cart(shirt, size="S")
    before = cart.lines
    cart.remove_from_cart(12345)
    assert cart.lines == before


def test_scenario_clothing_total():
    from core.cart import CartStore

    cart = CartStore()
    item = CatalogItem(id=1, title="Tee", category="clothing", price=50)
    cart.add_to_cart(item, size="M")
    cart.update_qty(1, 2)
    assert cart.compute_total() == 500


def test_total_tracks_add_update_remove(cart, catalog):
    for item in catalog:
        cart.add_to_cart(item)
    cart.add_to_cart(catalog[1])
    cart.update_qty(catalog[2].id, 3)
    cart.remove_from_cart(catalog[3].id)

    expected = sum(compute_price(line) * line.qty for line in cart.lines)
    assert cart.compute_total() == pytest.approx(expected)
    assert cart.compute_total() == pytest.approx(
        compute_price(catalog[0])
        + compute_price(catalog[1]) * 2
        + compute_price(catalog[2]) * 3
    )


def test_lines_snapshot_is_not_live(cart, shirt, ring):
    cart.add_to_cart(shirt)
    snapshot = cart.lines
    cart.add_to_cart(ring)
    assert len(snapshot) == 1
    assert len(cart.lines) == 2


def test_clear(cart, shirt):
    cart.add_to_cart(shirt)
    cart.clear()
    assert cart.is_empty()
