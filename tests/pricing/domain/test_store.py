"""Tests for the in-memory cart store."""

from pricing.cart.store import InMemoryStore


class TestInMemoryStore:
    def test_get_missing_key(self):
        assert InMemoryStore().get("missing") is None

    def test_put_and_get(self):
        store = InMemoryStore()
        store.put("cart_cart_items", [{"id": "a"}])
        assert store.get("cart_cart_items") == [{"id": "a"}]

    def test_values_are_copied(self):
        store = InMemoryStore()
        rows = [{"id": "a"}]
        store.put("key", rows)
        rows.append({"id": "b"})
        store.get("key").append({"id": "c"})
        assert store.get("key") == [{"id": "a"}]

    def test_forget(self):
        store = InMemoryStore({"key": 1})
        store.forget("key")
        store.forget("other")
        assert store.get("key") is None

    def test_cart_writes_through_store(self, cart, store):
        cart.add("sku", "Lamp", 10.0, 1)
        rows = store.get("shopping_cart_items")
        assert [row["id"] for row in rows] == ["sku"]
        assert "config" not in rows[0]

    def test_cart_reads_through_store(self, cart, store):
        store.put(
            "shopping_cart_items",
            [{"id": "sku", "name": "Lamp", "price": 10.0, "quantity": 3, "attributes": {}, "conditions": []}],
        )
        assert cart.get("sku").quantity == 3
