"""Tests for the catalog/settings store and its persistence."""

import json
import threading

import pytest

from amarna_store.common.models import Product, StoreSettings, default_products
from amarna_store.services.catalog_store import PRODUCTS_KEY, SETTINGS_KEY, CatalogStore


def _new_product(name="تمر"):
    return {
        "name": name,
        "description": "وصف",
        "price": "100 ج.م / كجم",
        "image": "/images/x.png",
        "category": "daily",
    }


@pytest.fixture
def empty_store(storage):
    storage.set_item(PRODUCTS_KEY, "[]")
    return CatalogStore(storage)


class TestLoading:
    def test_defaults_when_storage_is_empty(self, storage):
        store = CatalogStore(storage)

        assert [p.id for p in store.list_products()] == [1, 2, 3, 4, 5, 6]
        assert store.get_settings() == StoreSettings()

    def test_corrupt_payloads_fall_back_to_defaults(self, storage):
        storage.set_item(PRODUCTS_KEY, "{not json")
        storage.set_item(SETTINGS_KEY, "[1, 2]")

        store = CatalogStore(storage)

        assert store.list_products() == default_products()
        assert store.get_settings() == StoreSettings()

    def test_product_schema_mismatch_falls_back(self, storage):
        storage.set_item(PRODUCTS_KEY, json.dumps([{"id": 1, "name": "ناقص"}]))

        assert CatalogStore(storage).list_products() == default_products()

    def test_unknown_category_falls_back(self, storage):
        bad = dict(_new_product(), id=1, category="frozen")
        storage.set_item(PRODUCTS_KEY, json.dumps([bad]))

        assert CatalogStore(storage).list_products() == default_products()

    def test_partial_settings_are_backfilled_from_defaults(self, storage):
        storage.set_item(
            SETTINGS_KEY,
            json.dumps(
                {
                    "deliveryRates": {"cairo": 55, "mars": 5},
                    "isDiscountActive": True,
                    "legacyFlag": 1,
                }
            ),
        )

        settings = CatalogStore(storage).get_settings()

        assert settings.delivery_rates["cairo"] == 55
        assert settings.delivery_rates["giza"] == 60
        assert settings.delivery_rates["others"] == 100
        assert "mars" not in settings.delivery_rates
        assert settings.discount_percentage == 25
        assert settings.is_discount_active is True
        assert "legacyFlag" not in settings.to_dict()

    def test_out_of_range_saved_settings_fall_back(self, storage):
        storage.set_item(SETTINGS_KEY, json.dumps({"discountPercentage": 140}))

        assert CatalogStore(storage).get_settings() == StoreSettings()


class TestProducts:
    def test_ids_are_sequential_from_empty(self, empty_store):
        for i in range(5):
            empty_store.add_product(**_new_product(f"p{i}"))

        assert [p.id for p in empty_store.list_products()] == [1, 2, 3, 4, 5]

    def test_add_after_delete_uses_max_plus_one(self, empty_store):
        for i in range(4):
            empty_store.add_product(**_new_product(f"p{i}"))
        empty_store.delete_product(3)

        added = empty_store.add_product(**_new_product("new"))

        assert added.id == 5
        assert [p.id for p in empty_store.list_products()] == [1, 2, 4, 5]

    def test_deleting_the_max_id_allows_reuse(self, empty_store):
        for i in range(3):
            empty_store.add_product(**_new_product(f"p{i}"))
        empty_store.delete_product(3)

        assert empty_store.add_product(**_new_product("again")).id == 3

    def test_update_replaces_matching_entry(self, storage):
        store = CatalogStore(storage)
        changed = Product(id=2, name="جديد", description="d", price="99", image="/i.png", category="daily")

        store.update_product(changed)

        assert store.get_product(2) == changed
        assert [p.id for p in store.list_products()] == [1, 2, 3, 4, 5, 6]

    def test_update_unknown_id_is_a_noop(self, storage):
        store = CatalogStore(storage)
        before = store.list_products()

        store.update_product(Product(id=99, name="x", description="", price="1", image="", category="daily"))

        assert store.list_products() == before

    def test_delete_unknown_id_is_a_noop(self, storage):
        store = CatalogStore(storage)

        store.delete_product(42)

        assert len(store.list_products()) == 6

    def test_returned_products_are_copies(self, storage):
        store = CatalogStore(storage)

        store.list_products()[0].name = "mutated"

        assert store.get_product(1).name != "mutated"

    def test_mutations_persist_across_instances(self, empty_store, storage):
        empty_store.add_product(**_new_product("باقي"))
        empty_store.add_product(**_new_product("محذوف"))
        empty_store.delete_product(2)

        reloaded = CatalogStore(storage)

        assert [p.name for p in reloaded.list_products()] == ["باقي"]

    def test_add_rejects_unknown_category(self, empty_store):
        with pytest.raises(ValueError):
            empty_store.add_product(**dict(_new_product(), category="frozen"))


class TestSettings:
    def test_round_trip_through_storage(self, storage):
        store = CatalogStore(storage)
        settings = store.get_settings()
        settings.delivery_rates["alex"] = 120
        settings.discount_percentage = 10
        settings.is_discount_active = True

        store.update_settings(settings)

        assert CatalogStore(storage).get_settings() == settings

    def test_rejects_negative_rate(self, storage):
        store = CatalogStore(storage)
        settings = store.get_settings()
        settings.delivery_rates["cairo"] = -1

        with pytest.raises(ValueError):
            store.update_settings(settings)
        assert store.get_settings().delivery_rates["cairo"] == 60

    def test_rejects_percentage_above_100(self, storage):
        store = CatalogStore(storage)
        settings = store.get_settings()
        settings.discount_percentage = 101

        with pytest.raises(ValueError):
            store.update_settings(settings)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_percentage(self, storage, value):
        store = CatalogStore(storage)
        settings = store.get_settings()
        settings.discount_percentage = value

        with pytest.raises(ValueError):
            store.update_settings(settings)
        assert store.get_settings().discount_percentage == 25

    def test_rejects_infinite_rate(self, storage):
        store = CatalogStore(storage)
        settings = store.get_settings()
        settings.delivery_rates["alex"] = float("inf")

        with pytest.raises(ValueError):
            store.update_settings(settings)
        assert store.get_settings().delivery_rates["alex"] == 90

    def test_non_finite_saved_settings_fall_back(self, storage):
        storage.set_item(SETTINGS_KEY, '{"discountPercentage": NaN, "deliveryRates": {"cairo": Infinity}}')

        assert CatalogStore(storage).get_settings() == StoreSettings()


class TestConcurrency:
    def test_parallel_adds_get_unique_ids(self, empty_store):
        def add_many(worker):
            for i in range(20):
                empty_store.add_product(**_new_product(f"w{worker}-{i}"))

        threads = [threading.Thread(target=add_many, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [p.id for p in empty_store.list_products()]
        assert len(ids) == 160
        assert sorted(ids) == list(range(1, 161))
