from src.mavericks.domain.chat_models import BrandContext
from src.mavericks.services.brand_context_store import BrandContextStore


def test_set_and_get_are_copy_isolated():
    store = BrandContextStore()
    ctx = BrandContext(brand_name="Acme", industry="Retail")
    store.set("s1", ctx)

    ctx.brand_name = "Mutated"
    fetched = store.get("s1")
    assert fetched.brand_name == "Acme"

    fetched.industry = "Changed"
    assert store.get("s1").industry == "Retail"
    assert store.get("s1") is not store.get("s1")


def test_get_missing_returns_none():
    assert BrandContextStore().get("nope") is None


def test_update_creates_then_merges():
    store = BrandContextStore()
    store.update("s1", BrandContext(brand_name="Acme"))
    assert store.get("s1") == BrandContext(brand_name="Acme")

    merged = store.update("s1", BrandContext(brand_voice="Bold", brand_name=None))
    assert merged == BrandContext(brand_name="Acme", brand_voice="Bold")
    assert store.get("s1") == merged


def test_update_new_value_wins():
    store = BrandContextStore()
    store.set("s1", BrandContext(brand_name="Acme", industry="Retail"))
    store.update("s1", BrandContext(industry="Energy"))
    assert store.get("s1") == BrandContext(brand_name="Acme", industry="Energy")


def test_has_delete_clear_size():
    store = BrandContextStore()
    store.set("a", BrandContext(brand_name="A"))
    store.set("b", BrandContext(brand_name="B"))
    assert store.has("a") and "b" in store
    assert store.size() == 2 and len(store) == 2

    assert store.delete("a") is True
    assert store.delete("a") is False
    assert not store.has("a")

    store.clear()
    assert store.size() == 0


def test_set_replaces_whole_record():
    store = BrandContextStore()
    store.set("s", BrandContext(brand_name="A", industry="Tech"))
    store.set("s", BrandContext(brand_voice="Calm"))
    assert store.get("s") == BrandContext(brand_voice="Calm")


def test_instances_are_isolated():
    one, two = BrandContextStore(), BrandContextStore()
    one.set("s", BrandContext(brand_name="A"))
    assert not two.has("s")
