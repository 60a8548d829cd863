from __future__ import annotations

from ssr_import.parser.categories import (
    DEFAULT_CATEGORY,
    PUBLIC_HEALTH_CATEGORIES,
    CategoryResolver,
)


def test_resolve_known_keys():
    r = CategoryResolver(PUBLIC_HEALTH_CATEGORIES)
    assert r.resolve("1", 1) == "Labour Rates"
    assert r.resolve("8a", "8. a.") == "Pipe Laying"
    assert r.resolve("33", 33) == "Centering & Scaffolding"


def test_resolve_falls_back_to_raw_item_no():
    r = CategoryResolver({"7": "Loading"})
    # key would normally be canonical; the raw value is the second chance
    assert r.resolve("x", 7) == "Loading"


def test_resolve_unknown_is_general():
    r = CategoryResolver(PUBLIC_HEALTH_CATEGORIES)
    assert r.resolve("999", 999) == DEFAULT_CATEGORY
    assert r.resolve(None, None) == "General"


def test_custom_default_and_len():
    r = CategoryResolver({"1": "A"}, default="Misc")
    assert len(r) == 1
    assert r.resolve("2") == "Misc"


def test_compound_keys_are_all_mapped():
    for key in ("8a", "8b", "9a", "9b", "11a", "11b", "18a", "18b", "41a", "41b"):
        assert key in PUBLIC_HEALTH_CATEGORIES
