"""
Unit Tests for Cache Key Derivation
"""

import pytest

from src.infrastructure.cache.keys import derive_key, digest_key


@pytest.mark.unit
class TestDeriveKey:
    """Test canonical key construction."""

    def test_params_sorted_and_volatile_dropped(self):
        key = derive_key("/api/v1/comics", {"page": 2, "genre": "action", "_t": 1699})

        assert key == "/api/v1/comics?genre=action&page=2"

    def test_parameter_order_does_not_matter(self):
        a = derive_key("/api/v1/search", {"q": "tower", "page": 1})
        b = derive_key("/api/v1/search", {"page": 1, "q": "tower"})

        assert a == b

    @pytest.mark.parametrize("volatile", ["_t", "timestamp", "nocache"])
    def test_cache_busters_are_ignored(self, volatile):
        assert derive_key("/api/v1/comics", {"page": 1, volatile: "123"}) == "/api/v1/comics?page=1"

    def test_no_params_returns_path(self):
        assert derive_key("/api/v1/genres") == "/api/v1/genres"
        assert derive_key("/api/v1/genres", {}) == "/api/v1/genres"

    def test_only_volatile_params_returns_path(self):
        assert derive_key("/api/v1/genres", {"_t": 1, "nocache": "1"}) == "/api/v1/genres"

    def test_none_values_are_dropped(self):
        assert derive_key("/api/v1/comics", {"page": 1, "genre": None}) == "/api/v1/comics?page=1"

    def test_booleans_render_lowercase(self):
        key = derive_key("/api/v1/comics", {"completed": True, "nsfw": False})

        assert key == "/api/v1/comics?completed=true&nsfw=false"

    def test_repeated_params_render_in_order(self):
        key = derive_key("/api/v1/comics", {"page": 1, "genre": ["romance", "action"]})

        assert key == "/api/v1/comics?genre=romance&genre=action&page=1"

    def test_repeated_params_differ_from_single_value(self):
        assert derive_key("/c", {"genre": ["a", "b"]}) != derive_key("/c", {"genre": "b"})

    def test_empty_repeated_param_is_dropped(self):
        assert derive_key("/c", {"genre": [], "page": 2}) == "/c?page=2"

    def test_input_mapping_is_not_modified(self):
        params = {"page": 1, "_t": 5}

        derive_key("/api/v1/comics", params)

        assert params == {"page": 1, "_t": 5}


@pytest.mark.unit
class TestDigestKey:
    """Test the base-36 key digest."""

    def test_known_value(self):
        # 'abc' folds to 96354
        assert digest_key("abc") == "22ci"

    def test_empty_key(self):
        assert digest_key("") == "0"

    def test_is_deterministic(self):
        key = "/api/v1/comics/solo-leveling/chapters?page=3"

        assert digest_key(key) == digest_key(key)

    def test_overflowing_keys_stay_non_negative_base36(self):
        digest = digest_key("/api/v1/comics/" + "x" * 200)

        assert digest
        assert set(digest) <= set("0123456789abcdefghijklmnopqrstuvwxyz")
