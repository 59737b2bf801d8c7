"""Tests for key-set validators."""

import pytest

from errorkit.core.validation import (
    allowed_keys,
    ensure_allowed_keys,
    keys_amount,
    keys_in_range,
    keys_in_range_detailed,
)
from errorkit.services.errors import AppError

ABC = {"a": 1, "b": 2, "c": 3}


class TestKeyCounts:
    def test_keys_amount(self):
        assert keys_amount(ABC) == 3
        assert keys_amount({}) == 0

    def test_keys_in_range_detailed(self):
        assert keys_in_range_detailed(ABC, 5, 10) == -1
        assert keys_in_range_detailed(ABC, 1, 1) == 1
        assert keys_in_range_detailed(ABC, 1, 3) == 0
        assert keys_in_range_detailed(ABC, 3) == 0
        assert keys_in_range_detailed(ABC, 4) == -1

    def test_keys_in_range_exact_when_max_omitted(self):
        assert keys_in_range(ABC, 3)
        assert not keys_in_range(ABC, 2)
        assert keys_in_range(ABC, 2, 4)
        assert not keys_in_range(ABC, 4, 9)

    @pytest.mark.parametrize("obj", [{}, {"x": 1}, ABC, {str(i): i for i in range(7)}])
    @pytest.mark.parametrize("n", range(0, 8))
    def test_exact_range_matches_detailed_check(self, obj, n):
        assert keys_in_range(obj, n) == (keys_in_range_detailed(obj, n, n) == 0)


class TestAllowedKeys:
    def test_required_only(self):
        assert allowed_keys({"name": "Ada"}, ["name"])
        assert not allowed_keys({}, ["name"])

    def test_optional_keys(self):
        assert allowed_keys({"name": "Ada", "bio": "x"}, ["name"], ["bio", "age"])
        assert not allowed_keys({"name": "Ada", "admin": True}, ["name"], ["bio"])

    def test_duplicates_across_lists_collapse(self):
        assert allowed_keys({"name": "Ada"}, ["name"], ["name"])
        assert not allowed_keys({"name": "Ada", "x": 1}, ["name"], ["name"])

    def test_extra_key_with_missing_required(self):
        assert not allowed_keys({"a": 1, "z": 2}, ["a", "b"])

    @pytest.mark.parametrize(
        "keys,required,optional",
        [
            (set(), set(), set()),
            ({"a"}, {"a"}, set()),
            ({"a", "b"}, {"a"}, {"b", "c"}),
            ({"a", "d"}, {"a"}, {"b"}),
            ({"b"}, {"a"}, {"b"}),
            ({"a", "b", "c"}, {"a", "b"}, {"b"}),
        ],
    )
    def test_matches_set_definition(self, keys, required, optional):
        obj = {key: True for key in keys}
        expected = keys <= (required | optional) and required <= keys

        assert allowed_keys(obj, sorted(required), sorted(optional)) is expected


class TestEnsureAllowedKeys:
    def test_passes_silently(self):
        ensure_allowed_keys({"name": "Ada"}, ["name"], ["bio"])

    def test_reports_missing_and_unexpected_keys(self):
        with pytest.raises(AppError) as exc_info:
            ensure_allowed_keys({"admin": True}, ["name"])

        error = exc_info.value
        assert (error.status, error.code) == (400, "BAD_REQUEST")
        assert error.errors == [{"param": "name", "code": "missing"}, {"param": "admin", "code": "unexpected"}]

    def test_rejects_non_mapping_payload(self):
        with pytest.raises(AppError) as exc_info:
            ensure_allowed_keys(["name"], ["name"])

        assert exc_info.value.message == "Request body must be a JSON object"
