"""Tests for the JSON path resolver.

Covers field access, array indexing, mapping over arrays, digit keys,
and every way a lookup degrades to <nil>.
"""

from __future__ import annotations

from piped_args.models import LookupKind
from piped_args.paths import lookup_path, resolve


# ── Objects ───────────────────────────────────────────────────────


def test_top_level_field():
    assert resolve('{"x":"y"}', "x") == "y"


def test_nested_field():
    assert resolve('{"user":{"id":42}}', "user.id") == "42"


def test_digit_key_on_object():
    assert resolve('{"200":"ok"}', "200") == "ok"
    assert resolve('{"codes":{"404":"gone"}}', "codes.404") == "gone"


def test_key_with_symbols():
    assert resolve('{"content-type":"text/plain"}', "content-type") == "text/plain"


def test_boolean_value():
    assert resolve('{"ok":true}', "ok") == "true"


def test_object_value():
    assert resolve('{"u":{"b":2,"a":"x"}}', "u") == "map[a:x b:2]"


# ── Arrays ────────────────────────────────────────────────────────


def test_array_index():
    data = '{"items":[{"sku":"a1"},{"sku":"b2"}]}'
    assert resolve(data, "items.0.sku") == "a1"
    assert resolve(data, "items.1.sku") == "b2"
    assert resolve(data, "items.-1.sku") == "b2"


def test_array_index_out_of_range():
    lookup = lookup_path('{"items":[1]}', "items.3")
    assert lookup.kind is LookupKind.PATH_MISSING


def test_field_maps_over_array():
    assert resolve('[{"a":"c"},{"a":"d"}]', "a") == "[c d]"


def test_single_element_array_stays_a_list():
    assert resolve('[{"a":"c"}]', "a") == "[c]"


def test_nested_arrays_are_not_flattened():
    assert resolve('{"a":[{"b":[1,2]},{"b":[3]}]}', "a.b") == "[[1 2] [3]]"


def test_elements_without_the_field_are_skipped():
    assert resolve('[{"a":"c"},{"b":"x"},{"a":null}]', "a") == "[c]"


def test_no_element_has_the_field():
    lookup = lookup_path('[{"b":1},{"b":2}]', "a")
    assert lookup.kind is LookupKind.PATH_MISSING


# ── Failures ──────────────────────────────────────────────────────


def test_missing_field():
    lookup = lookup_path('{"c":"d"}', "zzz")
    assert lookup.kind is LookupKind.PATH_MISSING
    assert lookup.text == "<nil>"


def test_null_value_counts_as_missing():
    assert lookup_path('{"a":null}', "a").kind is LookupKind.PATH_MISSING


def test_path_through_scalar():
    assert lookup_path('{"a":"text"}', "a.b").kind is LookupKind.PATH_MISSING


def test_not_json():
    lookup = lookup_path("plain", "field")
    assert lookup.kind is LookupKind.PARSE_FAILED
    assert lookup.text == "<nil>"


def test_empty_segment_degrades_to_nil():
    lookup = lookup_path('{"a":1}', "a..b")
    assert lookup.kind is LookupKind.PATH_MISSING
    assert resolve('{"a":1}', "a..b") == "<nil>"


def test_ok_lookup_carries_value():
    lookup = lookup_path('{"a":"b"}', "a")
    assert lookup.kind is LookupKind.OK
    assert lookup.value == "b"
