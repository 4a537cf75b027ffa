"""Tests for collection queries: selection, sorting and grouping."""

from __future__ import annotations

import itertools

import pytest

from typed_records.query import (
    group_by_attr,
    group_keys,
    select_by_attr_defined,
    select_by_attr_value,
    select_by_attrs_values,
    select_by_index,
    sort_by_attr,
    values_for_attr,
    values_equal,
)
from typed_records.record import construct

FIXTURE = ["cstr=s", "aint=n", "estr=s", "flag=b", "level=n=1", "tags=l"]


@pytest.fixture
def records():
    """Five records with distinct cstr values and a partially defined estr."""
    rows = [
        ("alpha", 4, "aaa", True),
        ("bravo", 0, "bbb", False),
        ("charlie", 1, None, True),
        ("delta", 3, "aaa", None),
        ("echo", 2, "bbb", True),
    ]
    return [
        construct("Fixture", FIXTURE, ["cstr", c, "aint", a, "estr", e, "flag", f])
        for c, a, e, f in rows
    ]


@pytest.fixture
def mixed(records):
    """The five fixture records followed by a record of another type."""
    other = construct("Other", ["cstr=s", "size=n"], [("cstr", "foxtrot"), ("size", 9)])
    return records + [other]


def cstrs(records):
    return values_for_attr(records, "cstr")


class TestValuesEqual:
    def test_booleans_are_not_numbers(self):
        assert not values_equal(True, 1)
        assert not values_equal(0, False)
        assert values_equal(True, True)

    def test_sequences(self):
        assert values_equal([1, [2]], (1, (2,)))
        assert not values_equal([1], [True])
        assert not values_equal([1], [1, 2])

    def test_numbers(self):
        assert values_equal(1, 1.0)

    def test_record_and_positional_form(self):
        axle = construct("Axle", ["diameter=n", "length=n"], [("diameter", 10)])
        assert values_equal(axle, axle.to_sequence())
        assert values_equal(axle.to_sequence(), axle)
        assert not values_equal(axle, [1, 2])
        assert not values_equal(axle, construct("Axle", ["diameter=n", "length=n"], [("diameter", True)]))


class TestSelectByIndex:
    def test_gather(self, records):
        assert cstrs(select_by_index(records, [4, 0, 0])) == ["echo", "alpha", "alpha"]

    def test_empty(self, records):
        assert select_by_index(records, []) == []

    def test_out_of_range(self, records):
        with pytest.raises(IndexError):
            select_by_index(records, [5])


class TestSelectByAttrDefined:
    def test_keeps_defined(self, records):
        assert cstrs(select_by_attr_defined(records, "estr")) == ["alpha", "bravo", "delta", "echo"]

    def test_false_counts_as_defined(self, records):
        assert cstrs(select_by_attr_defined(records, "flag")) == ["alpha", "bravo", "charlie", "echo"]

    def test_schema_defaults_excluded(self, records):
        assert select_by_attr_defined(records, "level") == []

    def test_sequence_always_defined(self, records):
        assert len(select_by_attr_defined(records, "tags")) == 5

    def test_mixed_schemas(self, mixed):
        assert cstrs(select_by_attr_defined(mixed, "size")) == ["foxtrot"]
        assert len(select_by_attr_defined(mixed, "cstr")) == 6

    def test_undeclared(self, records):
        assert select_by_attr_defined(records, "bogus") == []

    def test_skips_records_with_invalid_schemas(self, records):
        broken = [["T", [["x"], "s", None]], 1]
        assert select_by_attr_defined([broken], "a") == []
        assert len(select_by_attr_defined([broken] + records, "estr")) == 4


class TestSelectByAttrValue:
    def test_match(self, records):
        assert cstrs(select_by_attr_value(records, "estr", "aaa")) == ["alpha", "delta"]

    def test_no_match(self, records):
        assert select_by_attr_value(records, "estr", "zzz") == []

    def test_strict_booleans(self, records):
        assert select_by_attr_value(records, "aint", False) == []
        assert cstrs(select_by_attr_value(records, "flag", False)) == ["bravo"]

    def test_schema_default_does_not_match(self, records):
        assert select_by_attr_value(records, "level", 1) == []

    def test_record_matches_positional_form(self):
        axle = construct("Axle", ["diameter=n", "length=n"], [("diameter", 10)])
        other = construct("Axle", ["diameter=n", "length=n"], [("diameter", 12)])
        cars = [
            construct("Car", ["name=s", "axle=r"], [("name", "buggy"), ("axle", axle)]),
            construct("Car", ["name=s", "axle=r"], [("name", "truck"), ("axle", other)]),
        ]
        for value in (axle, axle.to_sequence()):
            assert values_for_attr(select_by_attr_value(cars, "axle", value), "name") == ["buggy"]


class TestSelectByAttrsValues:
    def test_two_predicates(self, records):
        selected = select_by_attrs_values(records, [("estr", "bbb"), ("cstr", "echo")])
        assert cstrs(selected) == ["echo"]

    def test_mapping(self, records):
        selected = select_by_attrs_values(records, {"estr": "aaa", "flag": True})
        assert cstrs(selected) == ["alpha"]

    def test_no_pairs(self, records):
        assert select_by_attrs_values(records, []) == records

    def test_order_independent(self, records):
        pairs = [("estr", "bbb"), ("flag", True), ("aint", 2)]
        results = [select_by_attrs_values(records, p) for p in itertools.permutations(pairs)]
        assert all(r == results[0] for r in results)
        assert cstrs(results[0]) == ["echo"]

    def test_accepts_iterator(self, records):
        assert cstrs(select_by_attrs_values(iter(records), [("cstr", "bravo")])) == ["bravo"]


class TestValuesForAttr:
    def test_projection(self, records):
        assert values_for_attr(records, "aint") == [4, 0, 1, 3, 2]

    def test_schema_defaults_applied(self, records):
        assert values_for_attr(records, "level") == [1] * 5

    def test_missing_attribute(self, mixed):
        assert values_for_attr(mixed, "aint") == [4, 0, 1, 3, 2, None]
        assert values_for_attr(mixed, "aint", -1) == [4, 0, 1, 3, 2, -1]

    def test_default_fills_absent_values(self, records):
        assert values_for_attr(records, "estr", "---")[2] == "---"


class TestSortByAttr:
    def test_sort(self, records):
        assert cstrs(sort_by_attr(records, "aint")) == ["bravo", "charlie", "echo", "delta", "alpha"]

    def test_reverse(self, records):
        assert cstrs(sort_by_attr(records, "aint", reverse=True)) == [
            "alpha", "delta", "echo", "charlie", "bravo",
        ]

    def test_stable(self, records):
        assert cstrs(sort_by_attr(records, "flag")) == ["bravo", "alpha", "charlie", "echo", "delta"]

    def test_idempotent(self, records):
        once = sort_by_attr(records, "aint")
        assert sort_by_attr(once, "aint") == once

    def test_absent_values_last(self, records):
        assert cstrs(sort_by_attr(records, "estr")) == ["alpha", "delta", "bravo", "echo", "charlie"]

    def test_missing_attribute_last(self, mixed):
        assert cstrs(sort_by_attr(mixed, "aint"))[-1] == "foxtrot"

    def test_single_record_unchanged(self, records):
        assert sort_by_attr(records[:1], "aint") == records[:1]

    def test_no_defined_values_unchanged(self, records):
        assert sort_by_attr(records, "bogus") == records

    def test_does_not_modify_input(self, records):
        before = list(records)
        sort_by_attr(records, "aint")
        assert records == before


class TestGroupByAttr:
    def test_two_groups(self, records):
        groups = group_by_attr(records, "estr")
        assert len(groups) == 2
        assert sum(len(g) for g in groups) == len(select_by_attr_defined(records, "estr"))

    def test_membership_keeps_order(self, records):
        groups = group_by_attr(records, "estr")
        assert [cstrs(g) for g in groups] == [["alpha", "delta"], ["bravo", "echo"]]

    def test_keys_match_groups(self, records):
        keys = group_keys(records, "estr")
        groups = group_by_attr(records, "estr")
        assert keys == ["aaa", "bbb"]
        for key, group in zip(keys, groups):
            assert values_for_attr(group, "estr") == [key] * len(group)

    def test_booleans_and_numbers_kept_apart(self):
        specs = ["v"]
        records = [construct("T", specs, [("v", x)]) for x in (1, True, 1, False, 0)]
        groups = group_by_attr(records, "v")
        assert [values_for_attr(g, "v") for g in groups] == [[1, 1], [True], [False], [0]]

    def test_unhashable_values(self):
        records = [construct("T", ["v=l"], [("v", x)]) for x in ([1], [2], [1])]
        assert [len(g) for g in group_by_attr(records, "v")] == [2, 1]

    def test_undeclared_attribute(self, mixed):
        assert [cstrs(g) for g in group_by_attr(mixed, "size")] == [["foxtrot"]]

    def test_empty(self):
        assert group_by_attr([], "v") == []
