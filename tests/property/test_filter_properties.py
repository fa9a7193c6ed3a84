"""Property-based tests for the filters.

Covers reverse, split/join, round, batch, slice and json_encode invariants
with generated inputs.
"""

import json
import math

import pytest
from hypothesis import given, settings, strategies as st

from template_filters.filters.collections import (
    filter_batch,
    filter_join,
    filter_length,
    filter_reverse,
    filter_slice,
    filter_split,
)
from template_filters.filters.encoding import filter_json_encode
from template_filters.filters.numbers import filter_round

scalars = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=10))


@pytest.mark.property
class TestReverseProperties:
    """Property tests for the reverse filter."""

    @given(st.lists(scalars, max_size=30))
    @settings(max_examples=100)
    def test_reverse_keeps_length(self, items):
        assert filter_length(None, filter_reverse(None, items)) == filter_length(None, items)

    @given(st.lists(scalars, max_size=30))
    @settings(max_examples=100)
    def test_reverse_twice_is_identity(self, items):
        assert filter_reverse(None, filter_reverse(None, items)) == items

    @given(st.text(max_size=50))
    @settings(max_examples=100)
    def test_reverse_string_twice_is_identity(self, text):
        assert filter_reverse(None, filter_reverse(None, text)) == text


@pytest.mark.property
class TestSplitJoinProperties:
    """Property tests for split and join."""

    @given(
        st.text(max_size=50),
        st.text(min_size=1, max_size=3),
    )
    @settings(max_examples=200)
    def test_join_undoes_split(self, text, delimiter):
        assert filter_join(None, filter_split(None, text, delimiter), delimiter) == text

    @given(st.text(max_size=50), st.integers(min_value=1, max_value=10))
    @settings(max_examples=100)
    def test_chunks_rejoin_to_original(self, text, size):
        chunks = filter_split(None, text, "", size)
        assert "".join(chunks) == text
        assert all(len(chunk) == size for chunk in chunks[:-1])

    @given(
        st.lists(st.text(alphabet="abc", max_size=5), min_size=1, max_size=10),
        st.integers(min_value=1, max_value=12),
    )
    @settings(max_examples=100)
    def test_positive_limit_caps_segments(self, parts, limit):
        text = ",".join(parts)
        result = filter_split(None, text, ",", limit)
        assert len(result) == min(limit, len(parts))
        assert ",".join(result) == text

    @given(
        st.lists(st.text(alphabet="abc", max_size=5), min_size=1, max_size=10),
        st.integers(min_value=1, max_value=12),
    )
    @settings(max_examples=100)
    def test_negative_limit_drops_segments(self, parts, limit):
        result = filter_split(None, ",".join(parts), ",", -limit)
        assert result == parts[: max(len(parts) - limit, 0)]


@pytest.mark.property
class TestRoundProperties:
    """Property tests for the round filter."""

    @given(
        st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False),
        st.integers(min_value=0, max_value=6),
    )
    @settings(max_examples=200)
    def test_floor_and_ceil_bracket_value(self, value, precision):
        low = filter_round(None, value, precision, "floor")
        high = filter_round(None, value, precision, "ceil")
        assert low <= value <= high

    @given(
        st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False),
        st.integers(min_value=0, max_value=6),
    )
    @settings(max_examples=200)
    def test_common_is_floor_or_ceil(self, value, precision):
        result = filter_round(None, value, precision)
        assert result in (
            filter_round(None, value, precision, "floor"),
            filter_round(None, value, precision, "ceil"),
        )

    @given(st.integers(min_value=-10**6, max_value=10**6))
    @settings(max_examples=50)
    def test_integers_unchanged(self, value):
        assert filter_round(None, value) == float(value)


@pytest.mark.property
class TestBatchProperties:
    """Property tests for the batch filter."""

    @given(
        st.lists(st.integers(), max_size=40),
        st.integers(min_value=1, max_value=10),
        st.one_of(st.none(), st.just("X")),
    )
    @settings(max_examples=200)
    def test_group_count_and_sizes(self, items, size, fill):
        groups = filter_batch(None, items, size, fill)

        assert len(groups) == math.ceil(len(items) / size)
        for group in groups[:-1]:
            assert len(group) == size
        if groups:
            expected_last = size if fill is not None or len(items) % size == 0 else len(items) % size
            assert len(groups[-1]) == expected_last

    @given(st.lists(st.integers(), max_size=40), st.integers(min_value=1, max_value=10))
    @settings(max_examples=100)
    def test_flattening_restores_order(self, items, size):
        groups = filter_batch(None, items, size)
        assert [item for group in groups for item in group] == items


@pytest.mark.property
class TestSliceProperties:
    """Property tests for the slice filter."""

    @given(st.data())
    @settings(max_examples=200)
    def test_negative_start_takes_tail(self, data):
        items = data.draw(st.lists(st.integers(), min_size=1, max_size=30))
        k = data.draw(st.integers(min_value=1, max_value=len(items)))
        assert filter_slice(None, items, -k, k) == items[-k:]

    @given(st.data())
    @settings(max_examples=200)
    def test_negative_start_takes_tail_of_string(self, data):
        text = data.draw(st.text(min_size=1, max_size=30))
        k = data.draw(st.integers(min_value=1, max_value=len(text)))
        assert filter_slice(None, text, -k, k) == text[-k:]

    @given(
        st.integers(min_value=0, max_value=20),
        st.integers(min_value=-30, max_value=30),
        st.one_of(st.none(), st.integers(min_value=-30, max_value=30)),
    )
    @settings(max_examples=200)
    def test_result_is_contiguous_run(self, size, start, length):
        items = list(range(size))
        result = filter_slice(None, items, start, length)
        assert len(result) <= size
        if result:
            assert result == list(range(result[0], result[0] + len(result)))


@pytest.mark.property
class TestJsonEncodeProperties:
    """Property tests for the json_encode filter."""

    @given(
        st.recursive(
            st.one_of(st.integers(), st.text(max_size=20), st.booleans(), st.none()),
            lambda children: st.lists(children, max_size=5)
            | st.dictionaries(st.text(max_size=5), children, max_size=5),
            max_leaves=20,
        )
    )
    @settings(max_examples=100)
    def test_round_trips(self, data):
        assert json.loads(filter_json_encode(None, data)) == data

    @given(st.lists(st.from_regex(r"^[a-z]{1,5}$", fullmatch=True), unique=True, min_size=1, max_size=8))
    @settings(max_examples=50)
    def test_key_order_preserved(self, keys):
        data = {key: index for index, key in enumerate(keys)}
        assert list(json.loads(filter_json_encode(None, data))) == keys
