"""Tests for the all-or-nothing batch runner."""

import pytest

from tests.helpers import BASKET_V1, BASKET_V2
from viewer.batch import normalize_entities, run_batch
from viewer.errors import BatchPartialFailure, UnrecognizedEntity


class TestNormalizeEntities:
    """Tests for normalize_entities."""

    def test_lowercases(self):
        assert normalize_entities(["0x" + "AB" * 20]) == ["0x" + "ab" * 20]

    def test_rejects_malformed(self):
        with pytest.raises(ValueError, match="Invalid address"):
            normalize_entities([BASKET_V1, "0x12"])


class TestRunBatch:
    """Tests for run_batch."""

    def test_results_in_input_order(self):
        assert run_batch("square", [(3,), (1,), (2,)], lambda x: x * x) == [9, 1, 4]

    def test_identical_calls_read_once(self):
        reads = []

        def read(entity, owner):
            reads.append((entity, owner))
            return len(reads)

        results = run_batch("pairs", [("a", 1), ("b", 1), ("a", 1), ("a", 2)], read)

        assert results == [1, 2, 1, 3]
        assert reads == [("a", 1), ("b", 1), ("a", 2)]

    def test_first_failure_wrapped_and_chained(self):
        def read(entity):
            if entity != BASKET_V1:
                raise UnrecognizedEntity(entity)
            return entity

        with pytest.raises(BatchPartialFailure) as exc_info:
            run_batch("resolve", [(BASKET_V1,), (BASKET_V2,), ("0x" + "99" * 20,)], read)

        assert exc_info.value.index == 1
        assert exc_info.value.entity == BASKET_V2
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_non_viewer_errors_propagate_unwrapped(self):
        def read(_entity):
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            run_batch("broken", [("a",)], read)
