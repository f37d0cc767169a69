"""Tests for the step generators.

Covers the shared sequence invariants for every registered algorithm,
the per-algorithm scenarios (first bubble compare/swap, selection on an
already sorted array, insertion shifts), tie handling, and the registry's
handling of placeholders and unknown selectors.
"""

import logging
import random

import pytest

from arrays import ArrayElement, ElementState, elements_from_values, generate_array
from algorithms import (
    REGISTRY,
    HighlightKind,
    bubble_sort,
    generate_steps,
    get_algorithm,
    insertion_sort,
    is_supported,
    selection_sort,
)

ALL_KEYS = list(REGISTRY)
REAL_KEYS = ["bubble", "selection", "insertion"]


def _kinds(steps):
    return [s.highlight.kind for s in steps]


def _random_values(n, seed):
    rng = random.Random(seed)
    # narrow range so ties show up
    return [rng.randint(1, max(2, n // 2)) for _ in range(n)]


# ============= Sequence invariants =============


@pytest.mark.parametrize("key", ALL_KEYS)
@pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 8, 13, 31])
def test_sequence_invariants(key, n):
    arr = elements_from_values(_random_values(n, seed=n))
    steps = generate_steps(key, arr)

    assert steps, "every supported algorithm yields at least one step"
    final = steps[-1]
    assert final.is_final
    assert sorted(final.values) == sorted(el.value for el in arr)
    assert final.values == sorted(final.values)
    assert all(el.state is ElementState.SORTED for el in final.elements)
    assert final.sorted_indices == frozenset(range(n))

    previous = frozenset()
    for no, step in enumerate(steps):
        assert len(step.elements) == n
        assert sorted(el.index for el in step.elements) == list(range(n))
        assert step.sorted_indices >= previous
        assert step.step_number == no
        assert step.total_steps == len(steps)
        previous = step.sorted_indices
    assert sum(s.is_final for s in steps) == 1


@pytest.mark.parametrize("key", REAL_KEYS)
def test_large_input_is_value_preserving(key):
    arr = generate_array(200, seed=2024)
    final = generate_steps(key, arr)[-1]
    assert final.values == sorted(el.value for el in arr)
    assert {el.index for el in final.elements} == set(range(200))


@pytest.mark.parametrize("key", REAL_KEYS)
@pytest.mark.parametrize("n", [0, 1])
def test_trivial_input_yields_single_step(key, n):
    steps = generate_steps(key, elements_from_values([42] * n))
    assert len(steps) == 1
    assert steps[0].highlight.kind is HighlightKind.SORTED
    assert steps[0].description == "Array is already sorted"


@pytest.mark.parametrize("key", REAL_KEYS)
def test_generation_is_deterministic(key):
    values = _random_values(25, seed=9)
    first = generate_steps(key, elements_from_values(values))
    second = generate_steps(key, elements_from_values(list(values)))
    assert first == second
    assert [s.to_dict() for s in first] == [s.to_dict() for s in second]


@pytest.mark.parametrize("fn", [bubble_sort, selection_sort, insertion_sort])
def test_input_is_not_mutated(fn):
    arr = elements_from_values([4, 1, 3, 2])
    before = list(arr)
    list(fn(arr))
    assert arr == before


@pytest.mark.parametrize("fn", [bubble_sort, selection_sort, insertion_sort])
def test_steps_are_frozen(fn):
    step = next(fn(elements_from_values([2, 1])))
    with pytest.raises(AttributeError):
        step.description = "changed"
    assert isinstance(step.elements, tuple)


@pytest.mark.parametrize("fn", [bubble_sort, selection_sort, insertion_sort])
def test_generators_are_lazy(fn):
    gen = fn(elements_from_values([3, 2, 1]))
    first = next(gen)
    assert not first.is_final


@pytest.mark.parametrize("key", REAL_KEYS)
def test_element_identity_follows_the_value(key):
    arr = elements_from_values([30, 10, 20])
    for step in generate_steps(key, arr):
        for el in step.elements:
            assert arr[el.index].value == el.value


# ============= Bubble sort =============


def test_bubble_first_compare_then_swap(small_array):
    steps = generate_steps("bubble", small_array)

    first = steps[0]
    assert first.highlight.kind is HighlightKind.COMPARING
    assert first.highlight.indices == (0, 1)
    assert first.values[:2] == [5, 3]
    assert first.states[:2] == [ElementState.COMPARING, ElementState.COMPARING]

    swap = steps[1]
    assert swap.highlight.kind is HighlightKind.SWAPPING
    assert swap.highlight.indices == (0, 1)
    assert swap.values == [3, 5, 8, 1]
    assert swap.states[:2] == [ElementState.SWAPPING, ElementState.SWAPPING]
    assert swap.description == "Swapping elements 5 and 3"


def test_bubble_marks_end_of_each_pass(small_array):
    steps = generate_steps("bubble", small_array)
    sorted_marks = [s.highlight.indices for s in steps
                    if s.highlight.kind is HighlightKind.SORTED and not s.is_final]
    assert sorted_marks == [(3,), (2,), (1,)]


def test_bubble_compare_and_swap_counts():
    steps = generate_steps("bubble", elements_from_values([4, 3, 2, 1]))
    kinds = _kinds(steps)
    assert kinds.count(HighlightKind.COMPARING) == 6
    assert kinds.count(HighlightKind.SWAPPING) == 6
    # 3 pass-end marks + final
    assert kinds.count(HighlightKind.SORTED) == 4


def test_bubble_ties_never_swap():
    arr = elements_from_values([7, 7, 7])
    steps = generate_steps("bubble", arr)
    assert HighlightKind.SWAPPING not in _kinds(steps)
    assert [el.index for el in steps[-1].elements] == [0, 1, 2]


def test_bubble_window_tail_is_sorted():
    steps = generate_steps("bubble", elements_from_values([3, 1, 2]))
    # second pass compares (0, 1) while position 2 is already final
    second_pass = [s for s in steps
                   if s.highlight.kind is HighlightKind.COMPARING and 2 in s.sorted_indices]
    assert second_pass
    for step in second_pass:
        assert step.states[2] is ElementState.SORTED


# ============= Selection sort =============


def test_selection_on_sorted_input(sorted_array):
    steps = generate_steps("selection", sorted_array)
    kinds = _kinds(steps)
    assert kinds == [HighlightKind.COMPARING] * 3 + [HighlightKind.SORTED]
    assert HighlightKind.SWAPPING not in kinds
    assert steps[-1].is_final


def test_selection_scan_marks_minimum_as_pivot():
    steps = generate_steps("selection", elements_from_values([3, 1, 2]))
    # i=0: j=1 vs min 0, j=2 vs min 1
    assert steps[0].highlight.indices == (1, 0)
    assert steps[0].states == [ElementState.PIVOT, ElementState.COMPARING, ElementState.DEFAULT]
    assert steps[1].highlight.indices == (2, 1)
    assert steps[1].states[1] is ElementState.PIVOT

    swap = steps[2]
    assert swap.highlight.kind is HighlightKind.SWAPPING
    assert swap.highlight.indices == (0, 1)
    assert swap.values == [1, 3, 2]
    assert swap.description == "Swapping minimum element 1 to position 0"


def test_selection_prefix_is_sorted_during_iteration():
    steps = generate_steps("selection", elements_from_values([4, 3, 2, 1]))
    for step in steps:
        for idx in step.sorted_indices:
            assert step.states[idx] is ElementState.SORTED


def test_selection_first_minimum_wins_ties():
    arr = elements_from_values([5, 2, 2])
    steps = generate_steps("selection", arr)
    swap = next(s for s in steps if s.highlight.kind is HighlightKind.SWAPPING)
    # index 1 (first 2) moves to the front, not index 2
    assert swap.elements[0].index == 1


def test_selection_one_swap_per_outer_iteration_at_most():
    steps = generate_steps("selection", elements_from_values([5, 4, 3, 2, 1]))
    assert _kinds(steps).count(HighlightKind.SWAPPING) <= 4


# ============= Insertion sort =============


def test_insertion_event_order():
    steps = generate_steps("insertion", elements_from_values([3, 1, 2]))
    kinds = _kinds(steps)
    assert kinds == [
        HighlightKind.CURRENT,      # pick up 1
        HighlightKind.COMPARING,    # shift 3 right
        HighlightKind.SORTED,       # 0..1 sorted
        HighlightKind.CURRENT,      # pick up 2
        HighlightKind.COMPARING,    # shift 3 right
        HighlightKind.SORTED,       # 0..2 sorted
        HighlightKind.SORTED,       # final
    ]
    assert steps[0].states[1] is ElementState.CURRENT
    assert steps[2].highlight.indices == (0, 1)
    assert steps[2].values == [1, 3, 2]


def test_insertion_snapshots_never_duplicate_values():
    arr = elements_from_values([9, 8, 7, 6, 5])
    for step in generate_steps("insertion", arr):
        assert sorted(step.values) == [5, 6, 7, 8, 9]


def test_insertion_no_shift_for_equal_key():
    steps = generate_steps("insertion", elements_from_values([2, 2]))
    assert HighlightKind.COMPARING not in _kinds(steps)


def test_insertion_comparing_step_is_taken_before_shift():
    steps = generate_steps("insertion", elements_from_values([2, 1]))
    compare = steps[1]
    assert compare.highlight.indices == (0, 1)
    assert compare.values == [2, 1]
    assert compare.description == "Moving element 2 one position right"


def test_insertion_sorted_paint_matches_sorted_indices():
    steps = generate_steps("insertion", elements_from_values([4, 1, 3, 2, 5]))
    for step in steps:
        painted = {idx for idx, state in enumerate(step.states) if state is ElementState.SORTED}
        assert painted <= step.sorted_indices


def test_insertion_key_slot_not_sorted_while_shifting():
    steps = generate_steps("insertion", elements_from_values([1, 2, 5, 3]))
    # i=3: key 3 shifts past 5 at (2, 3); nothing beyond the prefix 0..2 is sorted
    shift = next(s for s in steps if s.highlight.kind is HighlightKind.COMPARING)
    assert shift.highlight.indices == (2, 3)
    assert shift.sorted_indices == frozenset({0, 1, 2})
    assert 3 not in shift.sorted_indices
    assert shift.states[:2] == [ElementState.SORTED, ElementState.SORTED]


# ============= Registry =============


@pytest.mark.parametrize("key", ["merge", "quick", "heap"])
def test_placeholders_alias_bubble(key, caplog):
    arr = elements_from_values([4, 2, 3, 1])
    info = get_algorithm(key)
    assert info.placeholder
    assert "Coming Soon" in info.label
    with caplog.at_level(logging.INFO, logger="algorithms"):
        steps = generate_steps(key, arr)
    assert steps == generate_steps("bubble", arr)
    assert "bubble sort" in caplog.text


def test_unknown_algorithm_returns_empty_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="algorithms"):
        steps = generate_steps("bogo", elements_from_values([2, 1]))
    assert steps == []
    assert not is_supported("bogo")
    assert "Unsupported algorithm 'bogo'" in caplog.text


@pytest.mark.parametrize("bad", [None, 12, "not a list"])
def test_non_array_input_raises(bad):
    with pytest.raises(TypeError):
        generate_steps("bubble", bad)


def test_registry_cards_serialise():
    card = get_algorithm("insertion").to_dict()
    assert card["key"] == "insertion"
    assert card["best_case"] == "O(n)"
    assert card["placeholder"] is False
    assert "fn" not in card


def test_step_to_dict_shape(small_array):
    data = generate_steps("bubble", small_array)[0].to_dict()
    assert data["highlight"] == {"kind": "comparing", "indices": [0, 1]}
    assert data["elements"][0] == {"value": 5, "index": 0, "state": "comparing"}
    assert data["sorted_indices"] == []
    assert data["total_steps"] > 0
