"""
Property-based tests for the max rectangle software reference using Hypothesis.

Random rectilinear polygons are drawn as "histograms": bars standing on y=0
with consecutive bars of different heights. For those, a rectangle lies in the
closed polygon exactly when every bar it overlaps is at least as tall as its
top edge, which gives a brute-force oracle for the search. Transposed and
mirrored copies put the notches on the other axes.
"""

from itertools import combinations

import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.strategies import integers, lists, tuples

from software_reference.coverage import Range, coverage_at_y, merge_ranges
from software_reference.max_rectangle_finder import (
    MaxRectangleFinder,
    area,
    max_bounding_box_area,
    max_contained_rectangle_area,
)
from software_reference.polygon import build_polygon, build_y_samples


@st.composite
def histograms(draw, max_bars=6, max_width=5, max_height=8):
    """Generate (points, xs, heights) of a histogram polygon."""
    widths = draw(lists(integers(min_value=1, max_value=max_width),
                        min_size=1, max_size=max_bars))

    heights = [draw(integers(min_value=1, max_value=max_height))]
    for _ in widths[1:]:
        # Never repeat the previous height, that would collapse a vertex
        step = draw(integers(min_value=1, max_value=max_height - 1))
        heights.append((heights[-1] - 1 + step) % max_height + 1)

    xs = [0]
    for w in widths:
        xs.append(xs[-1] + w)

    points = [(0, 0)]
    for i, h in enumerate(heights):
        points.append((xs[i], h))
        points.append((xs[i + 1], h))
    points.append((xs[-1], 0))

    return points, xs, heights


def closed_height(lo, hi, xs, heights):
    """
    Height of the closed histogram over every x in [lo, hi].

    A single x on a bar boundary sits on the taller bar's wall. A wider span
    crosses the open interior of each bar it overlaps, so the lowest of
    those bars decides.
    """
    if lo == hi:
        return max(h for i, h in enumerate(heights) if xs[i] <= lo <= xs[i + 1])
    return min(h for i, h in enumerate(heights) if xs[i] < hi and lo < xs[i + 1])


def brute_force_max(points, xs, heights):
    best = 0
    for p1, p2 in combinations(points, 2):
        lo, hi = sorted((p1[0], p2[0]))
        top = max(p1[1], p2[1])
        if closed_height(lo, hi, xs, heights) >= top:
            best = max(best, area(p1, p2))
    return best


def transpose(points):
    return [(y, x) for x, y in points]


def mirror(points):
    return [(-x, y) for x, y in points]


def is_merged(ranges):
    """Sorted by start, each range ending before the next one starts."""
    return all(a.end < b.start for a, b in zip(ranges, ranges[1:]))


def ranges_to_set(ranges):
    result = set()
    for start, end in ranges:
        result.update(range(start, end + 1))
    return result


@st.composite
def valid_range(draw):
    start = draw(integers(min_value=-1000, max_value=1000))
    end = draw(integers(min_value=start, max_value=start + 50))
    return Range(start, end)


ranges_strategy = lists(valid_range(), min_size=0, max_size=40)


# Property 1: Search agrees with the brute-force oracle
@given(histograms())
@settings(max_examples=300)
def test_matches_brute_force(histogram):
    points, xs, heights = histogram
    assert max_contained_rectangle_area(points) == brute_force_max(points, xs, heights)


# Property 2: Translating the polygon does not change the answer
@given(histograms(), integers(min_value=-50, max_value=50), integers(min_value=-50, max_value=50))
def test_translation_invariance(histogram, dx, dy):
    points, _, _ = histogram
    moved = [(x + dx, y + dy) for x, y in points]
    assert max_contained_rectangle_area(moved) == max_contained_rectangle_area(points)


# Property 3: Notches along y behave like notches along x
@given(histograms())
@settings(max_examples=300)
def test_transposed_matches_brute_force(histogram):
    points, xs, heights = histogram
    assert max_contained_rectangle_area(transpose(points)) == brute_force_max(points, xs, heights)


# Property 4: Mirroring and transposing keep the answer
@given(histograms())
def test_mirror_and_transpose_invariance(histogram):
    points, _, _ = histogram
    expected = max_contained_rectangle_area(points)

    assert max_contained_rectangle_area(mirror(points)) == expected
    assert max_contained_rectangle_area(transpose(points)) == expected
    assert max_contained_rectangle_area(mirror(transpose(points))) == expected


# Property 5: Containment can only shrink the unconstrained answer
@given(histograms())
def test_bounded_by_bounding_box(histogram):
    points, _, _ = histogram
    assert max_contained_rectangle_area(points) <= max_bounding_box_area(points)


# Property 6: A rectangle polygon yields its own area
@given(integers(min_value=-100, max_value=100), integers(min_value=-100, max_value=100),
       integers(min_value=1, max_value=60), integers(min_value=1, max_value=60))
def test_rectangle_polygon_own_area(x, y, w, h):
    points = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    assert max_contained_rectangle_area(points) == (w + 1) * (h + 1)


# Property 7: Every coverage row is merged, and the cache hands back the same list
@given(histograms(), lists(integers(min_value=-2, max_value=40), max_size=10))
def test_coverage_rows_merged_and_cached(histogram, extra_rows):
    points, _, _ = histogram
    polygon = build_polygon(points)
    cache = {}

    for y in build_y_samples(points) + extra_rows:
        first = coverage_at_y(y, polygon, cache)
        assert is_merged(first), f"row {y} not merged: {first}"
        assert coverage_at_y(y, polygon, cache) is first


# Property 8: Repeated searches agree, cache included
@given(histograms())
def test_search_idempotent(histogram):
    points, _, _ = histogram
    finder = MaxRectangleFinder()
    for x, y in points:
        finder.add_vertex(x, y)

    first = finder.find_max_rectangle()
    first_cache = dict(finder.coverage_cache)
    second = finder.find_max_rectangle()

    assert first == second
    assert finder.coverage_cache == first_cache


# Property 9: Area is symmetric in its corners
@given(tuples(integers(-10**6, 10**6), integers(-10**6, 10**6)),
       tuples(integers(-10**6, 10**6), integers(-10**6, 10**6)))
def test_area_symmetric(p1, p2):
    assert area(p1, p2) == area(p2, p1)
    assert area(p1, p2) >= 1


# Property 10: Sample rows are sorted, unique and include every vertex row
@given(histograms())
def test_y_samples_shape(histogram):
    points, _, _ = histogram
    samples = build_y_samples(points)
    distinct_ys = {y for _, y in points}

    assert samples == sorted(set(samples))
    assert distinct_ys <= set(samples)
    assert len(samples) == 2 * len(distinct_ys) - 1


# Property 11: Merging keeps the covered cells
@given(ranges_strategy)
@settings(max_examples=500)
def test_merge_preserves_cells(ranges):
    assert ranges_to_set(merge_ranges(ranges)) == ranges_to_set(ranges)


# Property 12: Merged output is sorted and disjoint
@given(ranges_strategy)
def test_merge_output_is_merged(ranges):
    merged = merge_ranges(ranges)
    assert merged == sorted(merged)
    assert is_merged(merged)


# Property 13: Merging is idempotent and order independent
@given(ranges_strategy)
def test_merge_idempotent_and_order_independent(ranges):
    merged = merge_ranges(ranges)
    assert merge_ranges(merged) == merged
    assert merge_ranges(list(reversed(ranges))) == merged


def test_merge_empty():
    assert merge_ranges([]) == []


def test_adjacent_ranges_stay_apart():
    """Walls at x=5 and x=6 still leave open area between them."""
    assert merge_ranges([Range(1, 5), Range(6, 10)]) == [Range(1, 5), Range(6, 10)]


def test_touching_ranges_merge():
    assert merge_ranges([Range(1, 5), Range(5, 10)]) == [Range(1, 10)]


def test_gapped_ranges_stay_apart():
    assert merge_ranges([Range(1, 5), Range(7, 10)]) == [Range(1, 5), Range(7, 10)]


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
