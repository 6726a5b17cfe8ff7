"""
Scanline coverage for rectilinear polygons.

coverage_at_y() answers "which x ranges are inside or on the polygon at row
y". Rows that carry no vertex use the even-odd rule on vertical edges alone.
Vertex rows are ambiguous under that rule (edges touch instead of cross), so
they are resolved as the union of the rows just above and just below plus any
horizontal edge lying on the row itself.

Results are memoised in a caller-owned dict; the polygon never changes while
a cache is alive, so entries are never invalidated.
"""

from typing import Dict, Iterable, List, NamedTuple, Sequence

from software_reference.polygon import Polygon, VerticalEdge, YSample


# Half the minimum spacing between distinct integer rows.
EPSILON = 0.5


class Range(NamedTuple):
    start: int
    end: int


CoverageCache = Dict[YSample, List[Range]]


def merge_ranges(ranges: Iterable[Range]) -> List[Range]:
    """
    Merge overlapping or touching ranges.

    Args:
        ranges: Inclusive (start, end) ranges in any order

    Returns:
        list: Ranges sorted by start, each ending strictly before the next
              one starts

    Algorithm:
        1. Sort ranges by start position
        2. Extend the last merged range while the next one starts at or
           before last.end
        3. Otherwise start a new merged range
    """
    merged = []

    for current in sorted(ranges):
        if merged and current.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Range(last.start, max(last.end, current.end))
        else:
            merged.append(Range(current.start, current.end))

    return merged


def interior_at_y(y: float, vertical_edges: Sequence[VerticalEdge]) -> List[Range]:
    """
    Even-odd scanline at a row that passes through no vertex.

    Args:
        y: Row to scan; must not coincide with any vertex y
        vertical_edges: Polygon vertical edges

    Returns:
        list: Inside spans between consecutive pairs of crossings
    """
    crossing_xs = sorted(e.x for e in vertical_edges if e.y1 < y < e.y2)

    return [
        Range(crossing_xs[i], crossing_xs[i + 1])
        for i in range(0, len(crossing_xs) - 1, 2)
    ]


def coverage_at_y(y: YSample, polygon: Polygon, coverage_cache: CoverageCache) -> List[Range]:
    """
    Covered x ranges of the closed polygon at row y, memoised.

    Args:
        y: Row to inspect
        polygon: Polygon built by build_polygon()
        coverage_cache: Caller-owned memo, filled in place

    Returns:
        list: Merged coverage ranges. Repeat queries return the cached list
              itself, so callers must not modify it.
    """
    cached = coverage_cache.get(y)
    if cached is not None:
        return cached

    if y in polygon.vertex_ys:
        on_row = [Range(e.x1, e.x2) for e in polygon.horizontal_edges if e.y == y]
        coverage = merge_ranges(
            interior_at_y(y + EPSILON, polygon.vertical_edges)
            + interior_at_y(y - EPSILON, polygon.vertical_edges)
            + on_row
        )
    else:
        # Crossings of a simple polygon never share an x, pairs are disjoint
        coverage = interior_at_y(y, polygon.vertical_edges)

    coverage_cache[y] = coverage
    return coverage


def covers_span(coverage: Sequence[Range], min_x: int, max_x: int) -> bool:
    """True if a single range of the row spans [min_x, max_x]."""
    return any(r.start <= min_x and r.end >= max_x for r in coverage)
