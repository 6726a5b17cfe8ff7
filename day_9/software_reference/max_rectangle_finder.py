#!/usr/bin/env python3
"""
Software Reference Implementation of the MaxRectangleFinder Algorithm

Finds the maximum area axis-aligned rectangle whose opposite corners are two
polygon vertices and which lies completely inside a rectilinear polygon
(boundary included). Area counts lattice cells: (|dx|+1) * (|dy|+1).

Algorithm:
1. Input polygon vertices (x,y coordinates)
2. Split the boundary into horizontal and vertical edges
3. Pick the sample rows: every vertex y plus midpoints between vertex rows
4. For each vertex pair (i < j):
   a. Compute the candidate area, skip it if it cannot beat the current max
   b. For every sample row inside the candidate's y span, fetch the
      (memoised) row coverage and require one range to span the candidate
   c. Track maximum valid rectangle area
5. Return the maximum area

Part 1 of the puzzle drops the containment check and just returns the
largest pairwise bounding box.

Usage (from day_9/):
    python3 -m software_reference.max_rectangle_finder testcases/example_input.txt -v
"""

import sys
import time
from bisect import bisect_left
from typing import List, Optional, Sequence, Tuple

from software_reference.coverage import CoverageCache, coverage_at_y, covers_span
from software_reference.polygon import (
    Point,
    Polygon,
    YSample,
    build_polygon,
    build_y_samples,
    check_rectilinear,
    parse_polygon_text,
)


def area(p1: Tuple[int, int], p2: Tuple[int, int]) -> int:
    """Inclusive lattice area of the rectangle spanned by two corners."""
    return (abs(p2[0] - p1[0]) + 1) * (abs(p2[1] - p1[1]) + 1)


def is_rectangle_valid(p1: Tuple[int, int], p2: Tuple[int, int],
                       y_samples: Sequence[YSample], polygon: Polygon,
                       coverage_cache: CoverageCache) -> bool:
    """
    Check that the rectangle spanned by p1 and p2 is inside the polygon.

    Args:
        p1, p2: Opposite rectangle corners
        y_samples: Sorted rows from build_y_samples()
        polygon: Polygon from build_polygon()
        coverage_cache: Shared row coverage memo, filled as rows are visited

    Returns:
        True if every sample row in [min_y, max_y] has one coverage range
        spanning [min_x, max_x]
    """
    min_x, max_x = min(p1[0], p2[0]), max(p1[0], p2[0])
    min_y, max_y = min(p1[1], p2[1]), max(p1[1], p2[1])

    for i in range(bisect_left(y_samples, min_y), len(y_samples)):
        y = y_samples[i]
        if y > max_y:
            break
        if not covers_span(coverage_at_y(y, polygon, coverage_cache), min_x, max_x):
            return False

    return True


class MaxRectangleFinder:
    """Software reference for the max contained rectangle search."""

    def __init__(self):
        self.vertices = []
        self.max_area = 0
        self.rectangles_tested = 0
        self.rectangles_pruned = 0
        self.valid_rectangles_found = 0
        self.coverage_cache = {}

    def add_vertex(self, x: int, y: int):
        """Append a vertex in boundary order."""
        self.vertices.append(Point(x, y))

    def _reset(self):
        self.max_area = 0
        self.rectangles_tested = 0
        self.rectangles_pruned = 0
        self.valid_rectangles_found = 0

    def find_max_bounding_box(self) -> int:
        """
        Largest rectangle spanned by any two vertices, ignoring the polygon.

        Returns:
            Maximum pairwise area (0 with fewer than two vertices)
        """
        self._reset()

        num_vertices = len(self.vertices)
        for i in range(num_vertices):
            for j in range(i + 1, num_vertices):
                candidate_area = area(self.vertices[i], self.vertices[j])
                self.rectangles_tested += 1
                if candidate_area > self.max_area:
                    self.max_area = candidate_area

        return self.max_area

    def find_max_rectangle(self) -> int:
        """
        Largest vertex-cornered rectangle contained in the polygon.

        Each call starts from an empty coverage cache owned by that call;
        it is kept on the instance afterwards for inspection.

        Returns:
            Maximum valid rectangle area (0 with fewer than two vertices)
        """
        self._reset()

        polygon = build_polygon(self.vertices)
        y_samples = build_y_samples(self.vertices)
        coverage_cache = {}
        self.coverage_cache = coverage_cache

        num_vertices = len(self.vertices)
        for i in range(num_vertices):
            for j in range(i + 1, num_vertices):
                p1 = self.vertices[i]
                p2 = self.vertices[j]
                candidate_area = area(p1, p2)

                # Validation cannot raise the max, skip it
                if candidate_area <= self.max_area:
                    self.rectangles_pruned += 1
                    continue

                self.rectangles_tested += 1
                if is_rectangle_valid(p1, p2, y_samples, polygon, coverage_cache):
                    self.max_area = candidate_area
                    self.valid_rectangles_found += 1

        return self.max_area

    def get_statistics(self) -> dict:
        """Return algorithm statistics of the last search."""
        return {
            'vertices': len(self.vertices),
            'rectangles_tested': self.rectangles_tested,
            'rectangles_pruned': self.rectangles_pruned,
            'valid_rectangles': self.valid_rectangles_found,
            'rows_cached': len(self.coverage_cache),
            'max_area': self.max_area,
        }


def _finder_for(points: Sequence[Tuple[int, int]]) -> MaxRectangleFinder:
    finder = MaxRectangleFinder()
    for x, y in points:
        finder.add_vertex(x, y)
    return finder


def max_bounding_box_area(points: Sequence[Tuple[int, int]]) -> int:
    """Part 1: largest pairwise bounding box over the vertices."""
    return _finder_for(points).find_max_bounding_box()


def max_contained_rectangle_area(points: Sequence[Tuple[int, int]]) -> int:
    """Part 2: largest vertex-cornered rectangle inside the polygon."""
    return _finder_for(points).find_max_rectangle()


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for MaxRectangleFinder."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Find maximum rectangle within rectilinear polygon'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                        default=sys.stdin,
                        help='Input file with polygon vertices (default: stdin)')
    parser.add_argument('--part', type=int, choices=(1, 2), default=2,
                        help='1: any vertex pair, 2: rectangle must fit in the polygon (default: 2)')
    parser.add_argument('--expected', type=int, default=None,
                        help='Expected answer; exit with status 1 on mismatch')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print algorithm statistics')
    args = parser.parse_args(argv)

    input_text = args.input_file.read()
    try:
        vertices = parse_polygon_text(input_text)
        if args.part == 2:
            check_rectilinear(vertices)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Processing polygon with {len(vertices)} vertices", file=sys.stderr)

    finder = _finder_for(vertices)

    start_time = time.perf_counter()
    if args.part == 1:
        max_area = finder.find_max_bounding_box()
    else:
        max_area = finder.find_max_rectangle()
    elapsed = time.perf_counter() - start_time

    print(max_area)

    if args.verbose:
        stats = finder.get_statistics()
        print(f"\nStatistics:", file=sys.stderr)
        print(f"  Vertices: {stats['vertices']}", file=sys.stderr)
        print(f"  Rectangles tested: {stats['rectangles_tested']}", file=sys.stderr)
        print(f"  Rectangles pruned: {stats['rectangles_pruned']}", file=sys.stderr)
        print(f"  Valid rectangles: {stats['valid_rectangles']}", file=sys.stderr)
        print(f"  Rows cached: {stats['rows_cached']}", file=sys.stderr)
        print(f"  Max area: {stats['max_area']}", file=sys.stderr)
        print(f"  Time: {elapsed:.3f}s", file=sys.stderr)

    if args.expected is not None and max_area != args.expected:
        print(f"Error: expected {args.expected}, got {max_area}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
