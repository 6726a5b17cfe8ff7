"""
Testbench for the RowCoverageChecker RTL implementation.

Streams scanline coverage rows produced by the software reference into the
hardware checker and compares its verdict with the software containment test.

Usage (from day_9/):
    python3 -m amaranth_benchs.rtl_coverage_checker_tests [test_file]

Default test file: testcases/example_input.txt
"""

import sys
from itertools import combinations

import pytest
from amaranth.sim import Simulator

from rtl.coverage_checker import RowCoverageChecker
from software_reference.coverage import Range, coverage_at_y, covers_span
from software_reference.polygon import build_polygon, build_y_samples, parse_polygon_text


EXAMPLE = [(7, 1), (11, 1), (11, 7), (9, 7), (9, 5), (2, 5), (2, 3), (7, 3)]


def simulate_rows(queries, coord_width=32):
    """
    Run the hardware checker over a batch of row queries.

    Args:
        queries: List of (ranges, span_min, span_max)

    Returns:
        list: (covered, ranges_seen) per query
    """
    dut = RowCoverageChecker(coord_width=coord_width)
    results = []

    async def testbench(ctx):
        for ranges, span_min, span_max in queries:
            ctx.set(dut.span_min, span_min)
            ctx.set(dut.span_max, span_max)

            # Start a new row
            ctx.set(dut.start, 1)
            await ctx.tick()
            ctx.set(dut.start, 0)

            if ranges:
                for i, (start, end) in enumerate(ranges):
                    ctx.set(dut.range_start, start)
                    ctx.set(dut.range_end, end)
                    ctx.set(dut.range_valid, 1)
                    ctx.set(dut.range_last, i == len(ranges) - 1)
                    await ctx.tick()
            else:
                ctx.set(dut.range_valid, 0)
                ctx.set(dut.range_last, 1)
                await ctx.tick()

            ctx.set(dut.range_valid, 0)
            ctx.set(dut.range_last, 0)

            assert ctx.get(dut.done) == 1
            assert ctx.get(dut.ready) == 1
            results.append((ctx.get(dut.covered), ctx.get(dut.ranges_seen)))

    sim = Simulator(dut)
    sim.add_clock(1e-6)
    sim.add_testbench(testbench)
    sim.run()

    return results


def software_row_queries(vertices):
    """Every (pair, sample row) check the software validator can ask for."""
    polygon = build_polygon(vertices)
    y_samples = build_y_samples(vertices)
    cache = {}
    queries = []

    for p1, p2 in combinations(vertices, 2):
        min_x, max_x = min(p1[0], p2[0]), max(p1[0], p2[0])
        min_y, max_y = min(p1[1], p2[1]), max(p1[1], p2[1])
        for y in y_samples:
            if min_y <= y <= max_y:
                queries.append((coverage_at_y(y, polygon, cache), min_x, max_x))

    return queries


@pytest.mark.parametrize("ranges, span_min, span_max, expected", [
    ([Range(2, 11)], 2, 9, 1),
    ([Range(7, 11)], 2, 9, 0),
    ([Range(0, 3), Range(7, 10)], 0, 3, 1),
    ([Range(0, 3), Range(7, 10)], 0, 10, 0),
    ([Range(0, 3), Range(7, 10)], 8, 9, 1),
    ([Range(5, 5)], 5, 5, 1),
    ([], 0, 0, 0),
    ([Range(-5, -1)], -4, -2, 1),
    ([Range(-5, 3)], -6, 0, 0),
    ([Range(-9, -7), Range(-3, 4)], -3, 4, 1),
])
def test_small_rows(ranges, span_min, span_max, expected):
    """Hand-crafted rows, including an empty one."""
    [(covered, seen)] = simulate_rows([(ranges, span_min, span_max)])
    assert covered == expected
    assert seen == len(ranges)


def test_result_cleared_between_rows():
    """A covered row must not leak into the next one."""
    results = simulate_rows([
        ([Range(0, 10)], 2, 8),
        ([Range(0, 1), Range(9, 10)], 2, 8),
    ])
    assert [covered for covered, _ in results] == [1, 0]


def test_matches_software_on_example(test_file=None):
    """Hardware agrees with the software containment test on every query."""
    if test_file is None:
        vertices = EXAMPLE
    else:
        with open(test_file) as f:
            vertices = parse_polygon_text(f.read())

    queries = software_row_queries(vertices)
    hw_results = simulate_rows(queries)

    mismatches = [
        (query, covered)
        for query, (covered, _) in zip(queries, hw_results)
        if bool(covered) != covers_span(*query)
    ]
    assert not mismatches, f"{len(mismatches)} rows differ, first: {mismatches[0]}"


def test_matches_software_below_origin():
    """Same cross-check with the example moved into negative coordinates."""
    vertices = [(x - 20, y - 20) for x, y in EXAMPLE]
    queries = software_row_queries(vertices)
    hw_results = simulate_rows(queries)

    assert [bool(covered) for covered, _ in hw_results] == [covers_span(*q) for q in queries]


def test_rejects_bad_width():
    with pytest.raises(ValueError):
        RowCoverageChecker(coord_width=4)


if __name__ == "__main__":
    test_file = "testcases/example_input.txt"
    if len(sys.argv) > 1:
        test_file = sys.argv[1]

    print("=" * 80)
    print("Amaranth HDL RowCoverageChecker Verification")
    print("=" * 80)

    try:
        test_matches_software_on_example(test_file)
    except AssertionError as e:
        print(f"\n  [BAD] {e}")
        sys.exit(1)

    print(f"\n  [OK] Hardware matches software on {test_file}")
    sys.exit(0)
