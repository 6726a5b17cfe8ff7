"""
Row Coverage Checker Hardware Implementation using Amaranth HDL

Hardware mirror of the per-row test inside the rectangle validator: given the
merged coverage ranges of one scanline row, decide whether a single range
spans the candidate rectangle's [span_min, span_max].

Architecture:
- Input: Stream of (start, end) coverage ranges for one row
- Processing: One SpanContainmentCheck per beat, hits OR-ed into a register
- Output: covered/done once the beat flagged range_last has been consumed

Coordinates are two's complement signed, like the software reference
which accepts negative vertices.

A row with no coverage is sent as a single beat with range_last=1 and
range_valid=0.
"""

from amaranth import *


class SpanContainmentCheck(Elaboratable):
    """
    Combinational check: does [range_start, range_end] contain [span_min, span_max]?

    Inputs: range_start, range_end, span_min, span_max
    Outputs: contains (1-bit)
    """

    def __init__(self, coord_width: int = 32):
        self.coord_width = coord_width

        # Inputs
        self.range_start = Signal(signed(coord_width))
        self.range_end = Signal(signed(coord_width))
        self.span_min = Signal(signed(coord_width))
        self.span_max = Signal(signed(coord_width))

        # Outputs
        self.contains = Signal()

    def elaborate(self, platform):
        m = Module()

        m.d.comb += self.contains.eq(
            (self.range_start <= self.span_min) &
            (self.range_end >= self.span_max)
        )

        return m


class RowCoverageChecker(Elaboratable):
    """
    Streaming checker for one coverage row.

    Parameters
    ----------
    coord_width : int
        Coordinate width in bits (8-64, default 32).

    Interface
    ---------
    Inputs:
        span_min, span_max : Candidate rectangle x extent (held for the row)
        range_start, range_end, range_valid, range_last : Coverage stream
        start : Clear the result and begin a new row

    Outputs:
        ready : Idle, waiting for start
        covered : Some range of the row contains the span (valid when done=1)
        done : Row finished
        ranges_seen : Number of valid beats consumed for the row
    """

    def __init__(self, coord_width: int = 32):
        if coord_width < 8 or coord_width > 64:
            raise ValueError(f"coord_width must be 8-64 bits, got {coord_width}")

        self.coord_width = coord_width

        # Span under test
        self.span_min = Signal(signed(coord_width))
        self.span_max = Signal(signed(coord_width))

        # Coverage stream
        self.range_start = Signal(signed(coord_width))
        self.range_end = Signal(signed(coord_width))
        self.range_valid = Signal()
        self.range_last = Signal()

        # Control
        self.start = Signal()
        self.ready = Signal()

        # Outputs
        self.covered = Signal()
        self.done = Signal()
        self.ranges_seen = Signal(16)

    def elaborate(self, platform):
        m = Module()

        check = SpanContainmentCheck(coord_width=self.coord_width)
        m.submodules.check = check
        m.d.comb += [
            check.range_start.eq(self.range_start),
            check.range_end.eq(self.range_end),
            check.span_min.eq(self.span_min),
            check.span_max.eq(self.span_max),
        ]

        hit = Signal()
        m.d.comb += hit.eq(self.range_valid & check.contains)

        with m.FSM():
            with m.State("IDLE"):
                m.d.comb += self.ready.eq(1)

                with m.If(self.start):
                    m.d.sync += [
                        self.covered.eq(0),
                        self.done.eq(0),
                        self.ranges_seen.eq(0),
                    ]
                    m.next = "SCAN"

            with m.State("SCAN"):
                with m.If(self.range_valid):
                    m.d.sync += self.ranges_seen.eq(self.ranges_seen + 1)

                with m.If(hit):
                    m.d.sync += self.covered.eq(1)

                with m.If(self.range_last):
                    m.d.sync += self.done.eq(1)
                    m.next = "IDLE"

        return m


if __name__ == "__main__":
    import sys
    from amaranth.back import verilog

    output_path = sys.argv[1] if len(sys.argv) > 1 else "row_coverage_checker.v"

    top = RowCoverageChecker(coord_width=32)
    v = verilog.convert(top, name="top", ports=[
        top.span_min, top.span_max,
        top.range_start, top.range_end, top.range_valid, top.range_last,
        top.start, top.ready, top.covered, top.done, top.ranges_seen,
    ])

    with open(output_path, "w") as f:
        f.write(v)
    print(f"Generated {output_path}")
