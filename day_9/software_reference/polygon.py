"""
Rectilinear polygon model for the MaxRectangleFinder software reference.

Turns the ordered vertex list into horizontal/vertical edge lists and the
set of scanline rows that is enough to certify any candidate rectangle.

Preconditions (not checked by the core, see check_rectilinear):
- at least 4 integer vertices
- consecutive vertices (including last -> first) differ in exactly one axis
- the boundary does not cross itself
"""

from typing import FrozenSet, List, NamedTuple, Sequence, Tuple, Union


class Point(NamedTuple):
    x: int
    y: int


class HorizontalEdge(NamedTuple):
    y: int
    x1: int
    x2: int


class VerticalEdge(NamedTuple):
    x: int
    y1: int
    y2: int


class Polygon(NamedTuple):
    """Edges of a rectilinear polygon plus the rows its vertices sit on."""
    points: Tuple[Point, ...]
    horizontal_edges: Tuple[HorizontalEdge, ...]
    vertical_edges: Tuple[VerticalEdge, ...]
    vertex_ys: FrozenSet[int]


YSample = Union[int, float]


def build_edges(points: Sequence[Point]) -> Tuple[List[HorizontalEdge], List[VerticalEdge]]:
    """
    Classify every polygon edge as horizontal or vertical.

    Args:
        points: Polygon vertices in boundary order (closing edge is implicit)

    Returns:
        tuple: (horizontal_edges, vertical_edges), coordinates normalised so
               x1 <= x2 and y1 <= y2
    """
    horizontal_edges = []
    vertical_edges = []
    n = len(points)

    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]

        if y1 == y2:
            horizontal_edges.append(HorizontalEdge(y1, min(x1, x2), max(x1, x2)))
        else:
            vertical_edges.append(VerticalEdge(x1, min(y1, y2), max(y1, y2)))

    return horizontal_edges, vertical_edges


def build_polygon(points: Sequence[Tuple[int, int]]) -> Polygon:
    """Build the immutable polygon description used by the coverage engine."""
    vertices = tuple(Point(x, y) for x, y in points)
    horizontal_edges, vertical_edges = build_edges(vertices)
    return Polygon(
        points=vertices,
        horizontal_edges=tuple(horizontal_edges),
        vertical_edges=tuple(vertical_edges),
        vertex_ys=frozenset(p.y for p in vertices),
    )


def build_y_samples(points: Sequence[Tuple[int, int]]) -> List[YSample]:
    """
    Compute the rows where polygon coverage has to be inspected.

    Every distinct vertex y is a sample, and so is the midpoint between each
    pair of neighbouring vertex rows. No edge starts or ends strictly between
    two consecutive samples, so coverage is constant there.

    Args:
        points: Polygon vertices

    Returns:
        list: Sorted, deduplicated sample rows
    """
    unique_ys = sorted({y for _, y in points})
    samples = []

    for i, y in enumerate(unique_ys):
        samples.append(y)
        if i + 1 < len(unique_ys):
            samples.append((y + unique_ys[i + 1]) / 2)

    return samples


def check_rectilinear(points: Sequence[Tuple[int, int]]):
    """
    Reject input that breaks the rectilinear polygon preconditions.

    Meant for untrusted input before a search starts; the search itself
    never calls it.

    Raises:
        ValueError: fewer than 4 vertices, or an edge that is diagonal or
                    has zero length
    """
    n = len(points)
    if n < 4:
        raise ValueError(f"Need at least 4 vertices, got {n}")

    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        if (x1 == x2) == (y1 == y2):
            raise ValueError(
                f"Edge {i} from ({x1},{y1}) to ({x2},{y2}) is not axis-aligned"
            )


def parse_polygon_text(text: str) -> List[Point]:
    """
    Parse polygon vertices from text.

    Format: "x,y\\nx,y\\n...", one vertex per line. Leading blank lines are
    skipped; the first blank line after data terminates the polygon.

    Args:
        text: Text with x,y coordinates per line

    Returns:
        list: Point per vertex

    Raises:
        ValueError: a line is not two comma-separated integers
    """
    vertices = []
    for line_no, line in enumerate(text.strip().split('\n'), start=1):
        line = line.strip()
        if not line:
            break
        parts = line.split(',')
        if len(parts) != 2:
            raise ValueError(f"Line {line_no}: expected 'x,y', got {line!r}")
        try:
            vertices.append(Point(int(parts[0]), int(parts[1])))
        except ValueError:
            raise ValueError(f"Line {line_no}: non-integer coordinate in {line!r}") from None
    return vertices
