"""
RectilinearLine - an axis-aligned polyline made of directed segments.

The same structure models the snake's body (which moves and grows every
tick) and the wall around the play area (which never changes).
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterable, Iterator, Optional

from .direction import Axis, Direction, Point, move_position


@dataclass
class Segment:
    """
    One straight piece of a line.

    Attributes:
        direction: the way the segment points, from tail side to head side
        length: number of unit steps, always >= 1
    """
    direction: Direction
    length: int

    def __post_init__(self):
        if self.length < 1:
            raise ValueError(f"Segment length must be at least 1, got {self.length}")


@dataclass(frozen=True)
class StraightRun:
    """
    A segment placed in absolute coordinates.

    `pos` is the minimum corner, so a horizontal run covers
    x in [pos.x, pos.x + length] and a vertical run covers
    y in [pos.y, pos.y + length]. `index` is the position of the
    segment the run was taken from.
    """
    pos: Point
    length: int
    axis: Axis
    index: int

    @property
    def end(self) -> Point:
        if self.axis == Axis.HORIZONTAL:
            return Point(self.pos.x + self.length, self.pos.y)
        return Point(self.pos.x, self.pos.y + self.length)

    def contains(self, point) -> bool:
        x, y = point
        if self.axis == Axis.HORIZONTAL:
            return y == self.pos.y and self.pos.x <= x <= self.pos.x + self.length
        return x == self.pos.x and self.pos.y <= y <= self.pos.y + self.length


class _Overlap:
    CORNER = "corner"
    LINE = "line"


def _intersects(x: int, x0: int, x1: int) -> Optional[str]:
    """Classify `x` against the closed range [x0, x1]."""
    if x in (x0, x1):
        return _Overlap.CORNER
    if x0 < x < x1:
        return _Overlap.LINE
    return None


def _ranges_overlap(a0: int, a1: int, b0: int, b1: int) -> bool:
    return (
        _intersects(b0, a0, a1) is not None
        or _intersects(b1, a0, a1) is not None
        or _intersects(a0, b0, b1) is not None
    )


class RectilinearLine:
    """
    A polyline traced from `start` through each segment in order.

    The first segment is next to the tail and the last one is next to
    the head. Consecutive segments are expected to alternate between
    horizontal and vertical.
    """

    def __init__(self, start, segments: Optional[Iterable[Segment]] = None):
        self.start = Point(*start)
        self.segments: Deque[Segment] = deque(segments or [])

    def __repr__(self):
        segs = ", ".join(f"{s.direction.name}x{s.length}" for s in self.segments)
        return f"<RectilinearLine start={tuple(self.start)} segments=[{segs}]>"

    def __eq__(self, other):
        if not isinstance(other, RectilinearLine):
            return NotImplemented
        return self.start == other.start and list(self.segments) == list(other.segments)

    def __len__(self):
        return self.length()

    def length(self) -> int:
        """Total length: 1 for the head plus the length of every segment."""
        return 1 + sum(segment.length for segment in self.segments)

    def direction(self) -> Optional[Direction]:
        """
        Direction of the head segment, or None while the line has fewer
        than two segments.
        """
        if len(self.segments) > 1:
            return self.segments[-1].direction
        return None

    def head(self) -> Point:
        pos = self.start
        for segment in self.segments:
            pos = move_position(pos, segment.direction, segment.length)
        return pos

    def shrink_tail(self):
        if not self.segments:
            raise ValueError("Cannot shrink the tail of a line without segments")

        tail = self.segments[0]
        self.start = move_position(self.start, tail.direction)
        if tail.length > 1:
            tail.length -= 1
        else:
            self.segments.popleft()

    def extend_head(self, direction: Direction):
        if self.segments and self.segments[-1].direction == direction:
            self.segments[-1].length += 1
        else:
            self.segments.append(Segment(direction, 1))

    def move_forward(self, direction: Direction):
        self.shrink_tail()
        self.extend_head(direction)

    def grow(self, heading: Optional[Direction] = None):
        """
        Add one unit behind the tail.

        The next `move_forward` uses up that unit instead of shortening
        the body, so the tail stays in place for one tick and the line
        ends up one unit longer.
        """
        if self.segments:
            tail = self.segments[0]
            tail.length += 1
            self.start = move_position(self.start, tail.direction.opposite())
            return

        if heading is None:
            raise ValueError("A heading is required to grow a line without segments")
        self.segments.append(Segment(heading, 1))
        self.start = move_position(self.start, heading.opposite())

    def points(self) -> Iterator[Point]:
        """Every cell covered by the line, from the tail to the head."""
        pos = self.start
        yield pos
        for segment in self.segments:
            for _ in range(segment.length):
                pos = move_position(pos, segment.direction)
                yield pos

    def collides_with_point(self, point) -> bool:
        if self.start == point:
            return True
        return any(run.contains(point) for run in self._straight_runs())

    def is_self_overlapping(self) -> bool:
        """
        Check if the line touches or crosses itself anywhere other than the
        joints where consecutive segments meet.
        """
        horizontal = list(self.horizontal_runs())
        vertical = list(self.vertical_runs())

        # Vertical runs against horizontal runs
        for v_run in vertical:
            v_x = v_run.pos.x
            v_y0, v_y1 = v_run.pos.y, v_run.end.y
            for h_run in horizontal:
                h_y = h_run.pos.y
                h_x0, h_x1 = h_run.pos.x, h_run.end.x

                across = _intersects(v_x, h_x0, h_x1)
                along = _intersects(h_y, v_y0, v_y1)
                if across is None or along is None:
                    continue

                if across == _Overlap.CORNER and along == _Overlap.CORNER:
                    # endpoints meeting is only fine at the joint of neighbours
                    if abs(v_run.index - h_run.index) != 1:
                        return True
                    continue

                overlaps_horizontally = (
                    across == _Overlap.LINE or h_y not in (v_y0, v_y1)
                )
                overlaps_vertically = (
                    along == _Overlap.LINE or v_x not in (h_x0, h_x1)
                )
                if overlaps_horizontally and overlaps_vertically:
                    return True

        # Horizontal runs against each other
        for n, a_run in enumerate(horizontal):
            for b_run in horizontal[n + 1:]:
                if a_run.pos.y == b_run.pos.y and _ranges_overlap(
                    a_run.pos.x, a_run.end.x, b_run.pos.x, b_run.end.x
                ):
                    return True

        # Vertical runs against each other
        for n, a_run in enumerate(vertical):
            for b_run in vertical[n + 1:]:
                if a_run.pos.x == b_run.pos.x and _ranges_overlap(
                    a_run.pos.y, a_run.end.y, b_run.pos.y, b_run.end.y
                ):
                    return True

        return False

    def horizontal_runs(self) -> Iterator[StraightRun]:
        """Iterate over each horizontal segment in absolute coordinates."""
        return self._straight_runs(Axis.HORIZONTAL)

    def vertical_runs(self) -> Iterator[StraightRun]:
        """Iterate over each vertical segment in absolute coordinates."""
        return self._straight_runs(Axis.VERTICAL)

    def _straight_runs(self, axis: Optional[Axis] = None) -> Iterator[StraightRun]:
        pos = self.start
        for index, segment in enumerate(self.segments):
            cur_pos = pos
            pos = move_position(pos, segment.direction, segment.length)

            if axis is not None and segment.direction.axis != axis:
                continue

            # runs always extend right or down from their position
            if segment.direction in (Direction.LEFT, Direction.UP):
                run_pos = pos
            else:
                run_pos = cur_pos

            yield StraightRun(
                pos=run_pos,
                length=segment.length,
                axis=segment.direction.axis,
                index=index,
            )

    def copy(self) -> "RectilinearLine":
        return RectilinearLine(
            self.start,
            (Segment(s.direction, s.length) for s in self.segments),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": [self.start.x, self.start.y],
            "segments": [[s.direction.value, s.length] for s in self.segments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RectilinearLine":
        return cls(
            data["start"],
            (Segment(Direction(d), length) for d, length in data["segments"]),
        )
