"""Shape - a rectangular box whose border is drawn into the grid."""

from __future__ import annotations

from dataclasses import dataclass, replace

from cellsketch.core.direction import Direction, Pos
from cellsketch.core.geometry import Region, strokes


@dataclass(frozen=True)
class Shape:
    """A box with tracked geometry.

    `width` and `height` are extents: the border occupies columns
    ``left .. left + width`` and rows ``top .. top + height``, so a shape
    needs a positive width and height to have four distinct corners. The
    cells themselves live in the document's grid; a Shape only records
    where its border is.
    """
    shape_id: str
    top: int
    left: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, shape_id: str, a: Pos, b: Pos) -> Shape:
        region = Region.from_corners(a, b)
        return cls(
            shape_id=shape_id,
            top=region.top,
            left=region.left,
            width=region.right - region.left,
            height=region.bottom - region.top,
        )

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def top_left(self) -> Pos:
        return (self.top, self.left)

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def footprint(self) -> Region:
        """Border and interior together."""
        return Region(self.top, self.left, self.bottom, self.right)

    @property
    def interior(self) -> Region:
        """Cells strictly inside the border (may be empty)."""
        return Region(self.top + 1, self.left + 1, self.bottom - 1, self.right - 1)

    def border(self) -> dict[Pos, Direction]:
        """Edge directions the border contributes at each border cell."""
        tl, tr = (self.top, self.left), (self.top, self.right)
        bl, br = (self.bottom, self.left), (self.bottom, self.right)
        result: dict[Pos, Direction] = {}
        for start, end in ((tl, tr), (tr, br), (bl, br), (tl, bl)):
            for pos, mask in strokes(start, end).items():
                result[pos] = result.get(pos, Direction.NONE) | mask
        return result

    def edges_at(self, pos: Pos) -> Direction:
        """Which sides of the border `pos` lies on (NONE if not on the border).

        Corners report two sides, e.g. NORTH | WEST for the top-left corner.
        """
        row, col = pos
        if not self.footprint.contains(pos):
            return Direction.NONE
        sides = Direction.NONE
        if row == self.top:
            sides |= Direction.NORTH
        if row == self.bottom:
            sides |= Direction.SOUTH
        if col == self.left:
            sides |= Direction.WEST
        if col == self.right:
            sides |= Direction.EAST
        return sides

    def interior_contains(self, pos: Pos) -> bool:
        return self.interior.contains(pos)

    def moved_to(self, top: int, left: int) -> Shape:
        return replace(self, top=top, left=left)

    def resized(self, top: int, left: int, width: int, height: int) -> Shape:
        return replace(self, top=top, left=left, width=width, height=height)

    def drag_edges(self, edges: Direction, pos: Pos) -> Shape:
        """Geometry after dragging the given sides of the border to `pos`.

        The opposite sides stay put. The result may have zero or negative
        extent; callers decide whether that is acceptable.
        """
        top, left, bottom, right = self.top, self.left, self.bottom, self.right
        if edges & Direction.NORTH:
            top = pos[0]
        if edges & Direction.SOUTH:
            bottom = pos[0]
        if edges & Direction.WEST:
            left = pos[1]
        if edges & Direction.EAST:
            right = pos[1]
        return self.resized(top, left, right - left, bottom - top)
