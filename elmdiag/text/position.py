from dataclasses import dataclass
from typing import Any, Final


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Line/column pair.

    The coordinate base depends on where the position lives: compiler
    regions are 1-based, editor ranges are 0-based. No bounds are enforced
    because compiler output is passed through unchanged.
    """

    line: int
    column: int

    @staticmethod
    def from_json(data: Any) -> "Position":
        """Create a Position from a `{"line": .., "column": ..}` object."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected position object, got {type(data).__name__}")
        return Position(line=_as_coordinate(data, "line"), column=_as_coordinate(data, "column"))

    def offset(self, delta: int) -> "Position":
        """Shift both coordinates by `delta`."""
        return Position(self.line + delta, self.column + delta)

    def to_lsp(self) -> dict[str, int]:
        """Editor-protocol shape (`character` instead of `column`)."""
        return {"line": self.line, "character": self.column}

    def __repr__(self) -> str:
        return f"Position({self.line}:{self.column})"


@dataclass(frozen=True, slots=True)
class Region:
    """
    1-based inclusive span reported by the compiler.

    Invariant (not validated):
    - start <= end in document order
    """

    start: Position
    end: Position

    @staticmethod
    def from_json(data: Any) -> "Region":
        """Create a Region from a `{"start": .., "end": ..}` object."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected region object, got {type(data).__name__}")
        return Region(
            start=Position.from_json(data["start"]),
            end=Position.from_json(data["end"]),
        )

    @staticmethod
    def at(line: int, column: int) -> "Region":
        """Create an empty Region at a single position."""
        position = Position(line, column)
        return Region(position, position)


def _as_coordinate(data: dict[str, Any], key: str) -> int:
    value = data[key]
    # bool is an int subclass; JSON `true` is not a coordinate.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected integer for {key!r}, got {type(value).__name__}")
    return value


FILE_START_REGION: Final[Region] = Region.at(1, 1)
"""Region used when the compiler reports a problem without a location."""


@dataclass(frozen=True, slots=True)
class Range:
    """0-based span as consumed by editors."""

    start: Position
    end: Position

    @staticmethod
    def create(start_line: int, start_column: int, end_line: int, end_column: int) -> "Range":
        return Range(Position(start_line, start_column), Position(end_line, end_column))

    def to_lsp(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_lsp(), "end": self.end.to_lsp()}

    def __repr__(self) -> str:
        return f"Range({self.start.line}:{self.start.column}-{self.end.line}:{self.end.column})"
