"""Position, region and range value types."""

from elmdiag.text.position import FILE_START_REGION, Position, Range, Region

__all__ = [
    "FILE_START_REGION",
    "Position",
    "Range",
    "Region",
]
