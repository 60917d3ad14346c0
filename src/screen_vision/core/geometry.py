#!/usr/bin/env python3
"""
Geometry Helpers for Screen Vision

Pure rectangle functions shared by the monitor resolver and the capture
pipeline. Coordinates may be negative in the global (virtual desktop)
space; monitor-local rectangles are always non-negative.

This module is part of the Core Layer and has no platform dependencies.

Sample input:
- Rect(x=-1920, y=0, width=1920, height=1080), point (-100, 500)

Expected output:
- contains_point -> True
"""

from dataclasses import dataclass, asdict
from typing import Dict, Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; right and bottom edges are exclusive."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        if self.width <= 0 or self.height <= 0:
            return 0
        return self.width * self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def contains_point(self, px: float, py: float) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom

    def translate(self, dx: int, dy: int) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def contains(outer: Rect, inner: Rect) -> bool:
    """True when ``inner`` lies completely inside ``outer``."""
    return (
        inner.x >= outer.x
        and inner.y >= outer.y
        and inner.right <= outer.right
        and inner.bottom <= outer.bottom
    )


def intersection_area(a: Rect, b: Rect) -> int:
    """Overlap area of two rectangles, 0 when they are disjoint."""
    width = min(a.right, b.right) - max(a.x, b.x)
    height = min(a.bottom, b.bottom) - max(a.y, b.y)
    if width <= 0 or height <= 0:
        return 0
    return width * height


def clamp_to_bounds(rect: Rect, bound_width: int, bound_height: int) -> Rect:
    """
    Clamp a local rectangle into ``[0, bound_width) x [0, bound_height)``.

    The origin is pulled up to 0, so a rectangle hanging off the left or top
    edge keeps only the part that enters the bounds. The result can have a
    zero area; callers decide whether that is usable.

    Args:
        rect: Rectangle in the bounds' local coordinate space
        bound_width: Width of the bounding area
        bound_height: Height of the bounding area

    Returns:
        Rect: Clamped rectangle with non-negative fields
    """
    left = max(0, rect.x)
    top = max(0, rect.y)
    right = min(rect.right, bound_width)
    bottom = min(rect.bottom, bound_height)

    left = min(left, max(bound_width, 0))
    top = min(top, max(bound_height, 0))

    return Rect(left, top, max(0, right - left), max(0, bottom - top))


def classify_position(x: int, is_primary: bool) -> str:
    """Label a monitor as left, center or right of the desktop origin."""
    if is_primary:
        return "center"
    return "left" if x < 0 else "right"


if __name__ == "__main__":
    """Validate geometry helpers"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: window hanging off the top-left edge
    total_tests += 1
    clamped = clamp_to_bounds(Rect(-50, -20, 200, 100), 1920, 1080)
    if clamped != Rect(0, 0, 150, 80):
        all_validation_failures.append(f"clamp test: Expected Rect(0, 0, 150, 80), got {clamped}")

    # Test 2: fully outside gives zero area
    total_tests += 1
    clamped = clamp_to_bounds(Rect(3000, 10, 200, 100), 1920, 1080)
    if clamped.area != 0:
        all_validation_failures.append(f"outside clamp test: Expected zero area, got {clamped}")

    # Test 3: position labels
    total_tests += 1
    labels = (classify_position(-1920, False), classify_position(0, True), classify_position(1920, False))
    if labels != ("left", "center", "right"):
        all_validation_failures.append(f"position test: got {labels}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
