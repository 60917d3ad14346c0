#!/usr/bin/env python3
"""
Display Topology Resolver

This module turns the raw monitor list reported by MSS into stable,
user-facing monitor records and resolves identifiers ("primary", 2,
"display2", ...) to a single record.

Enumeration runs as two explicit stages:
1. Raw stage: geometry for every physical monitor from MSS
2. Canonical stage: OS display numbers and primary flags from the
   platform display settings query, joined to the raw stage on exact
   (x, y) origin

If the canonical stage is unavailable the fallback numbering is used
(id = enumeration index, first monitor is primary). That fallback is a
best-effort heuristic; the platform does not promise that the first
enumerated monitor is the primary one.

Records are never cached across calls. Pass an already enumerated list to
the resolver functions to avoid re-querying the platform within one
request.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- resolve_monitor("display2")

Expected output:
- MonitorRecord(id=2, name='Display 2', is_primary=False, x=-1920, y=0, ...)
"""

import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from loguru import logger

from screen_vision.core.constants import PRIMARY_ALIASES
from screen_vision.core.display_settings import (
    DisplaySetting,
    query_display_settings,
    settings_by_origin,
)
from screen_vision.core.geometry import Rect, classify_position, intersection_area
from screen_vision.core.mss import get_raw_monitors


@dataclass(frozen=True)
class MonitorRecord:
    """Snapshot of one physical display at enumeration time."""

    id: int
    name: str
    is_primary: bool
    x: int
    y: int
    width: int
    height: int
    scale_factor: float = 1.0
    position: str = "right"

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["resolution"] = self.resolution
        return data


# Identifier variants -------------------------------------------------------

@dataclass(frozen=True)
class ById:
    value: int


@dataclass(frozen=True)
class Primary:
    pass


@dataclass(frozen=True)
class Unresolvable:
    raw: Any


MonitorIdentifier = Union[ById, Primary, Unresolvable]

_FIRST_INTEGER = re.compile(r"(\d+)")


def parse_identifier(identifier: Union[int, str, None]) -> MonitorIdentifier:
    """
    Classify a user supplied monitor identifier.

    Numeric 0 always means the primary monitor, never "the monitor whose id
    is 0". Any other number is a canonical display number. Strings are
    either a primary alias or carry a display number somewhere inside them.

    Args:
        identifier: Integer, string, or None (treated as primary)

    Returns:
        MonitorIdentifier: ById, Primary or Unresolvable
    """
    if identifier is None:
        return Primary()

    # bool is an int subclass but never a meaningful identifier
    if isinstance(identifier, bool):
        return Unresolvable(identifier)

    if isinstance(identifier, int):
        return Primary() if identifier == 0 else ById(identifier)

    if isinstance(identifier, str):
        text = identifier.strip().lower()
        if text in PRIMARY_ALIASES:
            return Primary()
        match = _FIRST_INTEGER.search(text)
        if match:
            number = int(match.group(1))
            if text.isdigit() and number == 0:
                return Primary()
            return ById(number)

    return Unresolvable(identifier)


# Enumeration ---------------------------------------------------------------

def _fallback_records(raw_monitors: List[Dict[str, int]]) -> List[MonitorRecord]:
    """Index-based numbering used when the OS display numbers are unknown."""
    records = []
    for index, raw in enumerate(raw_monitors):
        is_primary = index == 0
        records.append(
            MonitorRecord(
                id=index,
                name=f"Display {index + 1}",
                is_primary=is_primary,
                x=raw["left"],
                y=raw["top"],
                width=raw["width"],
                height=raw["height"],
                scale_factor=1.0,
                position=classify_position(raw["left"], is_primary),
            )
        )
    return records


def _scale_factor(raw: Dict[str, int], setting: DisplaySetting) -> float:
    if setting.width <= 0:
        return 1.0
    return round(raw["width"] / setting.width, 2)


def _canonical_records(
    raw_monitors: List[Dict[str, int]],
    settings: List[DisplaySetting],
) -> List[MonitorRecord]:
    """Join raw geometry to OS display settings by exact origin."""
    by_origin = settings_by_origin(settings)

    matched: Dict[int, DisplaySetting] = {}
    used_ids: Set[int] = set()
    for index, raw in enumerate(raw_monitors):
        setting = by_origin.get((raw["left"], raw["top"]))
        if setting is not None and setting.number not in used_ids:
            matched[index] = setting
            used_ids.add(setting.number)

    if len(matched) < len(raw_monitors):
        logger.debug(
            f"{len(raw_monitors) - len(matched)} monitor(s) had no display settings match, "
            f"falling back to enumeration index for them"
        )

    ids: Dict[int, int] = {index: setting.number for index, setting in matched.items()}
    for index in range(len(raw_monitors)):
        if index in ids:
            continue
        # 0 is reserved for "primary"
        candidate = max(used_ids, default=0) + 1
        ids[index] = candidate
        used_ids.add(candidate)

    primary_index = next(
        (index for index in range(len(raw_monitors)) if index in matched and matched[index].is_primary),
        0,
    )

    records = []
    for index, raw in enumerate(raw_monitors):
        setting = matched.get(index)
        is_primary = index == primary_index
        records.append(
            MonitorRecord(
                id=ids[index],
                name=f"Display {ids[index]}",
                is_primary=is_primary,
                x=raw["left"],
                y=raw["top"],
                width=raw["width"],
                height=raw["height"],
                scale_factor=_scale_factor(raw, setting) if setting else 1.0,
                position=classify_position(raw["left"], is_primary),
            )
        )
    return records


def build_monitor_records(
    raw_monitors: List[Dict[str, int]],
    settings: Optional[List[DisplaySetting]],
) -> List[MonitorRecord]:
    """
    Combine the raw and canonical stages into monitor records.

    Args:
        raw_monitors: MSS geometry in enumeration order
        settings: OS display settings, or None when the query degraded

    Returns:
        List[MonitorRecord]: Records in enumeration order, exactly one primary
    """
    if not raw_monitors:
        return []
    if not settings:
        return _fallback_records(raw_monitors)
    return _canonical_records(raw_monitors, settings)


def enumerate_monitors() -> List[MonitorRecord]:
    """
    Enumerate all connected monitors with canonical ids.

    Returns:
        List[MonitorRecord]: Monitor records in enumeration order
    """
    raw_monitors = get_raw_monitors()
    if not raw_monitors:
        logger.warning("No monitors reported by the capture backend")
        return []

    settings = query_display_settings()
    records = build_monitor_records(raw_monitors, settings)
    logger.info(
        f"Enumerated {len(records)} monitor(s) "
        f"({'display settings' if settings else 'fallback numbering'})"
    )
    return records


# Resolution ----------------------------------------------------------------

def get_primary(monitors: Sequence[MonitorRecord]) -> Optional[MonitorRecord]:
    for monitor in monitors:
        if monitor.is_primary:
            return monitor
    return monitors[0] if monitors else None


def resolve_identifier(
    identifier: MonitorIdentifier,
    monitors: Sequence[MonitorRecord],
) -> Optional[MonitorRecord]:
    """Resolve a parsed identifier against an enumeration."""
    if isinstance(identifier, Primary):
        return get_primary(monitors)
    if isinstance(identifier, ById):
        for monitor in monitors:
            if monitor.id == identifier.value:
                return monitor
        return None
    return None


def resolve_monitor(
    identifier: Union[int, str, None],
    monitors: Optional[Sequence[MonitorRecord]] = None,
) -> Optional[MonitorRecord]:
    """
    Resolve any supported identifier form to a monitor record.

    Args:
        identifier: 0 / "primary" / "main" for the primary monitor, any other
            number or a string containing one for a canonical display number
        monitors: Enumeration to resolve against; enumerated when omitted

    Returns:
        Optional[MonitorRecord]: The monitor, or None when nothing matches
    """
    if monitors is None:
        monitors = enumerate_monitors()
    parsed = parse_identifier(identifier)
    monitor = resolve_identifier(parsed, monitors)
    if monitor is None:
        logger.info(f"Monitor identifier {identifier!r} did not resolve ({parsed})")
    return monitor


def describe_monitors(monitors: Sequence[MonitorRecord]) -> str:
    """Short ``id: WxH`` listing used in not-found messages."""
    return ", ".join(f"{m.id}: {m.resolution}" for m in monitors)


def layout_left_to_right(monitors: Sequence[MonitorRecord]) -> List[MonitorRecord]:
    """Monitors in visual order, independent of id order."""
    return sorted(monitors, key=lambda m: (m.x, m.y))


def find_monitor_for_window(
    bounds: Rect,
    monitors: Sequence[MonitorRecord],
) -> Optional[MonitorRecord]:
    """
    Find the monitor that shows a window.

    The monitor containing the window centre wins. A centre that falls in a
    gap between monitors picks the monitor with the largest overlap, and a
    window that overlaps nothing maps to the primary monitor.

    Args:
        bounds: Window bounds in global coordinates
        monitors: Enumerated monitors

    Returns:
        Optional[MonitorRecord]: Target monitor, None only if monitors is empty
    """
    center_x, center_y = bounds.center
    for monitor in monitors:
        if monitor.bounds.contains_point(center_x, center_y):
            return monitor

    best = max(monitors, key=lambda m: intersection_area(m.bounds, bounds), default=None)
    if best is not None and intersection_area(best.bounds, bounds) > 0:
        return best

    return get_primary(monitors)
