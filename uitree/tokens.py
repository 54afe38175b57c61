"""Lookup tables mapping layout enums to CSS keywords."""

from __future__ import annotations

import logging
from typing import Dict, Literal, Mapping

logger = logging.getLogger(__name__)

Direction = Literal["row", "column"]
Alignment = Literal["top", "start", "center", "bottom", "end", "stretch", "baseline"]
Justify = Literal["start", "center", "end", "between", "around", "evenly"]

ALIGNMENT: Dict[str, str] = {
    "top": "start",
    "start": "start",
    "center": "center",
    "bottom": "end",
    "end": "end",
    "stretch": "stretch",
    "baseline": "baseline",
}

JUSTIFY: Dict[str, str] = {
    "start": "justify-start",
    "center": "justify-center",
    "end": "justify-end",
    "between": "justify-between",
    "around": "justify-around",
    "evenly": "justify-evenly",
}

# Distributions that space children on their own.
DISTRIBUTED_JUSTIFY = frozenset({"between", "around", "evenly"})

# Cross-axis sizing that gives a distributed stack room to act.
FULL_CROSS_AXIS: Dict[str, str] = {"column": "h-full", "row": "w-full"}
STACK_DIRECTION: Dict[str, str] = {"column": "flex-col", "row": "flex-row"}
STACK_GAP_PREFIX: Dict[str, str] = {"column": "space-y", "row": "space-x"}

RESPONSIVE_GRID_COLUMNS: Dict[int, str] = {
    1: "grid-cols-1",
    2: "grid-cols-1 sm:grid-cols-2",
    3: "grid-cols-1 sm:grid-cols-2 lg:grid-cols-3",
    4: "grid-cols-1 sm:grid-cols-2 lg:grid-cols-3 xl:grid-cols-4",
    5: "grid-cols-1 sm:grid-cols-2 md:grid-cols-3 lg:grid-cols-4 xl:grid-cols-5",
    6: "grid-cols-2 sm:grid-cols-3 lg:grid-cols-4 xl:grid-cols-6",
}

GRID_ALIGN: Dict[str, str] = {
    "start": "items-start",
    "center": "items-center",
    "end": "items-end",
    "stretch": "items-stretch",
}

GRID_AUTO_ROWS: Dict[str, str] = {
    "min": "auto-rows-min",
    "max": "auto-rows-max",
    "fr": "auto-rows-fr",
}

GRID_AUTO_FLOW: Dict[str, str] = {
    "row": "grid-flow-row",
    "col": "grid-flow-col",
    "column": "grid-flow-col",
    "dense": "grid-flow-dense",
    "row_dense": "grid-flow-row-dense",
    "col_dense": "grid-flow-col-dense",
    "column_dense": "grid-flow-col-dense",
}

BREAKPOINTS = ("base", "sm", "md", "lg", "xl", "2xl")

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


def lookup(table: Mapping[str, str], value: object, default: str, *, kind: str) -> str:
    """Map ``value`` through ``table``, falling back to ``default`` for unknown input."""

    key = str(value).lower() if value is not None else None
    if key in table:
        return table[key]
    logger.debug("Unknown %s %r; falling back to %r", kind, value, default)
    return default


def alignment_keyword(value: object) -> str:
    return lookup(ALIGNMENT, value, "center", kind="alignment")


def justify_class(value: object) -> str:
    return lookup(JUSTIFY, value, "justify-start", kind="justify")


def is_distributed(value: object) -> bool:
    return value is not None and str(value).lower() in DISTRIBUTED_JUSTIFY


__all__ = [
    "ALIGNMENT",
    "Alignment",
    "BREAKPOINTS",
    "DISTRIBUTED_JUSTIFY",
    "Direction",
    "FULL_CROSS_AXIS",
    "GRID_ALIGN",
    "GRID_AUTO_FLOW",
    "GRID_AUTO_ROWS",
    "JUSTIFY",
    "Justify",
    "RESPONSIVE_GRID_COLUMNS",
    "STACK_DIRECTION",
    "STACK_GAP_PREFIX",
    "VOID_ELEMENTS",
    "alignment_keyword",
    "is_distributed",
    "justify_class",
    "lookup",
]
