"""Stack and grid layouts built from the token tables."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List

from .elements import text
from .node import Block, Node, attribute_kwargs, create, with_children
from .security import safe_grid_cols_class
from .tokens import (
    BREAKPOINTS,
    FULL_CROSS_AXIS,
    GRID_ALIGN,
    GRID_AUTO_FLOW,
    GRID_AUTO_ROWS,
    RESPONSIVE_GRID_COLUMNS,
    STACK_DIRECTION,
    STACK_GAP_PREFIX,
    Alignment,
    Direction,
    Justify,
    alignment_keyword,
    is_distributed,
    justify_class,
    lookup,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoFit:
    """Auto-fit grid columns with a minimum item width in pixels."""

    min_width: int

    def __post_init__(self) -> None:
        if int(self.min_width) <= 0:
            raise ValueError(f"min_width must be positive, got {self.min_width!r}")


def _spacing_value(spacing: Any) -> float:
    try:
        return float(spacing)
    except (TypeError, ValueError):
        logger.debug("Unusable spacing %r; treating as 0", spacing)
        return 0.0


def _spacing_token(spacing: Any) -> str:
    value = _spacing_value(spacing)
    return str(int(value)) if value.is_integer() else str(value)


def _build(
    classes: List[str],
    children: Any,
    block: Block | None,
    attributes: dict,
) -> Node:
    attributes = attribute_kwargs(attributes)
    extra = attributes.pop("class", None)
    node = create("div", attributes=attributes, block=block)
    node.add_class(*classes, extra)
    if children is not None:
        with_children(node, children)
    return node


def stack_classes(
    direction: Direction,
    *,
    alignment: Alignment | str | None = "center",
    justify: Justify | str | None = "start",
    spacing: Any = 8,
) -> List[str]:
    """Compute the flex classes for a stack.

    Distributed justification (between, around, evenly) spaces the children on
    its own, so the gap class is omitted and the cross axis is stretched
    instead.
    """

    if direction not in STACK_DIRECTION:
        logger.debug("Unknown stack direction %r; using column", direction)
        direction = "column"
    classes = [
        "flex",
        STACK_DIRECTION[direction],
        f"items-{alignment_keyword(alignment)}",
        justify_class(justify),
    ]
    if is_distributed(justify):
        classes.append(FULL_CROSS_AXIS[direction])
    elif _spacing_value(spacing) > 0:
        classes.append(f"{STACK_GAP_PREFIX[direction]}-{_spacing_token(spacing)}")
    return classes


def stack(
    direction: Direction,
    children: Any = None,
    *,
    alignment: Alignment | str | None = "center",
    justify: Justify | str | None = "start",
    spacing: Any = 8,
    block: Block | None = None,
    **attributes: Any,
) -> Node:
    classes = stack_classes(direction, alignment=alignment, justify=justify, spacing=spacing)
    return _build(classes, children, block, attributes)


def vstack(children: Any = None, **options: Any) -> Node:
    return stack("column", children, **options)


def hstack(children: Any = None, **options: Any) -> Node:
    return stack("row", children, **options)


def zstack(children: Any = None, *, block: Block | None = None, **attributes: Any) -> Node:
    return _build(["relative"], children, block, attributes)


def grid_column_classes(
    columns: int | str | Mapping[str, Any] | AutoFit | None,
    *,
    min_item_width: int | None = None,
    responsive: bool = True,
) -> List[str]:
    """Resolve grid columns through exactly one path: auto-fit, breakpoint map, or count."""

    if min_item_width is not None:
        columns = AutoFit(min_item_width)

    if isinstance(columns, AutoFit):
        return [f"grid-cols-[repeat(auto-fit,minmax({int(columns.min_width)}px,1fr))]"]

    if isinstance(columns, Mapping):
        classes = []
        for breakpoint, count in columns.items():
            if breakpoint not in BREAKPOINTS:
                logger.debug("Unknown breakpoint %r ignored", breakpoint)
                continue
            cols = safe_grid_cols_class(count)
            classes.append(cols if breakpoint == "base" else f"{breakpoint}:{cols}")
        return classes or ["grid-cols-1"]

    if responsive and isinstance(columns, int) and columns in RESPONSIVE_GRID_COLUMNS:
        return RESPONSIVE_GRID_COLUMNS[columns].split()
    return [safe_grid_cols_class(columns)]


def grid(
    children: Any = None,
    *,
    columns: int | str | Mapping[str, Any] | AutoFit | None = 2,
    spacing: Any = 8,
    min_item_width: int | None = None,
    responsive: bool = True,
    row_gap: Any = None,
    column_gap: Any = None,
    align: str = "stretch",
    justify: str = "start",
    auto_rows: str | None = None,
    auto_flow: str | None = None,
    masonry: bool = False,
    block: Block | None = None,
    **attributes: Any,
) -> Node:
    classes = ["grid"]
    classes.extend(
        grid_column_classes(columns, min_item_width=min_item_width, responsive=responsive)
    )

    row_gap = spacing if row_gap is None else row_gap
    column_gap = spacing if column_gap is None else column_gap
    if _spacing_value(row_gap) == _spacing_value(column_gap):
        classes.append(f"gap-{_spacing_token(row_gap)}")
    else:
        if _spacing_value(column_gap) > 0:
            classes.append(f"gap-x-{_spacing_token(column_gap)}")
        if _spacing_value(row_gap) > 0:
            classes.append(f"gap-y-{_spacing_token(row_gap)}")

    classes.append(lookup(GRID_ALIGN, align, "items-stretch", kind="grid alignment"))
    classes.append(justify_class(justify))

    if auto_rows:
        if str(auto_rows) in GRID_AUTO_ROWS:
            classes.append(GRID_AUTO_ROWS[str(auto_rows)])
        else:
            classes.append(f"auto-rows-[{auto_rows}]")
    if auto_flow:
        if str(auto_flow) in GRID_AUTO_FLOW:
            classes.append(GRID_AUTO_FLOW[str(auto_flow)])
        else:
            logger.debug("Unknown grid auto_flow %r ignored", auto_flow)

    node = _build(classes, children, block, attributes)
    if masonry:
        node.data({"masonry": "true"})
    logger.debug("grid classes: %s", " ".join(node.classes))
    return node


def spacer(min_length: int | None = None) -> Node:
    node = create("div", "", {"class": "flex-1"})
    if min_length:
        node.set_style(f"min-height: {int(min_length)}px")
    return node


def divider(**attributes: Any) -> Node:
    attributes = attribute_kwargs(attributes)
    extra = attributes.pop("class", None)
    return create("hr", attributes=attributes).add_class("border-t border-gray-300", extra)


ItemRenderer = Callable[[Any, int], Any]


def _collection_block(items: Iterable[Any], render_item: ItemRenderer | None) -> Block:
    values = list(items)

    def block() -> list:
        if render_item is None:
            return [text(str(item)) for item in values]
        return [render_item(item, index) for index, item in enumerate(values)]

    return block


def vstack_collection(
    items: Iterable[Any],
    render_item: ItemRenderer | None = None,
    *,
    spacing: Any = 8,
    **options: Any,
) -> Node:
    """Stack one child per item, built by ``render_item(item, index)`` or as text."""

    return vstack(spacing=spacing, block=_collection_block(items, render_item), **options)


def hstack_collection(
    items: Iterable[Any],
    render_item: ItemRenderer | None = None,
    *,
    spacing: Any = 8,
    **options: Any,
) -> Node:
    return hstack(spacing=spacing, block=_collection_block(items, render_item), **options)


def grid_collection(
    items: Iterable[Any],
    render_item: ItemRenderer | None = None,
    *,
    columns: Any = 3,
    spacing: Any = 8,
    **options: Any,
) -> Node:
    return grid(
        columns=columns,
        spacing=spacing,
        block=_collection_block(items, render_item),
        **options,
    )


__all__ = [
    "AutoFit",
    "divider",
    "grid",
    "grid_collection",
    "grid_column_classes",
    "hstack",
    "hstack_collection",
    "spacer",
    "stack",
    "stack_classes",
    "vstack",
    "vstack_collection",
    "zstack",
]
