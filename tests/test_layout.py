import pytest
from bs4 import BeautifulSoup

from uitree.elements import text
from uitree.layout import (
    AutoFit,
    divider,
    grid,
    grid_collection,
    hstack,
    hstack_collection,
    spacer,
    stack_classes,
    vstack,
    vstack_collection,
    zstack,
)
from uitree.node import create


def _root(html: str):
    return BeautifulSoup(html, "html.parser").find()


def _classes(node) -> list:
    return _root(node.render()).get("class", [])


def test_distributed_justify_stretches_cross_axis_and_drops_gap():
    classes = _classes(vstack([text("A"), text("B")], justify="between", spacing=4))
    assert "justify-between" in classes
    assert "h-full" in classes
    assert not any(name.startswith("space-y-") for name in classes)


def test_start_justify_keeps_gap():
    classes = _classes(vstack([text("A")], justify="start", spacing=4))
    assert "space-y-4" in classes
    assert "h-full" not in classes


def test_row_stack_uses_width_and_horizontal_gap():
    assert "w-full" in _classes(hstack(justify="evenly"))
    assert _classes(hstack(spacing=2)) == ["flex", "flex-row", "items-center", "justify-start", "space-x-2"]


def test_unknown_alignment_and_justify_fall_back():
    classes = stack_classes("column", alignment="diagonal", justify="sideways")
    assert classes == ["flex", "flex-col", "items-center", "justify-start", "space-y-8"]


def test_alignment_aliases():
    assert "items-start" in stack_classes("row", alignment="top")
    assert "items-end" in stack_classes("row", alignment="bottom")


def test_zero_and_fractional_spacing():
    assert stack_classes("column", spacing=0) == ["flex", "flex-col", "items-center", "justify-start"]
    assert stack_classes("column", spacing=0.5)[-1] == "space-y-0.5"


def test_children_render_once_inside_the_stack():
    def page():
        first = text("A")
        second = text("B")
        return vstack([first, second], spacing=2)

    html = create("main", block=page).render()
    assert html == (
        '<main><div class="flex flex-col items-center justify-start space-y-2">'
        "<span>A</span><span>B</span></div></main>"
    )


def test_stack_accepts_block_and_extra_attributes():
    node = hstack(block=lambda: text("x"), class_="mt-2", id="toolbar")
    root = _root(node.render())
    assert root["id"] == "toolbar"
    assert root["class"][-1] == "mt-2"
    assert root.span.text == "x"


def test_zstack_is_relative():
    assert _classes(zstack([text("a")])) == ["relative"]


def test_grid_responsive_count():
    assert _classes(grid(columns=3)) == [
        "grid",
        "grid-cols-1",
        "sm:grid-cols-2",
        "lg:grid-cols-3",
        "gap-8",
        "items-stretch",
        "justify-start",
    ]


def test_grid_plain_count_and_fallback():
    assert "grid-cols-3" in _classes(grid(columns=3, responsive=False))
    assert "grid-cols-8" in _classes(grid(columns=8))
    assert "grid-cols-1" in _classes(grid(columns=20))


def test_grid_breakpoint_mapping():
    classes = _classes(grid(columns={"base": 1, "md": 3, "huge": 9}))
    assert classes[1:3] == ["grid-cols-1", "md:grid-cols-3"]
    assert not any(name.startswith("huge") for name in classes)


def test_grid_auto_fit_takes_priority():
    classes = _classes(grid(columns=4, min_item_width=200))
    assert "grid-cols-[repeat(auto-fit,minmax(200px,1fr))]" in classes
    assert "sm:grid-cols-2" not in classes
    assert "grid-cols-[repeat(auto-fit,minmax(150px,1fr))]" in _classes(grid(columns=AutoFit(150)))


def test_auto_fit_requires_positive_width():
    with pytest.raises(ValueError):
        AutoFit(0)


def test_grid_gaps_and_rows():
    classes = _classes(grid(row_gap=2, column_gap=6, auto_rows="fr", auto_flow="column_dense"))
    assert "gap-x-6" in classes
    assert "gap-y-2" in classes
    assert "gap-8" not in classes
    assert "auto-rows-fr" in classes
    assert "grid-flow-col-dense" in classes
    assert "auto-rows-[200px]" in _classes(grid(auto_rows="200px"))


def test_grid_masonry_and_alignment():
    root = _root(grid(masonry=True, align="center", justify="between").render())
    assert root["data-masonry"] == "true"
    assert "items-center" in root["class"]
    assert "justify-between" in root["class"]


def test_spacer_and_divider():
    assert spacer().render() == '<div class="flex-1"></div>'
    assert spacer(min_length=20).render() == '<div class="flex-1" style="min-height: 20px"></div>'
    assert divider(class_="my-4").render() == '<hr class="border-t border-gray-300 my-4"/>'


def test_collections_default_to_text_children():
    html = vstack_collection(["a", 2], spacing=0).render()
    assert html == '<div class="flex flex-col items-center justify-start"><span>a</span><span>2</span></div>'


def test_collections_pass_item_and_index():
    node = hstack_collection(["x", "y"], lambda item, index: text(f"{index}:{item}"), spacing=2)
    root = _root(node.render())
    assert "space-x-2" in root["class"]
    assert [span.text for span in root.find_all("span")] == ["0:x", "1:y"]


def test_grid_collection_uses_columns():
    root = _root(grid_collection(range(3), columns=2, class_="mt-4").render())
    assert root["class"][:3] == ["grid", "grid-cols-1", "sm:grid-cols-2"]
    assert root["class"][-1] == "mt-4"
    assert len(root.find_all("span")) == 3
