import random

import pytest

from knowledge_graph.graph.catalog import GraphCatalog
from knowledge_graph.graph.interaction import CURSOR_DEFAULT, CURSOR_POINTER, InteractionController
from knowledge_graph.graph.simulation import ForceSimulation
from tests.conftest import place


@pytest.fixture
def controller(trio_sim: ForceSimulation) -> InteractionController:
    place(trio_sim, sys=(100, 100), a=(300, 300), b=(100, 300))
    return InteractionController(trio_sim)


def test_click_selects_and_click_again_deselects(controller: InteractionController) -> None:
    controller.pointer_down(100, 100)
    controller.pointer_up()
    assert controller.selected == "sys"
    controller.pointer_down(100, 100)
    controller.pointer_up()
    assert controller.selected is None


def test_click_other_node_replaces_selection(controller: InteractionController) -> None:
    controller.pointer_down(100, 100)
    controller.pointer_up()
    controller.pointer_down(300, 300)
    controller.pointer_up()
    assert controller.selected == "a"


def test_click_on_background_clears_selection_without_drag(controller: InteractionController) -> None:
    controller.select("b")
    assert controller.pointer_down(200, 200) is None
    assert controller.selected is None
    assert controller.drag is None


def test_drag_keeps_grab_offset_and_zeroes_velocity(controller: InteractionController) -> None:
    sim = controller.simulation
    controller.pointer_down(305, 290)
    assert (controller.drag.offset_x, controller.drag.offset_y) == (5, -10)

    sim.node("a").vx = 4.0
    controller.pointer_move(150, 160)
    a = sim.node("a")
    assert (a.x, a.y) == (145, 170)
    assert (a.vx, a.vy) == (0, 0)

    sim.tick(controller.dragged_id)
    assert (a.x, a.y) == (145, 170)


def test_pointer_up_ends_drag_but_keeps_selection(controller: InteractionController) -> None:
    controller.pointer_down(300, 300)
    controller.pointer_up()
    assert controller.drag is None
    assert controller.selected == "a"
    controller.pointer_move(10, 10)
    assert (controller.simulation.node("a").x, controller.simulation.node("a").y) == (300, 300)


def test_hover_updates_only_without_drag(controller: InteractionController) -> None:
    controller.pointer_move(100, 300)
    assert controller.hovered == "b"
    assert controller.cursor == CURSOR_POINTER

    controller.pointer_move(200, 200)
    assert controller.hovered is None
    assert controller.cursor == CURSOR_DEFAULT

    controller.pointer_down(300, 300)
    controller.pointer_move(100, 300)
    assert controller.hovered is None


def test_active_prefers_selected_over_hovered(controller: InteractionController) -> None:
    controller.pointer_move(100, 300)
    assert controller.active_id == "b"
    controller.select("a")
    assert controller.active_id == "a"
    assert controller.highlight_set() == {"a", "sys"}
    controller.select(None)
    assert controller.active_id == "b"


def test_no_highlight_without_active_node(controller: InteractionController) -> None:
    assert controller.highlight_set() is None


def test_callbacks_fire_on_change_only(controller: InteractionController) -> None:
    seen = []
    controller.on_selection_changed = seen.append
    controller.select("a")
    controller.select("a")
    controller.select(None)
    assert seen == ["a", None]


def test_selection_info_for_side_panel(controller: InteractionController) -> None:
    assert controller.selection_info() is None
    controller.select("sys")
    info = controller.selection_info()
    assert info.node.label == "System"
    assert info.node.group == "core"
    assert [n.id for n in info.connections] == ["a", "b"]
    assert info.connection_count == 2


def test_end_to_end_select_after_layout(trio_catalog: GraphCatalog) -> None:
    sim = ForceSimulation(trio_catalog, rng=random.Random(11))
    sim.reset(400, 400)
    for _ in range(100):
        sim.tick()
    controller = InteractionController(sim)
    a = sim.node("a")
    controller.pointer_down(a.x, a.y)
    controller.pointer_up()
    assert controller.selected == "a"
    assert controller.highlight_set() == {"sys", "a"}
    assert controller.selection_info().connection_count == 1
