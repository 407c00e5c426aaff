import json

import pytest

from knowledge_graph.graph.catalog import (
    DEFAULT_NODE_COLOR,
    CatalogError,
    GraphCatalog,
    catalog_from_dict,
    default_catalog,
    load_catalog,
)


def test_connected_set_of_chain_middle(small_catalog: GraphCatalog) -> None:
    assert small_catalog.connected("B") == {"A", "B", "C"}


def test_connected_set_of_isolated_node(small_catalog: GraphCatalog) -> None:
    assert small_catalog.connected("D") == {"D"}


def test_connected_set_of_unknown_id_is_itself(small_catalog: GraphCatalog) -> None:
    assert small_catalog.connected("nope") == {"nope"}


def test_neighbours_follow_edge_order(small_catalog: GraphCatalog) -> None:
    assert small_catalog.neighbours("B") == ["A", "C"]
    assert small_catalog.neighbours("D") == []


def test_neighbours_drop_repeated_edges() -> None:
    catalog = default_catalog()
    # linux-security is declared in both directions
    assert catalog.neighbours("linux").count("security") == 1


def test_unknown_group_falls_back_to_default_color(small_catalog: GraphCatalog) -> None:
    assert small_catalog.color_for("no-such-group") == DEFAULT_NODE_COLOR
    assert small_catalog.color_for("core") == "#2463EB"


def test_default_catalog_shape() -> None:
    catalog = default_catalog()
    assert len(catalog.nodes) == 24
    assert len(catalog.edges) == 43
    ids = {n.id for n in catalog.nodes}
    assert len(ids) == 24
    assert all(e.source in ids and e.target in ids for e in catalog.edges)
    assert [n.id for n in catalog.nodes if n.group == catalog.core_group] == ["system"]


def test_snapshot_can_be_loaded_back(tmp_path) -> None:
    catalog = default_catalog()
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(catalog.snapshot()), encoding="utf-8")

    loaded = load_catalog(path)

    assert loaded.nodes == catalog.nodes
    assert loaded.edges == catalog.edges
    assert loaded.group_colors == catalog.group_colors


def test_dangling_edges_are_kept_for_the_simulation_to_skip() -> None:
    catalog = catalog_from_dict({
        "nodes": [{"id": "a", "label": "A", "group": "core", "radius": 10}],
        "edges": [{"source": "a", "target": "ghost"}],
    })
    assert len(catalog.edges) == 1


def test_missing_groups_use_builtin_palette() -> None:
    catalog = catalog_from_dict({"nodes": [], "edges": []})
    assert catalog.color_for("bots") == "#E21D4B"


@pytest.mark.parametrize(
    "data, message",
    [
        ({"nodes": [{"label": "x", "radius": 5}]}, "missing 'id'"),
        ({"nodes": [{"id": "x", "radius": "big"}]}, "invalid radius"),
        ({"nodes": [{"id": "x", "radius": 0}]}, "positive finite radius"),
        ({"nodes": [{"id": "x", "radius": float("nan")}, {"id": "y", "radius": 10}]}, "positive finite radius"),
        ({"nodes": [{"id": "x", "radius": float("inf")}]}, "positive finite radius"),
        ({"nodes": [{"id": "x", "radius": 5}, {"id": "x", "radius": 6}]}, "duplicate node id"),
        ({"edges": [{"source": "x"}]}, "missing 'target'"),
        ({"groups": ["core"]}, "'groups'"),
        ([1, 2], "root must be an object"),
    ],
)
def test_malformed_catalogs_are_rejected(data, message) -> None:
    with pytest.raises(CatalogError, match=message):
        catalog_from_dict(data)


def test_invalid_json_file(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{nodes:", encoding="utf-8")
    with pytest.raises(CatalogError, match="invalid JSON"):
        load_catalog(path)


def test_nan_radius_from_json_file_is_rejected(tmp_path) -> None:
    path = tmp_path / "nan.json"
    path.write_text('{"nodes": [{"id": "x", "radius": NaN}]}', encoding="utf-8")
    with pytest.raises(CatalogError, match="positive finite radius"):
        load_catalog(path)


def test_non_utf8_file(tmp_path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"nodes": [{"id": "caf\xe9", "radius": 10}]}')
    with pytest.raises(CatalogError, match="not valid UTF-8"):
        load_catalog(path)
