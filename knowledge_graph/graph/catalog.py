"""knowledge_graph.graph.catalog

Static graph configuration: node catalog, edge catalog and group palette.

The catalog is plain data. It can be built in code (`default_catalog()`),
from a dict, or from a JSON file with the same shape that `snapshot()`
produces::

    {
      "core_group": "core",
      "default_color": "#737B8C",
      "groups": {"core": "#2463EB", ...},
      "nodes": [{"id": "system", "label": "System", "group": "core", "radius": 28}, ...],
      "edges": [{"source": "system", "target": "react"}, ...]
    }
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Set, Tuple, Union

from .model import GraphEdge, NodeSpec

logger = logging.getLogger("knowledge_graph.catalog")

DEFAULT_NODE_COLOR = "#737B8C"

GROUP_COLORS: Dict[str, str] = {
    "core": "#2463EB",
    "frontend": "#7C3BED",
    "backend": "#21C45D",
    "bots": "#E21D4B",
    "tools": "#F59F0A",
    "services": "#17A4BA",
}


class CatalogError(ValueError):
    """Raised when a catalog source is malformed."""


@dataclass(frozen=True)
class GraphCatalog:
    nodes: Tuple[NodeSpec, ...]
    edges: Tuple[GraphEdge, ...]
    group_colors: Dict[str, str] = field(default_factory=lambda: dict(GROUP_COLORS))
    core_group: str = "core"
    default_color: str = DEFAULT_NODE_COLOR

    def color_for(self, group: str) -> str:
        return self.group_colors.get(group, self.default_color)

    def connected(self, node_id: str) -> Set[str]:
        """The node itself plus every node joined to it by one edge."""
        result = {node_id}
        for e in self.edges:
            if e.source == node_id:
                result.add(e.target)
            if e.target == node_id:
                result.add(e.source)
        return result

    def neighbours(self, node_id: str) -> List[str]:
        """Directly connected node ids in edge order, without repeats."""
        seen: List[str] = []
        for e in self.edges:
            other = e.other(node_id)
            if other is not None and other != node_id and other not in seen:
                seen.append(other)
        return seen

    def snapshot(self) -> Dict[str, Any]:
        return {
            "core_group": self.core_group,
            "default_color": self.default_color,
            "groups": dict(self.group_colors),
            "nodes": [
                {"id": n.id, "label": n.label, "group": n.group, "radius": n.radius}
                for n in self.nodes
            ],
            "edges": [{"source": e.source, "target": e.target} for e in self.edges],
        }


def _node_from_dict(raw: Any, index: int) -> NodeSpec:
    if not isinstance(raw, dict):
        raise CatalogError(f"node #{index} is not an object")
    try:
        node_id = str(raw["id"])
        radius = float(raw["radius"])
    except KeyError as e:
        raise CatalogError(f"node #{index} is missing {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise CatalogError(f"node {raw.get('id')!r} has an invalid radius") from e
    if not math.isfinite(radius) or radius <= 0:
        raise CatalogError(f"node {node_id!r} must have a positive finite radius")
    return NodeSpec(
        id=node_id,
        label=str(raw.get("label", node_id)),
        group=str(raw.get("group", "")),
        radius=radius,
    )


def _edge_from_dict(raw: Any, index: int) -> GraphEdge:
    if not isinstance(raw, dict):
        raise CatalogError(f"edge #{index} is not an object")
    try:
        return GraphEdge(source=str(raw["source"]), target=str(raw["target"]))
    except KeyError as e:
        raise CatalogError(f"edge #{index} is missing {e.args[0]!r}") from e


def catalog_from_dict(data: Dict[str, Any]) -> GraphCatalog:
    if not isinstance(data, dict):
        raise CatalogError("catalog root must be an object")
    nodes = [_node_from_dict(raw, i) for i, raw in enumerate(data.get("nodes") or [])]
    ids = set()
    for n in nodes:
        if n.id in ids:
            raise CatalogError(f"duplicate node id {n.id!r}")
        ids.add(n.id)
    edges = [_edge_from_dict(raw, i) for i, raw in enumerate(data.get("edges") or [])]
    dangling = [e for e in edges if e.source not in ids or e.target not in ids]
    if dangling:
        # Se aceptan: la simulación y el render las omiten
        logger.warning("%d edge(s) reference unknown nodes and will be skipped", len(dangling))
    groups = data.get("groups")
    if groups is None:
        groups = dict(GROUP_COLORS)
    elif not isinstance(groups, dict):
        raise CatalogError("'groups' must map group names to colours")
    return GraphCatalog(
        nodes=tuple(nodes),
        edges=tuple(edges),
        group_colors={str(k): str(v) for k, v in groups.items()},
        core_group=str(data.get("core_group", "core")),
        default_color=str(data.get("default_color", DEFAULT_NODE_COLOR)),
    )


def load_catalog(path: Union[str, Path]) -> GraphCatalog:
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise CatalogError(f"{p}: not valid UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"{p}: invalid JSON ({e})") from e
    catalog = catalog_from_dict(raw)
    logger.info("Loaded catalog %s: %d nodes, %d edges", p, len(catalog.nodes), len(catalog.edges))
    return catalog


def _edges(pairs: Iterable[Tuple[str, str]]) -> Tuple[GraphEdge, ...]:
    return tuple(GraphEdge(a, b) for a, b in pairs)


def default_catalog() -> GraphCatalog:
    """Skill graph shown on the portfolio's about page."""
    nodes = (
        NodeSpec("system", "System", "core", 28),
        NodeSpec("react", "React", "frontend", 22),
        NodeSpec("tailwind", "Tailwind", "frontend", 20),
        NodeSpec("html-css", "HTML/CSS", "frontend", 18),
        NodeSpec("ui-design", "UI Design", "frontend", 16),
        NodeSpec("nodejs", "Node.js", "backend", 22),
        NodeSpec("express", "Express", "backend", 20),
        NodeSpec("python", "Python", "backend", 22),
        NodeSpec("database", "Database", "backend", 18),
        NodeSpec("api", "REST API", "backend", 18),
        NodeSpec("discordjs", "Discord.js", "bots", 22),
        NodeSpec("discord-bot", "Discord Bot", "bots", 20),
        NodeSpec("telegram-bot", "Telegram Bot", "bots", 20),
        NodeSpec("chatbot-ai", "AI Chatbot", "bots", 18),
        NodeSpec("moderation", "Moderation", "bots", 16),
        NodeSpec("linux", "Linux/VPS", "tools", 20),
        NodeSpec("bash", "Bash", "tools", 18),
        NodeSpec("npm", "npm", "tools", 16),
        NodeSpec("ssh", "SSH", "tools", 16),
        NodeSpec("security", "Security", "tools", 18),
        NodeSpec("youtube-api", "YouTube API", "services", 16),
        NodeSpec("spotify-api", "Spotify API", "services", 16),
        NodeSpec("marketing", "Marketing", "services", 18),
        NodeSpec("ecommerce", "E-commerce", "services", 18),
    )
    edges = _edges([
        # Hubs
        ("system", "react"), ("system", "nodejs"), ("system", "python"),
        ("system", "discordjs"), ("system", "linux"), ("system", "marketing"),
        # Frontend
        ("react", "tailwind"), ("react", "html-css"), ("react", "ui-design"),
        ("react", "api"), ("react", "ecommerce"),
        ("tailwind", "html-css"), ("tailwind", "ui-design"),
        # Backend
        ("nodejs", "express"), ("nodejs", "database"), ("nodejs", "api"),
        ("nodejs", "npm"), ("nodejs", "discordjs"),
        ("express", "api"), ("express", "database"),
        ("python", "security"), ("python", "bash"), ("python", "api"),
        ("database", "api"),
        # Bots
        ("discordjs", "discord-bot"), ("discord-bot", "moderation"),
        ("discord-bot", "chatbot-ai"), ("discord-bot", "youtube-api"),
        ("discord-bot", "spotify-api"), ("telegram-bot", "chatbot-ai"),
        ("telegram-bot", "nodejs"), ("chatbot-ai", "api"),
        # Tools
        ("linux", "bash"), ("linux", "ssh"), ("linux", "security"),
        ("bash", "ssh"), ("security", "linux"), ("npm", "nodejs"),
        # Services
        ("youtube-api", "api"), ("spotify-api", "api"),
        ("marketing", "ecommerce"), ("ecommerce", "react"), ("ecommerce", "database"),
    ])
    return GraphCatalog(nodes=nodes, edges=edges)
