from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Set, Tuple

from articletree.models.article import ArticleNode

LOGGER = logging.getLogger(__name__)

_NODE_FIELDS = ("id", "title", "slug", "parent_id")
OPTION_MARKER = "↳ "


class FlatEntry(NamedTuple):
    node: ArticleNode
    depth: int


def _record_to_mapping(record: Any) -> Dict[str, Any]:
    if isinstance(record, Mapping):
        data = dict(record)
        if "parent_id" not in data and "parentId" in data:
            data["parent_id"] = data.pop("parentId")
        return data
    if is_dataclass(record) and not isinstance(record, type):
        return {item.name: getattr(record, item.name) for item in fields(record)}
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def _make_node(data: Mapping[str, Any]) -> ArticleNode:
    parent_id = data.get("parent_id") or None
    return ArticleNode(
        id=data["id"],
        title=data.get("title") or "",
        slug=data.get("slug") or "",
        parent_id=parent_id,
        payload={key: value for key, value in data.items() if key not in _NODE_FIELDS and key != "children"},
    )


def build_forest(records: Iterable[Any]) -> List[ArticleNode]:
    """Link flat parent-pointer records into an ordered forest of ArticleNode roots.

    Roots keep input order, as do the children of every node. A record whose
    parent id does not resolve inside the same collection becomes a root. When
    an id repeats, the last record wins in the lookup map.
    """

    items = [_record_to_mapping(record) for record in records]
    by_id: Dict[str, ArticleNode] = {}
    for data in items:
        by_id[data["id"]] = _make_node(data)

    roots: List[ArticleNode] = []
    for data in items:
        node = by_id[data["id"]]
        parent_id = node.parent_id
        if parent_id is None:
            roots.append(node)
            continue
        parent = by_id.get(parent_id)
        if parent is None:
            LOGGER.debug("Article %s references missing parent %s; treating as root", node.id, parent_id)
            roots.append(node)
        else:
            parent.add_child(node)
    return roots


def flatten(forest: Sequence[ArticleNode], exclude_id: Optional[str] = None) -> Iterator[FlatEntry]:
    """Yield (node, depth) pairs in pre-order, skipping the subtree rooted at exclude_id."""

    stack: List[Tuple[ArticleNode, int]] = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        if exclude_id is not None and node.id == exclude_id:
            continue
        yield FlatEntry(node, depth)
        stack.extend((child, depth + 1) for child in reversed(node.children))


def iter_nodes(forest: Sequence[ArticleNode]) -> Iterator[ArticleNode]:
    for entry in flatten(forest):
        yield entry.node


def count_nodes(forest: Sequence[ArticleNode]) -> int:
    return sum(1 for _ in iter_nodes(forest))


def find_node(forest: Sequence[ArticleNode], node_id: str) -> Optional[ArticleNode]:
    for node in iter_nodes(forest):
        if node.id == node_id:
            return node
    return None


def descendant_ids(forest: Sequence[ArticleNode], node_id: str) -> Set[str]:
    """Ids of every node strictly below node_id (empty when node_id is absent)."""

    node = find_node(forest, node_id)
    if node is None:
        return set()
    return {child.id for child in iter_nodes(node.children)}


def option_label(title: str, depth: int) -> str:
    prefix = "  " * depth
    if depth > 0:
        prefix += OPTION_MARKER
    return f"{prefix}{title}"


def parent_options(records: Iterable[Any], exclude_id: Optional[str] = None) -> List[Tuple[str, str, int]]:
    """Return (id, label, depth) tuples for an indented parent-selection list."""

    forest = build_forest(records)
    return [
        (entry.node.id, option_label(entry.node.title, entry.depth), entry.depth)
        for entry in flatten(forest, exclude_id=exclude_id)
    ]


__all__ = [
    "FlatEntry",
    "OPTION_MARKER",
    "build_forest",
    "count_nodes",
    "descendant_ids",
    "find_node",
    "flatten",
    "iter_nodes",
    "option_label",
    "parent_options",
]
