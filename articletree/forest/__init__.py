"""Parent-pointer records to article forests and back."""

from .builder import (
    FlatEntry,
    build_forest,
    count_nodes,
    descendant_ids,
    find_node,
    flatten,
    iter_nodes,
    option_label,
    parent_options,
)

__all__ = [
    "FlatEntry",
    "build_forest",
    "count_nodes",
    "descendant_ids",
    "find_node",
    "flatten",
    "iter_nodes",
    "option_label",
    "parent_options",
]
