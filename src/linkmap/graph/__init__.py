"""Relationship-resolution engine."""

from linkmap.graph.index import RelationIndex
from linkmap.graph.markers import partition_by_tier, project
from linkmap.graph.overrides import annotate, load_override_rules
from linkmap.graph.resolver import GraphResolver

__all__ = [
    "GraphResolver",
    "RelationIndex",
    "annotate",
    "load_override_rules",
    "partition_by_tier",
    "project",
]
