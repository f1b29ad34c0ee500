"""Domain value objects for thread processing."""

from skythread.domain.value.types import (
    AtUri,
    FeatureType,
    NodeType,
    SortMode,
    SpanKind,
)

__all__ = [
    "AtUri",
    "FeatureType",
    "NodeType",
    "SortMode",
    "SpanKind",
]
