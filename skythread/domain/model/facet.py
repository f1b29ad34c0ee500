"""Rich-text facets.

A facet annotates a byte range of a post's text. Offsets index the UTF-8
encoding of the text, not its characters. Only the link, mention and tag
features are understood; anything else parses as UnknownFeature.
"""

from typing import Annotated, Any, ClassVar, Union

from pydantic import BeforeValidator, Discriminator, Field, Tag

from skythread.domain.model.common import (
    ByteOffset,
    DomainModel,
    OptionalStr,
    mapping_items_or_empty,
    mapping_or_empty,
)
from skythread.domain.value import FeatureType


class FacetIndex(DomainModel):
    """Half-open byte range ``[byte_start, byte_end)``.

    Offsets that are missing or not integral numbers parse as None and make
    the facet invalid.
    """

    byte_start: ByteOffset = None
    byte_end: ByteOffset = None


class LinkFeature(DomainModel):
    """Hyperlink to ``uri``."""

    feature_kind: ClassVar[str] = "link"

    uri: OptionalStr = None


class MentionFeature(DomainModel):
    """Mention of the account identified by ``did``."""

    feature_kind: ClassVar[str] = "mention"

    did: OptionalStr = None


class TagFeature(DomainModel):
    """Hashtag; ``tag`` may or may not carry the leading '#'."""

    feature_kind: ClassVar[str] = "tag"

    tag: OptionalStr = None


class UnknownFeature(DomainModel):
    """Feature of a type this service does not render."""

    feature_kind: ClassVar[str] = "unknown"

    type: OptionalStr = Field(default=None, alias="$type")


_FEATURE_KINDS = {
    FeatureType.LINK.value: LinkFeature.feature_kind,
    FeatureType.MENTION.value: MentionFeature.feature_kind,
    FeatureType.TAG.value: TagFeature.feature_kind,
}


def _feature_kind(value: Any) -> str:
    if isinstance(value, dict):
        feature_type = value.get("$type")
        if not isinstance(feature_type, str):
            return UnknownFeature.feature_kind
        return _FEATURE_KINDS.get(feature_type, UnknownFeature.feature_kind)
    return getattr(value, "feature_kind", UnknownFeature.feature_kind)


FacetFeature = Annotated[
    Union[
        Annotated[LinkFeature, Tag("link")],
        Annotated[MentionFeature, Tag("mention")],
        Annotated[TagFeature, Tag("tag")],
        Annotated[UnknownFeature, Tag("unknown")],
    ],
    Discriminator(_feature_kind),
]


class Facet(DomainModel):
    """Annotation of a byte range with one or more features."""

    index: Annotated[FacetIndex, BeforeValidator(mapping_or_empty)] = FacetIndex()
    features: Annotated[
        list[FacetFeature], BeforeValidator(mapping_items_or_empty)
    ] = []

    @property
    def byte_start(self) -> int | None:
        return self.index.byte_start

    @property
    def byte_end(self) -> int | None:
        return self.index.byte_end
