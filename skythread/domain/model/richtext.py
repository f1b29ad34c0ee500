"""Segmented rich-text spans."""

from skythread.domain.model.common import DomainModel
from skythread.domain.value import SpanKind


class Span(DomainModel):
    """A run of sanitized text, optionally linking to ``href``.

    ``href`` is set for link, mention and tag spans and is already sanitized
    for use inside a quoted attribute.
    """

    kind: SpanKind
    content: str
    href: str | None = None

    @property
    def is_link(self) -> bool:
        return self.kind is not SpanKind.TEXT
