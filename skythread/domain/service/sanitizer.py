"""Escaping of untrusted text for embedding in markup."""

import html


def sanitize(raw: object) -> str:
    """Escape ``raw`` so it is safe as element text or a quoted attribute.

    None becomes the empty string; other non-string values are converted
    with ``str()`` first. Never raises.
    """
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else str(raw)
    return html.escape(text, quote=True)
