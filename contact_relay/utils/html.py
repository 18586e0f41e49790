"""HTML helpers for embedding user-supplied text in email bodies."""

_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
})


def escape_html(text: str) -> str:
    """Replace ``& < > " '`` with their HTML entities. Everything else is left as is."""
    return text.translate(_HTML_ESCAPES)


def escape_multiline(text: str) -> str:
    """Escape text and turn newlines into ``<br>`` line breaks"""
    return escape_html(text).replace("\n", "<br>")
