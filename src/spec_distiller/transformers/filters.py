"""Text helpers shared by the transformers and the Jinja2 templates.

These are registered as Jinja2 filters for the page header templates and are
also used directly when composing citation fragments.
"""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_space(text: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim the ends.

    Examples:
        >>> normalize_space("  Hash\\n   Chain ")
        'Hash Chain'
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def escape_html(text: str | None) -> str:
    """Escape ``&``, ``<`` and ``"`` for inclusion in markup or attribute values.

    Examples:
        >>> escape_html('Tom & "Jerry" <3')
        'Tom &amp; &quot;Jerry&quot; &lt;3'
    """
    if not text:
        return ""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace('"', "&quot;")


def join_names(names: list[str]) -> str:
    """Join names as an English list using "&" before the last one.

    Examples:
        >>> join_names(["Robin"])
        'Robin'
        >>> join_names(["Robin", "Juan"])
        'Robin & Juan'
        >>> join_names(["Ann", "Bob", "Cy"])
        'Ann, Bob & Cy'
    """
    names = [n for n in names if n]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} & {names[-1]}"


def mailto(email: str) -> str:
    if not email:
        return ""
    return email if email.startswith("mailto:") else f"mailto:{email}"


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "normalize_space": normalize_space,
    "escape_html": escape_html,
    "join_names": join_names,
    "mailto": mailto,
}
