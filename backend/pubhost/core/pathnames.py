"""Pathname codec — flat storage keys <-> (category, name) <-> view routes.

A pathname such as ``lessons/algebra.html`` is the only thing the store
knows about. The category (``lessons``) and name (``algebra.html``) are
derived from it and never stored separately.
"""

from __future__ import annotations

HTML_EXTENSIONS = (".html", ".htm")
VIEW_PREFIX = "/view"


def decompose(pathname: str) -> tuple[str | None, str]:
    """Split a pathname into ``(category, name)``.

    All segments but the last form the category, so categories may nest
    (``a/b/c.html`` -> ``("a/b", "c.html")``). A single segment has no category.
    Store keys never start with ``/``; a leading slash yields no category
    rather than an empty one.
    """
    parts = pathname.split("/")
    category = "/".join(parts[:-1]) or None
    return category, parts[-1]


def compose(category: str | None, name: str) -> str:
    """Inverse of :func:`decompose`."""
    return f"{category}/{name}" if category else name


def is_html_name(name: str) -> bool:
    return name.endswith(HTML_EXTENSIONS)


def strip_html_extension(name: str) -> str:
    for ext in HTML_EXTENSIONS:
        if name.endswith(ext):
            return name[: -len(ext)]
    return name


def to_view_route(category: str | None, name: str) -> str:
    """Public, extension-less address of a document."""
    basename = strip_html_extension(name)
    if category:
        return f"{VIEW_PREFIX}/{category}/{basename}"
    return f"{VIEW_PREFIX}/{basename}"


def view_candidates(path: str) -> list[str]:
    """Stored pathnames a requested view path can refer to, in lookup order.

    ``.html`` and ``.htm`` are always re-appended first, so the route of
    ``notes.htm.html`` (``/view/notes.htm``) finds that document rather than
    ``notes.htm``. A path that already names an HTML file is tried last.
    """
    path = path.strip("/")
    candidates = [path + ext for ext in HTML_EXTENSIONS]
    if is_html_name(path):
        candidates.append(path)
    return candidates
