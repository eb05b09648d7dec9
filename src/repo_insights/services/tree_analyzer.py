"""Tree analysis: count files and locate the first file of a given type.

Operates only on what the tree query expanded: directories whose children
were not fetched contribute nothing.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from repo_insights.domain.entities import TreeEntry


def iter_files(entries: Sequence[TreeEntry]) -> Iterator[TreeEntry]:
    """Yield file entries in depth-first pre-order."""
    for entry in entries:
        if entry.is_file:
            yield entry
        elif entry.children:
            yield from iter_files(entry.children)


def count_files(entries: Sequence[TreeEntry]) -> int:
    """Return the number of file entries reachable in *entries*."""
    return sum(1 for _ in iter_files(entries))


def extension_of(name: str) -> str:
    """Return the text after the last ``.`` (the whole name if there is none)."""
    return name[name.rfind(".") + 1 :]


def find_first_path_of_type(
    entries: Sequence[TreeEntry], file_type: str | None
) -> str | None:
    """Return the path of the first file whose extension equals *file_type*."""
    if file_type is None:
        return None
    return next(
        (entry.path for entry in iter_files(entries) if extension_of(entry.name) == file_type),
        None,
    )
