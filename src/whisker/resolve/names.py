"""Candidate filenames for a part, most specific first.

    build_candidate_names("order", "pending", extension=".py")
    -> ("order-pending.py", "pending.py", "order.py")

    build_candidate_names("order", extension=".py")
    -> ("order.py",)

"""

from whisker._types import Filenames, Slug


def build_candidate_names(
    slug: Slug,
    name: str | None = None,
    *,
    extension: str,
) -> Filenames:
    """Return the filenames to try for *slug* and optional *name*.

    The name-only candidate is skipped entirely when *name* is empty, so a
    bare ``".py"`` never shows up in the list.

    """
    files: list[str] = []
    if name:
        files.append(f"{slug}-{name}{extension}")
        files.append(f"{name}{extension}")
    files.append(f"{slug}{extension}")
    return tuple(files)
