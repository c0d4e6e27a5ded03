"""Directory rules: which account applies to a working directory.

A rule table maps a directory prefix to an account nickname. Matching is
done on a normalised form of both sides:

1. **Case folding** -- ``C:\\Proj`` and ``c:\\proj`` are the same key.
2. **Separator unification** -- ``/`` and ``\\`` are interchangeable, so a
   rule written on Windows as ``C:/proj`` matches ``C:\\proj\\sub``.

Rules are tried longest key first and the first prefix hit wins, so a rule
for ``/a/b`` shadows one for ``/a`` inside ``/a/b``. Matching is on plain
string prefixes; a rule for ``/a`` therefore also covers ``/ab``.
"""

from __future__ import annotations

from typing import Mapping, Optional


def normalize_path(path: str) -> str:
    """Return the comparison form of *path*.

    Example::

        normalize_path("C:\\\\Users\\\\Me/Work")  # "c:/users/me/work"
    """
    return path.lower().replace("\\", "/")


def resolve(rules: Mapping[str, str], current_dir: str) -> Optional[str]:
    """Return the nickname bound to the longest rule prefixing *current_dir*.

    Args:
        rules: Directory prefix -> nickname. Nicknames are returned as-is
            even if no such account is registered.
        current_dir: The directory git was invoked from.

    Returns:
        The matching nickname, or ``None`` when the table is empty,
        *current_dir* is empty, or no rule matches.

    Example::

        resolve({"/a": "X", "/a/b": "Y"}, "/a/b/c")  # "Y"
        resolve({"C:/Proj": "Work"}, "c:\\\\proj\\\\sub")  # "Work"
    """
    if not rules or not current_dir:
        return None

    target = normalize_path(current_dir)
    # sorted() is stable, so equal-length keys keep mapping order.
    ordered = sorted(rules.items(), key=lambda item: len(item[0]), reverse=True)
    for prefix, nickname in ordered:
        key = normalize_path(prefix)
        if key and target.startswith(key):
            return nickname
    return None


def rules_for(rules: Mapping[str, str], nickname: str) -> list[str]:
    """Return the directories bound to *nickname*, sorted."""
    return sorted(path for path, name in rules.items() if name == nickname)
