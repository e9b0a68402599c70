from __future__ import annotations

from collections.abc import Iterable


def dedup_file_ids(file_ids: Iterable[str]) -> list[str]:
    """Drop repeated identities, keeping the first occurrence of each in order."""
    seen: set[str] = set()
    unique: list[str] = []
    for file_id in file_ids:
        if file_id in seen:
            continue
        seen.add(file_id)
        unique.append(file_id)
    return unique
