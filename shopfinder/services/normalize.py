from __future__ import annotations


def normalize_name(value: str) -> str:
    return value.strip().lower()


def names_match(a: str, b: str) -> bool:
    """Two names refer to the same item iff their normalized forms are equal."""
    return normalize_name(a) == normalize_name(b)


def name_contains(name: str, query: str) -> bool:
    """Substring match on normalized forms. A blank query matches nothing."""
    needle = normalize_name(query)
    if not needle:
        return False
    return needle in normalize_name(name)


__all__ = ["normalize_name", "names_match", "name_contains"]
