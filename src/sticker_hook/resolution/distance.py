"""Levenshtein edit distance."""

from __future__ import annotations


def edit_distance(source: str, target: str) -> int:
    """Minimum number of single-character insertions, deletions or
    substitutions turning ``source`` into ``target``.

    Not normalized by length: short queries sit closer to short names.
    """
    if source == target:
        return 0
    if not source:
        return len(target)
    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    for i, s_char in enumerate(source, start=1):
        current = [i]
        for j, t_char in enumerate(target, start=1):
            cost = 0 if s_char == t_char else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]
