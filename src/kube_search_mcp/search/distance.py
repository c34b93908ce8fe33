"""Edit distance helpers for fuzzy name matching."""


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``.

    Two-row dynamic programming; O(len(a) * len(b)) time, O(len(b)) space.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def bounded_levenshtein(a: str, b: str, max_distance: int) -> int | None:
    """Distance between ``a`` and ``b``, or None once it must exceed ``max_distance``.

    The length difference is a lower bound on the distance, so the full
    computation is skipped when that alone is too large.
    """
    if abs(len(a) - len(b)) > max_distance:
        return None
    distance = levenshtein(a, b)
    return distance if distance <= max_distance else None


def distance_score(distance: int, query: str, name: str) -> float:
    """Similarity in [0, 1] from an edit distance; 1.0 means identical."""
    longest = max(len(query), len(name))
    if longest == 0:
        return 1.0
    return 1.0 - distance / longest
