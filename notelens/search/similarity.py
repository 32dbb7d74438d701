"""String similarity based on Levenshtein edit distance."""


def edit_distance(first: str, second: str) -> int:
    """Levenshtein distance, with insertion, deletion and substitution each costing 1."""
    if not first:
        return len(second)
    if not second:
        return len(first)

    matrix = [[0] * (len(second) + 1) for _ in range(len(first) + 1)]
    for i in range(len(first) + 1):
        matrix[i][0] = i
    for j in range(len(second) + 1):
        matrix[0][j] = j

    for i in range(1, len(first) + 1):
        for j in range(1, len(second) + 1):
            cost = 0 if first[i - 1] == second[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,  # deletion
                matrix[i][j - 1] + 1,  # insertion
                matrix[i - 1][j - 1] + cost,  # substitution
            )

    return matrix[len(first)][len(second)]


def similarity(first: str, second: str) -> float:
    """Normalized similarity in [0, 1]; two empty strings are identical."""
    max_length = max(len(first), len(second))
    if max_length == 0:
        return 1.0
    return 1.0 - edit_distance(first, second) / max_length
