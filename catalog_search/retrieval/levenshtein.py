"""Levenshtein edit distance for typo-tolerant matching."""


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``.

    Uses the full (len(b)+1) x (len(a)+1) dynamic programming table. Catalog
    names are short, so the quadratic cost stays small.

    Args:
        a: Source string
        b: Target string

    Returns:
        Number of insertions, deletions or substitutions
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            if a[i - 1] == b[j - 1]:
                matrix[j][i] = matrix[j - 1][i - 1]
            else:
                matrix[j][i] = min(
                    matrix[j - 1][i - 1] + 1,  # substitution
                    matrix[j][i - 1] + 1,  # insertion
                    matrix[j - 1][i] + 1,  # deletion
                )

    return matrix[len(b)][len(a)]
