"""Edit-distance string similarity used for fuzzy matching.

Both functions are quadratic in input length. They are meant for single
words and tags, never whole documents.
"""


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings (case-sensitive).

    Insertion, deletion and substitution each cost 1.

    Examples:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("", "abc")
        3
    """
    rows = len(a) + 1
    cols = len(b) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,  # deletion
                matrix[i][j - 1] + 1,  # insertion
                matrix[i - 1][j - 1] + cost,  # substitution
            )

    return matrix[-1][-1]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1], case-insensitive.

    Returns ``1 - distance / max(len(a), len(b))``, or 1.0 when both
    strings are empty.

    Examples:
        >>> similarity("Recipe", "recipe")
        1.0
        >>> similarity("recipe", "recipes")
        0.8571428571428572
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    # Case folding can lengthen some characters, so clamp at zero
    return max(0.0, 1 - edit_distance(a.lower(), b.lower()) / max_len)
