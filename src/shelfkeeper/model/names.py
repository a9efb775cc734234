# ABOUTME: Converts between ordered lists of person names and display strings.
# ABOUTME: "A, B and C" is the interchange format for authors and editors.

_AND = " and "
_COMMA = ", "


def format_name_list(names: list[str]) -> str:
    """Join names for display: "A", "A and B", "A, B and C".

    There is no Oxford comma before the final "and". An empty list
    formats as an empty string.
    """
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return _COMMA.join(names[:-1]) + _AND + names[-1]


def parse_name_list(text: str) -> list[str]:
    """Split a display string back into an ordered list of names.

    Heuristic inverse of format_name_list: splits on the first " and ",
    then splits everything before it on ", ". Names that themselves
    contain " and " or ", " are not recoverable.

    Args:
        text: A formatted name string, possibly empty.

    Returns:
        The names in display order; empty for an empty string.
    """
    if not text:
        return []

    segments = text.split(_AND)
    if len(segments) == 1:
        return segments

    # Anything after a second " and " is dropped, as it always has been.
    return [*segments[0].split(_COMMA), segments[1]]
