"""
Query string handling for route helpers.

Values are returned exactly as written (no percent-decoding), so a test
asserting against a literal query string sees the literal values back.
"""

from typing import Dict, Optional, Tuple


def decode(querystring: Optional[str]) -> Dict[str, Optional[str]]:
    """
    Parse a query string into a ``{key: value}`` mapping.

    - ``None`` or ``""`` yields an empty mapping.
    - Pieces are split on ``&``, then on the first ``=``.
    - A piece with no ``=`` maps its key to ``None``.
    - Empty pieces (``a=1&&b=2``) are skipped.
    - The last occurrence of a duplicate key wins.

    Example:
        decode("flag=true&page=2") -> {"flag": "true", "page": "2"}
    """
    params: Dict[str, Optional[str]] = {}
    if not querystring:
        return params

    for piece in querystring.split("&"):
        if not piece:
            continue
        key, sep, value = piece.partition("=")
        params[key] = value if sep else None
    return params


def split_path(path: str) -> Tuple[str, Optional[str]]:
    """Split ``"/things/1?flag=true"`` into ``("/things/1", "flag=true")``."""
    bare, sep, querystring = path.partition("?")
    return bare, (querystring if sep else None)
