"""Import token helpers.

An import token names a pre-existing rule as ``<zone_id>/<rule_id>``.
"""

from typing import Tuple

from errors import MalformedImportTokenError

SEPARATOR = "/"


def build_import_token(zone_id: str, rule_id: str) -> str:
    return f"{zone_id}{SEPARATOR}{rule_id}"


def parse_import_token(token: str) -> Tuple[str, str]:
    """
    Split an import token into (zone_id, rule_id).

    Only the first separator splits, so rule ids may themselves contain
    ``/``. Both parts must be non-empty.

    Raises:
        MalformedImportTokenError: If the token does not have two non-empty parts.
    """
    parts = token.split(SEPARATOR, 1)
    if len(parts) != 2 or not all(parts):
        raise MalformedImportTokenError(token)
    return parts[0], parts[1]
