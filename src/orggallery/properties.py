from typing import Any, Optional

from .document import OrgDocument

ARTIST = 'ARTIST'
SOURCE = 'SOURCE'

_NO_DEFAULT: Any = object()


def property_key(prefix: str, field: str) -> str:
    """Namespaced property key, e.g. ('IMAGE', 'artist') -> 'IMAGE_ARTIST'."""
    return f"{prefix}_{field}".upper()


def resolve_property(
    document: OrgDocument, key: str, pos: int, default: Any = _NO_DEFAULT
) -> Optional[Any]:
    """Look up ``key`` on the heading at ``pos``.

    A present value, including an empty string, is returned verbatim. Otherwise
    ``default`` is returned when given, else None.
    """
    value = document.get_property(key, pos)
    if value is not None:
        return value
    if default is not _NO_DEFAULT:
        return default
    return None
