import re
from typing import NamedTuple, Optional

# Non-greedy runs excluding ']'; searched, not anchored, so surrounding text is tolerated
LINK_DESC_RE = re.compile(r'\[\[([^\]]+?)\]\[([^\]]+?)\]\]')
LINK_RE = re.compile(r'\[\[([^\]]+?)\]\]')


class LinkParts(NamedTuple):
    link: Optional[str]
    description: Optional[str]


def decompose_link(text: Optional[str]) -> LinkParts:
    """Split an Org link ``[[target][description]]`` or ``[[target]]``.

    The link-with-description form is tried first. Text without either form
    yields ``LinkParts(None, None)``.
    """
    if not text:
        return LinkParts(None, None)
    m = LINK_DESC_RE.search(text)
    if m:
        return LinkParts(m.group(1), m.group(2))
    m = LINK_RE.search(text)
    if m:
        return LinkParts(m.group(1), None)
    return LinkParts(None, None)
