import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import NoHeadingError, PositionError

HEADLINE_RE = re.compile(r'^(?P<stars>\*+)\s+(?P<title>.*?)\s*$')
TAGS_RE = re.compile(r'(?:^|\s+)(?P<tags>:(?:[\w@#%]+:)+)$')
PRIORITY_RE = re.compile(r'^\[#[A-Za-z0-9]\]\s*')
PLANNING_RE = re.compile(r'^\s*(?:SCHEDULED|DEADLINE|CLOSED):')
PROP_BEGIN_RE = re.compile(r'^\s*:PROPERTIES:\s*$', re.I)
PROP_END_RE = re.compile(r'^\s*:END:\s*$', re.I)
PROP_LINE_RE = re.compile(r'^\s*:(?P<key>[^:\s]+):(?:\s+(?P<value>.*?))?\s*$')
KEYWORD_RE = re.compile(r'^#\+(?P<key>[^:\s]+):\s*(?P<value>.*?)\s*$')

DEFAULT_TODO_KEYWORDS = ('TODO', 'DONE')
TODO_META_KEYS = ('TODO', 'SEQ_TODO', 'TYP_TODO')


@dataclass
class OrgHeading:
    line: int
    level: int
    item: str
    tags: Tuple[str, ...] = ()
    todo: Optional[str] = None
    props: Dict[str, str] = field(default_factory=dict)
    body_start: int = 0
    # Exclusive line index of the next heading (any level)
    body_end: int = 0
    # Exclusive line index of the next heading at this level or shallower
    subtree_end: int = 0


def _todo_keywords(meta_lines: List[Tuple[str, str]]) -> Tuple[str, ...]:
    words = list(DEFAULT_TODO_KEYWORDS)
    for key, value in meta_lines:
        if key not in TODO_META_KEYS:
            continue
        for w in value.split():
            if w == '|':
                continue
            # Fast-access and logging annotations, e.g. WAIT(w@/!)
            w = w.split('(', 1)[0]
            if w and w not in words:
                words.append(w)
    return tuple(words)


def _split_headline(title: str, todo_keywords: Tuple[str, ...]) -> Tuple[Optional[str], str, Tuple[str, ...]]:
    """Split headline text into (todo keyword, item text, tags)."""
    tags: Tuple[str, ...] = ()
    m = TAGS_RE.search(title)
    if m:
        tags = tuple(t for t in m.group('tags').split(':') if t)
        title = title[: m.start()].rstrip()
    todo = None
    head, _, rest = title.partition(' ')
    if head in todo_keywords:
        todo = head
        title = rest.lstrip()
    title = PRIORITY_RE.sub('', title, count=1)
    return todo, title, tags


class OrgDocument:
    """A parsed Org outline addressed by 0-based line positions.

    The document keeps an optional restriction (see ``narrowed``) that bounds
    ``entries``; all other accessors see the whole document.
    """

    def __init__(self, lines: List[str]):
        self.lines = [ln.rstrip('\r\n') for ln in lines]
        if self.lines and self.lines[0].startswith('\ufeff'):
            self.lines[0] = self.lines[0][1:]
        self.meta: Dict[str, str] = {}
        self.headings: List[OrgHeading] = []
        self.point = 0
        self._by_line: Dict[int, OrgHeading] = {}
        self._restriction: Optional[Tuple[int, int]] = None
        self._parse()

    @classmethod
    def from_string(cls, text: str) -> 'OrgDocument':
        # Only \n ends a line, so positions match from_file
        lines = text.split('\n')
        if lines and lines[-1] == '':
            lines.pop()
        return cls(lines)

    @classmethod
    def from_file(cls, path) -> 'OrgDocument':
        with open(path, encoding='utf-8-sig', newline='') as f:
            return cls.from_string(f.read())

    def _parse(self):
        meta_lines: List[Tuple[str, str]] = []
        starts: List[Tuple[int, int, str]] = []
        for idx, line in enumerate(self.lines):
            m = HEADLINE_RE.match(line)
            if m:
                starts.append((idx, len(m.group('stars')), m.group('title')))
                continue
            if not starts:
                km = KEYWORD_RE.match(line.lstrip())
                if km:
                    key = km.group('key').upper()
                    meta_lines.append((key, km.group('value')))
                    self.meta[key] = km.group('value')
        todo_keywords = _todo_keywords(meta_lines)

        total = len(self.lines)
        for n, (idx, level, title) in enumerate(starts):
            todo, item, tags = _split_headline(title, todo_keywords)
            body_end = starts[n + 1][0] if n + 1 < len(starts) else total
            subtree_end = total
            for later_idx, later_level, _ in starts[n + 1 :]:
                if later_level <= level:
                    subtree_end = later_idx
                    break
            heading = OrgHeading(
                line=idx,
                level=level,
                item=item,
                tags=tags,
                todo=todo,
                body_end=body_end,
                subtree_end=subtree_end,
            )
            heading.body_start = self._read_section_header(heading)
            self.headings.append(heading)
            self._by_line[idx] = heading

    def _read_section_header(self, heading: OrgHeading) -> int:
        """Consume planning line and property drawer; return first body line."""
        i = heading.line + 1
        end = heading.body_end
        if i < end and PLANNING_RE.match(self.lines[i]):
            i += 1
        if i < end and PROP_BEGIN_RE.match(self.lines[i]):
            props: Dict[str, str] = {}
            j = i + 1
            while j < end and not PROP_END_RE.match(self.lines[j]):
                pm = PROP_LINE_RE.match(self.lines[j])
                if pm:
                    props.setdefault(pm.group('key').upper(), pm.group('value') or '')
                j += 1
            if j < end:
                heading.props = props
                return j + 1
            # Unterminated drawer is plain body text
        return i

    # Host interface

    def _check(self, pos: int) -> int:
        if not isinstance(pos, int) or pos < 0 or pos > max(len(self.lines) - 1, 0):
            raise PositionError(f"Position {pos!r} outside document of {len(self.lines)} lines")
        return pos

    def heading(self, pos: int) -> OrgHeading:
        """Return the heading on line ``pos``; ``NoHeadingError`` if it is not one."""
        self._check(pos)
        h = self._by_line.get(pos)
        if h is None:
            raise NoHeadingError(f"Line {pos + 1} is not a heading")
        return h

    def is_at_heading(self, pos: int) -> bool:
        return self._check(pos) in self._by_line

    def previous_heading(self, pos: int) -> int:
        """Position of the heading on or before ``pos``.

        Every heading of a parsed file is visible, so this is the nearest
        preceding heading.
        """
        self._check(pos)
        found = None
        for h in self.headings:
            if h.line > pos:
                break
            found = h.line
        if found is None:
            raise NoHeadingError(f"No heading found before line {pos + 1}")
        return found

    def heading_level(self, pos: int) -> int:
        return self.heading(pos).level

    def raw_item_text(self, pos: int) -> str:
        return self.heading(pos).item

    def tags(self, pos: int) -> Tuple[str, ...]:
        return self.heading(pos).tags

    def get_property(self, key: str, pos: int) -> Optional[str]:
        """Node-local property lookup; no inheritance from ancestors."""
        return self.heading(pos).props.get(key.upper())

    def body_text(self, pos: int) -> str:
        h = self.heading(pos)
        return '\n'.join(self.lines[h.body_start : h.body_end]).strip()

    @contextmanager
    def narrowed(self, pos: int) -> Iterator['OrgDocument']:
        """Restrict ``entries`` to the subtree at ``pos`` for the ``with`` block."""
        h = self.heading(pos)
        saved = self._restriction
        self._restriction = (h.line, h.subtree_end)
        try:
            yield self
        finally:
            self._restriction = saved

    @property
    def restriction(self) -> Optional[Tuple[int, int]]:
        return self._restriction

    def entries(self, level: Optional[int] = None, tag: Optional[str] = None) -> List[int]:
        """Heading positions in document order inside the current restriction.

        ``level`` matches exactly; ``tag`` matches a local tag.
        """
        start, end = self._restriction or (0, len(self.lines))
        out = []
        for h in self.headings:
            if h.line < start:
                continue
            if h.line >= end:
                break
            if level is not None and h.level != level:
                continue
            if tag is not None and tag not in h.tags:
                continue
            out.append(h.line)
        return out


def parse_org(path) -> OrgDocument:
    return OrgDocument.from_file(path)
