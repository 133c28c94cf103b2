"""Per-conversion rendering state.

A ConversionContext is created for every document and discarded when the
conversion ends. Scoped state (open lists, active inline styles, table
cells, preformatted text) is only changed through context managers so it
is restored on every exit path.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Set, Tuple

from slugify import slugify

from confluence_md.content_converter.assets import AssetCollector
from confluence_md.models.conversion_options import ConversionOptions, ReferenceKind

logger = logging.getLogger(__name__)

BULLET = "bullet"
ORDERED = "ordered"
TASK = "task"

DEFAULT_SLUG = "section"


@dataclass
class ListFrame:
    """An open list and the number of its next item.

    Attributes:
        kind: BULLET, ORDERED or TASK
        next_number: Number given to the next ordered item
    """

    kind: str
    next_number: int = 1

    def next_marker(self) -> str:
        if self.kind != ORDERED:
            return "- "
        marker = f"{self.next_number}. "
        self.next_number += 1
        return marker


@dataclass(frozen=True)
class HeadingEntry:
    level: int
    text: str
    slug: str


@dataclass(frozen=True)
class TocRequest:
    min_level: int = 1
    max_level: int = 6
    inline: bool = False


class ConversionState:
    """Scoped state consulted by handlers while rendering."""

    def __init__(self):
        self.list_frames: List[ListFrame] = []
        self.active_styles: List[str] = []
        self.table_cell_depth = 0
        self.preformatted_depth = 0

    @property
    def list_depth(self) -> int:
        return len(self.list_frames)

    @property
    def in_table_cell(self) -> bool:
        return self.table_cell_depth > 0

    @property
    def preformatted(self) -> bool:
        return self.preformatted_depth > 0

    @contextmanager
    def list_scope(self, kind: str, start: int = 1) -> Iterator[ListFrame]:
        frame = ListFrame(kind, start)
        self.list_frames.append(frame)
        try:
            yield frame
        finally:
            self.list_frames.pop()

    @contextmanager
    def style(self, marker: str) -> Iterator[bool]:
        """Enter an inline style, yielding True if it was already active."""
        already_active = marker in self.active_styles
        self.active_styles.append(marker)
        try:
            yield already_active
        finally:
            self.active_styles.pop()

    @contextmanager
    def table_cell(self) -> Iterator[None]:
        self.table_cell_depth += 1
        try:
            yield
        finally:
            self.table_cell_depth -= 1

    @contextmanager
    def preformatted_scope(self) -> Iterator[None]:
        self.preformatted_depth += 1
        try:
            yield
        finally:
            self.preformatted_depth -= 1

    def snapshot(self) -> Tuple:
        return (
            tuple(frame.kind for frame in self.list_frames),
            tuple(self.active_styles),
            self.table_cell_depth,
            self.preformatted_depth,
        )


class ConversionContext:
    """Everything a handler can see while converting one document.

    Attributes:
        options: Options of the running conversion
        state: Scoped rendering state
        assets: Collector of referenced images and attachments
        headings: Headings rendered so far, in document order
        toc_requests: Table of contents macros awaiting resolution
    """

    def __init__(self, options: ConversionOptions, dispatcher):
        self.options = options
        self.state = ConversionState()
        self.assets = AssetCollector()
        self.headings: List[HeadingEntry] = []
        self.toc_requests: List[TocRequest] = []
        self._dispatcher = dispatcher
        self._slugs: Set[str] = set()
        self._warnings: Dict[str, None] = {}

    def convert(self, node) -> str:
        return self._dispatcher.convert(node, self)

    def convert_children(self, node) -> str:
        return self._dispatcher.convert_children(node, self)

    def resolve_link(self, target: str, kind: ReferenceKind) -> str:
        return self.options.link_rewrite_policy(target, kind)

    def register_slug(self, text: str) -> str:
        """Return a document-unique anchor slug for text.

        Repeated titles get -1, -2, ... suffixes in order of appearance.
        """
        base = slugify(text, separator="-") or DEFAULT_SLUG
        slug = base
        counter = 1
        while slug in self._slugs:
            slug = f"{base}-{counter}"
            counter += 1
        self._slugs.add(slug)
        return slug

    def register_heading(self, level: int, text: str) -> str:
        slug = self.register_slug(text)
        self.headings.append(HeadingEntry(level, text, slug))
        return slug

    def request_toc(self, min_level: int, max_level: int, inline: bool = False) -> int:
        self.toc_requests.append(TocRequest(min_level, max_level, inline))
        return len(self.toc_requests) - 1

    def warn(self, message: str) -> None:
        if message not in self._warnings:
            logger.debug(message)
            self._warnings[message] = None

    @property
    def warnings(self) -> Tuple[str, ...]:
        return tuple(self._warnings)
