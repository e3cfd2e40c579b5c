"""Page registry and page content-stream lifecycle.

A page's content stream is written as::

    S 0 obj
    << /Length L 0 R >>
    stream
    ...
    endstream
    endobj
    L 0 obj
    <byte length>
    endobj
    P 0 obj
    <</Type/Page/Parent T 0 R/Contents S 0 R>>
    endobj

The length object L is referenced before its value is known and its body is
written after the stream, so nothing already emitted is ever rewritten.
"""

import enum
import logging
from typing import Callable, Iterator, List, Optional

from ..config import Config, LineNumberMode
from ..errors import PageRegistryError, PageStateError
from ..utils.pdf_helpers import fmt_g
from .objects import ObjectTable

logger = logging.getLogger(__name__)


class PageRegistry:
    """Ordered ids of finished pages, drained once into the page tree."""

    def __init__(self):
        self._ids: List[int] = []
        self.count = 0
        self.drained = False

    def append(self, page_id: int) -> None:
        if self.drained:
            raise PageRegistryError("Page registry already drained")
        self._ids.append(page_id)
        self.count += 1

    def drain(self) -> Iterator[int]:
        """Yield page ids in append order and release them. Only once."""
        if self.drained:
            raise PageRegistryError("Page registry already drained")
        self.drained = True
        ids, self._ids = self._ids, []
        yield from ids


class PageState(enum.Enum):
    IDLE = 'idle'
    OPEN = 'open'
    CLOSED = 'closed'
    DONE = 'done'


class Page:
    """Transient per-page state; lives from open_page to close_page.

    The vertical cursor is kept as a depth below the first text position,
    counted in (possibly half) line heights, so overstrike moves return to
    exactly the same baseline.
    """

    def __init__(self, number: int, stream_id: int, length_id: int, top_y: float,
                 line_height: float):
        self.number = number
        self.stream_id = stream_id
        self.length_id = length_id
        self.stream_start = 0
        self.top_y = top_y
        self.line_height = line_height
        self.depth = 0.0

    @property
    def y(self) -> float:
        return self.top_y - self.depth * self.line_height

    @property
    def at_top(self) -> bool:
        return self.depth <= 0

    def move_down(self, lines: float = 1.0) -> None:
        self.depth += lines

    def move_up(self, lines: float = 1.0) -> None:
        self.depth -= lines


class PageStream:
    """Opens and closes page content streams for one document."""

    def __init__(self, objects: ObjectTable, registry: PageRegistry, config: Config,
                 tree_id: int, decorate: Optional[Callable[['Page'], None]] = None):
        self.objects = objects
        self.sink = objects.sink
        self.registry = registry
        self.config = config
        self.tree_id = tree_id
        self.decorate = decorate
        self.state = PageState.IDLE
        self.page: Optional[Page] = None
        self.page_count = 0
        self.line_count = 0

    def write(self, data: str) -> None:
        if self.state is not PageState.OPEN:
            raise PageStateError("No page is open")
        self.sink.write(data)

    def open_page(self) -> Page:
        if self.state is PageState.OPEN:
            raise PageStateError("A page is already open")
        if self.state is PageState.DONE:
            raise PageStateError("Document pages are finished")
        layout = self.config.layout
        stream_id = self.objects.allocate()
        length_id = self.objects.allocate()
        self.page_count += 1
        if self.config.style.line_numbers is LineNumberMode.PER_PAGE:
            self.line_count = 0
        page = Page(self.page_count, stream_id, length_id, layout.top_y, layout.line_height)

        self.objects.begin_object(stream_id)
        self.sink.write(f"<< /Length {length_id} 0 R >>\nstream\n")
        page.stream_start = self.sink.offset
        self.page = page
        self.state = PageState.OPEN

        if self.decorate is not None:
            self.decorate(page)

        self.sink.write(
            f"BT\n/F0 {fmt_g(layout.body_font_size)} Tf\n"
            f"{fmt_g(layout.margin_left)} {fmt_g(layout.top_y)} Td\n"
            f"{fmt_g(layout.line_height)} TL\n"
        )
        logger.debug("page %d opened: stream %d, length %d", page.number, stream_id, length_id)
        return page

    def close_page(self) -> int:
        """Finish the open page and return its page object id."""
        if self.state is not PageState.OPEN or self.page is None:
            raise PageStateError("No page is open")
        page = self.page
        page_id = self.objects.allocate()
        self.registry.append(page_id)

        self.sink.write("ET\n")
        stream_len = self.sink.offset - page.stream_start
        self.sink.write("endstream\nendobj\n")
        self.objects.write_object(page.length_id, str(stream_len))
        self.objects.write_object(
            page_id,
            f"<</Type/Page/Parent {self.tree_id} 0 R/Contents {page.stream_id} 0 R>>",
        )
        self.page = None
        self.state = PageState.CLOSED
        logger.debug("page %d closed: object %d, %d content bytes", page.number, page_id, stream_len)
        return page_id

    def new_page(self) -> Page:
        self.close_page()
        return self.open_page()

    def finish(self) -> None:
        if self.state is PageState.OPEN:
            self.close_page()
        self.state = PageState.DONE
