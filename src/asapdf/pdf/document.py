"""Document assembly: the fixed top-level sequence of a listing PDF.

header -> page tree id reserved -> pages (driven by the carriage engine)
-> fonts -> page tree -> catalog -> xref -> trailer
"""

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional, Union

from ..carriage import CarriageEngine
from ..config import Config
from ..errors import ConfigError
from ..utils.file_ops import read_lines
from ..utils.pdf_helpers import fmt_g
from ..validation import validate_config
from .decoration import PageDecorator
from .objects import ObjectTable, OutputSink
from .pages import PageRegistry, PageStream

logger = logging.getLogger(__name__)

PDF_VERSION = "1.4"
# A comment of four bytes >= 128 marks the file as binary for transfer tools
BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"
HEADER_COMMENT = "% PDF: Adobe Portable Document Format\n"


@dataclass
class DocumentSummary:
    pages: int
    objects: int
    bytes_written: int
    lines: int = 0


class Document:
    """One output PDF. Owns the object table, page registry and page stream."""

    def __init__(self, config: Config, out: BinaryIO):
        self.config = config
        self.sink = OutputSink(out)
        self.objects = ObjectTable(self.sink)
        self.registry = PageRegistry()
        self.tree_id: Optional[int] = None
        self.catalog_id: Optional[int] = None
        self.pages: Optional[PageStream] = None

    def write_header(self) -> None:
        self.sink.write(f"%PDF-{PDF_VERSION}\n")
        self.sink.write(BINARY_MARKER)
        self.sink.write(HEADER_COMMENT)

    def reserve_page_tree(self) -> int:
        # Allocated before any page so each page object can name its parent
        self.tree_id = self.objects.allocate()
        decorator = PageDecorator(self.config, self.sink.write)
        self.pages = PageStream(
            self.objects, self.registry, self.config, self.tree_id, decorate=decorator
        )
        return self.tree_id

    def write_font(self, name: str) -> int:
        font_id = self.objects.allocate()
        self.objects.write_object(
            font_id, f"<</Type/Font/Subtype/Type1/BaseFont/{name}/Encoding/WinAnsiEncoding>>"
        )
        return font_id

    def write_page_tree(self, body_font_id: int, heading_font_id: int) -> None:
        layout = self.config.layout
        style = self.config.style
        # drain() empties the registry, so take the count first
        count = self.registry.count
        kids = ''.join(f"{page_id} 0 R\n" for page_id in self.registry.drain())
        self.objects.begin_object(self.tree_id)
        self.sink.write(
            f"<</Type /Pages /Count {count}\n"
            f"/Kids[\n{kids}]\n"
            f"/Resources<</ProcSet[/PDF/Text]/Font<<"
            f"/F0 {body_font_id} 0 R\n"
            f"/F1 {heading_font_id} 0 R\n"
            f"/F2<</Type /Font /Subtype /Type1 /BaseFont /{style.heading_font}"
            f" /Encoding /WinAnsiEncoding >> >>\n"
            f">>/MediaBox [ 0 0 {fmt_g(layout.page_width)} {fmt_g(layout.page_height)} ]\n"
            f">>\nendobj\n"
        )

    def write_catalog(self) -> int:
        self.catalog_id = self.objects.allocate()
        self.objects.write_object(self.catalog_id, f"<</Type /Catalog /Pages {self.tree_id} 0 R>>")
        return self.catalog_id

    def write_trailer(self, xref_start: int) -> None:
        self.sink.write(
            f"trailer\n<<\n/Size {self.objects.count}\n/Root {self.catalog_id} 0 R\n>>\n"
        )
        self.sink.write(f"startxref\n{xref_start}\n%%EOF\n")

    def build(self, lines: Iterable[str]) -> DocumentSummary:
        self.write_header()
        self.reserve_page_tree()
        engine = CarriageEngine(self.pages, self.config)
        line_count = engine.run(lines)

        body_font_id = self.write_font(self.config.style.body_font)
        heading_font_id = self.write_font(self.config.style.heading_font)
        page_count = self.registry.count
        self.write_page_tree(body_font_id, heading_font_id)
        self.write_catalog()
        xref_start = self.objects.write_xref()
        self.write_trailer(xref_start)

        logger.info(
            "wrote %d pages, %d objects, %d bytes",
            page_count,
            self.objects.count - 1,
            self.sink.offset,
        )
        return DocumentSummary(
            pages=page_count,
            objects=self.objects.count - 1,
            bytes_written=self.sink.offset,
            lines=line_count,
        )


def build_document(lines: Iterable[str], config: Config, out: BinaryIO) -> DocumentSummary:
    """Validate ``config`` and write one complete PDF for ``lines`` to ``out``.

    Raises ConfigError when validation reports errors; nothing is written then.
    """
    result = validate_config(config)
    if not result.ok():
        details = '; '.join(f"{i.path}: {i.message}" for i in result.errors())
        raise ConfigError(f"Invalid settings: {details}")
    return Document(config, out).build(lines)


def convert_text(text: Union[str, bytes], config: Optional[Config] = None) -> bytes:
    """Convert in-memory text to PDF bytes."""
    if isinstance(text, str):
        text = text.encode('latin-1', errors='replace')
    out = io.BytesIO()
    build_document(read_lines(io.BytesIO(text)), config or Config(), out)
    return out.getvalue()
