"""PDF writing package.

- objects: byte-counting sink, object ids and the xref table
- pages: page registry and the page content-stream lifecycle
- decoration: bands, titles, page numbers and banner
- document: top-level assembly of one document
"""

from .objects import ObjectTable, OutputSink
from .pages import Page, PageRegistry, PageState, PageStream
from .decoration import PageDecorator
from .document import Document, DocumentSummary, build_document, convert_text

__all__ = [
    # Objects and xref
    'ObjectTable',
    'OutputSink',
    # Pages
    'Page',
    'PageRegistry',
    'PageState',
    'PageStream',
    # Furniture
    'PageDecorator',
    # Assembly
    'Document',
    'DocumentSummary',
    'build_document',
    'convert_text',
]
