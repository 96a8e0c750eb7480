"""Document tools: decrypt, count, split and convert PDF files."""

from .base import DocumentTools, MarkupConverter, Renderer
from .converter import Pdf2HtmlConverter, WkhtmltopdfRenderer
from .models import PageRange, Segment
from .pdf import PyMuPDFDocumentTools
from .splitter import plan_page_ranges, split_document

__all__ = [
    "DocumentTools",
    "MarkupConverter",
    "PageRange",
    "Pdf2HtmlConverter",
    "PyMuPDFDocumentTools",
    "Renderer",
    "Segment",
    "WkhtmltopdfRenderer",
    "plan_page_ranges",
    "split_document",
]
