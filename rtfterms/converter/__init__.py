"""RTF and HTML converters for terms-and-conditions content."""

from .html_to_rtf import html_to_rtf
from .parse_html import parse_html
from .rtf_to_document import rtf_to_document
from .rtf_to_html import decode_document, rtf_to_html

__all__ = [
    "decode_document",
    "html_to_rtf",
    "parse_html",
    "rtf_to_document",
    "rtf_to_html",
]
