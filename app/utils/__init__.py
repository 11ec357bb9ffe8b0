"""
Utility package initialization and exports
"""

from .pdf_utils import PDFGenerator, format_amount

__all__ = [
    "PDFGenerator",
    "format_amount",
]
