"""
Services package for the Freight LR Document Service
"""

from .lr_document_generator import lr_document_generator, LRDocumentGenerator, LRDocument
from .lr_document_generator import LRDocumentError, MissingRequiredInputError, LRRenderError
from .logo_loader import prefetch_logos, prefetch_standalone_logo

__all__ = [
    "lr_document_generator",
    "LRDocumentGenerator",
    "LRDocument",
    "LRDocumentError",
    "MissingRequiredInputError",
    "LRRenderError",
    "prefetch_logos",
    "prefetch_standalone_logo"
]
