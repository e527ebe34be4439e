"""Importer interfaces for clippings exports."""

from .clippings_importer import ClippingsImporter, ClippingsImportError

__all__ = ["ClippingsImporter", "ClippingsImportError"]
