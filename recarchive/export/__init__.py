"""Archive export."""

from .exporter import ArchiveExporter

__all__ = ["ArchiveExporter"]
