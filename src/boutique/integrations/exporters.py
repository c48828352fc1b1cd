"""
FILE EXPORTER
Writes rendered documents into the exports directory:
HTML documents as .html, layout documents painted to .pdf.
"""

import logging
from pathlib import Path

from boutique.core.exceptions import ExportError
from boutique.reports.documents import RenderedDocument, RenderMode
from boutique.reports.pdf_painter import paint_pdf

logger = logging.getLogger(__name__)


class FileExporter:
    """Saves documents as files."""

    def __init__(self, exports_dir: Path):
        self.exports_dir = Path(exports_dir)

    def path_for(self, document: RenderedDocument) -> Path:
        return self.exports_dir / f"{document.filename}.{document.extension}"

    def export(self, document: RenderedDocument) -> Path:
        """
        Write the document and return its path.

        Raises:
            ExportError: The file could not be written
        """
        path = self.path_for(document)
        try:
            self.exports_dir.mkdir(parents=True, exist_ok=True)
            if document.mode == RenderMode.HTML:
                path.write_text(document.html or '', encoding='utf-8')
            else:
                path.write_bytes(paint_pdf(document.commands, title=document.title))
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}") from e

        logger.info(f"Document exported: {path}")
        return path
