# src/boutique/reports/pdf_painter.py
"""
PDF PAINTER
Paints layout draw commands onto an A4 reportlab canvas.
"""

import base64
import io
import logging
from typing import Iterable, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdf_canvas

from boutique.reports.documents import DrawCommand

logger = logging.getLogger(__name__)

FONT_NAME = 'Helvetica'
DEFAULT_FONT_SIZE = 12


def _image_reader(data_uri: str) -> Optional[ImageReader]:
    """ImageReader for a base64 data URI, None when it cannot be decoded."""
    try:
        _, encoded = data_uri.split(',', 1)
        return ImageReader(io.BytesIO(base64.b64decode(encoded)))
    except Exception as e:
        logger.warning(f"Logo could not be decoded, drawing without it: {e}")
        return None


def paint_pdf(commands: Iterable[DrawCommand], title: str = '') -> bytes:
    """
    Paint draw commands into a PDF document.

    Args:
        commands: Commands in millimetres from the top-left corner
        title: Document title metadata

    Returns:
        PDF file content
    """
    width, height = A4
    buffer = io.BytesIO()
    c = pdf_canvas.Canvas(buffer, pagesize=A4)
    if title:
        c.setTitle(title)

    font_size = DEFAULT_FONT_SIZE
    c.setFont(FONT_NAME, font_size)

    def top(y_mm: float) -> float:
        return height - y_mm * mm

    for command in commands:
        if command.op == 'text':
            c.drawString(command.x * mm, top(command.y), command.text)
        elif command.op == 'line':
            c.line(command.x * mm, top(command.y), command.x2 * mm, top(command.y2))
        elif command.op == 'font':
            font_size = command.size or DEFAULT_FONT_SIZE
            c.setFont(FONT_NAME, font_size)
        elif command.op == 'color':
            r, g, b = command.rgb
            c.setFillColorRGB(r / 255.0, g / 255.0, b / 255.0)
        elif command.op == 'image':
            image = _image_reader(command.text)
            if image is not None:
                c.drawImage(
                    image,
                    command.x * mm,
                    top(command.y + command.height),
                    width=command.width * mm,
                    height=command.height * mm,
                    preserveAspectRatio=True,
                    mask='auto'
                )
        elif command.op == 'page':
            c.showPage()
            c.setFont(FONT_NAME, font_size)
        else:
            logger.debug(f"Ignoring unknown draw command: {command.op}")

    c.showPage()
    c.save()
    logger.debug(f"Painted PDF ({width:.0f}x{height:.0f}pt)")
    return buffer.getvalue()
