# src/boutique/reports/documents.py
"""
RENDERED DOCUMENT TYPES
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class ReportKind(str, Enum):
    SALES = "sales"
    EXPENSES = "expenses"
    BALANCE = "balance"


class RenderMode(str, Enum):
    HTML = "html"
    LAYOUT = "layout"


class DrawCommand(BaseModel):
    """
    One absolutely-positioned drawing step, in millimetres from the top-left
    corner of an A4 page.

    ops: text, line, image, font, color, page
    """
    model_config = ConfigDict(frozen=True)

    op: str
    x: float = 0
    y: float = 0
    x2: float = 0
    y2: float = 0
    width: float = 0
    height: float = 0
    text: str = ''
    size: float = 0
    rgb: Tuple[int, int, int] = (0, 0, 0)


class RenderedDocument(BaseModel):
    """A report or invoice ready for export."""
    kind: str
    title: str
    filename: str
    mode: RenderMode
    html: Optional[str] = None
    commands: List[DrawCommand] = Field(default_factory=list)
    totals: Dict[str, Union[int, float]] = Field(default_factory=dict)

    @property
    def extension(self) -> str:
        return 'html' if self.mode == RenderMode.HTML else 'pdf'

    def texts(self) -> List[str]:
        """Text of every text command, in drawing order."""
        return [command.text for command in self.commands if command.op == 'text']
