"""Export and share targets for rendered documents."""

from .exporters import FileExporter
from .sharing import SystemSharer

__all__ = [
    'FileExporter',
    'SystemSharer',
]
