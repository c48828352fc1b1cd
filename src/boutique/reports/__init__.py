"""Report engine: period filter, aggregates, renderers and orchestrator."""

from .documents import DrawCommand, RenderedDocument, RenderMode, ReportKind
from .orchestrator import ExportResult, ReportOrchestrator
from .periods import FilterPeriod, filter_by_period

__all__ = [
    'DrawCommand',
    'RenderedDocument',
    'RenderMode',
    'ReportKind',
    'ExportResult',
    'ReportOrchestrator',
    'FilterPeriod',
    'filter_by_period',
]
