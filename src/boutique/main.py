# src/boutique/main.py
"""
APPLICATION WIRING
Config -> logging -> storage -> state -> services -> report orchestrator
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from boutique.core.config import AppConfig, load_config
from boutique.core.logger import log_exception, setup_logging
from boutique.core.state import AppState
from boutique.core.storage import StorageManager
from boutique.integrations import FileExporter, SystemSharer
from boutique.reports.orchestrator import ExportResult, ReportOrchestrator
from boutique.repositories.store_repo import StoreRepository
from boutique.services import DashboardService, ExpenseService, ProductService, SaleService, SettingsService

logger = logging.getLogger(__name__)


class BoutiqueApp:
    """The shop application: owns storage, state, services and the report engine."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        now: Optional[Callable[[], datetime]] = None,
        sharer: Any = None
    ):
        self.config = config or load_config()
        self.now = now

        self.storage = StorageManager(self.config.data_dir)
        self.repo = StoreRepository(self.storage)
        self.state = AppState(self.repo)

        self.products = ProductService(self.state, now)
        self.sales = SaleService(self.state, now)
        self.expenses = ExpenseService(self.state, now)
        self.settings = SettingsService(self.state)
        self.dashboard = DashboardService(self.state)

        self.exporter = FileExporter(self.config.exports_dir)
        self.sharer = sharer if sharer is not None else SystemSharer()
        self.reports = ReportOrchestrator(
            locale=self.config.locale,
            render_mode=self.config.render_mode,
            now=now,
            exporter=self.exporter,
            sharer=self.sharer
        )

    def startup(self):
        """Initialize logging and storage, then load the shop data."""
        setup_logging(self.config.log_dir, self.config.log_level)
        logger.info("Starting Boutique Manager...")
        try:
            self.storage.initialize_storage()
            self.state.load()
        except Exception as e:
            log_exception(e, f"startup with data dir {self.config.data_dir}")
            raise
        logger.info(f"Boutique Manager started (data: {self.config.data_dir})")

    def shutdown(self):
        logger.info("Shutting down Boutique Manager...")
        self.storage.close_all_connections()

    def generate_report(self, kind: Any, period: Any) -> ExportResult:
        """Produce a report over the current records and export it."""
        document = self.reports.produce_report(
            kind, period, self.state.sales, self.state.expenses, self.state.settings
        )
        return self.reports.export(document)

    def generate_invoice(self, sale_id: str) -> ExportResult:
        document = self.reports.produce_invoice(sale_id, self.state.sales, self.state.settings)
        return self.reports.export(document)

    def __enter__(self):
        self.startup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
