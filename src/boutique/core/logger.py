# src/boutique/core/logger.py
"""
LOGGING SYSTEM FOR AUDIT TRAILS AND DEBUGGING
"""

import logging
import logging.handlers
import sys
import json
from pathlib import Path
from typing import Optional, Dict, Any
import traceback


def setup_logging(log_dir: Path, level: str = "INFO"):
    """
    Setup logging: console, daily app log, error log and audit log.

    Args:
        log_dir: Directory to store log files
        level: Root log level name
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Configure root logger
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_format = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # Main application log (daily rotation)
    app_log_handler = logging.handlers.TimedRotatingFileHandler(
        log_dir / "app.log",
        when="midnight",
        interval=1,
        backupCount=30,
        encoding="utf-8"
    )
    app_log_handler.setLevel(log_level)
    app_format = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    app_log_handler.setFormatter(app_format)
    logger.addHandler(app_log_handler)

    # Error log
    error_handler = logging.FileHandler(log_dir / "errors.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(app_format)
    logger.addHandler(error_handler)

    # Audit log handler
    audit_handler = logging.FileHandler(log_dir / "audit.log", encoding="utf-8")
    audit_handler.setLevel(logging.INFO)
    audit_format = logging.Formatter('%(asctime)s - AUDIT - %(message)s')
    audit_handler.setFormatter(audit_format)
    audit_handler.addFilter(lambda record: record.name == 'audit')
    logger.addHandler(audit_handler)


def audit_log(
    action: str,
    record_type: Optional[str],
    record_id: Optional[str],
    old_values: Optional[Dict[str, Any]] = None,
    new_values: Optional[Dict[str, Any]] = None
):
    """
    Log a record mutation to the audit log.

    Args:
        action: Action performed (create_sale, settle_debt, ...)
        record_type: Collection affected
        record_id: Record id affected
        old_values: Values before the change
        new_values: Values after the change
    """
    try:
        audit_logger = logging.getLogger('audit')
        message = (
            f"Action:{action} | "
            f"Type:{record_type or 'N/A'} | "
            f"Record:{record_id or 'N/A'}"
        )
        if old_values:
            message += f" | Old:{json.dumps(old_values, default=str, ensure_ascii=False)}"
        if new_values:
            message += f" | New:{json.dumps(new_values, default=str, ensure_ascii=False)}"
        audit_logger.info(message)

    except Exception as e:
        logging.error(f"Failed to log audit trail: {e}")


def log_exception(exc: Exception, context: Optional[str] = None):
    """
    Log exception with context.

    Args:
        exc: Exception object
        context: Additional context information
    """
    logger = logging.getLogger(__name__)
    error_msg = f"Exception: {type(exc).__name__}: {str(exc)}"
    if context:
        error_msg += f" | Context: {context}"
    error_msg += f"\nTraceback:\n{traceback.format_exc()}"
    logger.error(error_msg)
