# src/boutique/core/exceptions.py
"""
EXCEPTIONS SHARED BY SERVICES, REPORTS AND INTEGRATIONS
"""


class BoutiqueError(Exception):
    """Base class for all application errors."""
    pass


class RecordNotFoundError(BoutiqueError, LookupError):
    """Raised when a product, sale or expense id does not exist."""

    def __init__(self, record_type: str, record_id: str):
        super().__init__(f"{record_type} {record_id} not found")
        self.record_type = record_type
        self.record_id = record_id


class ExportError(BoutiqueError):
    """Raised when a rendered document cannot be written out."""
    pass


class ShareError(BoutiqueError):
    """Raised when an exported document cannot be handed to the share target."""
    pass
