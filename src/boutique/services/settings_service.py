# src/boutique/services/settings_service.py
"""
SETTINGS SERVICE
Shop identity shown on reports and invoices
"""

from typing import Dict, Any
import logging

from boutique.core.logger import audit_log
from boutique.core.models import ShopSettings
from boutique.core.state import AppState
from boutique.utils.validators import validate_settings_data

logger = logging.getLogger(__name__)

# Accepted keys, by attribute name
SETTINGS_FIELDS = {
    'name': 'name',
    'logo_uri': 'logo_uri',
    'logoUri': 'logo_uri',
    'phone': 'phone',
    'address': 'address',
    'email': 'email',
}


class SettingsService:
    """Service for the shop settings singleton"""

    def __init__(self, state: AppState):
        self.state = state

    def get_settings(self) -> ShopSettings:
        return self.state.settings

    def update_settings(self, settings_data: Dict[str, Any]) -> ShopSettings:
        """Apply the given fields; unknown keys are ignored."""
        try:
            validate_settings_data(settings_data)
            current = self.state.settings

            changes = {}
            for key, value in settings_data.items():
                field = SETTINGS_FIELDS.get(key)
                if field is None:
                    logger.debug(f"Ignoring unknown settings key: {key}")
                    continue
                changes[field] = value.strip() if isinstance(value, str) and field != 'logo_uri' else value

            updated = current.model_copy(update=changes)
            self.state.commit(settings=updated)

            audit_log(
                action="update_settings",
                record_type="settings",
                record_id=None,
                old_values=current.to_storage(),
                new_values=updated.to_storage()
            )
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to update settings: {e}")
            raise

    def reset_logo(self) -> ShopSettings:
        try:
            current = self.state.settings
            updated = current.model_copy(update={'logo_uri': None})
            self.state.commit(settings=updated)

            audit_log(action="reset_logo", record_type="settings", record_id=None)
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to reset logo: {e}")
            raise

    def reset_all_data(self):
        """Erase products, sales and expenses and restore default settings."""
        try:
            self.state.reset()
            audit_log(action="reset_all_data", record_type=None, record_id=None)
            logger.warning("All shop data has been erased")

        except Exception as e:
            logger.error(f"Service: Failed to reset data: {e}")
            raise
