# src/boutique/core/storage.py
"""
KEY-VALUE STORAGE MANAGER
- Auto-creates the data directory and database on first run
- Stores JSON blobs under fixed keys (products, sales, expenses, settings)
- Backup of the database file
"""

import sqlite3
import logging
import json
import threading
import shutil
from datetime import datetime
from pathlib import Path
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Local persistence for the application state.
    One SQLite table holding a JSON document per key.
    """

    def __init__(self, app_data_path: Path):
        """
        Initialize storage manager.

        Args:
            app_data_path: Root directory for database, backups, logs and exports
        """
        self.app_data_path = Path(app_data_path)

        self.create_directories()

        self.db_path = self.app_data_path / 'database' / 'boutique.db'
        self.backup_dir = self.app_data_path / 'backups'

        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self.initialized = False

        logger.info(f"Storage Manager initialized. Data path: {self.app_data_path}")

    def create_directories(self):
        """Create all required directories."""
        directories = [
            self.app_data_path,
            self.app_data_path / 'database',
            self.app_data_path / 'backups',
            self.app_data_path / 'logs',
            self.app_data_path / 'exports',
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_connection(self) -> sqlite3.Connection:
        """Return the shared connection, opening it on first use."""
        with self._lock:
            if self._connection is None:
                conn = sqlite3.connect(str(self.db_path))
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA journal_mode = WAL")
                self._connection = conn
            return self._connection

    @contextmanager
    def get_cursor(self) -> Generator[sqlite3.Cursor, None, None]:
        """
        Cursor context manager. Commits on success, rolls back on error.
        """
        conn = self.get_connection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()

    def initialize_storage(self):
        """Create the key-value table if missing."""
        if self.initialized:
            return
        try:
            with self.get_cursor() as cursor:
                cursor.execute('''
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                ''')
            self.initialized = True
            logger.info("Storage initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize storage: {e}")
            raise

    def load(self, key: str) -> Optional[Any]:
        """
        Load the JSON document stored under key.

        Returns:
            Decoded value, or None when the key is absent or unreadable
        """
        with self.get_cursor() as cursor:
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()

        if row is None:
            return None
        try:
            return json.loads(row['value'])
        except (TypeError, ValueError) as e:
            logger.warning(f"Stored value for '{key}' is not valid JSON, ignoring: {e}")
            return None

    def save(self, key: str, value: Any):
        """Serialize value to JSON and upsert it under key."""
        self.save_many({key: value})

    def save_many(self, values: Dict[str, Any]):
        """
        Upsert several keys in one transaction: either all are written or none.

        Args:
            values: JSON-serializable value per key
        """
        payloads = {key: json.dumps(value, ensure_ascii=False) for key, value in values.items()}
        updated_at = datetime.now().isoformat()
        with self.get_cursor() as cursor:
            for key, payload in payloads.items():
                cursor.execute('''
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                ''', (key, payload, updated_at))
        logger.debug(f"Saved {', '.join(payloads)} in one transaction")

    def delete(self, key: str):
        with self.get_cursor() as cursor:
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def clear(self):
        """Remove every stored key."""
        with self.get_cursor() as cursor:
            cursor.execute("DELETE FROM kv_store")
        logger.info("All stored data cleared")

    def backup_storage(self, backup_name: Optional[str] = None) -> str:
        """
        Create a backup of the database file.

        Args:
            backup_name: Custom backup name (optional)

        Returns:
            Path to backup file
        """
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)

            if backup_name:
                backup_file = self.backup_dir / f"{backup_name}.db"
            else:
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                backup_file = self.backup_dir / f"backup_{timestamp}.db"

            # Flush pending WAL pages into the main file before copying
            with self.get_cursor() as cursor:
                cursor.execute("PRAGMA wal_checkpoint(FULL)")

            shutil.copy2(self.db_path, backup_file)

            logger.info(f"Backup created: {backup_file}")
            return str(backup_file)

        except Exception as e:
            logger.error(f"Backup failed: {e}")
            raise

    def get_storage_info(self) -> Dict[str, Any]:
        """
        Get storage statistics.

        Returns:
            Dictionary with path, size and stored keys
        """
        info = {
            'path': str(self.db_path),
            'size': self.db_path.stat().st_size if self.db_path.exists() else 0,
            'keys': {},
        }

        try:
            with self.get_cursor() as cursor:
                cursor.execute("SELECT key, LENGTH(value) AS size, updated_at FROM kv_store ORDER BY key")
                for row in cursor.fetchall():
                    info['keys'][row['key']] = {
                        'size': row['size'],
                        'updated_at': row['updated_at'],
                    }
        except Exception as e:
            logger.error(f"Failed to get storage info: {e}")

        return info

    def close_all_connections(self):
        """Close the database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.info("Storage connection closed")
