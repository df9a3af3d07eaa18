import os
import sqlite3

from .config import settings


def get_db_path() -> str:
    return os.path.join(settings.DB_DIR, settings.DB_FILE)


def get_db_connection():
    """Opens the log database."""
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    return conn


def create_log_table():
    conn = get_db_connection()
    with conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
                logger TEXT,
                mode TEXT,
                level TEXT,
                message TEXT
            );
        """
        )
    conn.close()


def init_db():
    os.makedirs(settings.DB_DIR, exist_ok=True)
    create_log_table()
