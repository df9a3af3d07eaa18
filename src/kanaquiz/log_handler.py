import logging

from .database import get_db_connection


class SQLiteHandler(logging.Handler):
    """
    Writes quiz activity into the ``logs`` table.

    Records logged with ``extra={"mode": ...}`` keep their character set in
    its own column so batches and scores can be filtered per mode.
    """

    def row(self, record):
        return (
            record.name.rpartition(".")[2],
            record.levelname,
            getattr(record, "mode", None),
            self.format(record),
        )

    def emit(self, record):
        try:
            conn = get_db_connection()
            with conn:
                conn.execute(
                    "INSERT INTO logs (logger, level, mode, message) VALUES (?, ?, ?, ?)",
                    self.row(record),
                )
            conn.close()
        except Exception:
            self.handleError(record)
