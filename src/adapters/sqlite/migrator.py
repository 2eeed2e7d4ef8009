import logging
import os
import sqlite3

logger = logging.getLogger(__name__)


class SQLiteMigrator:
    def __init__(
        self,
        db_path: str,
        migrations_dir: str,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self.migrations_dir = migrations_dir
        self._external_conn = connection

    def _get_connection(self) -> sqlite3.Connection:
        if self._external_conn is not None:
            return self._external_conn
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _ensure_migration_table(self, conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)

    def _get_applied_migrations(self, conn: sqlite3.Connection) -> set[str]:
        cursor = conn.execute("SELECT filename FROM _migrations")
        rows = cursor.fetchall()
        # Row shape depends on the connection's row_factory.
        return {row["filename"] if isinstance(row, dict) else row[0] for row in rows}

    def pending_migrations(self) -> list[str]:
        conn = self._get_connection()
        try:
            self._ensure_migration_table(conn)
            applied = self._get_applied_migrations(conn)
            files = sorted(f for f in os.listdir(self.migrations_dir) if f.endswith(".sql"))
            return [f for f in files if f not in applied]
        finally:
            if self._external_conn is None:
                conn.close()

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations; return the filenames applied."""
        pending = self.pending_migrations()
        conn = self._get_connection()
        try:
            for filename in pending:
                logger.info(f"Applying migration: {filename}")
                self._apply_migration(conn, filename)
            logger.info("All migrations applied.")
            return pending
        finally:
            if self._external_conn is None:
                conn.close()

    def _read_up_script(self, filename: str) -> str:
        path = os.path.join(self.migrations_dir, filename)
        with open(path) as f:
            content = f.read()

        # Convention: the file starts with the Up part; anything after '-- Down' is ignored.
        if "-- Down" in content:
            return content.split("-- Down")[0]
        return content

    def _apply_migration(self, conn: sqlite3.Connection, filename: str) -> None:
        script = self._read_up_script(filename)
        try:
            conn.executescript(f"BEGIN;\n{script}\nCOMMIT;")
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (filename,))
            conn.commit()
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
