"""SQLite database management."""

import json
from pathlib import Path
from typing import Any, Optional

import aiosqlite


class Database:
    """SQLite database holding the state of every workspace."""

    def __init__(self, db_path: Optional[Path] = None):
        """Initialize the database.

        Args:
            db_path: Path to SQLite database file.
                    Defaults to ~/.local/share/develevate/state.db
        """
        if db_path is None:
            data_dir = Path.home() / ".local" / "share" / "develevate"
            db_path = data_dir / "state.db"

        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Connect to the database."""
        if str(self.db_path) != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self.db_path)
        await self._create_tables()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def _create_tables(self) -> None:
        """Create database tables if they don't exist."""
        assert self._connection is not None

        await self._connection.executescript("""
            CREATE TABLE IF NOT EXISTS workspace_state (
                workspace TEXT NOT NULL,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (workspace, key)
            );

            CREATE TABLE IF NOT EXISTS completed_challenges (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workspace TEXT NOT NULL,
                language TEXT NOT NULL,
                challenge_id TEXT NOT NULL,
                completed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE(workspace, language, challenge_id)
            );

            CREATE TABLE IF NOT EXISTS hint_cursors (
                workspace TEXT NOT NULL,
                challenge_id TEXT NOT NULL,
                revealed INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (workspace, challenge_id)
            );

            CREATE INDEX IF NOT EXISTS idx_completed_workspace
                ON completed_challenges(workspace, language);
        """)
        await self._connection.commit()

    @property
    def connection(self) -> aiosqlite.Connection:
        """Get the database connection."""
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    # Key/value state
    async def set_state(self, workspace: str, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        encoded = json.dumps(value)
        await self.connection.execute(
            """
            INSERT INTO workspace_state (workspace, key, value, updated_at)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(workspace, key) DO UPDATE SET value=?, updated_at=CURRENT_TIMESTAMP
            """,
            (workspace, key, encoded, encoded),
        )
        await self.connection.commit()

    async def get_state(self, workspace: str, key: str, default: Any = None) -> Any:
        """Get a stored value, or `default` if unset."""
        async with self.connection.execute(
            "SELECT value FROM workspace_state WHERE workspace = ? AND key = ?",
            (workspace, key),
        ) as cursor:
            row = await cursor.fetchone()
            return json.loads(row[0]) if row else default

    # Challenges
    async def mark_challenge_completed(
        self,
        workspace: str,
        language: str,
        challenge_id: str,
    ) -> bool:
        """Mark a challenge as completed.

        Returns:
            True if it was newly completed, False if it already was
        """
        cursor = await self.connection.execute(
            """
            INSERT OR IGNORE INTO completed_challenges (workspace, language, challenge_id)
            VALUES (?, ?, ?)
            """,
            (workspace, language, challenge_id),
        )
        await self.connection.commit()
        return cursor.rowcount > 0

    async def get_completed_challenges(self, workspace: str) -> list[dict]:
        """Get all completed challenges of a workspace, oldest first."""
        async with self.connection.execute(
            """
            SELECT language, challenge_id, completed_at
            FROM completed_challenges
            WHERE workspace = ?
            ORDER BY id
            """,
            (workspace,),
        ) as cursor:
            rows = await cursor.fetchall()
            return [
                {
                    "language": row[0],
                    "challenge_id": row[1],
                    "completed_at": row[2],
                }
                for row in rows
            ]

    async def count_completed(self, workspace: str, language: str) -> int:
        """Count completed challenges of one language."""
        async with self.connection.execute(
            "SELECT COUNT(*) FROM completed_challenges WHERE workspace = ? AND language = ?",
            (workspace, language),
        ) as cursor:
            return (await cursor.fetchone())[0]

    # Hints
    async def get_hint_cursor(self, workspace: str, challenge_id: str) -> int:
        """Get how many hints of a challenge were revealed."""
        async with self.connection.execute(
            "SELECT revealed FROM hint_cursors WHERE workspace = ? AND challenge_id = ?",
            (workspace, challenge_id),
        ) as cursor:
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def advance_hint_cursor(self, workspace: str, challenge_id: str, limit: int) -> bool:
        """Increment the hint cursor unless it already reached `limit`.

        Returns:
            True if the cursor moved
        """
        cursor = await self.connection.execute(
            """
            INSERT INTO hint_cursors (workspace, challenge_id, revealed)
            SELECT ?, ?, 1 WHERE ? > 0
            ON CONFLICT(workspace, challenge_id) DO UPDATE SET revealed = revealed + 1
            WHERE revealed < ?
            """,
            (workspace, challenge_id, limit, limit),
        )
        await self.connection.commit()
        return cursor.rowcount > 0

    async def reset_hint_cursor(self, workspace: str, challenge_id: str) -> None:
        """Set the hint cursor of a challenge back to 0."""
        await self.connection.execute(
            """
            INSERT INTO hint_cursors (workspace, challenge_id, revealed) VALUES (?, ?, 0)
            ON CONFLICT(workspace, challenge_id) DO UPDATE SET revealed = 0
            """,
            (workspace, challenge_id),
        )
        await self.connection.commit()
