"""
Project stores for the Intake context.

The dictation parser never fetches projects itself. The intake adapter asks a
ProjectStore for the candidate projects of one user right before parsing, on
every call. Any caching is the store's business.

SqliteProjectStore is the bundled implementation; the surrounding application
can plug in its own store by implementing list_candidate_projects().
"""

import sqlite3
import uuid
from contextlib import closing
from pathlib import Path
from typing import List, Optional, Protocol

from herald.contexts.parsing.data_structures import ProjectCandidate

# Projects in these states are never offered as match candidates
CLOSED_STATUSES = ("COMPLETED", "CANCELLED")


class ProjectStore(Protocol):
    """Read capability the intake adapter needs from persistence."""

    def list_candidate_projects(self, user_id: str) -> List[ProjectCandidate]:
        """Return the user's non-completed projects."""
        ...


class SqliteProjectStore:
    """
    SQLite-backed project store.

    The database is persistent - create once with create(), then load later
    by instantiating with the db_path. Every read or write opens its own
    short-lived connection, so one store can be shared across threads and
    nothing needs closing.
    """

    def __init__(self, db_path: Path):
        """
        Open an existing project database.

        To create a new database, use SqliteProjectStore.create() instead.

        Args:
            db_path: Path to existing SQLite database file

        Raises:
            FileNotFoundError: If database file doesn't exist
        """
        self.db_path = Path(db_path)

        if not self.db_path.exists():
            raise FileNotFoundError(
                f"Project database not found: {self.db_path}\n"
                f"To create a new database, use SqliteProjectStore.create()"
            )

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @classmethod
    def create(cls, db_path: Path) -> "SqliteProjectStore":
        """
        Create the schema (keeping any existing rows) and open the store.

        Args:
            db_path: Path where the database will live

        Returns:
            SqliteProjectStore ready for use
        """
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS projects (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'ACTIVE',
                created_by_id TEXT NOT NULL
            )
        """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_projects_owner ON projects(created_by_id)")
        conn.commit()
        conn.close()

        return cls(db_path)

    def add_project(
        self,
        name: str,
        user_id: str,
        status: str = "ACTIVE",
        project_id: Optional[str] = None,
    ) -> ProjectCandidate:
        """
        Insert a project owned by user_id.

        Args:
            name: Project name
            user_id: Owner
            status: Project status (COMPLETED/CANCELLED projects are not candidates)
            project_id: Explicit id (a random hex id is generated when omitted)

        Returns:
            The stored project as a ProjectCandidate
        """
        project_id = project_id or uuid.uuid4().hex
        with closing(self._connect()) as conn, conn:
            conn.execute(
                "INSERT INTO projects (id, name, status, created_by_id) VALUES (?, ?, ?, ?)",
                (project_id, name, status.upper(), user_id),
            )
        return ProjectCandidate(id=project_id, name=name)

    def list_candidate_projects(self, user_id: str) -> List[ProjectCandidate]:
        """
        Return the user's projects that are not completed or cancelled.

        Errors from sqlite (missing table, locked database) propagate unchanged.
        """
        placeholders = ", ".join("?" for _ in CLOSED_STATUSES)
        with closing(self._connect()) as conn:
            rows = conn.execute(
                f"""
                SELECT id, name FROM projects
                WHERE created_by_id = ? AND status NOT IN ({placeholders})
                ORDER BY name COLLATE NOCASE, id
            """,
                (user_id, *CLOSED_STATUSES),
            ).fetchall()
        return [ProjectCandidate(id=row["id"], name=row["name"]) for row in rows]
