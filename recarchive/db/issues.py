"""Issue storage and lifecycle."""

from datetime import date, datetime
from typing import List, Optional, Union

from psycopg import Connection

from ..extraction.models import IssueStub
from ..models import Issue


class IssueManager:
    """Manage newsletter issues in database."""

    def upsert_stub(self, conn: Connection, stub: IssueStub) -> int:
        """
        Insert a discovered issue, or refresh the title of a known one.

        The date is only set on insert; a later run never overwrites it.

        Returns:
            Issue ID
        """
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO issues (title, url, date)
                VALUES (%s, %s, %s)
                ON CONFLICT (url) DO UPDATE SET title = EXCLUDED.title
                RETURNING id
                """,
                (stub.title, stub.url, stub.date),
            )
            return cur.fetchone()["id"]

    def get_unscraped(self, conn: Connection, limit: Optional[int] = None) -> List[Issue]:
        """Get issues not yet parsed for recommendations, newest first."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT * FROM issues
                WHERE scraped_at IS NULL
                ORDER BY date DESC NULLS LAST, id
                LIMIT %s
                """,
                (limit,),
            )
            return [Issue(**row) for row in cur.fetchall()]

    def get_by_url(self, conn: Connection, url: str) -> Optional[Issue]:
        """Get an issue by its URL."""
        with conn.cursor() as cur:
            cur.execute("SELECT * FROM issues WHERE url = %s", (url,))
            row = cur.fetchone()
            return Issue(**row) if row else None

    def create_issue(
        self,
        conn: Connection,
        title: str,
        url: str,
        issue_date: Optional[Union[date, datetime]] = None,
    ) -> Issue:
        """Create an issue discovered outside the archive index."""
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO issues (title, url, date)
                VALUES (%s, %s, %s)
                RETURNING *
                """,
                (title, url, issue_date),
            )
            return Issue(**cur.fetchone())

    def mark_scraped(
        self,
        conn: Connection,
        issue_id: int,
        issue_date: Optional[Union[date, datetime]] = None,
    ) -> None:
        """Mark an issue as parsed, filling in its date if it had none."""
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE issues
                SET scraped_at = CURRENT_TIMESTAMP,
                    date = COALESCE(date, %s)
                WHERE id = %s
                """,
                (issue_date, issue_id),
            )

    def reset_scraped(self, conn: Connection, issue_id: int) -> None:
        """Clear the scraped marker so the issue is parsed again."""
        with conn.cursor() as cur:
            cur.execute("UPDATE issues SET scraped_at = NULL WHERE id = %s", (issue_id,))

    def get_issues_without_dates(self, conn: Connection) -> List[Issue]:
        """Get issues whose publish date is still unknown."""
        with conn.cursor() as cur:
            cur.execute("SELECT * FROM issues WHERE date IS NULL ORDER BY id")
            return [Issue(**row) for row in cur.fetchall()]

    def update_date(self, conn: Connection, issue_id: int, issue_date: Union[date, datetime]) -> None:
        """Set the publish date of an issue."""
        with conn.cursor() as cur:
            cur.execute("UPDATE issues SET date = %s WHERE id = %s", (issue_date, issue_id))

    def get_all(self, conn: Connection) -> List[Issue]:
        """Get all issues, newest first."""
        with conn.cursor() as cur:
            cur.execute("SELECT * FROM issues ORDER BY date DESC NULLS LAST, id")
            return [Issue(**row) for row in cur.fetchall()]
