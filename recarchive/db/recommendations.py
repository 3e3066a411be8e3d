"""Recommendation storage and curation."""

from typing import Dict, Iterable, List, Set

from psycopg import Connection

from ..extraction.models import ParsedRecommendation
from ..models import Recommendation


class RecommendationStorage:
    """Handle recommendation storage and per-issue deduplication."""

    def get_existing_urls(self, conn: Connection, issue_id: int) -> Set[str]:
        """Get the URLs already recorded for an issue."""
        with conn.cursor() as cur:
            cur.execute(
                "SELECT url FROM recommendations WHERE issue_id = %s AND url IS NOT NULL",
                (issue_id,),
            )
            return {row["url"] for row in cur.fetchall()}

    def add_recommendations(
        self,
        conn: Connection,
        issue_id: int,
        recommendations: Iterable[ParsedRecommendation],
    ) -> int:
        """
        Store parsed recommendations, skipping URLs the issue already has.

        Returns:
            Number of recommendations added
        """
        existing = self.get_existing_urls(conn, issue_id)
        added = 0

        with conn.cursor() as cur:
            for rec in recommendations:
                if rec.url and rec.url in existing:
                    continue

                cur.execute(
                    """
                    INSERT INTO recommendations (
                        issue_id, title, url, description, category,
                        section_name, is_primary_link, is_crowdsourced,
                        contributor_name
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (issue_id, url) DO NOTHING
                    """,
                    (
                        issue_id,
                        rec.title,
                        rec.url,
                        rec.description,
                        rec.category,
                        rec.section_name,
                        rec.is_primary_link,
                        rec.is_crowdsourced,
                        rec.contributor_name,
                    ),
                )
                if cur.rowcount:
                    added += 1
                if rec.url:
                    existing.add(rec.url)

        return added

    def get_title_candidates(self, conn: Connection, limit: int = 100) -> List[Recommendation]:
        """Get linked, live recommendations ordered by title."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT * FROM recommendations
                WHERE url IS NOT NULL AND dead = FALSE
                ORDER BY title ASC
                LIMIT %s
                """,
                (limit,),
            )
            return [Recommendation(**row) for row in cur.fetchall()]

    def update_title(self, conn: Connection, recommendation_id: int, title: str) -> None:
        """Replace the title of a recommendation."""
        with conn.cursor() as cur:
            cur.execute(
                "UPDATE recommendations SET title = %s WHERE id = %s",
                (title, recommendation_id),
            )

    def set_hidden(self, conn: Connection, recommendation_id: int, hidden: bool = True) -> None:
        """Hide or unhide a recommendation."""
        with conn.cursor() as cur:
            cur.execute(
                "UPDATE recommendations SET hidden = %s WHERE id = %s",
                (hidden, recommendation_id),
            )

    def set_dead(self, conn: Connection, recommendation_id: int, dead: bool = True) -> None:
        """Flag or unflag a recommendation as a broken link."""
        with conn.cursor() as cur:
            cur.execute(
                "UPDATE recommendations SET dead = %s WHERE id = %s",
                (dead, recommendation_id),
            )

    def get_export_rows(self, conn: Connection) -> List[Dict]:
        """Get visible recommendations joined with their issue and tag names."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT
                    r.*,
                    i.title AS issue_title,
                    i.date AS issue_date,
                    i.url AS issue_url,
                    COALESCE(
                        array_agg(t.name ORDER BY t.name) FILTER (WHERE t.name IS NOT NULL),
                        '{}'
                    ) AS tags
                FROM recommendations r
                JOIN issues i ON r.issue_id = i.id
                LEFT JOIN recommendation_tags rt ON rt.recommendation_id = r.id
                LEFT JOIN tags t ON t.id = rt.tag_id
                WHERE r.hidden = FALSE AND r.dead = FALSE
                GROUP BY r.id, i.id
                ORDER BY i.date DESC NULLS LAST, r.id
                """
            )
            return cur.fetchall()

    def get_category_counts(self, conn: Connection) -> Dict[str, int]:
        """Count visible recommendations per category."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT category, COUNT(*) AS count
                FROM recommendations
                WHERE hidden = FALSE AND dead = FALSE
                GROUP BY category
                ORDER BY count DESC
                """
            )
            return {row["category"]: row["count"] for row in cur.fetchall()}
