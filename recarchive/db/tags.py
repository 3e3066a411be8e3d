"""Tag management for recommendation curation."""

from typing import Dict, Iterable, List, Optional

from psycopg import Connection

from ..models import Tag


def normalize_tag_name(name: str) -> str:
    """Normalize a tag name so equal labels map to one tag."""
    normalized = " ".join(name.split()).lower()
    if not normalized:
        raise ValueError("Tag name cannot be empty")
    return normalized


class TagManager:
    """Manage tags and their links to recommendations."""

    def get_or_create(self, conn: Connection, name: str) -> Tag:
        """Get a tag by name, creating it if needed. Repeated calls reuse the tag."""
        normalized = normalize_tag_name(name)
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO tags (name)
                VALUES (%s)
                ON CONFLICT (name) DO NOTHING
                """,
                (normalized,),
            )
            cur.execute("SELECT * FROM tags WHERE name = %s", (normalized,))
            return Tag(**cur.fetchone())

    def get_by_name(self, conn: Connection, name: str) -> Optional[Tag]:
        """Get a tag by its normalized name."""
        with conn.cursor() as cur:
            cur.execute("SELECT * FROM tags WHERE name = %s", (normalize_tag_name(name),))
            row = cur.fetchone()
            return Tag(**row) if row else None

    def add_tag(self, conn: Connection, recommendation_id: int, name: str) -> Tag:
        """Attach a tag to a recommendation; attaching twice is a no-op."""
        tag = self.get_or_create(conn, name)
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO recommendation_tags (recommendation_id, tag_id)
                VALUES (%s, %s)
                ON CONFLICT (recommendation_id, tag_id) DO NOTHING
                """,
                (recommendation_id, tag.id),
            )
        return tag

    def remove_tag(self, conn: Connection, recommendation_id: int, tag_id: int) -> None:
        """Detach a tag from a recommendation."""
        with conn.cursor() as cur:
            cur.execute(
                "DELETE FROM recommendation_tags WHERE recommendation_id = %s AND tag_id = %s",
                (recommendation_id, tag_id),
            )

    def set_tags(self, conn: Connection, recommendation_id: int, names: Iterable[str]) -> List[Tag]:
        """Replace the tags of a recommendation. Names that normalize alike count once."""
        tags: Dict[int, Tag] = {}
        for name in names:
            tag = self.get_or_create(conn, name)
            tags.setdefault(tag.id, tag)

        with conn.cursor() as cur:
            cur.execute(
                "DELETE FROM recommendation_tags WHERE recommendation_id = %s",
                (recommendation_id,),
            )
            for tag_id in tags:
                cur.execute(
                    """
                    INSERT INTO recommendation_tags (recommendation_id, tag_id)
                    VALUES (%s, %s)
                    """,
                    (recommendation_id, tag_id),
                )
        return list(tags.values())

    def list_tags(self, conn: Connection) -> List[dict]:
        """List tags with the number of recommendations using each."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT t.id, t.name, COUNT(rt.recommendation_id) AS count
                FROM tags t
                LEFT JOIN recommendation_tags rt ON rt.tag_id = t.id
                GROUP BY t.id, t.name
                ORDER BY t.name
                """
            )
            return cur.fetchall()

    def delete_tag(self, conn: Connection, tag_id: int) -> None:
        """Delete a tag everywhere."""
        with conn.cursor() as cur:
            cur.execute("DELETE FROM tags WHERE id = %s", (tag_id,))
