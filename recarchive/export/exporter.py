"""JSON export of the recommendation archive."""

import json
from collections import defaultdict
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum
from psycopg import Connection
from rich.console import Console

from ..db import IssueManager, RecommendationStorage
from ..models import Issue

console = Console()


def _isoformat(value: Optional[Any]) -> Optional[str]:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class ArchiveExporter:
    """Build and write JSON snapshots of issues and visible recommendations."""

    def __init__(
        self,
        issues: Optional[IssueManager] = None,
        recommendations: Optional[RecommendationStorage] = None,
    ) -> None:
        """Initialize exporter."""
        self.issues = issues or IssueManager()
        self.recommendations = recommendations or RecommendationStorage()

    def build_export(
        self,
        issues: List[Issue],
        rows: List[Dict[str, Any]],
        by_category: Optional[Dict[str, int]] = None,
    ) -> Dict[str, Any]:
        """Assemble the export document from issues and recommendation rows."""
        if by_category is None:
            by_category = defaultdict(int)
            for row in rows:
                by_category[row.get("category") or "articles"] += 1

        return {
            "exported_at": pendulum.now("UTC").isoformat(),
            "stats": {
                "total_issues": len(issues),
                "total_recommendations": len(rows),
                "by_category": dict(sorted(by_category.items(), key=lambda item: -item[1])),
            },
            "issues": [
                {
                    "id": issue.id,
                    "title": issue.title,
                    "url": issue.url,
                    "date": _isoformat(issue.date),
                    "issue_number": issue.issue_number,
                }
                for issue in issues
            ],
            "recommendations": [
                {
                    "id": row.get("id"),
                    "title": row.get("title"),
                    "url": row.get("url"),
                    "description": row.get("description"),
                    "category": row.get("category"),
                    "is_primary_link": bool(row.get("is_primary_link")),
                    "is_crowdsourced": bool(row.get("is_crowdsourced")),
                    "contributor_name": row.get("contributor_name"),
                    "section_name": row.get("section_name"),
                    "issue_id": row.get("issue_id"),
                    "issue_title": row.get("issue_title"),
                    "issue_date": _isoformat(row.get("issue_date")),
                    "tags": list(row.get("tags") or []),
                }
                for row in rows
            ],
        }

    def write_export(self, export: Dict[str, Any], output_dir: Path) -> List[Path]:
        """
        Write the full, minified and per-category export files.

        Returns:
            Paths of the files written
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        written = []

        full_path = output_dir / "archive.json"
        full_path.write_text(json.dumps(export, indent=2, ensure_ascii=False), encoding="utf-8")
        written.append(full_path)

        min_path = output_dir / "archive.min.json"
        min_path.write_text(json.dumps(export, separators=(",", ":"), ensure_ascii=False), encoding="utf-8")
        written.append(min_path)

        grouped: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        for rec in export["recommendations"]:
            grouped[rec["category"] or "articles"].append(rec)

        category_dir = output_dir / "by-category"
        category_dir.mkdir(exist_ok=True)
        for category, recs in grouped.items():
            path = category_dir / f"{category}.json"
            path.write_text(json.dumps(recs, indent=2, ensure_ascii=False), encoding="utf-8")
            written.append(path)

        return written

    def export(self, conn: Connection, output_dir: Path) -> List[Path]:
        """Export the whole archive to a directory."""
        issues = self.issues.get_all(conn)
        rows = self.recommendations.get_export_rows(conn)
        export = self.build_export(issues, rows, self.recommendations.get_category_counts(conn))

        written = self.write_export(export, output_dir)
        console.print(
            f"Exported {export['stats']['total_issues']} issues and "
            f"{export['stats']['total_recommendations']} recommendations to {output_dir}"
        )
        return written
