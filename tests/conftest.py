from __future__ import annotations

import json
import sys
from contextlib import nullcontext
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from recarchive.config import Config, ConfigModel
from recarchive.ingestion import PageContent
from recarchive.models import Issue, Recommendation


def build_issue_page(
    blocks: List[Dict[str, Any]],
    published_at: Optional[str] = None,
    title: str = "Installer No. 1",
) -> str:
    """Render a minimal issue page carrying a structured payload."""
    node: Dict[str, Any] = {"blocks": blocks}
    if published_at:
        node["publishedAt"] = published_at
    payload = {"props": {"pageProps": {"hydration": {"responses": [{"data": {"node": node}}]}}}}
    return (
        f'<html><head><meta property="og:title" content="{title}">'
        f'<script id="__NEXT_DATA__" type="application/json">{json.dumps(payload)}</script>'
        "</head><body></body></html>"
    )


def heading(text: str) -> Dict[str, Any]:
    return {"__typename": "CoreHeadingBlockType", "contents": {"html": text}}


def paragraph(*markup: str) -> Dict[str, Any]:
    return {"__typename": "CoreParagraphBlockType", "paragraphContents": [{"html": m} for m in markup]}


def list_block(*items: str) -> Dict[str, Any]:
    return {"__typename": "CoreListBlockType", "items": [{"html": item} for item in items]}


def _as_datetime(value: Optional[Union[date, datetime]]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time(), tzinfo=timezone.utc)


class FakeConnection:
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class RecordingCursor:
    def __init__(self, conn: "RecordingConnection") -> None:
        self.conn = conn
        self.rowcount = -1

    def __enter__(self) -> "RecordingCursor":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def execute(self, sql: str, params: Optional[tuple] = None) -> None:
        statement = " ".join(sql.split())
        self.conn.executed.append((statement, params))
        if not statement.startswith("SELECT"):
            self.rowcount = self.conn.rowcounts.pop(0) if self.conn.rowcounts else 1

    def fetchone(self) -> Optional[Dict[str, Any]]:
        return self.conn.fetchone_results.pop(0) if self.conn.fetchone_results else None

    def fetchall(self) -> List[Dict[str, Any]]:
        return self.conn.fetchall_results.pop(0) if self.conn.fetchall_results else []


class RecordingConnection(FakeConnection):
    """Connection whose cursors record statements and replay scripted results."""

    def __init__(
        self,
        fetchone: Optional[List[Optional[Dict[str, Any]]]] = None,
        fetchall: Optional[List[List[Dict[str, Any]]]] = None,
        rowcounts: Optional[List[int]] = None,
    ) -> None:
        super().__init__()
        self.fetchone_results = list(fetchone or [])
        self.fetchall_results = list(fetchall or [])
        self.rowcounts = list(rowcounts or [])
        self.executed: List[tuple] = []

    def cursor(self) -> RecordingCursor:
        return RecordingCursor(self)

    def statements(self, prefix: str) -> List[tuple]:
        return [(sql, params) for sql, params in self.executed if sql.startswith(prefix)]


class FakeIssueManager:
    def __init__(self) -> None:
        self.issues: Dict[int, Issue] = {}

    def add(self, title: str, url: str, issue_date=None, scraped: bool = False) -> Issue:
        issue = Issue(
            id=len(self.issues) + 1,
            title=title,
            url=url,
            date=_as_datetime(issue_date),
            scraped_at=datetime.now(timezone.utc) if scraped else None,
        )
        self.issues[issue.id] = issue
        return issue

    def upsert_stub(self, conn, stub) -> int:
        existing = self.get_by_url(conn, stub.url)
        if existing:
            self.issues[existing.id] = existing.model_copy(update={"title": stub.title})
            return existing.id
        return self.add(stub.title, stub.url, stub.date).id

    def get_unscraped(self, conn, limit=None) -> List[Issue]:
        unscraped = [issue for issue in self.issues.values() if issue.scraped_at is None]
        return unscraped[:limit] if limit else unscraped

    def get_by_url(self, conn, url) -> Optional[Issue]:
        return next((issue for issue in self.issues.values() if issue.url == url), None)

    def create_issue(self, conn, title, url, issue_date=None) -> Issue:
        return self.add(title, url, issue_date)

    def mark_scraped(self, conn, issue_id, issue_date=None) -> None:
        issue = self.issues[issue_id]
        self.issues[issue_id] = issue.model_copy(
            update={
                "scraped_at": datetime.now(timezone.utc),
                "date": issue.date or _as_datetime(issue_date),
            }
        )

    def reset_scraped(self, conn, issue_id) -> None:
        self.issues[issue_id] = self.issues[issue_id].model_copy(update={"scraped_at": None})

    def get_issues_without_dates(self, conn) -> List[Issue]:
        return [issue for issue in self.issues.values() if issue.date is None]

    def update_date(self, conn, issue_id, issue_date) -> None:
        self.issues[issue_id] = self.issues[issue_id].model_copy(update={"date": _as_datetime(issue_date)})

    def get_all(self, conn) -> List[Issue]:
        return list(self.issues.values())


class FakeRecommendationStore:
    def __init__(self) -> None:
        self.rows: List[Recommendation] = []

    def add(self, issue_id: int, title: str, url: Optional[str], **fields) -> Recommendation:
        rec = Recommendation(id=len(self.rows) + 1, issue_id=issue_id, title=title, url=url, **fields)
        self.rows.append(rec)
        return rec

    def add_recommendations(self, conn, issue_id, recommendations) -> int:
        existing = {rec.url for rec in self.rows if rec.issue_id == issue_id and rec.url}
        added = 0
        for parsed in recommendations:
            if parsed.url and parsed.url in existing:
                continue
            self.add(issue_id, **parsed.model_dump())
            existing.add(parsed.url)
            added += 1
        return added

    def for_issue(self, issue_id: int) -> List[Recommendation]:
        return [rec for rec in self.rows if rec.issue_id == issue_id]

    def get_title_candidates(self, conn, limit=100) -> List[Recommendation]:
        candidates = [rec for rec in self.rows if rec.url and not rec.dead]
        return sorted(candidates, key=lambda rec: rec.title)[:limit]

    def update_title(self, conn, recommendation_id, title) -> None:
        self.rows = [
            rec.model_copy(update={"title": title}) if rec.id == recommendation_id else rec
            for rec in self.rows
        ]


class FakeFetcher:
    def __init__(self, pages: Optional[Dict[str, str]] = None) -> None:
        self.pages = pages or {}
        self.fetched: List[str] = []
        self.pauses: List[Optional[float]] = []

    def fetch(self, url: str, timeout: Optional[float] = None) -> PageContent:
        self.fetched.append(url)
        if url not in self.pages:
            return PageContent(
                url=url,
                final_url=url,
                status_code=404,
                fetch_success=False,
                error="Page not found (404)",
            )
        return PageContent(url=url, final_url=url, html=self.pages[url], status_code=200)

    def pause(self, seconds: Optional[float] = None) -> None:
        self.pauses.append(seconds)

    def close(self) -> None:
        pass


@pytest.fixture
def config(tmp_path) -> Config:
    return Config.from_model(
        ConfigModel(workspace_root=str(tmp_path / "workspace")),
        tmp_path / "config.yaml",
    )


@pytest.fixture
def conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def issues() -> FakeIssueManager:
    return FakeIssueManager()


@pytest.fixture
def store() -> FakeRecommendationStore:
    return FakeRecommendationStore()


@pytest.fixture
def connect(conn):
    return lambda: nullcontext(conn)
