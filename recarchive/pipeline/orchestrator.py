"""Scrape orchestrator that drives fetching, parsing and persistence."""

from contextlib import AbstractContextManager
from typing import Callable, List, Optional

from psycopg import Connection
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import IssueManager, RecommendationStorage, get_connection
from ..extraction import (
    IssueStub,
    date_from_issue_url,
    describe_payload,
    extract_page_title,
    extract_publish_date,
    parse_archive_page,
    parse_newsletter_content,
)
from ..extraction.parser import count_article_links
from ..ingestion import PageFetcher
from ..models import Issue
from .models import BackfillResult, ScrapeResult
from .title_quality import needs_better_title, should_skip_for_title_extraction, title_similarity

console = Console()

ConnectionFactory = Callable[[], AbstractContextManager]


class ScrapeError(Exception):
    """Raised when a single issue cannot be fetched or stored."""


class ScrapeOrchestrator:
    """Run scrape and backfill actions against the newsletter site.

    Pages are fetched strictly one after another with a pause in between.
    Failures of a single issue or page are recorded in the result and never
    abort the rest of a batch; every issue is committed as soon as it is
    parsed so an interrupted run can be resumed.
    """

    def __init__(
        self,
        config: Config,
        fetcher: Optional[PageFetcher] = None,
        issues: Optional[IssueManager] = None,
        recommendations: Optional[RecommendationStorage] = None,
        connection_factory: Optional[ConnectionFactory] = None,
    ) -> None:
        """Initialize scrape orchestrator."""
        self.config = config
        self.scraper = config.config.scraper
        self.fetcher = fetcher or PageFetcher(
            timeout=self.scraper.timeout,
            delay=self.scraper.delay_between_requests,
            user_agent=self.scraper.user_agent,
        )
        self.issues = issues or IssueManager()
        self.recommendations = recommendations or RecommendationStorage()
        self._connect = connection_factory or (lambda: get_connection(self.config.get_db_config()))

    def _archive_page_url(self, page_num: int) -> str:
        if page_num == 1:
            return f"{self.scraper.archive_url}/archives"
        return f"{self.scraper.archive_url}/archives/{page_num}"

    def _harvest_archive(self, result: ScrapeResult) -> List[IssueStub]:
        all_issues: List[IssueStub] = []

        for page_num in range(1, self.scraper.max_archive_pages + 1):
            if page_num > 1:
                self.fetcher.pause()

            archive_url = self._archive_page_url(page_num)
            console.print(f"Scraping archive page {page_num}: {archive_url}")

            page = self.fetcher.fetch(archive_url, timeout=self.scraper.timeout)
            if not page.fetch_success:
                result.errors.append(f"Archive page {page_num}: {page.error}")
                break

            stubs = parse_archive_page(page.html, self.scraper.base_url, self.scraper.newsletter_path)
            if not stubs:
                console.print(f"[dim]No more issues found on page {page_num}[/dim]")
                break

            all_issues.extend(stubs)
            console.print(f"Found {len(stubs)} issues on page {page_num} (total: {len(all_issues)})")

        return all_issues

    def scrape_archive(self) -> ScrapeResult:
        """Discover issues on the archive index and record them."""
        result = ScrapeResult()
        all_issues = self._harvest_archive(result)
        result.issues_found = len(all_issues)

        try:
            with self._connect() as conn:
                for stub in all_issues:
                    self.issues.upsert_stub(conn, stub)
                conn.commit()
        except Exception as e:
            result.errors.append(f"Archive scraping failed: {e}")

        console.print(f"\nArchive scraping complete. Found {result.issues_found} issues.")
        return result

    def _scrape_issue(self, conn: Connection, issue: Issue) -> int:
        page = self.fetcher.fetch(issue.url, timeout=self.scraper.issue_timeout)
        if not page.fetch_success:
            raise ScrapeError(page.error or "Fetch failed")

        recommendations = parse_newsletter_content(page.html, self.scraper.base_url)
        console.print(f"  Found {len(recommendations)} recommendations")

        extracted_date = None
        if issue.date is None:
            extracted_date = extract_publish_date(page.html)
            if extracted_date:
                console.print(f"  Extracted date: {extracted_date.date().isoformat()}")

        added = self.recommendations.add_recommendations(conn, issue.id, recommendations)
        self.issues.mark_scraped(conn, issue.id, extracted_date)
        conn.commit()
        return added

    def scrape_issues(self, limit: Optional[int] = None) -> ScrapeResult:
        """Parse recommendations for every issue not yet scraped."""
        result = ScrapeResult()

        try:
            with self._connect() as conn:
                unscraped = self.issues.get_unscraped(conn, limit)
                result.issues_found = len(unscraped)

                if not unscraped:
                    console.print("No unscraped issues found.")
                    return result

                console.print(f"Found {len(unscraped)} unscraped issues.")

                for i, issue in enumerate(unscraped):
                    if i > 0:
                        self.fetcher.pause()

                    console.print(f"\n[{i + 1}/{len(unscraped)}] Scraping: {issue.title}")
                    try:
                        result.recommendations_added += self._scrape_issue(conn, issue)
                        result.issues_scraped += 1
                    except Exception as e:
                        conn.rollback()
                        result.errors.append(f"Issue {issue.id} ({issue.title}): {e}")
                        console.print(f"  [red]-> Error: {e}[/red]")
        except Exception as e:
            result.errors.append(f"Issue scraping failed: {e}")

        console.print("\nScraping complete.")
        console.print(f"Issues scraped: {result.issues_scraped}")
        console.print(f"Recommendations added: {result.recommendations_added}")
        if result.errors:
            console.print(f"[yellow]Errors: {len(result.errors)}[/yellow]")
        return result

    def scrape_all(self) -> ScrapeResult:
        """Discover issues on the archive, then parse every unscraped one."""
        console.print("[bold]=== Phase 1: Scraping archive for newsletter URLs ===[/bold]\n")
        archive_result = self.scrape_archive()

        console.print("\n[bold]=== Phase 2: Scraping individual issues ===[/bold]\n")
        issue_result = self.scrape_issues()

        return archive_result.merge(issue_result)

    def scrape_single_url(self, url: str) -> ScrapeResult:
        """
        Scrape one issue by address, creating it if it is not known yet.

        An issue that was already scraped is parsed again; recommendations it
        already has are not duplicated.

        Raises:
            ValueError: If no URL is given
        """
        if not url or not url.strip():
            raise ValueError("URL is required")
        url = url.strip()

        result = ScrapeResult(issues_found=1)

        if self.scraper.site_domain not in url:
            result.errors.append(f"URL must be a {self.scraper.site_domain} URL")
            return result

        console.print(f"Scraping single URL: {url}")
        page = self.fetcher.fetch(url, timeout=self.scraper.issue_timeout)
        if not page.fetch_success:
            result.errors.append(f"Failed to scrape URL: {page.error}")
            return result

        html = page.html
        result.debug.extend(describe_payload(html))

        extracted_date = extract_publish_date(html)
        extracted_title = extract_page_title(html) or (
            f"Untitled issue - {extracted_date.date().isoformat() if extracted_date else 'Unknown'}"
        )

        try:
            with self._connect() as conn:
                issue = self.issues.get_by_url(conn, url)
                if issue:
                    if issue.is_scraped:
                        result.debug.append("Issue already scraped, re-scraping...")
                        self.issues.reset_scraped(conn, issue.id)
                else:
                    issue = self.issues.create_issue(conn, extracted_title, url, extracted_date)
                    result.debug.append(f"Created new issue: {extracted_title}")

                recommendations = parse_newsletter_content(html, self.scraper.base_url)
                sections = list(dict.fromkeys(rec.section_name or "none" for rec in recommendations))
                result.debug.append(f"Found {len(recommendations)} recommendations")
                result.debug.append(f"Sections found: {', '.join(sections) or 'none'}")
                result.debug.append(
                    f"Crowdsourced items: {sum(1 for rec in recommendations if rec.is_crowdsourced)}"
                )

                link_count = count_article_links(html)
                if link_count is not None:
                    result.debug.append(f"Total links in article HTML: {link_count}")
                else:
                    result.debug.append("No <article> tag found in HTML")

                result.recommendations_added = self.recommendations.add_recommendations(
                    conn, issue.id, recommendations
                )
                self.issues.mark_scraped(conn, issue.id, extracted_date)
                conn.commit()
                result.issues_scraped = 1
        except Exception as e:
            result.errors.append(f"Failed to scrape URL: {e}")
            return result

        console.print(f"Scraping complete. Added {result.recommendations_added} recommendations.")
        return result

    def backfill_dates(self) -> BackfillResult:
        """Fill in publish dates for issues that have none."""
        result = BackfillResult()

        try:
            with self._connect() as conn:
                issues = self.issues.get_issues_without_dates(conn)
                if not issues:
                    console.print("All issues already have dates.")
                    return result

                console.print(f"Found {len(issues)} issues without dates.\n")

                for i, issue in enumerate(issues):
                    if i > 0:
                        self.fetcher.pause()

                    console.print(f"[{i + 1}/{len(issues)}] {issue.title}")
                    page = self.fetcher.fetch(issue.url, timeout=self.scraper.issue_timeout)
                    if not page.fetch_success:
                        result.errors.append(f"Issue {issue.id}: {page.error}")
                        console.print(f"  [red]-> Error: {page.error}[/red]")
                        continue

                    extracted_date = extract_publish_date(page.html) or date_from_issue_url(issue.url)
                    if not extracted_date:
                        console.print("  -> No date found")
                        result.skipped += 1
                        continue

                    try:
                        self.issues.update_date(conn, issue.id, extracted_date)
                        conn.commit()
                    except Exception as e:
                        conn.rollback()
                        result.errors.append(f"Issue {issue.id}: {e}")
                        continue

                    console.print(f"  -> {extracted_date.isoformat()[:10]}")
                    result.updated += 1
        except Exception as e:
            result.errors.append(f"Date backfill failed: {e}")

        console.print(f"\nBackfill complete. Updated {result.updated} issues.")
        return result

    def backfill_titles(self, limit: int = 50, only_short_titles: bool = True) -> BackfillResult:
        """Replace vague recommendation titles with the linked page's title."""
        result = BackfillResult()

        try:
            with self._connect() as conn:
                candidates = self.recommendations.get_title_candidates(conn, limit)
                if only_short_titles:
                    candidates = [rec for rec in candidates if needs_better_title(rec.title)]

                if not candidates:
                    console.print("No recommendations with short/vague titles to process.")
                    return result

                console.print(f"Processing {len(candidates)} recommendations for title extraction.\n")

                fetched_any = False
                for i, rec in enumerate(candidates):
                    short_title = rec.title if len(rec.title) <= 40 else f"{rec.title[:40]}..."
                    console.print(f'[{i + 1}/{len(candidates)}] "{short_title}"')

                    if not rec.url or should_skip_for_title_extraction(rec.url):
                        console.print("  -> Skipped (URL pattern)")
                        result.skipped += 1
                        continue

                    if fetched_any:
                        self.fetcher.pause(self.scraper.title_delay)
                    fetched_any = True

                    page = self.fetcher.fetch(rec.url, timeout=self.scraper.title_timeout)
                    if not page.fetch_success:
                        result.errors.append(f"{rec.id}: {page.error}")
                        console.print(f"  [red]-> Error: {page.error}[/red]")
                        continue

                    extracted = extract_page_title(page.html)
                    if not extracted or not len(rec.title) < len(extracted) < 200:
                        console.print("  -> Skipped (no better title found)")
                        result.skipped += 1
                        continue

                    if title_similarity(rec.title.lower(), extracted.lower()) >= 0.8:
                        console.print("  -> Skipped (similar to existing)")
                        result.skipped += 1
                        continue

                    try:
                        self.recommendations.update_title(conn, rec.id, extracted)
                        conn.commit()
                    except Exception as e:
                        conn.rollback()
                        result.errors.append(f"{rec.id}: {e}")
                        continue

                    console.print(f'  -> "{extracted[:50]}{"..." if len(extracted) > 50 else ""}"')
                    result.updated += 1
        except Exception as e:
            result.errors.append(f"Title backfill failed: {e}")

        console.print("\nTitle backfill complete.")
        console.print(f"Updated: {result.updated}, Skipped: {result.skipped}, Errors: {len(result.errors)}")
        return result


def print_scrape_summary(result: ScrapeResult) -> None:
    """Print summary of a scrape action."""
    table = Table(title="Scrape Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Issues found", str(result.issues_found))
    table.add_row("Issues scraped", f"[green]{result.issues_scraped}[/green]")
    table.add_row("Recommendations added", f"[green]{result.recommendations_added}[/green]")
    table.add_row("Errors", f"[red]{len(result.errors)}[/red]" if result.errors else "0")
    console.print(table)

    if result.debug:
        console.print("\n[bold]Debug:[/bold]")
        for line in result.debug:
            console.print(f"  [dim]{line}[/dim]")

    if result.errors:
        console.print("\n[bold red]Errors:[/bold red]")
        for error in result.errors:
            console.print(f"  - {error}")


def print_backfill_summary(result: BackfillResult) -> None:
    """Print summary of a backfill action."""
    console.print("\n[bold]Backfill Summary:[/bold]")
    console.print(f"  Updated: [green]{result.updated}[/green]")
    console.print(f"  Skipped: {result.skipped}")
    console.print(f"  Failed: [red]{len(result.errors)}[/red]")

    for error in result.errors:
        console.print(f"  - {error}")
