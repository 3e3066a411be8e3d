from __future__ import annotations

from datetime import date

from conftest import build_issue_page, paragraph

from recarchive.extraction import date_from_issue_url, extract_publish_date
from recarchive.extraction.dates import parse_timestamp


def test_publish_date_from_payload():
    html = build_issue_page([paragraph("hi")], published_at="2024-03-10T14:00:00.000Z")
    published = extract_publish_date(html)
    assert published is not None
    assert published.date() == date(2024, 3, 10)


def test_publish_date_from_time_element():
    html = '<article><time datetime="2023-11-02T09:30:00Z">Nov 2</time></article>'
    assert extract_publish_date(html).date() == date(2023, 11, 2)


def test_publish_date_from_meta():
    html = '<meta property="article:published_time" content="2022-05-06T08:00:00+00:00">'
    assert extract_publish_date(html).date() == date(2022, 5, 6)


def test_invalid_payload_date_falls_through():
    html = build_issue_page([], published_at="not a date") + '<time datetime="2021-01-15T00:00:00Z"></time>'
    assert extract_publish_date(html).date() == date(2021, 1, 15)


def test_no_date_found():
    assert extract_publish_date("<html></html>") is None
    assert extract_publish_date("") is None


def test_parse_timestamp_rejects_garbage():
    assert parse_timestamp("yesterday-ish") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None


def test_date_from_issue_url():
    url = "https://www.theverge.com/2024/3/10/24096000/installer-25-best-stuff"
    assert date_from_issue_url(url) == date(2024, 3, 10)
    assert date_from_issue_url("https://www.theverge.com/installer-newsletter/123/foo") is None
    assert date_from_issue_url("https://www.theverge.com/2024/13/40/1/bad") is None


def test_publish_date_from_single_quoted_meta():
    html = "<meta property='article:published_time' content='2024-03-05T10:00:00Z'>"
    assert extract_publish_date(html).date() == date(2024, 3, 5)


def test_publish_date_from_itemprop_meta():
    html = '<html><body><meta itemprop="datePublished" content="2020-02-29"></body></html>'
    assert extract_publish_date(html).date() == date(2020, 2, 29)


def test_time_only_element_is_skipped_for_meta_date():
    html = (
        '<html><head><meta property="article:published_time" content="2023-06-01T12:00:00Z"></head>'
        '<body><time datetime="10:30">10:30</time></body></html>'
    )
    assert extract_publish_date(html).date() == date(2023, 6, 1)


def test_parse_timestamp_rejects_time_only_values():
    assert parse_timestamp("10:30") is None
    assert parse_timestamp("10:30:00") is None


def test_parse_timestamp_accepts_date_only_values():
    assert parse_timestamp("2022-12-25").date() == date(2022, 12, 25)
