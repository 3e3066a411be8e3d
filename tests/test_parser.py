from __future__ import annotations

from conftest import build_issue_page, heading, list_block, paragraph

from recarchive.extraction import parse_newsletter_content
from recarchive.extraction.parser import count_article_links, extract_contributor, section_label


def test_heading_then_primary_link():
    html = build_issue_page(
        [
            heading("Apps"),
            paragraph('Check out <a href="https://apps.apple.com/app/widget">Widget</a> (link)'),
        ]
    )

    recs = parse_newsletter_content(html)

    assert len(recs) == 1
    rec = recs[0]
    assert rec.title == "Widget"
    assert rec.url == "https://apps.apple.com/app/widget"
    assert rec.category == "apps"
    assert rec.section_name == "apps"
    assert rec.is_primary_link is True
    assert rec.is_crowdsourced is False
    assert rec.contributor_name is None
    assert rec.description == "Check out Widget (link)"


def test_reader_submission_with_contributor():
    html = build_issue_page(
        [paragraph('I love <a href="https://example.com/cool-thing">Cool Thing</a> so much &mdash; Sam')]
    )

    recs = parse_newsletter_content(html)

    assert len(recs) == 1
    assert recs[0].is_crowdsourced is True
    assert recs[0].contributor_name == "Sam"
    assert recs[0].is_primary_link is False


def test_community_mention_marks_crowdsourced():
    html = build_issue_page(
        [list_block('From the community: <a href="https://example.com/tool">Neat Tool</a>')]
    )

    recs = parse_newsletter_content(html)

    assert recs[0].is_crowdsourced is True
    assert recs[0].contributor_name is None


def test_sections_follow_headings_and_start_at_intro():
    html = build_issue_page(
        [
            paragraph('Opening <a href="https://example.com/one">First Thing</a>'),
            heading("Signing off"),
            list_block('<a href="https://example.com/two">Second Thing</a>'),
        ]
    )

    recs = parse_newsletter_content(html)

    assert [rec.section_name for rec in recs] == ["intro", "signing_off"]


def test_duplicate_urls_emitted_once():
    html = build_issue_page(
        [
            paragraph('<a href="https://example.com/a">Thing One</a>'),
            paragraph('Again: <a href="https://example.com/a">Thing One again</a>'),
            list_block('<a href="https://example.com/a">Thing One list</a>'),
        ]
    )

    recs = parse_newsletter_content(html)

    assert [rec.title for rec in recs] == ["Thing One"]


def test_share_intent_links_are_skipped():
    html = build_issue_page(
        [
            paragraph(
                '<a href="https://twitter.com/intent/tweet?text=great">Share this great newsletter</a> '
                'and <a href="https://example.com/real">Real Pick</a>'
            )
        ]
    )

    recs = parse_newsletter_content(html)

    assert [rec.url for rec in recs] == ["https://example.com/real"]


def test_junk_anchor_text_is_skipped():
    html = build_issue_page([paragraph('<a href="https://example.com/more">Read more</a>')])
    assert parse_newsletter_content(html) == []


def test_weak_anchor_uses_link_marker():
    html = build_issue_page([paragraph('Widget Pro (link) <a href="https://widgetpro.example/">Try</a>')])

    recs = parse_newsletter_content(html)

    assert recs[0].title == "Widget Pro"
    assert recs[0].is_primary_link is True


def test_relative_links_resolve_against_site():
    html = build_issue_page([paragraph('<a href="/2024/1/2/123/great-review">Great Review</a>')])

    recs = parse_newsletter_content(html)

    assert recs[0].url == "https://www.theverge.com/2024/1/2/123/great-review"


def test_short_context_has_no_description():
    html = build_issue_page([paragraph('<a href="https://example.com/x">Widget</a>')])
    assert parse_newsletter_content(html)[0].description is None


def test_fallback_to_article_anchors():
    html = (
        "<html><body><nav><a href=\"https://example.com/nav\">Navigation</a></nav>"
        '<article><p><a href="https://www.youtube.com/watch?v=1">Great Video</a>'
        '<a href="mailto:x@example.com">Email us</a></p></article></body></html>'
    )

    recs = parse_newsletter_content(html)

    assert len(recs) == 1
    assert recs[0].title == "Great Video"
    assert recs[0].category == "videos"
    assert recs[0].section_name is None


def test_empty_blocks_fall_back_to_article():
    html = build_issue_page([]) + '<article><a href="https://example.com/fallback">Fallback Pick</a></article>'
    assert [rec.title for rec in parse_newsletter_content(html)] == ["Fallback Pick"]


def test_nothing_found():
    assert parse_newsletter_content("<html><body>No links</body></html>") == []
    assert parse_newsletter_content("") == []


def test_extract_contributor_single_word():
    assert extract_contributor("Great pick &mdash; Sam") == "Sam"
    assert extract_contributor("Great pick — Alex ") == "Alex"
    assert extract_contributor("Great pick &mdash;&nbsp;Jo") == "Jo"
    assert extract_contributor("No credit here") is None


def test_section_label():
    assert section_label("<strong>Signing&nbsp;off</strong>") == "signing_off"


def test_count_article_links():
    assert count_article_links('<article><a href="a">1</a><a href="b">2</a></article>') == 2
    assert count_article_links("<div></div>") is None
