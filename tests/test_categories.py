from __future__ import annotations

import pytest

from recarchive.extraction import CATEGORIES, guess_category


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://apps.apple.com/us/app/widget/id123", "apps"),
        ("https://play.google.com/store/apps/details?id=x", "apps"),
        ("https://www.netflix.com/title/8000", "shows"),
        ("https://www.youtube.com/watch?v=abc", "videos"),
        ("https://open.spotify.com/album/123", "music"),
        ("https://open.spotify.com/show/123", "podcasts"),
        ("https://store.steampowered.com/app/123/Foo/", "games"),
        ("https://www.amazon.com/dp/B000123", "books"),
        ("https://www.amazon.com/gp/product/B000123", "gadgets"),
        ("https://www.imdb.com/title/tt123/", "movies"),
        ("https://www.themoviedb.org/movie/1", "movies"),
        ("https://www.themoviedb.org/tv/1", "shows"),
        ("https://www.seriouseats.com/best-chili", "food-drink"),
    ],
)
def test_domain_rules(url, expected):
    assert guess_category("Something", None, url) == expected


def test_storefront_domain_beats_title_text():
    url = "https://store.steampowered.com/app/123/Foo/"
    assert guess_category("A movie review of sorts", "a film about film", url) == "games"


def test_text_rules_when_no_domain_matches():
    assert guess_category("A great new album", None, "https://example.com/x") == "music"
    assert guess_category("The best iPhone app for notes", None, "https://example.com/x") == "apps"
    assert guess_category("Season 2 finale recap", None, "https://example.com/x") == "shows"


def test_podcast_mentions_stay_articles():
    assert guess_category("My favorite podcast", None, "https://example.com/p") == "articles"


def test_defaults_to_articles():
    assert guess_category("Nothing special", None, "https://example.com/post") == "articles"
    assert guess_category("Nothing special", None, None) == "articles"


def test_result_always_in_fixed_set():
    for url in ("", "garbage", "https://example.com", "https://www.netflix.com"):
        assert guess_category("t", "d", url) in CATEGORIES
