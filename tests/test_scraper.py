"""End-to-end behaviour of the fetch/politeness orchestrator with a fake transport."""

import pytest
import requests

from cardgetter.cards.wildcard import (
    ArticleCard,
    CardType,
    ImageCard,
    LinkCard,
    VideoCard,
    card_to_dict,
)
from cardgetter.core.config import ScraperConfig
from cardgetter.core.scraping import scraper as scraper_module
from cardgetter.core.scraping.scraper import Scraper, fetch_card, media_card
from cardgetter.exceptions import (
    ErrorKind,
    InvalidURLError,
    MarkupParseError,
    RobotsDisallowedError,
    TransportError,
    UpstreamStatusError,
)
from conftest import FakeFetcher, make_response

URL = "https://site.test/a/b"
ROBOTS = "https://site.test/robots.txt"
ARTICLE = b'<meta property="og:type" content="article"/><meta property="og:title" content="T"/>'
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_html_goes_through_tag_extraction(config):
    fetcher = FakeFetcher({URL: make_response(200, ARTICLE, "text/html; charset=utf-8")})
    card = Scraper(config, fetcher).fetch_card(URL)
    assert isinstance(card, ArticleCard)
    assert card.article.generic_metadata.title == "T"
    assert fetcher.calls == [ROBOTS, URL]


def test_missing_content_type_is_treated_as_html(no_robots_config):
    fetcher = FakeFetcher({URL: make_response(200, "<title>Foo</title>")})
    card = Scraper(no_robots_config, fetcher).fetch_card(URL)
    assert isinstance(card, LinkCard)
    assert card.target.generic_metadata.title == "Foo"
    assert card.target.url == URL


def test_declared_image_becomes_image_card(no_robots_config, monkeypatch):
    def no_extraction(*args, **kwargs):
        raise AssertionError("media must not go through tag extraction")

    monkeypatch.setattr(scraper_module, "extract_tags", no_extraction)
    fetcher = FakeFetcher({URL: make_response(200, PNG, "image/png")})
    card = Scraper(no_robots_config, fetcher).fetch_card(URL)

    assert isinstance(card, ImageCard)
    assert card.media.image_details.image_url == URL
    assert card.media.image_details.image_content_type == "image/png"
    data = card_to_dict(card)
    assert data["card_type"] == "image"
    assert data["media"] == {
        "type": "image",
        "image_details": {"image_url": URL, "image_content_type": "image/png"},
    }


def test_sniffed_type_wins_over_declared_one(no_robots_config):
    fetcher = FakeFetcher({URL: make_response(200, b"GIF89a" + b"\x00" * 10, "image/png")})
    card = Scraper(no_robots_config, fetcher).fetch_card(URL)
    assert card.media.image_details.image_content_type == "image/gif"


def test_html_served_with_wrong_type_is_still_parsed(no_robots_config):
    body = b"<!DOCTYPE html>\n" + ARTICLE + b" " * 1000
    fetcher = FakeFetcher({URL: make_response(200, body, "application/octet-stream")})
    card = Scraper(no_robots_config, fetcher).fetch_card(URL)
    assert card.card_type is CardType.ARTICLE
    assert card.article.generic_metadata.title == "T"


def test_video_card(no_robots_config):
    webm = b"\x1a\x45\xdf\xa3" + b"\x00" * 16
    fetcher = FakeFetcher({URL: make_response(200, webm, "video/webm")})
    card = Scraper(no_robots_config, fetcher).fetch_card(URL)
    assert isinstance(card, VideoCard)
    assert card.web_url == URL
    assert card.media.stream_url == URL
    assert card.media.stream_content_type == "video/webm"


def test_other_media_becomes_bare_link(no_robots_config):
    fetcher = FakeFetcher({URL: make_response(200, b"%PDF-1.4\n", "application/pdf")})
    card = Scraper(no_robots_config, fetcher).fetch_card(URL)
    assert isinstance(card, LinkCard)
    assert card.target.url == URL
    assert card.target.generic_metadata.app_link is None


def test_robots_denial_skips_primary_fetch(config):
    fetcher = FakeFetcher(
        {
            ROBOTS: make_response(200, "User-agent: *\nDisallow: /a\n", "text/plain"),
            URL: make_response(200, ARTICLE, "text/html"),
        }
    )
    with pytest.raises(RobotsDisallowedError) as excinfo:
        Scraper(config, fetcher).fetch_card(URL)

    assert excinfo.value.kind is ErrorKind.FORBIDDEN_BY_ROBOTS
    assert fetcher.calls == [ROBOTS]


def test_unreachable_robots_txt_does_not_block(config):
    fetcher = FakeFetcher(
        {
            ROBOTS: requests.ConnectionError("no route"),
            URL: make_response(200, ARTICLE, "text/html"),
        }
    )
    card = Scraper(config, fetcher).fetch_card(URL)
    assert card.card_type is CardType.ARTICLE
    assert fetcher.calls == [ROBOTS, URL]


def test_robots_check_disabled(no_robots_config):
    fetcher = FakeFetcher({URL: make_response(200, ARTICLE, "text/html")})
    Scraper(no_robots_config, fetcher).fetch_card(URL)
    assert fetcher.calls == [URL]


def test_non_2xx_is_an_upstream_error(no_robots_config):
    fetcher = FakeFetcher({URL: make_response(404, "gone fishing", "text/plain")})
    with pytest.raises(UpstreamStatusError) as excinfo:
        Scraper(no_robots_config, fetcher).fetch_card(URL)

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == "gone fishing"
    assert excinfo.value.kind is ErrorKind.UPSTREAM_STATUS


def test_transport_failure(no_robots_config):
    fetcher = FakeFetcher({URL: requests.Timeout("too slow")})
    with pytest.raises(TransportError):
        Scraper(no_robots_config, fetcher).fetch_card(URL)


@pytest.mark.parametrize("url", ["", "not a url", "ftp://site.test/file", "/relative/path"])
def test_invalid_urls(no_robots_config, url):
    fetcher = FakeFetcher({})
    with pytest.raises(InvalidURLError):
        Scraper(no_robots_config, fetcher).fetch_card(url)
    assert fetcher.calls == []


def test_parse_errors_propagate(no_robots_config, monkeypatch):
    def broken(*args, **kwargs):
        raise MarkupParseError("bad markup")

    monkeypatch.setattr(scraper_module, "extract_tags", broken)
    fetcher = FakeFetcher({URL: make_response(200, "<html>", "text/html")})
    with pytest.raises(MarkupParseError):
        Scraper(no_robots_config, fetcher).fetch_card(URL)


def test_media_card_helper():
    assert media_card(URL, "image/jpeg").card_type is CardType.IMAGE
    assert media_card(URL, "video/mp4").card_type is CardType.VIDEO
    assert media_card(URL, "application/zip").card_type is CardType.LINK


def test_sniffing_reads_past_short_chunks(no_robots_config):
    resp = make_response(200, b"", "application/octet-stream")
    pieces = [b"<!DOCTYPE", b" html>\n", ARTICLE, b" " * 600]
    # chunked bodies can arrive in pieces smaller than the sniff window
    resp.iter_content = lambda chunk_size=1, decode_unicode=False: iter(pieces)
    card = Scraper(no_robots_config, FakeFetcher({URL: resp})).fetch_card(URL)
    assert card.card_type is CardType.ARTICLE
    assert card.article.generic_metadata.title == "T"


def test_read_head_stops_once_the_window_is_full():
    chunks = iter([b"a" * 300, b"b" * 300, b"c" * 300])
    head = scraper_module._read_head(chunks)
    assert head == b"a" * 300 + b"b" * 300
    assert list(chunks) == [b"c" * 300]


@pytest.fixture
def shared_scrapers():
    scraper_module.default_scraper.cache_clear()
    yield scraper_module.default_scraper
    scraper_module.default_scraper.cache_clear()


def test_fetch_card_reuses_one_session_per_config(shared_scrapers, monkeypatch):
    sessions = []
    real_init = requests.Session.__init__

    def counting_init(self):
        sessions.append(self)
        real_init(self)

    monkeypatch.setattr(requests.Session, "__init__", counting_init)
    monkeypatch.setattr(Scraper, "fetch_card", lambda self, url: media_card(url, "image/png"))

    for _ in range(3):
        assert fetch_card(URL, ScraperConfig(check_robots_txt=False)).card_type is CardType.IMAGE
    assert len(sessions) == 1

    fetch_card(URL, ScraperConfig(check_robots_txt=False, timeout=3))
    assert len(sessions) == 2
    assert shared_scrapers(ScraperConfig()) is shared_scrapers(ScraperConfig())


def test_closing_a_scraper_closes_its_session(no_robots_config, monkeypatch):
    closed = []
    with Scraper(no_robots_config) as scraper:
        monkeypatch.setattr(scraper.fetcher.session, "close", lambda: closed.append(True))
    assert closed == [True]
