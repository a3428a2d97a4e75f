"""
Unit tests for the built-in site variants.
"""

from unittest.mock import Mock

import pytest
from extracta.extractor.exceptions import MetadataLookupError
from extracta.extractor.oembed import OEmbedResponse
from extracta.extractor.registry import ExtractorRegistry
from extracta.extractor.sites import (
    dinosaur_comics_variant,
    generic_variant,
    register_site_variants,
    youtube_variant,
)
from extracta.extractor.urls import SourceUrl

YOUTUBE_URL = "http://www.youtube.com/watch?v=FzRH3iTQPrk"

YOUTUBE_PAGE = """
<html>
  <head>
    <title>The Sneezing Baby Panda - YouTube</title>
    <meta property="og:title" content="The Sneezing Baby Panda">
    <meta name="description" content="A Baby Panda Sneezing Original footage taken from Tony Nicol.">
    <link rel="image_src" href="http://i.ytimg.com/vi/FzRH3iTQPrk/default.jpg">
  </head>
  <body><div id="player"></div></body>
</html>
"""

EMBED = '<object width="480" height="385"><param name="movie" value="http://www.youtube.com/v/FzRH3iTQPrk"></object>'

QWANTZ_URL = "http://www.qwantz.com/index.php?comic=1"

QWANTZ_PAGE = """
<html>
  <head><title>Dinosaur Comics - February 1st, 2003</title></head>
  <body>
    <img src="/images/logo.png">
    <img class="comic" src="/comics/comic2-01.png" title="joke">
  </body>
</html>
"""


@pytest.fixture
def panda_provider():
    provider = Mock()
    provider.lookup.return_value = OEmbedResponse(type="video", title="The Sneezing Baby Panda", html=EMBED)
    return provider


class TestYoutubeVariant:
    """Test YouTube watch page extraction."""

    def test_matches_youtube_hosts(self):
        variant = youtube_variant()

        assert variant.can_extract(SourceUrl.parse(YOUTUBE_URL))
        assert variant.can_extract(SourceUrl.parse("https://youtube.com/watch?v=1"))
        assert not variant.can_extract(SourceUrl.parse("http://www.vimeo.com/1"))

    def test_extraction_with_oembed(self, parse, panda_provider):
        content = youtube_variant(panda_provider).extract(SourceUrl.parse(YOUTUBE_URL), parse(YOUTUBE_PAGE))

        panda_provider.lookup.assert_called_once_with(YOUTUBE_URL)
        assert content.url == YOUTUBE_URL
        assert content.media_type == "video"
        assert content.title == "The Sneezing Baby Panda"
        assert content.content == "A Baby Panda Sneezing Original footage taken from Tony Nicol."
        assert content.image_urls == ["http://i.ytimg.com/vi/FzRH3iTQPrk/default.jpg"]
        assert content.video_embed == EMBED
        assert content.summary is None

    def test_extraction_when_oembed_unavailable(self, parse):
        provider = Mock()
        provider.lookup.side_effect = MetadataLookupError("timed out")

        content = youtube_variant(provider).extract(SourceUrl.parse(YOUTUBE_URL), parse(YOUTUBE_PAGE))

        assert content.title == "The Sneezing Baby Panda"
        assert content.video_embed is None


class TestDinosaurComicsVariant:
    """Test comic strip extraction."""

    def test_comic_image_and_joke(self, parse):
        variant = dinosaur_comics_variant()
        url = SourceUrl.parse(QWANTZ_URL)

        assert variant.can_extract(url)
        content = variant.extract(url, parse(QWANTZ_PAGE))

        assert content.media_type == "image"
        assert content.title == "Dinosaur Comics - February 1st, 2003"
        assert content.content == "joke"
        assert content.image_urls == ["http://www.qwantz.com/comics/comic2-01.png"]
        assert content.video_embed is None


class TestRegistration:
    """Test startup registration of the built-in variants."""

    def test_registered_in_priority_order(self):
        registry = ExtractorRegistry()

        variants = register_site_variants(registry)

        assert registry.names() == ["youtube", "dinosaur_comics"]
        assert list(registry) == variants

    def test_provider_is_wired_into_youtube(self, panda_provider):
        registry = ExtractorRegistry()
        register_site_variants(registry, panda_provider)

        assert registry.select(SourceUrl.parse(YOUTUBE_URL)).provider is panda_provider

    def test_selection_by_domain(self):
        registry = ExtractorRegistry()
        register_site_variants(registry)

        assert registry.select(SourceUrl.parse(QWANTZ_URL)).name == "dinosaur_comics"
        assert registry.select(SourceUrl.parse("http://example.com/")) is None

    def test_registering_twice_is_rejected(self):
        registry = ExtractorRegistry()
        register_site_variants(registry)

        with pytest.raises(ValueError):
            register_site_variants(registry)

    def test_generic_variant_is_never_selected(self):
        variant = generic_variant("article")

        assert variant.name == "generic"
        assert variant.media_type == "article"
        assert not variant.can_extract(SourceUrl.parse(QWANTZ_URL))
