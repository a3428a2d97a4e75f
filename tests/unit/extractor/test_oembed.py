"""
Unit tests for the oEmbed provider and the oEmbed-backed variant.
"""

from unittest.mock import Mock

import httpx
import pytest
from extracta.extractor.exceptions import MetadataLookupError
from extracta.extractor.oembed import HttpOEmbedProvider, OEmbedResponse, OEmbedVariant
from extracta.extractor.rules import FieldRule, rule_table
from extracta.extractor.urls import SourceUrl
from extracta.extractor.variant import ExactDomain

ENDPOINT = "https://oembed.example.com/oembed"
VIDEO_URL = "http://www.example.com/watch?v=1"

PAGE = """
<html>
  <head><title>Page Title</title></head>
  <body>
    <h1>Rule Title</h1>
    <div class="player"><video src="/v.mp4"></video></div>
  </body>
</html>
"""


def provider_with(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpOEmbedProvider(endpoint=ENDPOINT, client=client)


class TestHttpOEmbedProvider:
    """Test HTTP lookups against a mocked transport."""

    def test_successful_lookup(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "type": "video",
                    "version": "1.0",
                    "title": "A Video",
                    "html": "<iframe></iframe>",
                    "width": 480,
                    "cache_age": 3600,
                },
            )

        with provider_with(handler) as provider:
            metadata = provider.lookup(VIDEO_URL)

        assert metadata.title == "A Video"
        assert metadata.html == "<iframe></iframe>"
        assert metadata.width == 480
        (request,) = seen
        assert request.url.host == "oembed.example.com"
        assert request.url.params["url"] == VIDEO_URL
        assert request.url.params["format"] == "json"

    def test_error_status(self):
        provider = provider_with(lambda request: httpx.Response(404))

        with pytest.raises(MetadataLookupError, match="404"):
            provider.lookup(VIDEO_URL)

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(MetadataLookupError):
            provider_with(handler).lookup(VIDEO_URL)

    def test_non_json_body(self):
        provider = provider_with(lambda request: httpx.Response(200, text="<html>not json</html>"))

        with pytest.raises(MetadataLookupError, match="not JSON"):
            provider.lookup(VIDEO_URL)

    def test_invalid_payload(self):
        provider = provider_with(lambda request: httpx.Response(200, json={"width": "wide"}))

        with pytest.raises(MetadataLookupError, match="Invalid"):
            provider.lookup(VIDEO_URL)


class TestOEmbedVariant:
    """Test merging oEmbed metadata into page records."""

    @pytest.fixture
    def document(self, parse):
        return parse(PAGE)

    @pytest.fixture
    def url(self):
        return SourceUrl.parse(VIDEO_URL)

    def make_variant(self, provider):
        return OEmbedVariant(
            name="video",
            matcher=ExactDomain("example"),
            media_type="video",
            rules=rule_table(title="//h1", video_embed=FieldRule("//div[@class='player']/video")),
            provider=provider,
        )

    def test_metadata_overrides_title_and_embed(self, document, url):
        provider = Mock()
        provider.lookup.return_value = OEmbedResponse(title="oEmbed Title", html="<iframe></iframe>")

        content = self.make_variant(provider).extract(url, document)

        provider.lookup.assert_called_once_with(VIDEO_URL)
        assert content.title == "oEmbed Title"
        assert content.video_embed == "<iframe></iframe>"
        assert content.media_type == "video"

    def test_missing_metadata_fields_keep_page_values(self, document, url):
        provider = Mock()
        provider.lookup.return_value = OEmbedResponse(type="video")

        content = self.make_variant(provider).extract(url, document)

        assert content.title == "Rule Title"
        assert content.video_embed == '<video src="/v.mp4"></video>'

    def test_lookup_failure_keeps_page_record(self, document, url):
        provider = Mock()
        provider.lookup.side_effect = MetadataLookupError("offline")
        variant = self.make_variant(provider)

        content = variant.extract(url, document)

        assert content == variant.bind(url, document).to_content()
        assert content.title == "Rule Title"

    def test_without_provider(self, document, url):
        content = self.make_variant(None).extract(url, document)

        assert content.title == "Rule Title"
        assert content.video_embed == '<video src="/v.mp4"></video>'

    def test_bound_extraction_carries_metadata(self, document, url):
        provider = Mock()
        provider.lookup.return_value = OEmbedResponse(title="oEmbed Title", html="<iframe></iframe>")
        variant = self.make_variant(provider)

        extraction = variant.bind(url, document)

        assert extraction.title == "oEmbed Title"
        assert extraction.video_embed == "<iframe></iframe>"
        assert extraction.to_content() == variant.extract(url, document)

    def test_lookup_runs_once_per_extraction(self, document, url):
        provider = Mock()
        provider.lookup.return_value = OEmbedResponse(title="oEmbed Title")
        extraction = self.make_variant(provider).bind(url, document)

        extraction.to_content()
        extraction.to_content()

        provider.lookup.assert_called_once_with(VIDEO_URL)
        assert extraction.video_embed == '<video src="/v.mp4"></video>'
