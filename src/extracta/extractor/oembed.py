"""
oEmbed metadata lookup and the variant that uses it.

The provider is injected into :class:`OEmbedVariant`; the generic extraction
path never performs remote lookups.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Optional, Protocol

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from .detector import CONTENT_BLOCK_THRESHOLD
from .exceptions import MetadataLookupError
from .protocols import Document, Url
from .variant import Extraction, ExtractorVariant

logger = structlog.get_logger(__name__)

YOUTUBE_OEMBED_ENDPOINT = "https://www.youtube.com/oembed"


class OEmbedResponse(BaseModel):
    """Subset of an oEmbed response the extractors care about."""

    model_config = ConfigDict(extra="ignore")

    type: str = "rich"
    version: str = "1.0"
    title: Optional[str] = None
    author_name: Optional[str] = None
    provider_name: Optional[str] = None
    html: Optional[str] = None
    thumbnail_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class MetadataProvider(Protocol):
    def lookup(self, url: str) -> OEmbedResponse:
        """Return oEmbed metadata for ``url``.

        Raises:
            MetadataLookupError: If the metadata cannot be fetched or parsed.
        """
        ...


class HttpOEmbedProvider:
    """Fetches oEmbed metadata from a provider endpoint over HTTP."""

    def __init__(
        self,
        endpoint: str = YOUTUBE_OEMBED_ENDPOINT,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.endpoint = endpoint
        headers: Dict[str, str] = {"User-Agent": user_agent} if user_agent else {}
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout), headers=headers, follow_redirects=True)
        self.logger = logger.bind(component="HttpOEmbedProvider", endpoint=endpoint)

    def lookup(self, url: str) -> OEmbedResponse:
        try:
            response = self._client.get(self.endpoint, params={"url": url, "format": "json"})
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as e:
            raise MetadataLookupError(f"oEmbed endpoint returned {e.response.status_code} for {url}") from e
        except httpx.HTTPError as e:
            raise MetadataLookupError(f"oEmbed request for {url} failed: {e}") from e
        except ValueError as e:
            raise MetadataLookupError(f"oEmbed response for {url} is not JSON") from e

        try:
            metadata = OEmbedResponse.model_validate(payload)
        except ValidationError as e:
            raise MetadataLookupError(f"Invalid oEmbed payload for {url}: {e}") from e

        self.logger.debug("Fetched oEmbed metadata", url=url, type=metadata.type)
        return metadata

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpOEmbedProvider:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class OEmbedExtraction(Extraction):
    """An extraction whose title and video embed prefer oEmbed metadata.

    The lookup runs at most once per extraction. When it fails, or returns no
    title or html, the page-derived values are used.
    """

    def __init__(
        self,
        variant: ExtractorVariant,
        url: Url,
        document: Document,
        threshold: int = CONTENT_BLOCK_THRESHOLD,
        provider: Optional[MetadataProvider] = None,
    ) -> None:
        super().__init__(variant, url, document, threshold=threshold)
        self.provider = provider

    @cached_property
    def metadata(self) -> Optional[OEmbedResponse]:
        if self.provider is None:
            return None
        try:
            return self.provider.lookup(self.url.url)
        except MetadataLookupError as e:
            logger.warning(
                "oEmbed lookup failed, keeping page fields", variant=self.variant.name, url=self.url.url, error=str(e)
            )
            return None

    @cached_property
    def title(self) -> Optional[str]:
        remote = self.metadata.title if self.metadata is not None else None
        return remote or super().title

    @cached_property
    def video_embed(self) -> Optional[str]:
        remote = self.metadata.html if self.metadata is not None else None
        return remote or super().video_embed


@dataclass(frozen=True, eq=False)
class OEmbedVariant(ExtractorVariant):
    """Variant whose title and video embed come from oEmbed when available.

    Page rules still produce every field; a non-empty oEmbed ``title`` or
    ``html`` replaces the rule-based title or embed. When the lookup fails the
    rule-based record is returned unchanged.
    """

    provider: Optional[MetadataProvider] = None

    def bind(self, url: Url, document: Document, threshold: int = CONTENT_BLOCK_THRESHOLD) -> OEmbedExtraction:
        return OEmbedExtraction(self, url, document, threshold=threshold, provider=self.provider)
