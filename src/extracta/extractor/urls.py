"""
Source URL parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

import tldextract

# Bundled public-suffix snapshot only; parsing a URL never touches the network
_SUFFIXES = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


@dataclass(slots=True, frozen=True)
class SourceUrl:
    """The URL a document was fetched from.

    ``domain`` is the registrable label without its public suffix, so
    ``http://www.youtube.com/watch?v=x`` has host ``www.youtube.com`` and
    domain ``youtube``. ``path`` keeps the query string.
    """

    url: str
    scheme: str
    host: str
    path: str
    domain: str

    @classmethod
    def parse(cls, url: str) -> SourceUrl:
        raw = url.strip()
        parts = urlsplit(raw)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"Not an absolute URL: {url!r}")

        host = parts.hostname.lower()
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"

        return cls(
            url=raw,
            scheme=parts.scheme.lower(),
            host=host,
            path=path,
            domain=_SUFFIXES(host).domain or host,
        )

    def __str__(self) -> str:
        return self.url
