"""URL rewriting of local media URLs to a CDN image endpoint."""

import re
from collections.abc import Mapping
from dataclasses import replace

from cdnmark.models.cdn import CDNConfig, CDNTarget, DimensionMatch, SrcsetCandidate
from cdnmark.models.url import URL, MalformedURLError

# "name-400x300.ext": the last -WxH group right before the final extension
DIMENSION_PATTERN = re.compile(r"(?P<base>.+)-(?P<width>\d+)x(?P<height>\d+)(?P<ext>\.[^.]*)?")

# src attribute of an img tag; data-src and srcset are not matched, and quoted
# values of other attributes are skipped whole
IMG_SRC_PATTERN = re.compile(
    r"""<img\b(?:[^>"']|"[^"]*"|'[^']*')*?(?<![\w-])src\s*=\s*(?P<quote>["'])(?P<url>.*?)(?P=quote)""",
    re.IGNORECASE | re.DOTALL,
)


def resolve(source: str, target: CDNTarget) -> str:
    """
    Overlay the CDN scheme, host and port onto a source URL.

    Fields the target leaves unset are removed from the result. Path, query,
    fragment and credentials are carried over from the source.

    Raises:
        MalformedURLError: If the source cannot be parsed.
    """
    return _resolve_url(URL.decompose(source), target).compose()


def _resolve_url(url: URL, target: CDNTarget) -> URL:
    return replace(url, scheme=target.scheme, host=target.host, port=target.port)


def extract_dimensions(filename: str) -> DimensionMatch | None:
    """
    Detect a ``-{width}x{height}`` suffix before the file extension.

    Args:
        filename: A bare filename such as "photo-400x300.png"

    Returns:
        The filename without the suffix and both dimensions, or None
    """
    match = DIMENSION_PATTERN.fullmatch(filename)
    if match is None:
        return None

    width = int(match.group("width"))
    height = int(match.group("height"))
    if width <= 0 or height <= 0:
        return None

    return DimensionMatch(
        base_name=f"{match.group('base')}{match.group('ext') or ''}",
        width=width,
        height=height,
    )


def rewrite_attachment_url(url: str, config: CDNConfig) -> str:
    """
    Point a single media URL at the CDN.

    Args:
        url: Media URL, typically under the upload directory
        config: CDN settings snapshot

    Returns:
        The CDN URL, or the input unchanged when the CDN is off or the URL is malformed
    """
    target = config.target if config.enabled else None
    if target is None:
        return url

    try:
        parsed = URL.decompose(url)
    except MalformedURLError:
        return url

    return _to_cdn(parsed, target, config).compose()


def _to_cdn(url: URL, target: CDNTarget, config: CDNConfig) -> URL:
    return _resolve_url(url, target).with_query_params(config.query_params)


def rewrite_srcset(
    candidates: Mapping[int, SrcsetCandidate],
    config: CDNConfig,
) -> dict[int, SrcsetCandidate]:
    """Rewrite the url of every srcset candidate, keeping keys, descriptors and values."""
    if not config.enabled:
        return dict(candidates)

    return {
        key: candidate.model_copy(update={"url": rewrite_attachment_url(candidate.url, config)})
        for key, candidate in candidates.items()
    }


def _rewrite_managed_src(src: str, config: CDNConfig) -> str:
    """Rewrite one managed src, promoting a dimension suffix to w/h parameters."""
    try:
        url = URL.decompose(src)
    except MalformedURLError:
        return src

    dimensions = extract_dimensions(url.filename)
    if dimensions is None:
        return rewrite_attachment_url(src, config)

    resized = url.with_filename(dimensions.base_name).with_query_params(
        f"w={dimensions.width}&h={dimensions.height}"
    )
    return rewrite_attachment_url(resized.compose(), config)


def rewrite_html(html: str, config: CDNConfig, upload_base_url: str) -> str:
    """
    Rewrite img src attributes that point into the upload directory.

    Only the URL inside each matched attribute changes; every other byte of
    the input is kept as is. Markup that is not valid HTML simply yields no
    matches.

    Args:
        html: Arbitrary HTML content
        config: CDN settings snapshot
        upload_base_url: URL prefix of locally managed uploads

    Returns:
        HTML with managed image URLs pointing at the CDN
    """
    if not config.enabled or not html or not upload_base_url:
        return html

    pieces: list[str] = []
    position = 0
    for match in IMG_SRC_PATTERN.finditer(html):
        src = match.group("url")
        if not src.startswith(upload_base_url):
            continue

        new_src = _rewrite_managed_src(src, config)
        if new_src == src:
            continue

        start, end = match.span("url")
        pieces.append(html[position:start])
        pieces.append(new_src)
        position = end

    if not pieces:
        return html  # Fast path: nothing rewritten

    pieces.append(html[position:])
    return "".join(pieces)
