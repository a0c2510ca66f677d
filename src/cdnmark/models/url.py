"""URL value type with explicit optional parts."""

import re
from dataclasses import dataclass, replace
from urllib.parse import urlsplit

SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")


class MalformedURLError(ValueError):
    """Raised when a string cannot be parsed as a URL at all."""


@dataclass(frozen=True)
class URL:
    """A URL split into its parts. Absent parts are ``None``; ``""`` means present but empty."""

    scheme: str | None = None
    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    @classmethod
    def decompose(cls, url: str) -> "URL":
        """
        Parse a URL string into its parts.

        Scheme and host keep their original case, the query is kept raw. An
        empty authority (as in ``file:///tmp``) gives ``host=""``; no authority
        at all gives ``host=None``.

        Raises:
            MalformedURLError: If the string is empty or cannot be parsed.
        """
        if not url:
            raise MalformedURLError("Empty URL")
        # urlsplit silently drops these, which would alter the path
        if any(char in url for char in "\t\r\n"):
            raise MalformedURLError(f"Control character in URL {url!r}")

        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise MalformedURLError(f"Cannot parse URL {url!r}: {e}") from e

        # urlsplit lowercases the scheme, take it from the input instead
        scheme = None
        if parts.scheme:
            match = SCHEME_PATTERN.match(url)
            scheme = match.group(1) if match else parts.scheme

        user = password = host = None
        port = None
        has_authority = parts.netloc or url[len(scheme) + 1 if scheme else 0 :].startswith("//")
        if has_authority:
            user, password, host, port = _split_netloc(url, parts.netloc)

        # Distinguish "a?" (empty query) from "a" (no query)
        before_fragment = url.split("#", 1)[0]
        query = parts.query if "?" in before_fragment else None
        fragment = parts.fragment if "#" in url else None

        return cls(
            scheme=scheme,
            user=user,
            password=password,
            host=host,
            port=port,
            path=parts.path,
            query=query,
            fragment=fragment,
        )

    def compose(self) -> str:
        """Serialize the parts back into a URL string."""
        scheme = ""
        if self.scheme is not None:
            # No authority, as in mailto:user@example.com or http:/path
            scheme = f"{self.scheme}:" if self.host is None else f"{self.scheme}://"
        elif self.host is not None:
            scheme = "//"
        user = self.user or ""
        password = f":{self.password}" if self.password is not None else ""
        userinfo = f"{user}{password}@" if self.user is not None or self.password is not None else ""
        host = self.host or ""
        port = f":{self.port}" if self.port is not None else ""
        path = self.path
        if self.host is not None and path and not path.startswith("/"):
            path = f"/{path}"
        query = f"?{self.query}" if self.query is not None else ""
        fragment = f"#{self.fragment}" if self.fragment is not None else ""
        return f"{scheme}{userinfo}{host}{port}{path}{query}{fragment}"

    @property
    def filename(self) -> str:
        """Return the final path segment."""
        return self.path.rsplit("/", 1)[-1]

    def with_filename(self, filename: str) -> "URL":
        """Return a copy with the final path segment replaced."""
        directory = self.path[: len(self.path) - len(self.filename)]
        return replace(self, path=f"{directory}{filename}")

    def with_query_params(self, params: str) -> "URL":
        """Return a copy with an already-encoded ``key=value`` string appended to the query."""
        if not params:
            return self
        query = f"{self.query}&{params}" if self.query else params
        return replace(self, query=query)

    def __str__(self) -> str:
        return self.compose()


def _split_netloc(url: str, netloc: str) -> tuple[str | None, str | None, str, int | None]:
    """Split ``user:password@host:port`` into its parts."""
    user = password = None
    hostport = netloc
    if "@" in netloc:
        userinfo, hostport = netloc.rsplit("@", 1)
        user, sep, pw = userinfo.partition(":")
        password = pw if sep else None

    host = hostport
    port = None
    # Bracketed IPv6 literals contain colons of their own
    bracket = hostport.rfind("]")
    colon = hostport.rfind(":")
    if colon > bracket:
        host, port_str = hostport[:colon], hostport[colon + 1 :]
        if port_str:
            if not port_str.isdigit() or int(port_str) > 65535:
                raise MalformedURLError(f"Invalid port in URL {url!r}")
            port = int(port_str)

    if not host and (user is not None or port is not None):
        raise MalformedURLError(f"Missing host in URL {url!r}")

    return user, password, host, port


def decompose(url: str) -> URL:
    """Parse a URL string. See :meth:`URL.decompose`."""
    return URL.decompose(url)


def compose(url: URL) -> str:
    """Serialize a URL value. See :meth:`URL.compose`."""
    return url.compose()
