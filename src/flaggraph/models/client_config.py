from __future__ import annotations

from typing import Optional
from urllib.parse import unquote, urlsplit, urlunsplit

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, PositiveFloat, TypeAdapter


URL_ENV = "FLAGGRAPH_URL"
INSECURE_ENV = "FLAGGRAPH_INSECURE"
TIMEOUT_ENV = "FLAGGRAPH_TIMEOUT"
API_PREFIX_ENV = "FLAGGRAPH_API_PREFIX"

DEFAULT_SCHEME = "https"

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)


def parse_server_url(value: str) -> AnyHttpUrl:
    """Parse a server URL, defaulting the scheme to https.

    Raises:
        pydantic.ValidationError: If the value is not a usable http(s) URL.
    """
    value = value.strip()
    if "://" not in value:
        value = f"{DEFAULT_SCHEME}://{value}"
    return _URL_ADAPTER.validate_python(value)


def without_credentials(url: AnyHttpUrl) -> str:
    """Render ``url`` with any user info removed."""
    parts = urlsplit(str(url))
    return urlunsplit(parts._replace(netloc=parts.netloc.rpartition("@")[2]))


class ClientConfig(BaseModel):
    """Validated settings used to build the HTTP client."""

    model_config = ConfigDict(frozen=True)

    url: AnyHttpUrl
    insecure: bool = False
    timeout_seconds: PositiveFloat = 30.0

    @property
    def base_url(self) -> str:
        return without_credentials(self.url)

    @property
    def username(self) -> Optional[str]:
        if self.url.username is None:
            return None
        return unquote(self.url.username)

    @property
    def password(self) -> Optional[str]:
        if self.url.password is None:
            return None
        return unquote(self.url.password)
