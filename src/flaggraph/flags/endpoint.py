from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Any, Optional

from flaggraph.core.exceptions import FlagError, ResponseError
from flaggraph.core.logger import get_logger
from flaggraph.flags.base import Flag, bind_option
from flaggraph.flags.client import ClientFlag
from flaggraph.models.client_config import API_PREFIX_ENV

logger = get_logger(__name__)

DEFAULT_PREFIX = "/api"


@dataclass
class EndpointFlag(Flag):
    """Resolves API paths under a common prefix and issues requests through the shared client."""

    client: Optional[ClientFlag] = None
    prefix: str = DEFAULT_PREFIX

    def register(self, parser: argparse.ArgumentParser) -> None:
        self.prefix = os.environ.get(API_PREFIX_ENV) or self.prefix
        bind_option(
            parser, self, "prefix", "--prefix",
            metavar="PATH",
            help=f"API path prefix (default {DEFAULT_PREFIX}) [{API_PREFIX_ENV}]",
        )

    def process(self) -> None:
        prefix = self.prefix.strip().strip("/")
        self.prefix = f"/{prefix}" if prefix else ""

    def path(self, relative: str) -> str:
        relative = relative.strip().lstrip("/")
        return f"{self.prefix}/{relative}"

    def request(self, method: str, relative: str) -> Any:
        if self.client is None or self.client.client is None:
            raise FlagError("client has not been processed", flag="-u")

        path = self.path(relative)
        logger.debug(f"{method} {path} on {self.client}")
        resp = self.client.client.request(method, path)
        resp.raise_for_status()

        try:
            return resp.json()
        except ValueError as e:
            content_type = resp.headers.get("content-type", "unknown")
            raise ResponseError(
                f"Failed to parse response from {path} as JSON. "
                f"Status: {resp.status_code}, Content-Type: {content_type}. "
                f"Response preview: {resp.text[:200]}"
            ) from e
