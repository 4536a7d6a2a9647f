from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from flaggraph.commands.registry import register_command
from flaggraph.core.logger import get_logger
from flaggraph.flags.base import Command
from flaggraph.flags.client import ClientFlag
from flaggraph.flags.endpoint import EndpointFlag
from flaggraph.flags.output import OutputFlag

logger = get_logger(__name__)


@register_command(name="about")
@dataclass
class AboutCommand(Command):
    """Display information about the server."""

    client: Optional[ClientFlag] = None
    endpoint: Optional[EndpointFlag] = None
    output: Optional[OutputFlag] = None

    def run(self, args: List[str]) -> Optional[int]:
        logger.info(f"Querying {self.client}")
        self.output.write(self.endpoint.request("GET", "about"))
        return 0
