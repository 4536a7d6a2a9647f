from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from flaggraph.commands.registry import register_command
from flaggraph.core.exceptions import FlagError
from flaggraph.flags.base import Command
from flaggraph.flags.endpoint import EndpointFlag
from flaggraph.flags.output import OutputFlag


@register_command(name="get")
@dataclass
class GetCommand(Command):
    """GET a path under the API prefix and print the decoded response."""

    endpoint: Optional[EndpointFlag] = None
    output: Optional[OutputFlag] = None

    def usage(self) -> str:
        return "PATH"

    def run(self, args: List[str]) -> Optional[int]:
        if len(args) != 1:
            raise FlagError(f"expected exactly one PATH, got {len(args)}")

        self.output.write(self.endpoint.request("GET", args[0]))
        return 0
