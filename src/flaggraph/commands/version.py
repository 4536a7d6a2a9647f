from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from flaggraph.commands.registry import register_command
from flaggraph.flags.base import Command


@register_command(name="version")
@dataclass
class VersionCommand(Command):
    """Print the flaggraph version."""

    def run(self, args: List[str]) -> Optional[int]:
        from flaggraph import __version__

        print(f"flaggraph {__version__}")
        return 0
