from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from typing import Any, Optional, TextIO

from flaggraph.flags.base import Flag, bind_option


@dataclass
class OutputFlag(Flag):
    as_json: bool = False
    stream: Optional[TextIO] = field(default=None, repr=False, compare=False)

    def register(self, parser: argparse.ArgumentParser) -> None:
        bind_option(parser, self, "as_json", "--json", switch=True, help="Enable JSON output")

    def write(self, data: Any) -> None:
        out = self.stream or sys.stdout

        if self.as_json:
            out.write(json.dumps(data, indent=2, sort_keys=True, default=str) + "\n")
            return

        if isinstance(data, dict):
            width = max((len(str(k)) for k in data), default=0)
            for key, value in data.items():
                out.write(f"{str(key) + ':':<{width + 1}} {value}\n")
        elif isinstance(data, list):
            for item in data:
                out.write(f"{item}\n")
        else:
            out.write(f"{data}\n")
