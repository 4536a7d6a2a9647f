"""flaggraph.

Shared option groups for command-line tools.

Commands and option groups are plain dataclasses. An option group that several
others need (the server connection, say) is declared as an ``Optional[...]``
reference wherever it is needed, and a walk over the command wires every such
reference to one shared instance before options are registered and processed.

Public API:
    >>> from flaggraph import walk, Flag
    >>> shared = walk(command, Flag, lambda node: node.register(parser))
"""

from flaggraph.core.exceptions import FlagError, FlaggraphException, SchemaError
from flaggraph.core.schema import embed
from flaggraph.flags.base import Command, Flag
from flaggraph.walk import GraphWalker, walk

__version__ = "0.1.0"

__all__ = [
    "Command",
    "Flag",
    "FlagError",
    "FlaggraphException",
    "GraphWalker",
    "SchemaError",
    "embed",
    "walk",
]
