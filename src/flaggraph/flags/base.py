from __future__ import annotations

import argparse
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence


class Flag(ABC):
    """An option group.

    ``register`` adds the group's options to the command's parser before
    parsing; ``process`` validates and finalises them after parsing. A group
    only ever registers once per command, however many other groups reference
    it, because the walk shares one instance per type.
    """

    def register(self, parser: argparse.ArgumentParser) -> None:
        return None

    def process(self) -> None:
        return None

    def close(self) -> None:
        """Release whatever ``process`` acquired."""
        return None


class Command(Flag):
    """A runnable command. Its option groups are reference fields on the dataclass."""

    def usage(self) -> str:
        """Positional-argument synopsis shown after the options."""
        return ""

    @abstractmethod
    def run(self, args: List[str]) -> Optional[int]:
        ...


class _SetOnNode(argparse.Action):
    """argparse action that writes the parsed value straight onto a flag node."""

    def __init__(self, option_strings: Sequence[str], dest: str, *, node: Any, attribute: str, **kwargs: Any):
        super().__init__(option_strings, dest, **kwargs)
        self.node = node
        self.attribute = attribute

    def __call__(self, parser, namespace, values, option_string=None):  # type: ignore[override]
        value = self.const if self.nargs == 0 else values
        setattr(self.node, self.attribute, value)
        setattr(namespace, self.dest, value)


def bind_option(
    parser: argparse.ArgumentParser,
    node: Any,
    attribute: str,
    *option_strings: str,
    switch: bool = False,
    **kwargs: Any,
) -> None:
    """Add an option whose value lands on ``node.attribute`` when given.

    Args:
        parser: The command's parser.
        node: The flag instance that owns the value.
        attribute: Attribute name on ``node``.
        option_strings: e.g. ``"-u", "--url"``.
        switch: Store ``True`` without consuming an argument.
        kwargs: Passed through to ``add_argument`` (``type``, ``help``, ...).
    """
    if switch:
        kwargs.update(nargs=0, const=True)
    kwargs.setdefault("default", argparse.SUPPRESS)
    parser.add_argument(
        *option_strings,
        action=_SetOnNode,
        node=node,
        attribute=attribute,
        dest=f"{type(node).__name__}_{attribute}",
        **kwargs,
    )
