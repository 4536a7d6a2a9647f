from __future__ import annotations

import importlib
import sys
from typing import Iterable


BUILTIN_COMMAND_MODULES: tuple[str, ...] = (
    "flaggraph.commands.about",
    "flaggraph.commands.get",
    "flaggraph.commands.version",
)


_LOADED = False


def load_builtin_commands(*, reload: bool = False, modules: Iterable[str] = BUILTIN_COMMAND_MODULES) -> None:
    """Import built-in command modules so their decorators register them.

    In production, call with reload=False (default) so imports are cheap.
    In tests, call with reload=True to clear the registry and re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from flaggraph.commands.registry import CommandRegistry

        CommandRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True
