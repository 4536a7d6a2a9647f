from __future__ import annotations

from typing import Callable, ClassVar, Dict, List, Optional, Type

from flaggraph.flags.base import Command


class CommandRegistryError(RuntimeError):
    pass


class CommandRegistry:
    _registry: ClassVar[Dict[str, Type[Command]]] = {}

    @classmethod
    def register(
        cls,
        *,
        name: str,
        command_class: Type[Command],
        overwrite: bool = False,
    ) -> None:
        if not overwrite and name in cls._registry:
            existing = cls._registry[name]
            raise CommandRegistryError(f"Command already registered for name={name!r}: {existing}")
        cls._registry[name] = command_class

    @classmethod
    def get(cls, name: str) -> Type[Command]:
        try:
            return cls._registry[name]
        except KeyError as exc:
            raise CommandRegistryError(f"No command registered for name={name!r}") from exc

    @classmethod
    def try_get(cls, name: str) -> Optional[Type[Command]]:
        return cls._registry.get(name)

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_command(
    *,
    name: str,
    overwrite: bool = False,
) -> Callable[[Type[Command]], Type[Command]]:
    def decorator(command_class: Type[Command]) -> Type[Command]:
        CommandRegistry.register(name=name, command_class=command_class, overwrite=overwrite)
        return command_class

    return decorator
