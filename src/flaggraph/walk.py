"""
Shared-instance walk over option-group dataclasses.

Many option groups may each declare "I need the client configuration"::

    @dataclass
    class DatacenterFlag(Flag):
        client: Optional[ClientFlag] = None

    @dataclass
    class AboutCommand(Command):
        client: Optional[ClientFlag] = None
        datacenter: Optional[DatacenterFlag] = None

``walk`` makes every such field point at one ``ClientFlag`` instance. The first
field of a given type reached in depth-first declaration order decides the
instance: it is adopted when already set, otherwise a fresh ``T()`` is built.
Later fields of that type are overwritten with it.

The visitor runs once per distinct node, after the node's own reference fields
have been wired and their subtrees visited. Anything the visitor raises stops
the walk and reaches the caller unchanged; fields wired up to that point stay
wired.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict

from flaggraph.core.logger import get_logger
from flaggraph.core.schema import NodeSchema, inspect_schema, qualified_name

logger = get_logger(__name__)


VisitFn = Callable[[Any], Any]


class GraphWalker:
    """Walks option-group graphs, sharing one instance per capability type."""

    def __init__(self, capability: type):
        self.capability = capability

    def walk(self, root: Any, visit: VisitFn) -> Dict[type, Any]:
        """Wire and visit every node reachable from ``root``.

        Args:
            root: A dataclass instance.
            visit: Called with each distinct node, children before parents.

        Returns:
            A copy of the visited registry, mapping each capability type to its
            shared instance.

        Raises:
            TypeError: If ``root`` is not a dataclass instance, or a preset
                reference holds an instance of the wrong type.
            SchemaError: If the type graph is wrongly shaped. Raised before the
                visitor is called for any node.
        """
        if isinstance(root, type) or not dataclasses.is_dataclass(root):
            raise TypeError(f"walk() needs a dataclass instance, got {root!r}")

        schemas = inspect_schema(type(root), self.capability)
        visited: Dict[type, Any] = {}
        origins: Dict[type, str] = {}

        def schema_for(node: Any) -> NodeSchema:
            # A preset instance may be a subclass of the declared type
            if type(node) not in schemas:
                schemas.update(inspect_schema(type(node), self.capability))
            return schemas[type(node)]

        def step(node: Any, schema: NodeSchema) -> None:
            for ref in schema.references:
                current = getattr(node, ref.name)
                location = f"{qualified_name(schema.node_type)}.{ref.name}"

                if ref.target not in visited:
                    if current is None:
                        visited[ref.target] = ref.target()
                    elif isinstance(current, ref.target):
                        visited[ref.target] = current
                    else:
                        raise TypeError(
                            f"{location} holds a {type(current).__name__}, expected {ref.target.__name__}"
                        )
                    origins[ref.target] = location

                    # Not seen before, recurse.
                    step(visited[ref.target], schema_for(visited[ref.target]))
                elif current is not None and current is not visited[ref.target]:
                    logger.warning(
                        f"{location} held its own {ref.target.__name__}; "
                        f"replacing it with the instance from {origins[ref.target]}"
                    )

                setattr(node, ref.name, visited[ref.target])

            visit(node)

        step(root, schemas[type(root)])
        logger.debug(f"Walked {type(root).__name__}: {len(visited)} shared instance(s)")
        return dict(visited)


def walk(root: Any, capability: type, visit: VisitFn) -> Dict[type, Any]:
    """Walk ``root`` with a one-off :class:`GraphWalker`.

    Example:
        >>> cmd = AboutCommand()
        >>> walk(cmd, Flag, lambda node: node.register(parser))
    """
    return GraphWalker(capability).walk(root, visit)
