"""
Type-level inspection of option-group dataclasses.

Only types are inspected here, never instances. ``inspect_schema`` walks the
type graph reachable from a root dataclass through capability reference
fields, classifies every field once, and rejects shapes that would make it
impossible to share one instance per capability type:

- a capability type held by value (``client: ClientFlag``),
- a capability reference declared with :func:`embed`,
- a union that mixes a capability type with other types,
- a capability type that cannot be built without arguments,
- annotations that cannot be resolved (string annotations naming classes
  defined inside a function).

A reference field is spelled ``Optional[T]`` (or ``T | None``) where ``T``
implements the capability.
"""

from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from flaggraph.core.exceptions import SchemaError


EMBEDDED_KEY = "flaggraph.embedded"

_NONE_TYPE = type(None)


def embed(**kwargs: Any) -> Any:
    """Declare a dataclass field as embedded.

    An embedded field is the flaggraph spelling of an anonymous member: its
    options belong to the enclosing group. Capability references may never be
    embedded, since the enclosing group would then answer for the capability
    twice.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True)
class FieldSpec:
    """A classified capability reference field of a node type.

    Attributes:
        name: Attribute name on the node.
        annotation: The resolved declared annotation.
        target: The capability type the field references.
    """

    name: str
    annotation: Any
    target: type


@dataclass(frozen=True)
class NodeSchema:
    """Reference fields of one node type, in declaration order."""

    node_type: type
    references: Tuple[FieldSpec, ...]


def qualified_name(tp: type) -> str:
    return f"{tp.__module__}.{tp.__qualname__}"


def implements(tp: Any, capability: type) -> bool:
    if not isinstance(tp, type):
        return False
    try:
        return issubclass(tp, capability)
    except TypeError:
        # Protocols with data members and parametrized generics refuse issubclass()
        return False


def _union_members(annotation: Any) -> Optional[Tuple[Any, ...]]:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return get_args(annotation)
    return None


def _strip_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def classify_field(
    owner: type,
    field: dataclasses.Field,
    annotation: Any,
    capability: type,
) -> Optional[FieldSpec]:
    """Classify a single dataclass field against the capability.

    Returns:
        A FieldSpec for a valid capability reference, or None for an ordinary
        data field.

    Raises:
        SchemaError: If the field holds a capability type in a shape that
            prevents sharing.
    """
    annotation = _strip_annotated(annotation)
    members = _union_members(annotation)

    if members is None:
        if implements(annotation, capability):
            raise SchemaError(
                field=field.name,
                owner=qualified_name(owner),
                problem=f"must be a reference (Optional[{annotation.__name__}])",
            )
        return None

    candidates = [_strip_annotated(m) for m in members if m is not _NONE_TYPE]
    capable = [c for c in candidates if implements(c, capability)]
    if not capable:
        return None

    if len(candidates) != 1 or len(members) == len(candidates):
        names = ", ".join(getattr(c, "__name__", repr(c)) for c in candidates)
        raise SchemaError(
            field=field.name,
            owner=qualified_name(owner),
            problem=f"must reference exactly one type as Optional[...], got {names}",
        )

    target = capable[0]
    if field.metadata.get(EMBEDDED_KEY, False):
        raise SchemaError(
            field=field.name,
            owner=qualified_name(owner),
            problem="must not be embedded",
        )

    if not dataclasses.is_dataclass(target):
        raise SchemaError(
            field=field.name,
            owner=qualified_name(owner),
            problem=f"references {qualified_name(target)}, which is not a dataclass",
        )

    required = [
        f.name
        for f in dataclasses.fields(target)
        if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    ]
    if required:
        raise SchemaError(
            field=field.name,
            owner=qualified_name(owner),
            problem=(
                f"references {qualified_name(target)}, which cannot be built without arguments "
                f"(no default for {', '.join(required)})"
            ),
        )

    return FieldSpec(name=field.name, annotation=annotation, target=target)


def inspect_node_type(node_type: type, capability: type) -> NodeSchema:
    try:
        hints = get_type_hints(node_type, include_extras=True)
    except NameError as exc:
        # String annotations naming classes local to a function cannot be resolved
        raise SchemaError(
            owner=qualified_name(node_type),
            problem=f"has an annotation that cannot be resolved: {exc}",
        ) from exc

    references: List[FieldSpec] = []

    for field in dataclasses.fields(node_type):
        spec = classify_field(node_type, field, hints.get(field.name, field.type), capability)
        if spec is not None:
            references.append(spec)

    if references and node_type.__dataclass_params__.frozen:
        raise SchemaError(
            field=references[0].name,
            owner=qualified_name(node_type),
            problem="cannot be rewired on a frozen dataclass",
        )

    return NodeSchema(node_type=node_type, references=tuple(references))


def inspect_schema(root_type: type, capability: type) -> Dict[type, NodeSchema]:
    """Inspect every node type reachable from ``root_type``.

    Each type is inspected once; reference cycles between capability types
    are followed only until a type has been seen.

    Args:
        root_type: The dataclass type of the root node.
        capability: The capability class that marks shared references.

    Returns:
        A mapping from node type to its NodeSchema.

    Raises:
        TypeError: If ``root_type`` is not a dataclass type.
        SchemaError: If any reachable field is wrongly shaped.
    """
    if not (isinstance(root_type, type) and dataclasses.is_dataclass(root_type)):
        raise TypeError(f"expected a dataclass type, got {root_type!r}")

    schemas: Dict[type, NodeSchema] = {}
    pending = [root_type]

    while pending:
        node_type = pending.pop()
        if node_type in schemas:
            continue
        schema = inspect_node_type(node_type, capability)
        schemas[node_type] = schema
        pending.extend(
            ref.target for ref in reversed(schema.references) if ref.target not in schemas
        )

    return schemas
