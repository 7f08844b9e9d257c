"""
The inferred structural type of a JSON value.

A Shape is exactly one of NullShape, PrimitiveShape, ArrayShape, ObjectShape or
UnionShape. Code that consumes shapes branches over these five classes and
nothing else.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"

# Fixed order used whenever primitive kinds are listed side by side
PRIMITIVE_KINDS = (STRING, NUMBER, BOOLEAN)

Literal = Union[str, int, float, bool]


@dataclass(frozen=True)
class NullShape:
    pass


@dataclass(frozen=True)
class PrimitiveShape:
    primitive: str
    literal: Optional[Literal] = None

    def __post_init__(self):
        if self.primitive not in PRIMITIVE_KINDS:
            raise ValueError(f"Unknown primitive kind: {self.primitive!r}")

    @property
    def has_literal(self) -> bool:
        return self.literal is not None


@dataclass(frozen=True)
class ArrayShape:
    item: "Shape"


@dataclass(frozen=True)
class Field:
    """An object field: its shape and whether some merged instance lacked it."""
    shape: "Shape"
    optional: bool = False


@dataclass(frozen=True)
class ObjectShape:
    fields: Dict[str, Field] = field(default_factory=dict)


@dataclass(frozen=True)
class UnionShape:
    members: Tuple["Shape", ...]


Shape = Union[NullShape, PrimitiveShape, ArrayShape, ObjectShape, UnionShape]

NULL = NullShape()

# Stand-in for "anything": used for empty arrays and values JSON cannot represent
UNKNOWN = PrimitiveShape(STRING)


def is_scalar(shape: Shape) -> bool:
    """True for shapes that may appear in an inline record: primitives and null."""
    return isinstance(shape, (PrimitiveShape, NullShape))


def describe(shape: Shape) -> str:
    """Short human-readable summary, used in logs and the schema table."""
    if isinstance(shape, NullShape):
        return "null"
    if isinstance(shape, PrimitiveShape):
        return shape.primitive if not shape.has_literal else f"{shape.primitive}({shape.literal!r})"
    if isinstance(shape, ArrayShape):
        return f"array<{describe(shape.item)}>"
    if isinstance(shape, ObjectShape):
        return f"object({len(shape.fields)} fields)"
    if isinstance(shape, UnionShape):
        return " | ".join(describe(member) for member in shape.members)
    raise TypeError(f"Not a shape: {shape!r}")
