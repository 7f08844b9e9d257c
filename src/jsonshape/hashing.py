"""
Canonical structural keys for shapes.

Two shapes get the same key exactly when they are structurally equal: union
members and object fields are compared without regard to order, while field
names, optional flags and literal values all count.
"""

import json
from typing import Dict, Optional, Tuple

from .shapes import ArrayShape, NullShape, ObjectShape, PrimitiveShape, Shape, UnionShape, NUMBER

ShapeKey = tuple
# id(shape) -> (shape, key); holding the shape keeps its id from being reused
KeyMemo = Dict[int, Tuple[Shape, ShapeKey]]


def shape_key(shape: Shape, memo: Optional[KeyMemo] = None) -> ShapeKey:
    """
    Return a hashable, order-normalized key for `shape`.
    Pass the same `memo` dict across calls on one shape tree to avoid re-walking subtrees.
    """
    if memo is not None:
        cached = memo.get(id(shape))
        if cached is not None and cached[0] is shape:
            return cached[1]

    if isinstance(shape, NullShape):
        key = ("null",)
    elif isinstance(shape, PrimitiveShape):
        if shape.has_literal:
            key = ("primitive", shape.primitive, literal_token(shape))
        else:
            key = ("primitive", shape.primitive)
    elif isinstance(shape, ArrayShape):
        key = ("array", shape_key(shape.item, memo))
    elif isinstance(shape, ObjectShape):
        key = ("object", tuple(
            (name, shape.fields[name].optional, shape_key(shape.fields[name].shape, memo))
            for name in sorted(shape.fields)
        ))
    elif isinstance(shape, UnionShape):
        member_keys = {shape_key(member, memo) for member in shape.members}
        key = ("union", tuple(sorted(member_keys, key=repr)))
    else:
        raise TypeError(f"Not a shape: {shape!r}")

    if memo is not None:
        memo[id(shape)] = (shape, key)
    return key


def shape_hash(shape: Shape) -> str:
    """Serialize the canonical key of `shape` to a compact string."""
    return json.dumps(shape_key(shape), ensure_ascii=False, separators=(",", ":"))


def shapes_equal(left: Shape, right: Shape) -> bool:
    return shape_key(left) == shape_key(right)


def literal_token(shape: PrimitiveShape):
    """
    The literal of a primitive shape in comparable form.
    JSON has a single number type, so 3 and 3.0 are the same literal.
    """
    value = shape.literal
    if shape.primitive == NUMBER and isinstance(value, float) and value.is_integer():
        return int(value)
    return value
