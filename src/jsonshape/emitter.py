"""
Turns shapes into TypeScript-style declarations.

Every object shape that is not inlined receives one named declaration; shapes
that are structurally equal share it. Names come from the field (or array
position) where the shape is first met.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .hashing import KeyMemo, ShapeKey, literal_token, shape_key
from .log import get_logger
from .naming import ensure_unique, make_type_name, quote_key, quote_string
from .options import GenerateOptions
from .shapes import (
    ArrayShape,
    Field,
    NullShape,
    ObjectShape,
    PrimitiveShape,
    Shape,
    UnionShape,
    is_scalar,
    STRING,
)
from .singularize import make_singularizer

logger = get_logger(__name__)

UNKNOWN_TYPE = "unknown"
UNION_SEPARATOR = " | "
ARRAY_SUFFIX = "[]"
ITEM_SUFFIX = "Item"
UNION_SUFFIX = "Union"

# The most fields an object may have and still be written inline
INLINE_MAX_FIELDS = 2


@dataclass
class Declaration:
    """A named type: `type <name> = <body>;`"""
    name: str
    body: str = ""
    # Field names of the object, sorted
    fields: List[str] = field(default_factory=list)
    # Names of other declarations referenced by the body, in order of first reference
    dependencies: List[str] = field(default_factory=list)

    def render(self) -> str:
        return f"type {self.name} = {self.body};"


@dataclass
class TypeRegistry:
    """
    State of one emission pass. Created by TypeEmitter.emit and never shared
    between passes.
    """
    shape_to_name: Dict[ShapeKey, str] = field(default_factory=dict)
    declarations: Dict[str, Declaration] = field(default_factory=dict)
    used_names: Set[str] = field(default_factory=set)
    _keys: KeyMemo = field(default_factory=dict, repr=False)

    def key_for(self, shape: Shape) -> ShapeKey:
        return shape_key(shape, self._keys)

    def lookup(self, shape: Shape) -> Optional[str]:
        return self.shape_to_name.get(self.key_for(shape))

    def reserve(self, name: str):
        self.used_names.add(name)

    def allocate(self, suggested_name: str, shape: Shape) -> Declaration:
        """
        Claim a unique name for `shape` and register an empty declaration.
        Registration happens before the body is rendered so that nested
        references to the same shape resolve to this name.
        """
        name = ensure_unique(suggested_name, self.used_names)
        self.used_names.add(name)
        self.shape_to_name[self.key_for(shape)] = name
        declaration = Declaration(name)
        self.declarations[name] = declaration
        logger.debug("Allocated declaration %s", name)
        return declaration

    def ordered(self, order: str = "discovery") -> List[Declaration]:
        """
        Declarations in first-allocation order, or with `order="dependency"`
        topologically sorted so that a declaration precedes those it references.
        """
        if order == "discovery":
            return list(self.declarations.values())
        if order == "dependency":
            return self._dependency_order()
        raise ValueError(f"Unknown declaration order: {order!r}")

    def _dependency_order(self) -> List[Declaration]:
        position = {name: index for index, name in enumerate(self.declarations)}
        referrers = {name: 0 for name in self.declarations}
        for declaration in self.declarations.values():
            for dependency in set(declaration.dependencies):
                if dependency in referrers and dependency != declaration.name:
                    referrers[dependency] += 1

        ready = sorted((name for name, count in referrers.items() if count == 0), key=position.get)
        result = []
        while ready:
            name = ready.pop(0)
            result.append(self.declarations[name])
            for dependency in dict.fromkeys(self.declarations[name].dependencies):
                if dependency not in referrers or dependency == name:
                    continue
                referrers[dependency] -= 1
                if referrers[dependency] == 0:
                    ready.append(dependency)
                    ready.sort(key=position.get)

        # Anything left sits on a reference cycle; keep discovery order for it
        emitted = {declaration.name for declaration in result}
        result.extend(d for d in self.declarations.values() if d.name not in emitted)
        return result


class TypeEmitter:
    """
    Renders shapes as type expressions, collecting named declarations in a
    TypeRegistry as it goes.
    """

    def __init__(self, options: Optional[GenerateOptions] = None):
        self.options = options or GenerateOptions()
        self._quote = self.options.quote_char
        self._indent = " " * self.options.indent
        self._singularize = make_singularizer(self.options.singular_overrides)

    def emit(self, shape: Shape, root_name: str) -> Tuple[str, TypeRegistry]:
        """
        Render `shape` under `root_name`.

        Returns the root type expression and the registry of declarations. When
        the root is an extracted object, the expression is `root_name` itself and
        the registry holds its declaration.
        """
        registry = TypeRegistry()
        if not self.allocates_name(shape):
            # Keep nested types from claiming the root alias
            registry.reserve(root_name)
        text = self.type_of(shape, root_name, registry, [])
        logger.debug("Emitted %d declarations for %s", len(registry.declarations), root_name)
        return text, registry

    def allocates_name(self, shape: Shape) -> bool:
        return isinstance(shape, ObjectShape) and not self.should_inline(shape)

    def should_inline(self, shape: ObjectShape) -> bool:
        if self.options.extract_objects:
            return False
        return len(shape.fields) <= INLINE_MAX_FIELDS and all(
            is_scalar(f.shape) for f in shape.fields.values()
        )

    def type_of(self, shape: Shape, suggested_name: str, registry: TypeRegistry,
                references: List[str]) -> str:
        """
        Type expression for `shape`. Names of declarations used by the
        expression are appended to `references`.
        """
        existing = registry.lookup(shape)
        if existing is not None:
            references.append(existing)
            return existing

        if isinstance(shape, NullShape):
            return "null"
        if isinstance(shape, PrimitiveShape):
            return self.format_primitive(shape)
        if isinstance(shape, ArrayShape):
            return self._array_type(shape, suggested_name, registry, references)
        if isinstance(shape, UnionShape):
            return UNION_SEPARATOR.join(self._union_fragments(shape, suggested_name, registry, references))
        if isinstance(shape, ObjectShape):
            if self.should_inline(shape):
                return self._inline_object(shape, registry, references)
            declaration = registry.allocate(suggested_name, shape)
            declaration.fields = sorted(shape.fields)
            declaration.body = self._object_body(shape, registry, declaration.dependencies)
            references.append(declaration.name)
            return declaration.name
        raise TypeError(f"Not a shape: {shape!r}")

    def format_primitive(self, shape: PrimitiveShape) -> str:
        if not shape.has_literal:
            return shape.primitive
        if shape.primitive == STRING:
            return quote_string(str(shape.literal), self._quote)
        value = literal_token(shape)
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def _array_type(self, shape: ArrayShape, suggested_name: str, registry: TypeRegistry,
                    references: List[str]) -> str:
        item_name = suggested_name + ITEM_SUFFIX
        if isinstance(shape.item, UnionShape):
            # `(A | B)[]`: the suffix applies to the whole union
            fragments = self._union_fragments(shape.item, item_name, registry, references)
            if len(fragments) > 1:
                return f"({UNION_SEPARATOR.join(fragments)}){ARRAY_SUFFIX}"
            return fragments[0] + ARRAY_SUFFIX
        return self.type_of(shape.item, item_name, registry, references) + ARRAY_SUFFIX

    def _union_fragments(self, shape: UnionShape, suggested_name: str, registry: TypeRegistry,
                         references: List[str]) -> List[str]:
        """Member expressions of a union, deduplicated and sorted."""
        assert shape.members, "union shapes always have members"
        if not shape.members:
            logger.warning("Empty union shape reached the emitter; rendering %s", UNKNOWN_TYPE)
            return [UNKNOWN_TYPE]

        fragments = [
            self.type_of(member, f"{suggested_name}{UNION_SUFFIX}{index}", registry, references)
            for index, member in enumerate(shape.members)
        ]
        return sorted(set(fragments))

    def _inline_object(self, shape: ObjectShape, registry: TypeRegistry, references: List[str]) -> str:
        if not shape.fields:
            return "{}"
        parts = [self._field(name, shape.fields[name], registry, references) for name in sorted(shape.fields)]
        return "{ " + "; ".join(parts) + " }"

    def _object_body(self, shape: ObjectShape, registry: TypeRegistry, references: List[str]) -> str:
        if not shape.fields:
            return "{}"
        lines = [
            f"{self._indent}{self._field(name, shape.fields[name], registry, references)};"
            for name in sorted(shape.fields)
        ]
        return "{\n" + "\n".join(lines) + "\n}"

    def _field(self, name: str, member: Field, registry: TypeRegistry, references: List[str]) -> str:
        field_shape = member.shape
        optional = member.optional

        # Only the field's own union loses null; nulls inside arrays are array contents
        if self.options.null_as_optional and isinstance(field_shape, UnionShape) and any(
            isinstance(m, NullShape) for m in field_shape.members
        ):
            remaining = tuple(m for m in field_shape.members if not isinstance(m, NullShape))
            field_shape = remaining[0] if len(remaining) == 1 else UnionShape(remaining)
            optional = True

        type_text = self.type_of(field_shape, self.suggest_name(name), registry, references)
        marker = "?" if optional else ""
        return f"{quote_key(name, self._quote)}{marker}: {type_text}"

    def suggest_name(self, field_name: str) -> str:
        """Type name suggested for the value of a field, e.g. `addresses` -> `addressType`."""
        base = self._singularize(field_name) if self.options.singularize else field_name
        return make_type_name(base)
