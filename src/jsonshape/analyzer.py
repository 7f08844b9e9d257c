import numbers
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import NestingDepthError
from .hashing import KeyMemo, literal_token, shape_key
from .log import get_logger
from .options import GenerateOptions
from .shapes import (
    ArrayShape,
    Field,
    NULL,
    NullShape,
    ObjectShape,
    PRIMITIVE_KINDS,
    PrimitiveShape,
    Shape,
    UnionShape,
    UNKNOWN,
    BOOLEAN,
    NUMBER,
    STRING,
    describe,
)

logger = get_logger(__name__)


class ShapeAnalyzer:
    """
    Infers a Shape from a JSON value.

    Array elements are unified into one item shape: objects are merged field by
    field (fields missing from some elements become optional), primitives of one
    kind collapse into either a small literal union or the bare primitive, and
    differing kinds end up in a union.
    """

    def __init__(self, options: Optional[GenerateOptions] = None):
        self.options = options or GenerateOptions()
        self._keys: KeyMemo = {}

    def analyze(self, value: Any) -> Shape:
        self._keys = {}
        shape = self._analyze(value, 0)
        logger.debug("Analyzed root value as %s", describe(shape))
        return shape

    def _analyze(self, value: Any, depth: int) -> Shape:
        if depth > self.options.max_depth:
            raise NestingDepthError(self.options.max_depth)

        if value is None:
            return NULL
        # bool first: it is a subclass of int
        if isinstance(value, bool):
            return self._primitive(BOOLEAN, value)
        if isinstance(value, numbers.Number):
            return self._primitive(NUMBER, value)
        if isinstance(value, str):
            return self._primitive(STRING, value)
        if isinstance(value, (list, tuple)):
            return self._analyze_array(value, depth)
        if isinstance(value, dict):
            return self._analyze_object(value, depth)

        logger.debug("Value of type %s has no JSON counterpart; using the unknown placeholder",
                     type(value).__name__)
        return UNKNOWN

    def _primitive(self, kind: str, value: Any) -> PrimitiveShape:
        if self.options.tracks_literals:
            return PrimitiveShape(kind, value)
        return PrimitiveShape(kind)

    def _analyze_object(self, obj: Dict[Any, Any], depth: int) -> ObjectShape:
        return ObjectShape({
            str(key): Field(self._analyze(value, depth + 1))
            for key, value in obj.items()
        })

    def _analyze_array(self, items: Sequence[Any], depth: int) -> ArrayShape:
        if depth > self.options.max_depth:
            raise NestingDepthError(self.options.max_depth)
        if not items:
            return ArrayShape(UNKNOWN)

        primitives: Dict[str, List[Any]] = {kind: [] for kind in PRIMITIVE_KINDS}
        objects = []
        arrays = []
        has_null = False

        for item in items:
            if item is None:
                has_null = True
            elif isinstance(item, (list, tuple)):
                arrays.append(item)
            elif isinstance(item, dict):
                objects.append(item)
            elif isinstance(item, bool):
                primitives[BOOLEAN].append(item)
            elif isinstance(item, numbers.Number):
                primitives[NUMBER].append(item)
            elif isinstance(item, str):
                primitives[STRING].append(item)
            else:
                # Values with no JSON counterpart count as the unknown placeholder
                primitives[STRING].append(None)

        members: List[Shape] = []
        for kind in PRIMITIVE_KINDS:
            values = primitives[kind]
            if values:
                members.append(self._widen(kind, values))
        if objects:
            members.append(self.merge_objects([self._analyze_object(obj, depth + 1) for obj in objects]))
        for sub_array in arrays:
            members.append(self._analyze_array(sub_array, depth + 1))
        if has_null:
            members.append(NULL)

        return ArrayShape(self.make_union(members))

    def _widen(self, kind: str, literals: List[Any]) -> Shape:
        """
        Collapse the values seen for one primitive kind.
        None in `literals` stands for an occurrence without a tracked literal.
        """
        if self.options.tracks_literals and all(value is not None for value in literals):
            distinct = list(dict.fromkeys(literal_token(PrimitiveShape(kind, value)) for value in literals))
            if len(distinct) <= self.options.literal_threshold:
                return self.make_union([PrimitiveShape(kind, value) for value in distinct])
        return PrimitiveShape(kind)

    def merge_objects(self, shapes: Sequence[ObjectShape]) -> ObjectShape:
        """
        Merge sibling object shapes into one.
        A field is optional when at least one input lacks it (or already had it optional).
        """
        if not shapes:
            return ObjectShape({})
        if len(shapes) == 1:
            return shapes[0]

        names: Dict[str, None] = {}
        for shape in shapes:
            for name in shape.fields:
                names.setdefault(name)

        merged = {}
        for name in names:
            present = [shape.fields[name] for shape in shapes if name in shape.fields]
            optional = len(present) < len(shapes) or any(f.optional for f in present)
            distinct = self._distinct(f.shape for f in present)
            field_shape = distinct[0] if len(distinct) == 1 else self.consolidate(distinct)
            merged[name] = Field(field_shape, optional)

        return ObjectShape(merged)

    def consolidate(self, shapes: Sequence[Shape]) -> Shape:
        """
        Reduce shapes competing for one position to a single shape.
        Members come out as primitives (string, number, boolean), object, arrays, null.
        """
        flat = self._distinct(self._flatten(shapes))
        if len(flat) == 1:
            return flat[0]

        primitives: Dict[str, List[Any]] = {kind: [] for kind in PRIMITIVE_KINDS}
        objects = []
        arrays = []
        has_null = False

        for shape in flat:
            if isinstance(shape, PrimitiveShape):
                primitives[shape.primitive].append(shape.literal)
            elif isinstance(shape, ObjectShape):
                objects.append(shape)
            elif isinstance(shape, ArrayShape):
                arrays.append(shape)
            elif isinstance(shape, NullShape):
                has_null = True
            else:
                raise TypeError(f"Unexpected shape in consolidation: {shape!r}")

        members: List[Shape] = []
        for kind in PRIMITIVE_KINDS:
            if primitives[kind]:
                members.append(self._widen(kind, primitives[kind]))
        if objects:
            members.append(self.merge_objects(objects))
        members.extend(arrays)
        if has_null:
            members.append(NULL)

        return self.make_union(members)

    def make_union(self, members: Iterable[Shape]) -> Shape:
        """
        Build a flat, deduplicated union.
        No members gives the unknown placeholder, one member is returned as is.
        """
        distinct = self._distinct(self._flatten(members))
        if not distinct:
            return UNKNOWN
        if len(distinct) == 1:
            return distinct[0]
        return UnionShape(tuple(distinct))

    def _distinct(self, shapes: Iterable[Shape]) -> List[Shape]:
        seen = {}
        for shape in shapes:
            seen.setdefault(shape_key(shape, self._keys), shape)
        return list(seen.values())

    @staticmethod
    def _flatten(shapes: Iterable[Shape]) -> List[Shape]:
        flat = []
        for shape in shapes:
            if isinstance(shape, UnionShape):
                flat.extend(shape.members)
            else:
                flat.append(shape)
        return flat


def analyze(value: Any, options: Optional[GenerateOptions] = None) -> Shape:
    """Infer the shape of a parsed JSON value."""
    return ShapeAnalyzer(options).analyze(value)
