"""
Top-level entry points: JSON value in, type declarations out.
"""

from typing import Any, Optional

from .analyzer import ShapeAnalyzer
from .emitter import TypeEmitter, TypeRegistry
from .log import get_logger
from .naming import TYPE_SUFFIX, make_type_name
from .options import GenerateOptions, resolve_options
from .shapes import Shape

logger = get_logger(__name__)


def generate(value: Any, options: Optional[GenerateOptions] = None, **overrides: Any) -> str:
    """
    Generate type declarations describing `value`.

    Keyword overrides are applied on top of `options`, e.g.
    `generate(data, root_name="user", literal_threshold=3)`.
    """
    opts = resolve_options(options, **overrides)
    shape = ShapeAnalyzer(opts).analyze(value)
    return generate_from_shape(shape, opts)


def generate_from_shape(shape: Shape, options: Optional[GenerateOptions] = None, **overrides: Any) -> str:
    """
    Emit declarations for an already analysed shape.
    Lets callers re-render under another root name without analysing again.
    """
    opts = resolve_options(options, **overrides)
    root_name = resolve_root_name(opts.root_name)
    root_text, registry = TypeEmitter(opts).emit(shape, root_name)
    return render_declarations(root_name, root_text, registry, opts.declaration_order)


def resolve_root_name(name: str) -> str:
    """`user` -> `userType`; names already ending in `Type` are kept."""
    if name.endswith(TYPE_SUFFIX):
        return name
    return make_type_name(name)


def render_declarations(root_name: str, root_text: str, registry: TypeRegistry,
                        order: str = "discovery") -> str:
    """
    Serialize the root declaration followed by the rest of the registry,
    separated by blank lines.
    """
    blocks = []
    root = registry.declarations.get(root_name)
    if root is not None:
        blocks.append(root.render())
    else:
        blocks.append(f"type {root_name} = {root_text};")

    for declaration in registry.ordered(order):
        if declaration is root:
            continue
        blocks.append(declaration.render())

    logger.debug("Rendered %d declarations", len(blocks))
    return "\n\n".join(blocks)
