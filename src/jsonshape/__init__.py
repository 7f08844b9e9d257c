"""
jsonshape - Infer TypeScript type declarations from JSON data.

This library analyses an arbitrary JSON value, unifies the shapes of sibling
array elements, deduplicates repeated structures and emits a minimal set of
named `type` declarations describing the data.
"""

from .analyzer import ShapeAnalyzer, analyze
from .emitter import Declaration, TypeEmitter, TypeRegistry
from .errors import ConfigError, InputError, JsonShapeError, NestingDepthError
from .generator import generate, generate_from_shape
from .options import GenerateOptions, load_options

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Declaration",
    "GenerateOptions",
    "InputError",
    "JsonShapeError",
    "NestingDepthError",
    "ShapeAnalyzer",
    "TypeEmitter",
    "TypeRegistry",
    "analyze",
    "generate",
    "generate_from_shape",
    "load_options",
    "__version__",
]
