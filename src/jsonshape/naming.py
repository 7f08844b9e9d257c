"""
Identifier helpers: camel-casing, reserved words, key quoting and unique type names.
"""

import re
from typing import Set

TYPE_SUFFIX = "Type"

RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "enum", "export", "extends", "false", "finally",
    "for", "function", "if", "import", "in", "instanceof", "new", "null",
    "return", "super", "switch", "this", "throw", "true", "try", "typeof",
    "var", "void", "while", "with", "yield", "let", "static", "implements",
    "interface", "package", "private", "protected", "public", "abstract",
    "as", "async", "await", "declare", "from", "get", "is", "keyof",
    "module", "namespace", "never", "readonly", "require", "set", "type",
    "unique", "unknown", "any", "boolean", "number", "string", "symbol",
    "object", "undefined",
})

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_SEPARATORS = re.compile(r"[^A-Za-z0-9$]+(.)?")


def to_camel_case(text: str) -> str:
    """
    Convert `user_name`, `user-name` or `user name` to `userName`.
    Any run of non-alphanumeric characters acts as a word separator.
    """
    camel = _SEPARATORS.sub(lambda m: m.group(1).upper() if m.group(1) else "", text)
    if camel[:1].isupper():
        camel = camel[0].lower() + camel[1:]
    return camel


def is_reserved_word(word: str) -> bool:
    return word in RESERVED_WORDS


def is_valid_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name)) and not is_reserved_word(name)


def quote_string(value: str, quote: str = "'") -> str:
    """Wrap a string in quotes, escaping backslashes and the quote character."""
    escaped = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    return f"{quote}{escaped}{quote}"


def quote_key(key: str, quote: str = "'") -> str:
    """Return the key as-is when it is a usable identifier, quoted otherwise."""
    if is_valid_identifier(key):
        return key
    return quote_string(key, quote)


def make_type_name(base: str, suffix: str = TYPE_SUFFIX) -> str:
    name = to_camel_case(base)
    if name[:1].isdigit():
        name = "_" + name
    return name + suffix


def ensure_unique(name: str, used_names: Set[str]) -> str:
    """Return `name`, or `name2`, `name3`, ... whichever is not yet used."""
    candidate = name
    counter = 2
    while candidate in used_names:
        candidate = f"{name}{counter}"
        counter += 1
    return candidate
