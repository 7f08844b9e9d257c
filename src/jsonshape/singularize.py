"""
Heuristic English singularization, used to name the item types of plural fields
(`addresses` -> `addressType`).
"""

import re
from typing import Callable, Dict, Mapping, Optional

IRREGULARS: Dict[str, str] = {
    "people": "person",
    "children": "child",
    "geese": "goose",
    "mice": "mouse",
    "men": "man",
    "women": "woman",
    "indices": "index",
    "data": "datum",
    "feet": "foot",
    "teeth": "tooth",
    "oxen": "ox",
    "criteria": "criterion",
    "phenomena": "phenomenon",
    "analyses": "analysis",
    "bases": "basis",
    "crises": "crisis",
    "hypotheses": "hypothesis",
    "oases": "oasis",
    "parentheses": "parenthesis",
    "synopses": "synopsis",
    "theses": "thesis",
    "vertices": "vertex",
    "matrices": "matrix",
    "appendices": "appendix",
    "codices": "codex",
}

# Words that look plural but must be left alone
INVARIANTS = frozenset({
    "status", "species", "news", "css", "series", "scissors", "glasses",
    "pants", "jeans", "shorts", "trousers", "headquarters", "means", "deer",
    "sheep", "fish", "aircraft", "spacecraft", "mathematics", "physics",
    "economics", "politics", "athletics", "gymnastics", "acoustics", "optics",
    "electronics", "dynamics", "statistics", "mechanics", "ethics",
    "semantics", "phonetics", "genetics",
})

_ES_ENDINGS = re.compile(r"(xes|ches|shes|sses|zes)$")
# Splits `orderItems` into (`order`, `Items`) and `USER_IDS` into (`USER_`, `IDS`)
_LAST_WORD = re.compile(r"^(.*?)([A-Z]?[a-z]+|[A-Z]+|[0-9a-z]+)$")


def singularize(word: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the singular form of the last word in `word`, preserving its case.
    `overrides` maps lower-case plurals to singulars and wins over the built-in tables.
    """
    match = _LAST_WORD.match(word)
    if match is None or len(match.group(2)) < 2:
        prefix, tail = "", word
    else:
        prefix, tail = match.group(1), match.group(2)
    return prefix + _singularize_word(tail, overrides or {})


def make_singularizer(overrides: Mapping[str, str]) -> Callable[[str], str]:
    lowered = {k.lower(): v for k, v in overrides.items()}
    return lambda word: singularize(word, lowered)


def _singularize_word(word: str, overrides: Mapping[str, str]) -> str:
    lower = word.lower()

    if lower in overrides:
        return _preserve_case(overrides[lower], word)
    if lower in IRREGULARS:
        return _preserve_case(IRREGULARS[lower], word)
    if lower in INVARIANTS:
        return word

    if lower.endswith("ies") and len(lower) > 3:
        y = "Y" if word[-3:].isupper() else "y"
        return word[:-3] + y
    if _ES_ENDINGS.search(lower):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith("ss") and len(lower) > 1:
        return word[:-1]
    return word


def _preserve_case(result: str, original: str) -> str:
    if not original:
        return result
    if original.isupper():
        return result.upper()
    if original[0].isupper():
        return result[:1].upper() + result[1:]
    return result
