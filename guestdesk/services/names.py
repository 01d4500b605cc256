from __future__ import annotations

from typing import Any

# Portuguese articles and prepositions kept lower-case inside a name
LOWERCASE_CONNECTIVES = frozenset(
    {"de", "da", "do", "das", "dos", "e", "em", "na", "no", "nas", "nos", "a", "o", "as", "os"}
)


def _capitalize(word: str) -> str:
    # a first letter whose title form expands ("ŉ" -> "ʼN") is left as is
    first = word[:1].title()
    if len(first) != 1:
        return word
    return first + word[1:]


def format_name(value: Any) -> str:
    """
    Canonical display form of a guest name.

    "MARIA DE SOUZA" -> "Maria de Souza". Non-strings and blank input give "".
    Applying it twice changes nothing.
    """
    if not isinstance(value, str):
        return ""

    words = value.lower().split()
    out = []
    for i, word in enumerate(words):
        if i > 0 and word in LOWERCASE_CONNECTIVES:
            out.append(word)
        else:
            out.append(_capitalize(word))
    return " ".join(out)
