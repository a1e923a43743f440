"""Modifier bitmask predicates.

Bit values follow ``java.lang.reflect.Modifier``.  Adapters encode keyword
sets into a mask once; everything else queries the mask through the
predicates below.
"""

from __future__ import annotations

from collections.abc import Iterable

PUBLIC = 0x0001
PRIVATE = 0x0002
PROTECTED = 0x0004
STATIC = 0x0008
FINAL = 0x0010
SYNCHRONIZED = 0x0020
VOLATILE = 0x0040
TRANSIENT = 0x0080
NATIVE = 0x0100
INTERFACE = 0x0200
ABSTRACT = 0x0400
STRICT = 0x0800

_KEYWORD_BITS = {
    "public": PUBLIC,
    "private": PRIVATE,
    "protected": PROTECTED,
    "static": STATIC,
    "final": FINAL,
    "synchronized": SYNCHRONIZED,
    "volatile": VOLATILE,
    "transient": TRANSIENT,
    "native": NATIVE,
    "interface": INTERFACE,
    "abstract": ABSTRACT,
    "strictfp": STRICT,
}


def encode(keywords: Iterable[str]) -> int:
    """Build a modifier mask from Java modifier keywords.

    Unknown keywords (``default``, ``sealed``, annotations) are ignored.
    """
    mask = 0
    for keyword in keywords:
        mask |= _KEYWORD_BITS.get(keyword, 0)
    return mask


def is_public(mask: int) -> bool:
    return bool(mask & PUBLIC)


def is_static(mask: int) -> bool:
    return bool(mask & STATIC)


def is_final(mask: int) -> bool:
    return bool(mask & FINAL)


def is_abstract(mask: int) -> bool:
    return bool(mask & ABSTRACT)


def is_interface(mask: int) -> bool:
    return bool(mask & INTERFACE)
