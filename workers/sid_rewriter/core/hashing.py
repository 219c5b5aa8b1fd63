"""
Hashing — pluggable 32-bit string hashes and replacement-token formatting.

Every hash here is a pure function ``bytes -> int`` returning an unsigned
32-bit value.  The rewriter never calls a hash directly; it receives one
as a parameter, usually resolved by name through ``get_hash_function``.

The same functions can be used at run time to hash strings that have not
been preprocessed yet, so run-time and compile-time IDs agree.
"""
from __future__ import annotations

from typing import Callable, Dict

HashFunction = Callable[[bytes], int]

_MASK_32 = 0xFFFFFFFF

# ── Hash functions ───────────────────────────────────────────────────────────

_DJB2_SEED = 5381

_FNV1A_OFFSET = 0x811C9DC5
_FNV1A_PRIME = 0x01000193


def djb2(data: bytes) -> int:
    """Bernstein hash: ``h = h * 33 + byte``, seeded with 5381."""
    h = _DJB2_SEED
    for byte in data:
        h = ((h << 5) + h + byte) & _MASK_32
    return h


def fnv1a_32(data: bytes) -> int:
    """32-bit FNV-1a."""
    h = _FNV1A_OFFSET
    for byte in data:
        h = ((h ^ byte) * _FNV1A_PRIME) & _MASK_32
    return h


# ── Registry ─────────────────────────────────────────────────────────────────

HASH_FUNCTIONS: Dict[str, HashFunction] = {
    "djb2": djb2,
    "fnv1a": fnv1a_32,
}

DEFAULT_HASH_NAME = "djb2"


def get_hash_function(name: str) -> HashFunction:
    """
    Resolve a hash function by registry name.

    Raises
    ------
    KeyError
        If *name* is not registered.  The message lists the known names.
    """
    try:
        return HASH_FUNCTIONS[name]
    except KeyError:
        known = ", ".join(sorted(HASH_FUNCTIONS))
        raise KeyError(f"Unknown hash function {name!r} (known: {known})") from None


# ── Formatting ───────────────────────────────────────────────────────────────

def format_hash(value: int) -> str:
    """``0x``-prefixed, zero-padded, 8 lowercase hex digits."""
    return f"0x{value & _MASK_32:08x}"


def format_replacement(value: int, content: bytes) -> bytes:
    """
    Build the replacement token for one invocation.

    *content* is the raw literal span, escapes included, and is copied
    into the comment byte for byte.
    """
    return format_hash(value).encode("ascii") + b' /* "' + content + b'" */'
