"""
Common test fixtures shared by all modules.

Reference digests are computed straight from hashlib so the tests do not
depend on the implementation they check.
"""

import hashlib
from typing import Optional


def dh(data: str) -> str:
    """Reference double hash: sha256 over the hex text of sha256(data)."""
    first = hashlib.sha256(data.encode("utf-8")).hexdigest()
    return hashlib.sha256(first.encode("utf-8")).hexdigest()


def make_leaf_ids(count: int, prefix: str = "tx") -> list[str]:
    """Create ordered transaction ids tx1..txN."""
    return [f"{prefix}{i}" for i in range(1, count + 1)]


def reference_root(leaf_ids: list[str]) -> str:
    """Independent root computation following the promotion rule."""
    layer = [dh(leaf) for leaf in leaf_ids]
    while len(layer) > 1:
        nxt = []
        for i in range(0, len(layer), 2):
            if i + 1 < len(layer):
                nxt.append(dh(layer[i] + layer[i + 1]))
            else:
                nxt.append(layer[i])
        layer = nxt
    return layer[0]


def flip_hex_char(digest: str, position: Optional[int] = None) -> str:
    """Return digest with one hex character changed."""
    pos = len(digest) - 1 if position is None else position
    replacement = "0" if digest[pos] != "0" else "1"
    return digest[:pos] + replacement + digest[pos + 1:]
