"""Huffman coding of ASCII text and the compressed file format.

Compressed layout (all integers little-endian):

* bytes 0-3: length of the original text in symbols
* byte 4: number of distinct symbols ``n``
* ``n`` records of 5 bytes: the symbol and its 32-bit frequency,
  in decreasing order of frequency
* the coded bit stream, most significant bit first
"""

from __future__ import annotations

import struct
from collections import Counter
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

EPSILON = 0.33
TABLE_PART = 5.0
SYM_MAX = 255
MAX_BUFFER = 255_000_000
H_OFFSET = 5
S_COEFF = 5

_HEADER = struct.Struct("<IB")
_RECORD = struct.Struct("<BI")

ProgressCallback = Optional[Callable[[float], None]]
PathLike = Union[str, Path]


class HuffmanError(ValueError):
    """Raised when text cannot be coded or coded data cannot be read."""


class UnsupportedSymbolError(HuffmanError):
    """Raised when the text holds a byte outside the 7-bit ASCII range 1-127."""

    def __init__(self, symbol: int, position: int) -> None:
        super().__init__(f"unsupported symbol code {symbol} at position {position}")
        self.symbol = symbol
        self.position = position


@dataclass(eq=False)
class Node:
    """A node of a Huffman tree; a leaf carries a symbol."""

    freq: int
    symbol: int = 0
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    @property
    def leaf(self) -> bool:
        return self.left is None and self.right is None


class _Progress:
    """Forwards progress to a callback only when it has moved noticeably."""

    def __init__(self, callback: ProgressCallback) -> None:
        self._callback = callback
        self._last = 0.0
        self._finished = False

    def report(self, value: float) -> None:
        if self._callback is None:
            return
        notify = False
        if value - self._last > EPSILON:
            self._last = value
            notify = True
        if value > 99.999 and not self._finished:
            self._finished = True
            notify = True
        if notify:
            self._callback(value)


def count_frequencies(text: bytes) -> dict[int, int]:
    """Count how often each symbol occurs in ``text``."""
    for position, symbol in enumerate(text):
        if not 1 <= symbol <= 127:
            raise UnsupportedSymbolError(symbol, position)
    return dict(Counter(text))


def sorted_leaves(frequencies: Mapping[int, int]) -> list[Node]:
    """Make leaves ordered by decreasing frequency, ties by increasing symbol."""
    ordered = sorted(
        ((symbol, freq) for symbol, freq in frequencies.items() if freq > 0),
        key=lambda item: (-item[1], item[0]),
    )
    return [Node(freq=freq, symbol=symbol) for symbol, freq in ordered]


def build_tree(leaves: Iterable[Node]) -> Optional[Node]:
    """Build the Huffman tree from leaves sorted by decreasing frequency.

    Returns ``None`` when there are no leaves. A single leaf is placed
    under an inner node so that it gets a one-bit code.
    """
    pending = list(leaves)
    subtrees: list[Node] = []

    def take() -> Optional[Node]:
        if pending and subtrees:
            if subtrees[-1].freq < pending[-1].freq:
                return subtrees.pop()
            return pending.pop()
        if pending:
            return pending.pop()
        if subtrees:
            return subtrees.pop()
        return None

    while True:
        first = take()
        if first is None:
            return None
        if not pending and not subtrees:
            if first.leaf:
                return Node(freq=first.freq, left=first)
            return first
        second = take()
        merged = Node(freq=first.freq + second.freq, left=first, right=second)
        position = next(
            (
                i
                for i in range(len(subtrees) - 1, -1, -1)
                if merged.freq < subtrees[i].freq
            ),
            0,
        )
        subtrees.insert(position, merged)


def make_codes(root: Optional[Node]) -> dict[int, str]:
    """Map every symbol of the tree to its code as a string of '0' and '1'."""

    def walk(node: Node, prefix: str) -> Iterator[tuple[int, str]]:
        if node.left is not None:
            yield from walk(node.left, prefix + "0")
        if node.right is not None:
            yield from walk(node.right, prefix + "1")
        if node.leaf:
            yield node.symbol, prefix

    if root is None:
        return {}
    return dict(walk(root, ""))


def encode(text: bytes, progress: ProgressCallback = None) -> bytes:
    """Compress ``text`` into the header-plus-bitstream format."""
    if len(text) > MAX_BUFFER:
        raise HuffmanError(f"text longer than {MAX_BUFFER} symbols")
    leaves = sorted_leaves(count_frequencies(text))
    codes = make_codes(build_tree(leaves))
    tracker = _Progress(progress)

    out = bytearray(_HEADER.pack(len(text), len(leaves)))
    for i, leaf in enumerate(leaves):
        out += _RECORD.pack(leaf.symbol, leaf.freq)
        tracker.report(i / len(leaves) * TABLE_PART)

    parts = []
    for i, symbol in enumerate(text):
        parts.append(codes[symbol])
        tracker.report(TABLE_PART + i / len(text) * (100.0 - TABLE_PART))
    bits = "".join(parts)

    if not bits:
        out.append(0)
        return bytes(out)
    size = (len(bits) + 7) // 8
    out += int(bits.ljust(size * 8, "0"), 2).to_bytes(size, "big")
    return bytes(out)


def _bits(data: bytes) -> Iterator[int]:
    for byte in data:
        for shift in range(7, -1, -1):
            yield (byte >> shift) & 1


def decode(data: bytes, progress: ProgressCallback = None) -> bytes:
    """Restore the original text from compressed ``data``."""
    if len(data) < H_OFFSET:
        raise HuffmanError("data too short for header")
    text_len, count = _HEADER.unpack_from(data)
    start = H_OFFSET + count * S_COEFF
    if len(data) < start:
        raise HuffmanError("data too short for symbol table")
    leaves = [
        Node(freq=freq, symbol=symbol)
        for symbol, freq in _RECORD.iter_unpack(data[H_OFFSET:start])
    ]
    if text_len == 0:
        return b""
    root = build_tree(leaves)
    if root is None:
        raise HuffmanError("symbol table is empty but text length is not zero")

    tracker = _Progress(progress)
    out = bytearray()
    node = root
    for bit in _bits(data[start:]):
        node = node.right if bit else node.left
        if node is None:
            raise HuffmanError("bit stream does not match the symbol table")
        if node.leaf:
            out.append(node.symbol)
            tracker.report(len(out) / text_len * 100.0)
            if len(out) == text_len:
                return bytes(out)
            node = root
    raise HuffmanError("bit stream ends before the whole text is decoded")


def compress_file(
    source: PathLike, output: PathLike, progress: ProgressCallback = None
) -> int:
    """Compress ``source`` into ``output``; return the number of bytes written."""
    try:
        data = encode(Path(source).read_bytes(), progress)
        Path(output).write_bytes(data)
        return len(data)
    finally:
        if progress is not None:
            progress(100.0)


def decompress_file(
    source: PathLike, output: PathLike, progress: ProgressCallback = None
) -> int:
    """Decompress ``source`` into ``output``; return the length of the text."""
    try:
        text = decode(Path(source).read_bytes(), progress)
        Path(output).write_bytes(text)
        return len(text)
    finally:
        if progress is not None:
            progress(100.0)