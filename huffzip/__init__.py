"""Huffman compression of ASCII text, a threaded progress board and a command line."""

__version__ = "0.1.0"
__all__ = ["huffman", "monitor", "cli"]