# huffzip

Huffman compression for plain 7-bit ASCII text files. The `huffzip` command
compresses or decompresses every file in a folder at once, one thread per
file, and shows the progress of each job on a terminal board.

## Installation

```
pip install .
```

There are no dependencies outside the standard library. The full-screen board
uses `curses`.

## Command line

Run `huffzip` in a directory that holds two folders:

- `to_compress/`: the text files to compress
- `compressed/`: the compressed files to decompress

```
huffzip
```

The command lists the files it finds in both folders. Names that start with a
dot are skipped, and the rest are sorted. Then it asks whether to compress
(`c`) or decompress (`u`). You can also give the choice on the command line
instead:

```
huffzip c
huffzip u
```

- **c**: each `to_compress/NAME` is written to `compressed/NAME.zip`.
- **u**: each `compressed/NAME` is written to `to_compress/NAME_decompressed`.
  For example, `compressed/notes.zip` becomes
  `to_compress/notes.zip_decompressed`.

At most 100 files can be handled in one run.

The board shows one line per task, such as `[task 0]: 42.0%`. When a task
finishes, its line changes to `[task 0]: Done`. When every task is done, the
board shows `PROGRAM FINISHED. PRESS ANY KEY.` and waits for a key.

If a task fails (for example, an unreadable file or a non-ASCII byte), the
error is printed after the board closes, and the exit status is 1.

### Options

| Option | Meaning |
|---|---|
| `c` / `u` | compress or decompress; asked for if left out |
| `--compress-dir DIR` | folder of files to compress (default `to_compress`) |
| `--compressed-dir DIR` | folder of compressed files (default `compressed`) |
| `--plain` | print the board as plain text lines, not as a full screen |
| `--single [SOURCE ARCHIVE VALIDATION]` | compress one file to `ARCHIVE`, then decompress it to `VALIDATION` |

The board is also printed as plain text when standard output is not a
terminal. In plain mode the command does not wait for a key at the end.

`--single` with no file names uses `to_compress/text2`,
`compressed/text2.zip` and `to_compress/text2_val`. With file names, it needs
exactly three.

## Library use

```python
from huffzip.huffman import compress_file, decompress_file, encode, decode

compress_file("notes.txt", "notes.txt.zip")
decompress_file("notes.txt.zip", "notes_copy.txt")

data = encode(b"abracadabra")
assert decode(data) == b"abracadabra"
```

`compress_file` returns the number of bytes it wrote. `decompress_file`
returns the length of the restored text.

### Progress callbacks

Each of these functions takes an optional `progress` callable, which is
called with a percentage from 0.0 to 100.0:

- `encode` and `decode` call it only when the value has moved by more than
  0.33 points, and once when it goes past 99.999.
- `compress_file` and `decompress_file` also call it with `100.0` at the end,
  even when they fail.

### Tracking several jobs

To track several jobs, use `huffzip.monitor.ProgressBoard`:

- `board.reporter(task)` returns a callable to pass as `progress`.
- `board.snapshot()` returns the current values.
- `board.all_done()` tells whether every task has reached 99.99.
- `board.wait_for_change(timeout)` blocks until some task reports progress.
- `huffzip.monitor.run_monitor(board, screen)` draws the board on any object
  that has curses-style `addstr`, `refresh` and `getch` methods.

### Building blocks

The steps are also available one by one:

- `count_frequencies`
- `sorted_leaves`
- `build_tree`
- `make_codes`

Each symbol of the text must be a byte from 1 to 127. Any other byte raises
`huffzip.huffman.UnsupportedSymbolError`, which is a subclass of
`HuffmanError` and records the byte and its position. `decode` raises
`HuffmanError` for truncated or inconsistent data.

## File format

The output uses the `.zip` extension, but it is not a ZIP archive. Only
`huffzip` can read it.

| Bytes | Content |
|---|---|
| 0–3 | length of the original text, little-endian `uint32` |
| 4 | number of distinct symbols `n` |
| next `5 * n` | for each symbol: 1 byte symbol, 4 bytes frequency (little-endian), most frequent first |
| rest | Huffman-coded bits, most significant bit first, padded with zero bits |

A text with a single distinct symbol gets a one-bit code. An empty text is
stored as the header followed by one zero byte.

## Limitations

- Input texts of more than 255,000,000 symbols are rejected.
- Non-ASCII text, and binary files in general, cannot be compressed.