"""Command line: compress or decompress every file of a directory at once."""

from __future__ import annotations

import argparse
import sys
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from huffzip.huffman import HuffmanError, compress_file, decompress_file
from huffzip.monitor import ProgressBoard, run_monitor

MAX_TASKS = 100
COMPRESS_DIR = "to_compress"
COMPRESSED_DIR = "compressed"
SINGLE_FILES = ("to_compress/text2", "compressed/text2.zip", "to_compress/text2_val")
_SUFFIXES = {"c": ".zip", "u": "_decompressed"}


@dataclass(frozen=True)
class Task:
    """One file to process and where to put the result."""

    index: int
    source: Path
    output: Path


def list_files(directory: str | Path) -> list[str]:
    """Names in ``directory`` that do not start with a dot, sorted."""
    return sorted(
        entry.name for entry in Path(directory).iterdir() if not entry.name.startswith(".")
    )


def plan_tasks(
    mode: str, compress_dir: str | Path, compressed_dir: str | Path
) -> list[Task]:
    """Make one task per file of the input directory of ``mode`` ('c' or 'u')."""
    if mode == "c":
        in_dir, out_dir = Path(compress_dir), Path(compressed_dir)
    elif mode == "u":
        in_dir, out_dir = Path(compressed_dir), Path(compress_dir)
    else:
        raise ValueError(f"mode must be 'c' or 'u', not {mode!r}")
    names = list_files(in_dir)
    if len(names) > MAX_TASKS:
        raise ValueError(f"{len(names)} files found, at most {MAX_TASKS} can be handled")
    suffix = _SUFFIXES[mode]
    return [
        Task(index, in_dir / name, out_dir / f"{name}{suffix}")
        for index, name in enumerate(names)
    ]


def run_task(task: Task, mode: str, board: ProgressBoard) -> int:
    """Process one task, reporting its progress on ``board``."""
    if mode == "c":
        action = compress_file
    elif mode == "u":
        action = decompress_file
    else:
        raise ValueError(f"mode must be 'c' or 'u', not {mode!r}")
    return action(task.source, task.output, board.reporter(task.index))


class _PlainScreen:
    """A screen that prints the board as text whenever it changes."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._rows: dict[int, str] = {}
        self._shown: list[str] = []

    def addstr(self, y: int, x: int, text: str) -> None:
        self._rows[y] = " " * x + text.rstrip()

    def refresh(self) -> None:
        lines = [self._rows[row] for row in sorted(self._rows)]
        if lines != self._shown:
            self._shown = lines
            print("\n".join(lines), file=self._stream, flush=True)

    def getch(self) -> int:
        return -1


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="huffzip", description="Huffman compression of whole directories."
    )
    parser.add_argument("mode", nargs="?", choices=("c", "u"),
                        help="c to compress, u to decompress; asked for if left out")
    parser.add_argument("--compress-dir", default=COMPRESS_DIR,
                        help="directory of files to compress")
    parser.add_argument("--compressed-dir", default=COMPRESSED_DIR,
                        help="directory of compressed files")
    parser.add_argument("--plain", action="store_true",
                        help="print progress as text instead of a full screen")
    parser.add_argument("--single", nargs="*", metavar="FILE",
                        help="compress SOURCE to ARCHIVE, then decompress it to VALIDATION")
    return parser


def _ask_mode() -> Optional[str]:
    while True:
        try:
            answer = input("Do you want to compress or uncompress) [c/u]: ")
        except EOFError:
            return None
        print()
        choice = answer.strip()[:1]
        if choice in _SUFFIXES:
            return choice


def _announce(directory: str, verb: str) -> None:
    try:
        names = list_files(directory)
    except OSError:
        print(f"Could not open directory: {directory}")
        return
    print(f"directory [{directory}] opened")
    for name in names:
        print(f"[{name}]")
    print(f"there are [{len(names)}] files to {verb}\n")


def _run_single(source: str, archive: str, validation: str) -> int:
    try:
        compress_file(source, archive)
        decompress_file(archive, validation)
    except (OSError, HuffmanError) as error:
        print(f"huffzip: {error}", file=sys.stderr)
        return 1
    return 0


def _worker(task: Task, mode: str, board: ProgressBoard, errors: dict[int, Exception]) -> None:
    try:
        run_task(task, mode, board)
    except (OSError, HuffmanError) as error:
        errors[task.index] = error
    finally:
        board.update(task.index, 100.0)


def _show(board: ProgressBoard, plain: bool) -> None:
    if plain or not sys.stdout.isatty():
        run_monitor(board, _PlainScreen(sys.stdout))
        return
    import curses

    curses.wrapper(lambda screen: run_monitor(board, screen))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program; return the exit status."""
    parser = _parser()
    args = parser.parse_args(argv)
    if args.single is not None:
        files = args.single or list(SINGLE_FILES)
        if len(files) != 3:
            parser.error("--single takes SOURCE ARCHIVE VALIDATION")
        return _run_single(*files)

    print("PROGRAM STARTED\n")
    _announce(args.compress_dir, "compress")
    _announce(args.compressed_dir, "uncompress")

    mode = args.mode or _ask_mode()
    if mode is None:
        return 1
    try:
        tasks = plan_tasks(mode, args.compress_dir, args.compressed_dir)
    except OSError:
        tasks = []
    except ValueError as error:
        print(f"huffzip: {error}", file=sys.stderr)
        return 1

    in_dir, out_dir = (
        (args.compress_dir, args.compressed_dir) if mode == "c"
        else (args.compressed_dir, args.compress_dir)
    )
    print(f"in_dir: {in_dir}")
    print(f"out_dir: {out_dir}")

    board = ProgressBoard(len(tasks))
    errors: dict[int, Exception] = {}
    threads = [
        threading.Thread(target=_worker, args=(task, mode, board, errors), daemon=True)
        for task in tasks
    ]
    for thread in threads:
        thread.start()
    _show(board, args.plain)
    for thread in threads:
        thread.join()

    for task in tasks:
        if task.index in errors:
            print(f"[task {task.index}] {task.source}: {errors[task.index]}", file=sys.stderr)
    print("\nPROGRAM FINISHED")
    return 1 if errors else 0