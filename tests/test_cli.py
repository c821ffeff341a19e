from pathlib import Path

import pytest

from huffzip.cli import MAX_TASKS, Task, list_files, main, plan_tasks, run_task
from huffzip.monitor import ProgressBoard

TEXT = b"this is an example of a huffman tree\n"


def test_list_files_skips_dot_names(tmp_path):
    for name in ("b", "a", ".hidden"):
        (tmp_path / name).write_bytes(b"x")
    assert list_files(tmp_path) == ["a", "b"]


def test_list_files_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        list_files(tmp_path / "absent")


def test_plan_tasks_compress(tmp_path):
    src, dst = tmp_path / "src", tmp_path / "dst"
    src.mkdir()
    (src / "one").write_bytes(TEXT)
    (src / "two").write_bytes(TEXT)
    tasks = plan_tasks("c", src, dst)
    assert [t.index for t in tasks] == [0, 1]
    assert tasks[0] == Task(0, src / "one", dst / "one.zip")


def test_plan_tasks_uncompress(tmp_path):
    src, dst = tmp_path / "src", tmp_path / "dst"
    dst.mkdir()
    (dst / "one.zip").write_bytes(b"")
    tasks = plan_tasks("u", src, dst)
    assert tasks == [Task(0, dst / "one.zip", src / "one.zip_decompressed")]


def test_plan_tasks_bad_mode(tmp_path):
    with pytest.raises(ValueError):
        plan_tasks("x", tmp_path, tmp_path)


def test_plan_tasks_too_many_files(tmp_path):
    for i in range(MAX_TASKS + 1):
        (tmp_path / f"f{i}").write_bytes(b"a")
    with pytest.raises(ValueError):
        plan_tasks("c", tmp_path, tmp_path / "out")


def test_run_task_round_trip(tmp_path):
    source = tmp_path / "text"
    source.write_bytes(TEXT)
    board = ProgressBoard(1)
    run_task(Task(0, source, tmp_path / "text.zip"), "c", board)
    assert board.all_done()
    back = ProgressBoard(1)
    length = run_task(Task(0, tmp_path / "text.zip", tmp_path / "back"), "u", back)
    assert length == len(TEXT)
    assert (tmp_path / "back").read_bytes() == TEXT
    assert back.all_done()


def test_run_task_bad_mode(tmp_path):
    with pytest.raises(ValueError):
        run_task(Task(0, tmp_path / "a", tmp_path / "b"), "z", ProgressBoard(1))


def test_main_compress_then_uncompress(tmp_path, capsys):
    plain, packed = tmp_path / "to_compress", tmp_path / "compressed"
    plain.mkdir()
    packed.mkdir()
    (plain / "doc").write_bytes(TEXT)
    dirs = ["--compress-dir", str(plain), "--compressed-dir", str(packed), "--plain"]
    assert main(["c", *dirs]) == 0
    assert (packed / "doc.zip").exists()
    assert main(["u", *dirs]) == 0
    assert (plain / "doc.zip_decompressed").read_bytes() == TEXT
    out = capsys.readouterr().out
    assert "PROGRAM FINISHED" in out
    assert "[task 0]: Done" in out


def test_main_reports_failed_task(tmp_path):
    plain, packed = tmp_path / "to_compress", tmp_path / "compressed"
    plain.mkdir()
    packed.mkdir()
    (plain / "bad").write_bytes(b"\x80\x81")
    args = ["c", "--compress-dir", str(plain), "--compressed-dir", str(packed), "--plain"]
    assert main(args) == 1
    assert not (packed / "bad.zip").exists()


def test_main_asks_for_mode(tmp_path, monkeypatch):
    answers = iter(["x", "c"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    plain, packed = tmp_path / "to_compress", tmp_path / "compressed"
    plain.mkdir()
    packed.mkdir()
    (plain / "doc").write_bytes(TEXT)
    args = ["--compress-dir", str(plain), "--compressed-dir", str(packed), "--plain"]
    assert main(args) == 0
    assert (packed / "doc.zip").exists()


def test_main_without_answer_fails(tmp_path, monkeypatch):
    def no_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", no_input)
    args = ["--compress-dir", str(tmp_path), "--compressed-dir", str(tmp_path), "--plain"]
    assert main(args) == 1


def test_main_single_round_trip(tmp_path):
    source = tmp_path / "text2"
    source.write_bytes(TEXT)
    archive = tmp_path / "text2.zip"
    validation = tmp_path / "text2_val"
    assert main(["--single", str(source), str(archive), str(validation)]) == 0
    assert Path(validation).read_bytes() == TEXT


def test_main_single_missing_source(tmp_path):
    args = ["--single", str(tmp_path / "no"), str(tmp_path / "a"), str(tmp_path / "b")]
    assert main(args) == 1


def test_main_single_wrong_arity(tmp_path):
    with pytest.raises(SystemExit):
        main(["--single", str(tmp_path / "only")])