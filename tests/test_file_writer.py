import pytest

from katana.output.file_writer import FileWriter


def test_writes_lines(tmp_path):
    target = tmp_path / "out.txt"
    writer = FileWriter(target)
    writer.write("a")
    writer.write(b"b")
    writer.close()
    assert target.read_text() == "a\nb\n"


def test_context_manager_truncates(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old content\n")
    with FileWriter(target) as writer:
        writer.write("new")
    assert target.read_text() == "new\n"


def test_close_twice_is_harmless(tmp_path):
    target = tmp_path / "out.txt"
    writer = FileWriter(str(target))
    writer.write("x")
    writer.close()
    writer.close()
    assert target.read_bytes() == b"x\n"


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        FileWriter(tmp_path / "missing" / "out.txt")