from pathlib import Path

import pytest

from dotplot import FileError, FormatError, InvalidArgument, open_dotplot, save_dotplot
from dotplot.keys import BasePairKey


def test_open_modify_save_reopen(sample_path: Path, tmp_path: Path) -> None:
    dotplot = open_dotplot(sample_path)
    dotplot.set_upper_cross(0, 8, 1, 0, 0)
    out_path = tmp_path / "annotated.ps"

    save_dotplot(dotplot, out_path)
    reopened = open_dotplot(out_path)

    assert reopened.annotations == dotplot.annotations
    assert dict(reopened.definitions) == dict(dotplot.definitions)
    assert reopened.annotations.upper_crosses[BasePairKey(1, 9)].color == (1.0, 0.0, 0.0)


def test_save_overwrites_existing_file(minimal_text: str, tmp_path: Path) -> None:
    source = tmp_path / "dot.ps"
    source.write_text(minimal_text, encoding="latin-1")
    dotplot = open_dotplot(source)
    dotplot.set_base_pair_probability(0, 11, 1.0)
    save_dotplot(dotplot, source)
    assert open_dotplot(source).get_probability(0, 11) == pytest.approx(1.0)


def test_non_ascii_comment_survives(minimal_text: str, tmp_path: Path) -> None:
    source = tmp_path / "latin.ps"
    source.write_bytes(b"%Created by G\xf6ttingen lab\n" + minimal_text.encode("ascii"))
    out_path = tmp_path / "copy.ps"
    save_dotplot(open_dotplot(source), out_path)
    assert out_path.read_bytes().startswith(b"%Created by G\xf6ttingen lab\n")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileError, match="does not exist"):
        open_dotplot(tmp_path / "nope.ps")


def test_unreadable_path_is_file_error(tmp_path: Path) -> None:
    with pytest.raises(FileError):
        open_dotplot(tmp_path)


def test_unwritable_destination(minimal_text: str, tmp_path: Path) -> None:
    source = tmp_path / "dot.ps"
    source.write_text(minimal_text, encoding="latin-1")
    dotplot = open_dotplot(source)
    with pytest.raises(FileError):
        save_dotplot(dotplot, tmp_path / "missing-dir" / "out.ps")


def test_file_error_is_an_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        open_dotplot(tmp_path / "nope.ps")


def test_format_error_from_file(tmp_path: Path) -> None:
    broken = tmp_path / "broken.ps"
    broken.write_text("/len 3 def\ndrawgrid\n1 2 ubox\nshowpage\n", encoding="latin-1")
    with pytest.raises(FormatError) as excinfo:
        open_dotplot(broken)
    assert excinfo.value.line_number == 3


def test_save_without_len_does_not_touch_destination(minimal_text: str, tmp_path: Path) -> None:
    source = tmp_path / "dot.ps"
    source.write_text(minimal_text, encoding="latin-1")
    dotplot = open_dotplot(source)
    del dotplot.definitions["len"]
    with pytest.raises(InvalidArgument):
        save_dotplot(dotplot, source)
    assert source.read_text(encoding="latin-1") == minimal_text
