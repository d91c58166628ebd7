import pytest

from dotplot.annotations import AnnotationKind, ColoredRecord
from dotplot.errors import InvalidArgument
from dotplot.keys import BasePairKey
from dotplot.parser import parse
from dotplot.serializer import format_number, serialize


def test_round_trip_preserves_model(sample_text):
    original = parse(sample_text)
    reparsed = parse(serialize(original))

    assert dict(reparsed.definitions) == dict(original.definitions)
    assert reparsed.annotations == original.annotations
    assert reparsed.leading_comments == original.leading_comments
    # the serializer separates `/len` from the commands with one blank line
    assert reparsed.leading_commands[0] == "\n"
    assert reparsed.leading_commands[1:] == [line for line in original.leading_commands if line.strip()]


def test_second_round_trip_is_stable(sample_text):
    once = serialize(parse(sample_text))
    assert serialize(parse(once)) == once


def test_round_trip_after_edits(sample_text):
    dotplot = parse(sample_text)
    dotplot.set_upper_cross(0, 8, 1, 0, 0)
    dotplot.set_lower_empty_box(2, 6, 0, 0.5, 1)
    dotplot.set_base_pair_probability(3, 5, 0.04)
    dotplot.mirror()

    reparsed = parse(serialize(dotplot))
    assert reparsed.annotations == dotplot.annotations
    assert reparsed.get_probability(3, 5) == pytest.approx(0.04)


def test_layout_order(minimal_text):
    dotplot = parse(minimal_text)
    dotplot.set_lower_cross(1, 4, 0, 0, 1)
    dotplot.set_upper_empty_box(1, 4, 0, 1, 0)
    text = serialize(dotplot)
    lines = text.splitlines()

    assert lines[:3] == ["%!PS-Adobe-3.0 EPSF-3.0", "%%Title: minimal", ""]
    assert lines[3:5] == ["/DPdict 100 dict def", "DPdict begin"]
    len_line = lines.index("/len 12 def")
    assert lines.index("/lpmin 1e-05 log def") < len_line
    assert lines.index("/obox {") < len_line
    assert lines[len_line + 1 :] == [
        "",
        "0.5 dup translate",
        "drawgrid",
        "0 0 0 setrgbcolor 1 12 0.5 ubox",
        "0 1 0 setrgbcolor 2 5 1 obox",
        "0 0 1 setrgbcolor 2 5 1 lcross",
        "showpage",
        "end",
    ]


def test_collections_written_in_fixed_order():
    dotplot = parse("/len 5 def\ndrawgrid\nshowpage\n")
    for offset, kind in enumerate(reversed(list(AnnotationKind))):
        dotplot.annotations.put(kind, BasePairKey(1, 2 + offset), ColoredRecord(0.5))
    body = serialize(dotplot).split("drawgrid\n", 1)[1].splitlines()
    assert [line.split(" ")[-1] for line in body[:-2]] == ["ubox", "lbox", "obox", "lobox", "ucross", "lcross"]


def test_blank_command_lines_are_dropped():
    dotplot = parse("/len 5 def\n\n \nstroke\ndrawgrid\nshowpage\n")
    assert dotplot.leading_commands == ["\n", " \n", "stroke\n", "drawgrid\n"]
    text = serialize(dotplot)
    assert "/len 5 def\n\nstroke\ndrawgrid\n" in text


def test_missing_len_is_rejected(minimal_text):
    dotplot = parse(minimal_text)
    del dotplot.definitions["len"]
    with pytest.raises(InvalidArgument):
        serialize(dotplot)


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, "0"), (1.0, "1"), (0.9, "0.9"), (0.5 ** 0.5, repr(0.5 ** 0.5)), (1e-05, "1e-05")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected
    assert float(format_number(value)) == value
