import pytest

from cub3d.scene import (
    CubError,
    check_empty_read,
    check_file_name,
    is_map_line,
    normalize_config_line,
    read_map,
    split_file_lines,
    trim_config_lines,
)


def test_check_file_name_accepts_cub():
    assert check_file_name("maps/level.cub") == "maps/level.cub"


@pytest.mark.parametrize("name", ["ab", ".cu", "map.txt", "map.cubx", "mapcub"])
def test_check_file_name_rejects(name):
    with pytest.raises(CubError) as info:
        check_file_name(name)
    assert str(info.value) == "file_name must final with .cub"


def test_check_empty_read_missing(tmp_path):
    with pytest.raises(CubError, match="does not exist"):
        check_empty_read(tmp_path / "nothing.cub")


def test_check_empty_read_empty(tmp_path):
    path = tmp_path / "empty.cub"
    path.write_text("")
    with pytest.raises(CubError, match="empty file"):
        check_empty_read(path)


def test_read_map_round_trip(tmp_path):
    content = "NO ./a.png\n\n111\n1N1\n111\n"
    path = tmp_path / "s.cub"
    path.write_text(content)
    assert read_map(path) == content


def test_read_map_missing(tmp_path):
    with pytest.raises(CubError):
        read_map(tmp_path / "gone.cub")


def test_split_file_lines_keeps_blank_as_newline():
    assert split_file_lines("a\n\nb\n") == ["a", "\n", "b"]


def test_split_file_lines_empty_text():
    assert split_file_lines("") == []


def test_split_file_lines_without_trailing_newline():
    lines = split_file_lines("x\ny")
    assert lines == ["x", "y"]
    assert all("\n" not in line for line in lines)


def test_normalize_config_line_collapses_blanks():
    assert normalize_config_line("  NO \t ./north.png  ") == "NO ./north.png"


def test_normalize_config_line_keeps_inner_text():
    assert normalize_config_line("F   220, 100,0") == "F 220, 100,0"


def test_trim_config_lines_leaves_map_lines():
    lines = ["  SO   ./s.png", " 1111", "10N1", "C 1,2,3"]
    result = trim_config_lines(lines)
    assert result[1:3] == [" 1111", "10N1"]
    assert result[0] == "SO ./s.png"
    assert result[3] == "C 1,2,3"
    assert len(result) == len(lines)


@pytest.mark.parametrize(
    "line, expected",
    [("   1011", True), ("0", True), ("  N11", False), ("\t111", False), ("", False)],
)
def test_is_map_line(line, expected):
    assert is_map_line(line) is expected