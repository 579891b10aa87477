from nativefier_ui.path_utils import render_path, split_path
from nativefier_ui.protocol import Platform


def test_posix_path_splits_on_slash_and_last_is_leaf():
    rendered = render_path("/a/b/c", Platform.OTHER)

    assert rendered.texts == ["a", "b", "c"]
    assert rendered.leaf.text == "c"
    assert rendered.leaf.is_leaf
    assert [s.separator for s in rendered] == [True, True, False]
    assert rendered.separator_count == 2


def test_windows_drive_and_backslash_are_one_boundary():
    rendered = render_path("C:\\Users\\Jack\\Desktop", Platform.WINDOWS)

    assert rendered.texts == ["C", "Users", "Jack", "Desktop"]
    assert rendered.leaf.text == "Desktop"


def test_windows_rule_does_not_split_forward_slashes():
    assert split_path("C:\\a/b", Platform.WINDOWS) == ["C", "a/b"]


def test_unknown_platform_uses_slash_rule():
    assert render_path("/x/y", Platform.UNKNOWN).texts == ["x", "y"]


def test_single_segment_has_no_separators():
    rendered = render_path("single", Platform.OTHER)

    assert rendered.texts == ["single"]
    assert rendered.separator_count == 0
    assert not rendered.is_empty


def test_empty_path_yields_one_empty_leaf():
    rendered = render_path("", Platform.OTHER)

    assert len(rendered) == 1
    assert rendered.leaf.text == ""
    assert rendered.is_empty


def test_text_joins_with_glyph():
    assert render_path("/x/y/z", Platform.OTHER).text(" > ") == "x > y > z"
    assert render_path("/x/y", Platform.OTHER).text("/") == "x/y"
