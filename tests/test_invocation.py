"""
Unit tests for command line parsing and mode selection using pytest
"""
import pytest
from sdrg.libs.invocation import Invocation, Mode
from sdrg.main import parse_invocation


def test_pattern_replacement_and_paths():
    """Test positional arguments map to pattern, replacement and paths in order"""
    inv = parse_invocation(["foo", "bar", "a.txt", "dir", "b.txt"])
    assert inv.pattern == "foo"
    assert inv.replacement == "bar"
    assert inv.paths == ("a.txt", "dir", "b.txt")
    assert inv.preview is False
    assert inv.string_mode is False
    assert inv.flags == ""


def test_no_paths():
    """Test paths is empty when only pattern and replacement are given"""
    inv = parse_invocation(["foo", "bar"])
    assert inv.paths == ()
    assert inv.search_paths == (".",)


def test_empty_replacement():
    """Test an empty replacement is a valid positional"""
    inv = parse_invocation(["\\s+$", ""])
    assert inv.pattern == "\\s+$"
    assert inv.replacement == ""


def test_options_in_any_position():
    """Test options are recognized between positionals"""
    inv = parse_invocation(["foo", "-p", "bar", "a.txt", "-s", "b.txt"])
    assert inv.preview is True
    assert inv.string_mode is True
    assert inv.paths == ("a.txt", "b.txt")


@pytest.mark.parametrize("flag", ["-s", "--string-mode", "-F", "--fixed-strings"])
def test_string_mode_aliases(flag):
    """Test every string mode spelling"""
    assert parse_invocation([flag, "a", "b"]).string_mode is True


@pytest.mark.parametrize("flag", ["-p", "--preview"])
def test_preview_aliases(flag):
    """Test both preview spellings"""
    assert parse_invocation([flag, "a", "b"]).preview is True


@pytest.mark.parametrize("argv", [["-f", "i", "a", "b"], ["--flags", "i", "a", "b"], ["--flags=i", "a", "b"]])
def test_case_insensitive_flag(argv):
    """Test the i flag enables case-insensitive matching"""
    inv = parse_invocation(argv)
    assert inv.flags == "i"
    assert inv.ignore_case is True


def test_other_flag_letters_are_ignored():
    """Test flag letters other than i are kept but not interpreted"""
    inv = parse_invocation(["-f", "mw", "a", "b"])
    assert inv.flags == "mw"
    assert inv.ignore_case is False


def test_double_dash_makes_rest_positional():
    """Test tokens after -- are positional even when they start with a dash"""
    inv = parse_invocation(["foo", "--", "-bar", "-p", "--preview"])
    assert inv.pattern == "foo"
    assert inv.replacement == "-bar"
    assert inv.paths == ("-p", "--preview")
    assert inv.preview is False


def test_double_dash_before_pattern():
    """Test a pattern that looks like an option"""
    inv = parse_invocation(["-s", "--", "-x", "y"])
    assert inv.pattern == "-x"
    assert inv.replacement == "y"
    assert inv.string_mode is True


@pytest.mark.parametrize("argv, token", [
    (["-x", "foo", "bar"], "-x"),
    (["foo", "bar", "--bogus"], "--bogus"),
    (["--prev", "foo", "bar"], "--prev"),
    (["-", "bar"], "-"),
    (["foo", "-1"], "-1"),
])
def test_unknown_option(argv, token, capsys):
    """Test unknown options fail with a usage error"""
    with pytest.raises(SystemExit) as exc_info:
        parse_invocation(argv)
    assert exc_info.value.code == 2
    err = capsys.readouterr().err
    assert f"unknown option: {token}" in err
    assert "usage:" in err


@pytest.mark.parametrize("argv", [[], ["foo"], ["-p", "foo"], ["--", "foo"]])
def test_missing_pattern_or_replacement(argv, capsys):
    """Test fewer than two positionals fail with error and usage on stderr"""
    with pytest.raises(SystemExit) as exc_info:
        parse_invocation(argv)
    assert exc_info.value.code == 2
    captured = capsys.readouterr()
    assert "PATTERN and REPLACEMENT required" in captured.err
    assert "usage:" in captured.err
    assert captured.out == ""


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help(flag, capsys):
    """Test help goes to stdout and exits 0 without requiring positionals"""
    with pytest.raises(SystemExit) as exc_info:
        parse_invocation([flag])
    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert "usage: sd-rg" in out
    assert "--preview" in out
    assert "--fixed-strings" in out


def test_invocation_is_immutable():
    """Test the parsed invocation cannot be modified"""
    inv = parse_invocation(["foo", "bar"])
    with pytest.raises(AttributeError):
        inv.pattern = "baz"


def test_stream_mode_selected_for_piped_input_without_paths():
    """Test stream mode requires no paths and non-terminal stdin"""
    inv = Invocation("a", "b")
    assert inv.select_mode(stdin_is_tty=False) == Mode.STREAM
    assert inv.select_mode(stdin_is_tty=True) == Mode.REPLACE


def test_stream_mode_wins_over_preview():
    """Test piped input without paths streams even with --preview"""
    inv = Invocation("a", "b", preview=True)
    assert inv.select_mode(stdin_is_tty=False) == Mode.STREAM
    assert inv.select_mode(stdin_is_tty=True) == Mode.PREVIEW


def test_paths_disable_stream_mode():
    """Test explicit paths always select a file mode"""
    assert Invocation("a", "b", paths=("x",)).select_mode(stdin_is_tty=False) == Mode.REPLACE
    assert Invocation("a", "b", paths=("x",), preview=True).select_mode(stdin_is_tty=False) == Mode.PREVIEW
