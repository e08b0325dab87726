import pytest

from core.ignore_rules import IgnoreRules, match_pattern, parse_lines


def test_parse_lines_drops_comments_and_blanks():
    assert parse_lines(["# c", "", "   ", " *.log ", "/build"]) == ("*.log", "/build")


@pytest.mark.parametrize(
    "path, pattern, expected",
    [
        # anchored
        ("build/sub/file.txt", "/build", True),
        ("build", "/build", True),
        ("other/build/x.txt", "/build", False),
        ("builder/x.txt", "/build", False),
        ("a/b.tmp", "/*.tmp", True),
        # single wildcard over the whole path
        ("a.log", "*.log", True),
        ("dir/b.log", "*.log", True),
        ("a.txt", "*.log", False),
        ("src/gen_a.py", "src/gen_*", True),
        ("lib/gen_a.py", "src/gen_*", False),
        ("ab", "ab*b", True),
        ("abc", "ab*b", False),
        # literal
        ("node_modules/x.js", "node_modules/", True),
        ("a/node_modules/x.js", "node_modules", True),
        ("node_modules_extra/x.js", "node_modules", False),
        ("docs/api/index.md", "docs/api", True),
        ("other/docs/api/index.md", "docs/api", False),
        ("target", "target", True),
    ],
)
def test_match_pattern(path, pattern, expected):
    assert match_pattern(path, pattern) is expected


def test_empty_patterns_never_match():
    assert not match_pattern("a.txt", "/")
    assert not match_pattern("a.txt", "")


def test_is_ignored_any_pattern():
    rules = IgnoreRules.from_lines(["/build", "*.log"])
    assert rules.is_ignored("build/out.txt")
    assert rules.is_ignored("x/y.log")
    assert not rules.is_ignored("src/main.py")


def test_load_missing_file_gives_empty_rules(tmp_path):
    rules = IgnoreRules.load(tmp_path)
    assert rules.patterns == ()
    assert not rules.is_ignored("anything")


def test_load_reads_root_gitignore(tmp_path):
    (tmp_path / ".gitignore").write_text("# generated\ndist/\n", encoding="utf-8")
    rules = IgnoreRules.load(tmp_path)
    assert rules.patterns == ("dist/",)
    assert rules.is_ignored("dist/app.js")


def test_load_undecodable_file_gives_empty_rules(tmp_path):
    (tmp_path / ".gitignore").write_bytes(b"\xff\xfe\xfa")
    assert IgnoreRules.load(tmp_path).patterns == ()
