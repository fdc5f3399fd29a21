import io
import os

import pytest

from spellscan.checker import (
    CheckResult,
    FileReport,
    FlaggedWord,
    candidate_word,
    check_file,
    check_paths,
    check_stream,
    iter_flagged,
    session_failed,
)
from spellscan.dictionary import Dictionary
from spellscan.errors import SourceReadError


def _triples(flagged):
    return [(f.line, f.column, f.word) for f in flagged]


def test_positions_with_empty_dictionary():
    flagged, had_error = check_stream(Dictionary(), b"foo bar\nbaz")
    assert _triples(flagged) == [(1, 1, "foo"), (1, 5, "bar"), (2, 1, "baz")]
    assert had_error


def test_end_to_end_only_unknown_word_flagged():
    d = Dictionary.from_words(["the", "quick", "brown", "fox"])
    result = check_stream(d, b"The quick Brown fox jumps.")
    assert _triples(result.flagged) == [(1, 21, "jumps")]


def test_numbers_and_symbols_never_flagged():
    result = check_stream(Dictionary(), b"123 -- 3.14 ... (42) 1,000")
    assert result == CheckResult([], False)


def test_flagged_word_is_stripped_form():
    d = Dictionary.from_words(["she"])
    result = check_stream(d, b'("Hello," she said.)')
    assert _triples(result.flagged) == [(1, 1, "Hello"), (1, 15, "said")]


def test_capitalization_applies_to_stripped_word():
    d = Dictionary.from_words(["Paris", "dog"])
    result = check_stream(d, b"(paris) \"DOG\" Paris.")
    assert [f.word for f in result.flagged] == ["paris"]


def test_label_is_attached():
    flagged, _ = check_stream(Dictionary(), b"teh", "notes.txt")
    assert flagged == [FlaggedWord("teh", 1, 1, "notes.txt")]


def test_iter_flagged_is_lazy():
    it = iter_flagged(Dictionary.from_words(["ok"]), io.BytesIO(b"ok bad ok worse"))
    assert next(it).word == "bad"
    assert next(it).word == "worse"
    with pytest.raises(StopIteration):
        next(it)


def test_candidate_word():
    assert candidate_word("123") is None
    assert candidate_word("'42'") is None
    assert candidate_word("--") is None
    assert candidate_word("(x1)") == "x1"
    assert candidate_word("fox,") == "fox"


def test_flagged_word_format():
    assert FlaggedWord("teh", 3, 7, "a.txt").format() == "a.txt:3:7 teh"
    assert FlaggedWord("teh", 3, 7).format() == "3:7 teh"
    assert FlaggedWord("teh", 3, 7, "a.txt").to_dict() == {
        "source": "a.txt", "line": 3, "column": 7, "word": "teh",
    }


def test_check_file(tmp_path):
    p = tmp_path / "a.txt"
    p.write_bytes(b"good\nbda\n")
    result = check_file(Dictionary.from_words(["good"]), p, "a.txt")
    assert result.flagged == [FlaggedWord("bda", 2, 1, "a.txt")]
    assert result.had_error


def test_check_file_missing(tmp_path):
    with pytest.raises(SourceReadError):
        check_file(Dictionary(), tmp_path / "missing.txt")


def test_check_file_directory(tmp_path):
    with pytest.raises(SourceReadError):
        check_file(Dictionary(), tmp_path)


def _make_tree(root):
    (root / "docs" / "sub").mkdir(parents=True)
    (root / "docs" / ".hidden").mkdir()
    (root / "docs" / "a.txt").write_bytes(b"good wrng\n")
    (root / "docs" / "b.md").write_bytes(b"nope\n")
    (root / "docs" / "sub" / "c.txt").write_bytes(b"good\n")
    (root / "docs" / "sub" / "d.txt").write_bytes(b"\n  oops\n")
    (root / "docs" / ".hidden" / "e.txt").write_bytes(b"secret\n")
    (root / "docs" / ".f.txt").write_bytes(b"hidden\n")


def test_check_paths_walks_directories(tmp_path):
    _make_tree(tmp_path)
    d = Dictionary.from_words(["good"])
    docs = str(tmp_path / "docs")
    reports = check_paths(d, [docs])
    assert [r.label for r in reports] == [
        os.path.join(docs, "a.txt"),
        os.path.join(docs, "sub", "c.txt"),
        os.path.join(docs, "sub", "d.txt"),
    ]
    lines = [f.format() for r in reports for f in r.flagged]
    assert lines == [
        f"{os.path.join(docs, 'a.txt')}:1:6 wrng",
        f"{os.path.join(docs, 'sub', 'd.txt')}:2:3 oops",
    ]
    assert session_failed(reports)


def test_check_paths_parallel_keeps_input_order(tmp_path):
    _make_tree(tmp_path)
    d = Dictionary.from_words(["good"])
    paths = [str(tmp_path / "docs"), str(tmp_path / "docs" / "b.md")]
    serial = check_paths(d, paths, jobs=1)
    parallel = check_paths(d, paths, jobs=4)
    assert serial == parallel
    assert serial[-1].flagged == [FlaggedWord("nope", 1, 1, paths[1])]


def test_check_paths_custom_suffix(tmp_path):
    _make_tree(tmp_path)
    reports = check_paths(Dictionary(), [str(tmp_path / "docs")], suffix=".md")
    assert [os.path.basename(r.path) for r in reports] == ["b.md"]


def test_missing_path_is_reported_not_raised(tmp_path):
    good = tmp_path / "good.txt"
    good.write_bytes(b"fine\n")
    reports = check_paths(Dictionary.from_words(["fine"]), [str(tmp_path / "nope.txt"), str(good)])
    assert reports[0].error is not None and reports[0].failed
    assert reports[1].error is None and not reports[1].failed
    assert session_failed(reports)


def test_session_passes_when_clean(tmp_path):
    p = tmp_path / "a.txt"
    p.write_bytes(b"fine fine\n")
    reports = check_paths(Dictionary.from_words(["fine"]), [str(p)])
    assert reports == [FileReport(path=str(p), label=None)]
    assert not session_failed(reports)


needs_permissions = pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="root ignores permission bits",
)


@needs_permissions
def test_unlistable_directory_fails_session(tmp_path):
    locked = tmp_path / "docs" / "locked"
    locked.mkdir(parents=True)
    (tmp_path / "docs" / "a.txt").write_bytes(b"good\n")
    locked.chmod(0)
    try:
        reports = check_paths(Dictionary.from_words(["good"]), [str(tmp_path / "docs")])
    finally:
        locked.chmod(0o755)
    assert [r.error is None for r in reports] == [True, False]
    assert reports[1].path == str(locked)
    assert session_failed(reports)


@needs_permissions
def test_unreadable_file_in_walk_is_reported_and_walk_continues(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "a.txt").write_bytes(b"good\n")
    (docs / "b.txt").write_bytes(b"good\n")
    (docs / "c.txt").write_bytes(b"good bda\n")
    (docs / "b.txt").chmod(0)
    try:
        reports = check_paths(Dictionary.from_words(["good"]), [str(docs)])
    finally:
        (docs / "b.txt").chmod(0o644)
    assert [os.path.basename(r.path) for r in reports] == ["a.txt", "b.txt", "c.txt"]
    assert reports[0].error is None and not reports[0].failed
    assert reports[1].error and reports[1].failed
    assert _triples(reports[2].flagged) == [(1, 6, "bda")]
    assert session_failed(reports)
