"""Unit tests for core/parse.py"""

import hashlib

import pytest

from mdxdoc.core.models import ParsedDoc
from mdxdoc.core.parse import _strip_frontmatter, discover_files, parse_file, parse_text


def test_strip_frontmatter_with_yaml():
    """_strip_frontmatter extracts YAML header and returns body."""
    text = "---\ntitle: Hello\n---\n# Body\n"
    fm, body = _strip_frontmatter(text)
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"


def test_strip_frontmatter_no_frontmatter():
    """_strip_frontmatter returns empty dict and full text when no header."""
    text = "# No frontmatter\n"
    fm, body = _strip_frontmatter(text)
    assert fm == {}
    assert body == text


def test_strip_frontmatter_invalid_yaml():
    """_strip_frontmatter raises ValueError for a malformed YAML header."""
    with pytest.raises(ValueError, match="Invalid YAML frontmatter"):
        _strip_frontmatter("---\ntags: [a\n---\n# Body\n")


def test_strip_frontmatter_not_a_mapping():
    """_strip_frontmatter rejects a header that is a YAML list."""
    with pytest.raises(ValueError, match="expected a mapping"):
        _strip_frontmatter("---\n- a\n- b\n---\nBody\n")


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "doc.mdx"
    f.write_text("# Hello")
    assert discover_files(f) == [f]


def test_discover_files_non_md_skipped(tmp_path):
    """discover_files ignores non-.md/.mdx files."""
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == []


def test_discover_files_dir(tmp_path):
    """discover_files finds all .md and .mdx files recursively, sorted."""
    (tmp_path / "b.md").write_text("b")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.mdx").write_text("a")
    files = discover_files(tmp_path)
    assert files == sorted(files)
    assert len(files) == 2


def test_discover_files_custom_suffixes(tmp_path):
    """discover_files honours an explicit suffix set."""
    (tmp_path / "doc.json").write_text("{}")
    (tmp_path / "doc.md").write_text("# x")
    assert discover_files(tmp_path, {".json"}) == [tmp_path / "doc.json"]


def test_parse_file_no_frontmatter(tmp_path):
    """parse_file produces a ParsedDoc with empty frontmatter and an editor document."""
    f = tmp_path / "plain.md"
    f.write_text("# Hello\n\nWorld.\n")
    parsed = parse_file(f)
    assert isinstance(parsed, ParsedDoc)
    assert parsed.frontmatter == {}
    assert parsed.slug == "plain"
    assert [n.type for n in parsed.doc.children] == ["heading", "paragraph"]


def test_parse_file_with_frontmatter(tmp_path):
    """parse_file converts only the body; the header lands in frontmatter."""
    f = tmp_path / "doc.mdx"
    f.write_text("---\ntitle: My Doc\n---\n# Body\n")
    parsed = parse_file(f)
    assert parsed.frontmatter == {"title": "My Doc"}
    assert "---" not in parsed.markdown
    assert parsed.doc.children[0].children[0].text == "Body"


def test_slug_from_frontmatter(tmp_path):
    """parse_file uses frontmatter slug field when present."""
    f = tmp_path / "anything.md"
    f.write_text("---\nslug: custom-slug\n---\n# Body\n")
    assert parse_file(f).slug == "custom-slug"


def test_slug_from_filename(tmp_path):
    """parse_file derives slug from filename stem when no frontmatter slug."""
    f = tmp_path / "My Document.mdx"
    f.write_text("# Body\n")
    assert parse_file(f).slug == "my-document"


def test_parse_file_hash_matches_raw(tmp_path):
    """parse_file hash is sha256 of full raw content including frontmatter."""
    f = tmp_path / "doc.md"
    raw = "---\ntitle: T\n---\n# Body\n"
    f.write_text(raw)
    parsed = parse_file(f)
    assert parsed.hash == hashlib.sha256(raw.encode("utf-8")).hexdigest()
    assert parsed.raw_markdown == raw


def test_parse_text_frontmatter_only(tmp_path):
    """A file holding only frontmatter converts to the empty document."""
    parsed = parse_text("---\ntitle: T\n---\n", tmp_path / "t.md")
    assert parsed.doc.to_json() == {"type": "doc", "content": [{"type": "paragraph"}]}


def test_parse_text_sample_frontmatter(sample_fm_mdx, tmp_path):
    """parse_text reads list-valued frontmatter and converts the body after it."""
    parsed = parse_text(sample_fm_mdx, tmp_path / "ignored.mdx")
    assert parsed.frontmatter == {"title": "Test Doc", "slug": "test-doc", "tags": ["a", "b"]}
    assert parsed.slug == "test-doc"
    assert [n.type for n in parsed.doc.children] == ["heading", "paragraph"]
