"""Unit tests for front matter parsing."""

from postkv.utils.file_helpers import extract_metadata, is_calendar_date, parse_front_matter

VALID_HEADER = (
    "---\n"
    "title: Test Post\n"
    "date: 2025-01-15\n"
    "author: Test Author\n"
    "status: published\n"
    "category: tech\n"
    "---\n"
)


class TestParseFrontMatter:
    """Tests for parse_front_matter function."""

    def test_no_header(self):
        """Test content without a header is reported as not found."""
        result = parse_front_matter("# Just a heading\n\nBody")
        assert result.found is False
        assert result.is_valid is False

    def test_header_must_start_content(self):
        """Test a header after leading text is not recognized."""
        result = parse_front_matter("\n" + VALID_HEADER + "Body")
        assert result.found is False

    def test_valid_header(self):
        """Test recognized fields are collected."""
        result = parse_front_matter(VALID_HEADER + "Body")
        assert result.is_valid
        assert result.fields["title"] == "Test Post"
        assert result.fields["category"] == "tech"
        assert result.fields["status"] == "published"

    def test_crlf_line_endings(self):
        """Test Windows line endings parse the same as LF."""
        result = parse_front_matter(VALID_HEADER.replace("\n", "\r\n") + "Body")
        assert result.is_valid
        assert result.fields["title"] == "Test Post"
        assert result.fields["date"] == "2025-01-15"

    def test_header_without_body(self):
        """Test a closing delimiter at end of content is accepted."""
        result = parse_front_matter(VALID_HEADER.rstrip("\n"))
        assert result.is_valid

    def test_colon_in_value(self):
        """Test only the first colon separates key and value."""
        content = VALID_HEADER.replace("title: Test Post", "title: Python: A Primer")
        result = parse_front_matter(content)
        assert result.fields["title"] == "Python: A Primer"

    def test_unknown_keys_ignored(self):
        """Test keys outside the known set are dropped."""
        content = VALID_HEADER.replace("---\ntitle", "---\nlayout: post\ntitle", 1)
        result = parse_front_matter(content)
        assert "layout" not in result.fields
        assert result.is_valid

    def test_keys_case_insensitive(self):
        """Test keys are matched case-insensitively."""
        content = VALID_HEADER.replace("title:", "Title:")
        result = parse_front_matter(content)
        assert result.fields["title"] == "Test Post"

    def test_lines_without_colon_skipped(self):
        """Test stray lines inside the header are ignored."""
        content = VALID_HEADER.replace("---\ntitle", "---\njust text\ntitle", 1)
        assert parse_front_matter(content).is_valid

    def test_tags_split_on_commas(self):
        """Test tags are split and trimmed."""
        content = VALID_HEADER.replace("category: tech", "category: tech\ntags: a, b ,c")
        result = parse_front_matter(content)
        assert result.fields["tags"] == ["a", "b", "c"]

    def test_bracketed_tags_kept_verbatim(self):
        """Test list brackets are not stripped from tag values."""
        content = VALID_HEADER.replace("category: tech", "category: tech\ntags: [test, demo]")
        result = parse_front_matter(content)
        assert result.fields["tags"] == ["[test", "demo]"]

    def test_status_normalized(self):
        """Test anything but published is a draft."""
        published = parse_front_matter(VALID_HEADER.replace("published", "Published"))
        archived = parse_front_matter(VALID_HEADER.replace("published", "archived"))
        assert published.fields["status"] == "published"
        assert archived.fields["status"] == "draft"

    def test_missing_required_field(self):
        """Test missing required fields are listed."""
        content = VALID_HEADER.replace("author: Test Author\n", "")
        result = parse_front_matter(content)
        assert result.found
        assert result.missing == ["author"]
        assert not result.is_valid

    def test_blank_required_field(self):
        """Test a present but empty required field counts as missing."""
        content = VALID_HEADER.replace("title: Test Post", "title:")
        assert parse_front_matter(content).missing == ["title"]

    def test_strict_dates(self):
        """Test strict mode rejects non calendar dates."""
        content = VALID_HEADER.replace("2025-01-15", "January 15, 2025")
        assert parse_front_matter(content, strict_dates=False).is_valid
        result = parse_front_matter(content, strict_dates=True)
        assert "date" in result.invalid
        assert not result.is_valid


class TestExtractMetadata:
    """Tests for extract_metadata function."""

    def test_extracts_metadata(self):
        """Test a valid header yields a metadata record."""
        metadata = extract_metadata(VALID_HEADER + "Body")
        assert metadata is not None
        assert metadata.title == "Test Post"
        assert metadata.author == "Test Author"
        assert metadata.status == "published"
        assert metadata.tags is None

    def test_status_defaults_to_draft(self):
        """Test a header without status yields a draft label."""
        metadata = extract_metadata(VALID_HEADER.replace("status: published\n", ""))
        assert metadata.status == "draft"

    def test_optional_fields(self):
        """Test excerpt and language are carried through."""
        content = VALID_HEADER.replace(
            "category: tech", "category: tech\nexcerpt: Short one\nlanguage: en"
        )
        metadata = extract_metadata(content)
        assert metadata.excerpt == "Short one"
        assert metadata.language == "en"

    def test_no_header_returns_none(self):
        """Test content without a header yields nothing."""
        assert extract_metadata("No header here") is None

    def test_missing_field_returns_none(self):
        """Test an incomplete header yields nothing."""
        assert extract_metadata(VALID_HEADER.replace("category: tech\n", "")) is None


class TestIsCalendarDate:
    """Tests for is_calendar_date function."""

    def test_valid_date(self):
        assert is_calendar_date("2024-02-29")

    def test_impossible_date(self):
        assert not is_calendar_date("2025-02-30")

    def test_wrong_format(self):
        assert not is_calendar_date("2025-1-5")
        assert not is_calendar_date("2025-01-15T10:00:00")
