"""Tests for reading and writing frontmatter tags."""

import pytest
import yaml
from hypothesis import given
from hypothesis import strategies as st

from notenamer.generation.frontmatter import (
    FrontmatterParseError,
    apply_tags,
    build_frontmatter,
    load_frontmatter_yaml,
    parse_frontmatter,
    read_tags,
    tags_equal,
)


class TestReadTags:
    def test_list_value(self):
        """A flow list is read as a list of strings."""
        assert read_tags("---\ntags: [a, b]\n---\nBody") == ["a", "b"]

    def test_block_list_value(self):
        """A block list is read the same way."""
        assert read_tags("---\ntags:\n  - a\n  - b\n---\nBody") == ["a", "b"]

    def test_single_string_value(self):
        """A single string becomes a one-element list."""
        assert read_tags("---\ntags: solo\n---\n") == ["solo"]

    def test_non_string_items_are_stringified(self):
        """YAML scalars that are not strings are converted."""
        assert read_tags("---\ntags: [2024, true]\n---\n") == ["2024", "True"]

    def test_no_block(self):
        """A note without frontmatter has no tags."""
        assert read_tags("Body only") == []

    def test_missing_tags_key(self):
        """A block without a tags key has no tags."""
        assert read_tags("---\ntitle: x\n---\nBody") == []

    def test_closing_delimiter_without_newline(self):
        """Reading accepts a closing delimiter at end of text."""
        assert read_tags("---\ntags: [a]\n---") == ["a"]

    def test_invalid_yaml(self):
        """Invalid YAML reads as no tags instead of raising."""
        assert read_tags("---\ntags: [a\n---\nBody") == []

    def test_non_mapping_block(self):
        """A block holding a list instead of a mapping reads as no tags."""
        assert read_tags("---\n- a\n- b\n---\nBody") == []

    def test_tags_null(self):
        """An empty tags value reads as no tags."""
        assert read_tags("---\ntags:\n---\nBody") == []


class TestApplyTags:
    def test_prepends_block_when_missing(self):
        """A note without frontmatter gets a new block."""
        result = apply_tags("Body text\n", ["a", "b"])
        assert result == "---\ntags:\n- a\n- b\n---\nBody text\n"

    def test_replaces_tags_and_keeps_other_keys_in_order(self):
        """Only tags changes; other keys keep their values and order."""
        content = "---\ntitle: Plan\ntags: [old]\nstatus: draft\n---\nBody\n"
        result = apply_tags(content, ["new"])

        metadata, body = parse_frontmatter(result)
        assert metadata == {"title": "Plan", "tags": ["new"], "status": "draft"}
        assert list(metadata) == ["title", "tags", "status"]
        assert body == "Body\n"

    def test_adds_tags_key_to_existing_block(self):
        """A block without tags gains the key at the end."""
        content = "---\ntitle: Plan\n---\nBody"
        metadata, body = parse_frontmatter(apply_tags(content, ["x"]))
        assert metadata == {"title": "Plan", "tags": ["x"]}
        assert body == "Body"

    def test_unparsable_block_is_kept_as_body(self):
        """A broken block is left in the text behind a new tags block."""
        content = "---\ntags: [a\n---\nBody"
        result = apply_tags(content, ["a"])
        assert result == "---\ntags:\n- a\n---\n" + content

    def test_non_mapping_block_is_kept_as_body(self):
        """A non-mapping block is treated like a broken one."""
        content = "---\n- x\n---\nBody"
        result = apply_tags(content, ["t"])
        assert result.endswith(content)
        assert read_tags(result) == ["t"]

    def test_unicode_tags_are_written_readably(self):
        """Non-ASCII tags are written as text, not escape sequences."""
        result = apply_tags("Body", ["日本語"])
        assert "日本語" in result
        assert read_tags(result) == ["日本語"]

    def test_round_trips_through_read_tags(self):
        """Tags written are the tags read back."""
        content = "---\nauthor: me\n---\n# Heading\n"
        assert read_tags(apply_tags(content, ["x", "y-z"])) == ["x", "y-z"]

    def test_body_is_untouched(self):
        """Horizontal rules in the body are not mistaken for delimiters."""
        body = "# Heading\n\n---\n\nSection with a rule above\n"
        content = "---\ntags: [a]\n---\n" + body
        _, new_body = parse_frontmatter(apply_tags(content, ["b"]))
        assert new_body == body


class TestTagsEqual:
    def test_order_independent(self):
        """Order does not matter."""
        assert tags_equal(["a", "b"], ["b", "a"])

    def test_multiplicity_matters(self):
        """A repeated tag is not the same as a single one."""
        assert not tags_equal(["a", "a"], ["a"])

    def test_same_length_reordered_duplicates(self):
        """Equal multisets compare equal whatever the order."""
        assert tags_equal(["a", "a", "b"], ["b", "a", "a"])

    def test_same_length_different_counts(self):
        """Same length and same distinct tags, different counts, are unequal."""
        assert not tags_equal(["a", "a", "b"], ["a", "b", "b"])

    def test_different_sets(self):
        """Different tags are unequal."""
        assert not tags_equal(["old"], ["new"])

    def test_empty_lists(self):
        """Two empty lists are equal."""
        assert tags_equal([], [])

    @given(st.lists(st.text()), st.lists(st.text()))
    def test_symmetric(self, left, right):
        """Comparison gives the same answer in both directions."""
        assert tags_equal(left, right) == tags_equal(right, left)

    @given(st.lists(st.text()))
    def test_reflexive(self, tags):
        """Any list equals itself."""
        assert tags_equal(tags, tags)

    @given(st.lists(st.text()), st.randoms())
    def test_permutation_invariant(self, tags, rng):
        """Any shuffle of a list equals the original."""
        shuffled = list(tags)
        rng.shuffle(shuffled)
        assert tags_equal(tags, shuffled)


class TestFrontmatterHelpers:
    def test_build_frontmatter_shape(self):
        """Built blocks are delimited and hold valid YAML."""
        block = build_frontmatter({"tags": ["a"]})
        assert block.startswith("---\n")
        assert block.endswith("\n---\n")
        assert yaml.safe_load(block.strip("-\n")) == {"tags": ["a"]}

    def test_load_empty_block(self):
        """An empty block is an empty mapping."""
        assert load_frontmatter_yaml("") == {}

    def test_load_rejects_scalar(self):
        """A scalar block is not a mapping."""
        with pytest.raises(FrontmatterParseError):
            load_frontmatter_yaml("just text")

    def test_load_rejects_invalid_yaml(self):
        """Invalid YAML raises FrontmatterParseError."""
        with pytest.raises(FrontmatterParseError):
            load_frontmatter_yaml("key: [unclosed")

    def test_parse_without_block(self):
        """Text without a block has no metadata."""
        assert parse_frontmatter("Body") == (None, "Body")
