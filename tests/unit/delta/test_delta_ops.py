"""Unit tests for Delta operation helpers."""

import pytest

from md2delta.delta.ops import is_bare_newline, is_text_op, make_op


@pytest.mark.unit
class TestMakeOp:
    """Tests for make_op."""

    def test_plain_text_has_no_attributes_key(self):
        """Unformatted ops omit the attributes key entirely."""
        assert make_op("Hello") == {"insert": "Hello"}

    def test_empty_attributes_are_omitted(self):
        """An empty mapping is treated like no attributes."""
        assert "attributes" not in make_op("x", {})

    def test_attributes_are_copied(self):
        """The op owns its attributes mapping."""
        attributes = {"bold": True}
        op = make_op("x", attributes)
        attributes["italic"] = True

        assert op == {"insert": "x", "attributes": {"bold": True}}

    def test_embed_insert(self):
        """Embeds are dict inserts."""
        assert make_op({"image": "cat.png"}, {"alt": ""}) == {"insert": {"image": "cat.png"}, "attributes": {"alt": ""}}


@pytest.mark.unit
class TestOpPredicates:
    """Tests for is_bare_newline and is_text_op."""

    def test_bare_newline(self):
        """Only an unattributed newline is bare."""
        assert is_bare_newline({"insert": "\n"})
        assert not is_bare_newline({"insert": "\n", "attributes": {"header": 1}})
        assert not is_bare_newline({"insert": "a\n"})

    def test_text_op(self):
        """String inserts are text ops, embeds are not."""
        assert is_text_op({"insert": "abc"})
        assert not is_text_op({"insert": {"image": "x.png"}})
