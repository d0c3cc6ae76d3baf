#!/usr/bin/env python3
"""
Tests for key synthesis, the UUID key pattern and XML escaping.
"""

from xliffconv.units import TranslationUnit, compile_key_pattern, escape_xml, synthesize_key

UUID = "0d9f4c8e-1b2a-4c3d-9e8f-a1b2c3d4e5f6"


def test_synthesize_key():
    """Test 1: Key is always identifier + '_' + field."""
    assert synthesize_key(UUID, "title") == f"{UUID}_title"
    assert synthesize_key("X", "body") == "X_body"


def test_distinct_identifiers_never_collide():
    """Test 2: Two identifiers give two different keys for the same field."""
    other = "1d9f4c8e-1b2a-4c3d-9e8f-a1b2c3d4e5f6"
    assert synthesize_key(UUID, "title") != synthesize_key(other, "title")


def test_key_pattern_matches_uuid_keys():
    """Test 3: Pattern recognizes canonical UUIDs and returns (identifier, field)."""
    pattern = compile_key_pattern(["title", "body"])
    match = pattern.match(f"{UUID}_body")
    assert match is not None
    assert match.groups() == (UUID, "body")


def test_key_pattern_is_case_insensitive_for_hex():
    """Test 4: Upper-case hex digits are accepted."""
    pattern = compile_key_pattern(["title"])
    assert pattern.match(f"{UUID.upper()}_title")


def test_key_pattern_rejects_other_shapes():
    """Test 5: Non-UUID identifiers, unknown fields and wrong grouping do not match."""
    pattern = compile_key_pattern(["title", "body"])
    assert pattern.match("item-42_title") is None
    assert pattern.match(f"{UUID}_summary") is None
    assert pattern.match(f"{UUID}_title_extra") is None
    # 36 characters of hex and hyphens, but not 8-4-4-4-12
    assert pattern.match("0d9f4c8e1b2a-4c3d-9e8f-a1b2-c3d4e5f6_title") is None
    # 'g' is not a hex digit
    assert pattern.match("gd9f4c8e-1b2a-4c3d-9e8f-a1b2c3d4e5f6_title") is None


def test_escape_plain_text_unchanged():
    """Test 6: Text without metacharacters comes back as is."""
    assert escape_xml("Hello, 세계") == "Hello, 세계"


def test_escape_ampersand_and_angle_brackets():
    """Test 7: 'a & b < c' escapes to 'a &amp; b &lt; c'."""
    assert escape_xml("a & b < c") == "a &amp; b &lt; c"


def test_escape_all_five_characters():
    """Test 8: All five metacharacters are escaped without double escaping."""
    assert escape_xml("<a href=\"x\">'&'</a>") == (
        "&lt;a href=&quot;x&quot;&gt;&apos;&amp;&apos;&lt;/a&gt;"
    )
    assert escape_xml("&amp;") == "&amp;amp;"


def test_escape_empty_and_none():
    """Test 9: None and empty string escape to empty string."""
    assert escape_xml(None) == ""
    assert escape_xml("") == ""


def test_translation_unit_id_is_string():
    """Test 10: Unit ids are coerced to str; target defaults to empty."""
    unit = TranslationUnit(id=42, source="text")
    assert unit.id == "42"
    assert unit.target == ""
    assert unit.note is None
