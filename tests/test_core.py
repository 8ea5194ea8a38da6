# tests/test_core.py

import pytest

from node_viewer.core.content_classifier import (
    HEX_VIEW_LIMIT, classify_content, extract_element_names, format_hex_dump,
    format_text_preview, is_hex_expandable, looks_like_text, looks_like_xml
)
from node_viewer.core.errors import ParseError
from node_viewer.core.models import FileDetails


# --- Tests for looks_like_xml ---

def test_xml_declaration_is_xml():
    assert looks_like_xml(b'<?xml version="1.0"?><a/>') is True


def test_plain_text_is_not_xml():
    assert looks_like_xml(b"hello world") is False


def test_empty_buffer_is_not_xml():
    assert looks_like_xml(b"") is False


def test_leading_whitespace_before_root_tag():
    assert looks_like_xml(b"\n   <root attr='1'>") is True


def test_tag_opening_without_close_is_not_xml():
    assert looks_like_xml(b"<abc") is False


def test_tag_like_text_is_accepted():
    """The sniff is intentionally loose: anything shaped like a tag passes."""
    assert looks_like_xml(b"<not really xml>") is True


@pytest.mark.parametrize("separator", [b"\x1c", b"\x1d", b"\x1e", b"\x1f"])
def test_separator_controls_are_not_leading_whitespace(separator):
    assert looks_like_xml(separator + b"<a>") is False


def test_invalid_utf8_is_not_xml():
    assert looks_like_xml(b"\xff<a>") is False


def test_only_the_first_thousand_bytes_are_inspected():
    content = b"<" + b"a" * 1100 + b">"
    assert looks_like_xml(content) is False


def test_character_split_at_sniff_boundary_is_not_xml():
    # 3 + 2 * 600 bytes: byte 1000 falls in the middle of an 'é'.
    content = b"<a>" + "é".encode("utf-8") * 600
    assert looks_like_xml(content) is False


# --- Tests for looks_like_text ---

@pytest.mark.parametrize("content", [
    b"",
    b"hello world",
    b"line one\nline two\r\n\ttabbed",
    "non\u00a0breaking\u2003space".encode("utf-8"),
])
def test_text_buffers(content):
    assert looks_like_text(content) is True


@pytest.mark.parametrize("content", [
    b"\x00\x01\x02",
    b"\xff\xfe",
    b"bell\x07",
    b"delete\x7f",
    b"unit\x1fseparator",
    "café".encode("utf-8"),
])
def test_non_text_buffers(content):
    assert looks_like_text(content) is False


def test_text_implies_ascii_or_whitespace():
    content = bytes(range(256))
    assert looks_like_text(content) is False
    assert looks_like_text(bytes(range(0x20, 0x7f))) is True


# --- Tests for extract_element_names ---

def test_element_names_in_document_order():
    assert extract_element_names(b"<a><b/><c>text</c></a>") == ["a", "b", "c"]


def test_unterminated_element_fails():
    with pytest.raises(ParseError) as exc_info:
        extract_element_names(b"<a><b>")
    assert exc_info.value.line == 1
    assert exc_info.value.diagnostic


@pytest.mark.parametrize("content, expected", [
    (b"<p>a&nbsp;b</p>", ["p"]),
    (b"<r>&copy; &amp; &#169;</r>", ["r"]),
    (b"<a/><b/>", ["a", "b"]),
    (b"<a><x/></a>\n<b/>", ["a", "x", "b"]),
    (b"hello <a/>", ["a"]),
    (b"<a/>tail text<b><c/></b>", ["a", "b", "c"]),
    (b"<a/> trailing words", ["a"]),
])
def test_fragments_are_accepted(content, expected):
    assert extract_element_names(content) == expected


@pytest.mark.parametrize("content", [
    b"<a></b>",
    b"<a><b>",
    b"<root><child attr='x'",
    b"<\xff\xfe/>",
    b"<a/></a>",
    b"text before <a><b>",
])
def test_lexical_errors_still_fail(content):
    with pytest.raises(ParseError):
        extract_element_names(content)


def test_error_location_counts_from_start_of_buffer():
    with pytest.raises(ParseError) as exc_info:
        extract_element_names(b"<a/>\n<b></c>")
    assert exc_info.value.line == 2
    assert "line 2" in exc_info.value.diagnostic


def test_empty_buffer_has_no_elements():
    assert extract_element_names(b"") == []


def test_text_without_markup_has_no_elements():
    assert extract_element_names(b"   just some words") == []


def test_comments_and_instructions_are_ignored():
    content = (b'<?xml version="1.0"?>\n<!-- a comment -->\n'
               b'<root><?render fast?><item/><item>one</item></root>')
    assert extract_element_names(content) == ["root", "item", "item"]


def test_prefixed_names_are_kept_as_written():
    content = b'<ns:root xmlns:ns="urn:example"><ns:child/></ns:root>'
    assert extract_element_names(content) == ["ns:root", "ns:child"]


def test_leading_whitespace_before_declaration():
    assert extract_element_names(b"\n  <?xml version='1.0'?><a/>") == ["a"]


def test_extraction_is_repeatable():
    content = b"<catalog><book id='1'/><book id='2'><title>X</title></book></catalog>"
    assert extract_element_names(content) == extract_element_names(content)


# --- Tests for hex rendering ---

def test_hex_boundary():
    assert is_hex_expandable(b"\x00" * HEX_VIEW_LIMIT) is True
    assert is_hex_expandable(b"\x00" * (HEX_VIEW_LIMIT + 1)) is False


def test_hex_dump_row_layout():
    dump = format_hex_dump(bytes(range(16)))
    assert dump == "00000000  00 01 02 03 04 05 06 07  08 09 0a 0b 0c 0d 0e 0f  |................|"


def test_hex_dump_ascii_column():
    dump = format_hex_dump(b"Hi!\n")
    assert dump.startswith("00000000  48 69 21 0a")
    assert dump.endswith("|Hi!.|")


def test_hex_dump_truncates_large_buffers():
    lines = format_hex_dump(b"A" * (HEX_VIEW_LIMIT + 1)).splitlines()
    assert len(lines) == HEX_VIEW_LIMIT // 16 + 1
    assert lines[-1] == "... 1 more bytes not shown"


def test_text_preview_replaces_undecodable_bytes():
    assert format_text_preview(b"ok\xff") == "ok�"


# --- Tests for classify_content ---

def test_report_for_xml_file():
    report = classify_content(FileDetails("doc.xml", b"<a><b/><c>text</c></a>"))
    assert report.kind == "XML"
    assert report.is_text is True
    assert report.element_names == ["a", "b", "c"]
    assert report.element_error is None


def test_broken_xml_keeps_the_rest_of_the_report():
    report = classify_content(FileDetails("broken.xml", b"<a><b>"))
    assert report.is_xml is True
    assert report.is_text is True
    assert report.hex_expandable is True
    assert report.element_names is None
    assert report.element_error


def test_report_for_binary_file():
    report = classify_content(FileDetails("blob.bin", bytes(range(256)) * 5))
    assert report.kind == "Binary"
    assert report.element_names is None
    assert report.hex_expandable is False
    assert len(report.notes) == 2


def test_file_details_copies_mutable_buffers():
    buffer = bytearray(b"abc")
    details = FileDetails("a.txt", buffer)
    buffer[0] = ord("z")
    assert details.file_content == b"abc"
    assert details.size == 3
