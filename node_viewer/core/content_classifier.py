# node_viewer/core/content_classifier.py

import logging
from dataclasses import dataclass, field
from typing import List, Optional
from xml.parsers import expat

from .errors import ParseError
from .models import FileDetails

logger = logging.getLogger(__name__)

# --- Classification Constants ---

# The XML sniffer only ever looks at this many leading bytes.
XML_SNIFF_LENGTH = 1000

# Buffers up to this size get the full byte-level hex expansion. Anything
# larger is shown as a truncated preview of its first HEX_VIEW_LIMIT bytes.
HEX_VIEW_LIMIT = 1024
HEX_BYTES_PER_ROW = 16

# str.isspace() treats the ASCII information separators (FS, GS, RS, US) as
# whitespace. They are control characters, so the text sniffer rejects them.
_SEPARATOR_CONTROLS = frozenset("\x1c\x1d\x1e\x1f")


# --- Sniffing Heuristics ---

def _strip_leading_whitespace(text: str) -> str:
    # Same as str.lstrip(), except the separator controls are not whitespace.
    index = 0
    while index < len(text) and text[index].isspace() and text[index] not in _SEPARATOR_CONTROLS:
        index += 1
    return text[index:]


def looks_like_xml(content: bytes) -> bool:
    """
    Cheap check for whether a buffer appears to be XML.

    Only the first XML_SNIFF_LENGTH bytes are decoded. The buffer counts as XML
    when, after leading whitespace, it starts with an XML declaration, or it
    starts with '<' and a '>' appears somewhere in the prefix. This is a sniff,
    not a validator: "<not really xml>" is accepted too.
    """
    try:
        prefix = bytes(content[:XML_SNIFF_LENGTH]).decode("utf-8")
    except UnicodeDecodeError:
        # A multi-byte character cut at the sniff boundary also lands here.
        return False

    trimmed = _strip_leading_whitespace(prefix)
    if trimmed.startswith("<?xml"):
        return True
    return trimmed.startswith("<") and ">" in prefix


def _is_text_char(char: str) -> bool:
    if char in _SEPARATOR_CONTROLS:
        return False
    if char.isspace():
        return True
    return char.isascii() and char.isprintable()


def looks_like_text(content: bytes) -> bool:
    """
    Returns True when the whole buffer is UTF-8 made only of printable ASCII
    and whitespace. An empty buffer is vacuously text.
    """
    try:
        decoded = bytes(content).decode("utf-8")
    except UnicodeDecodeError:
        return False
    return all(_is_text_char(char) for char in decoded)


# --- Streaming Tag Extraction ---

# expat error codes the extractor recovers from instead of failing.
_JUNK_AFTER_ROOT = expat.errors.codes[expat.errors.XML_ERROR_JUNK_AFTER_DOC_ELEMENT]
_PROLOG_SYNTAX_ERROR = expat.errors.codes[expat.errors.XML_ERROR_SYNTAX]


def extract_element_names(content: bytes) -> List[str]:
    """
    Lists the name of every start tag and empty tag in document order.

    The buffer is fed through expat in one linear pass. No tree is built and
    nothing is validated beyond lexical well-formedness. Names are reported
    exactly as written (prefixes included) and duplicates are kept.

    Fragments are accepted: undefined entity references are skipped, sibling
    top-level elements are all listed, and stray text around top-level
    elements is ignored.

    Raises:
        ParseError: The markup is lexically broken (unterminated tag,
            mismatched end tag, unclosed element at end of input, invalid
            bytes in a name, ...).
    """
    data = bytes(content)
    if b"<" not in data:
        # Nothing that could open a tag, so there is nothing to list.
        return []

    element_names: List[str] = []
    position = len(data) - len(data.lstrip(b" \t\r\n"))

    while position < len(data):
        parser = _create_tokenizer(element_names)
        try:
            parser.Parse(data[position:], True)
            break
        except expat.ExpatError as e:
            error_index = position + parser.ErrorByteIndex

            # Another top-level element (or text) after a complete one.
            if e.code == _JUNK_AFTER_ROOT and error_index > position:
                position = error_index
                continue

            # Text where a tag was expected: skip ahead to the next '<'.
            if e.code == _PROLOG_SYNTAX_ERROR and data[error_index:error_index + 1] != b"<":
                next_tag = data.find(b"<", error_index)
                if next_tag == -1:
                    break
                position = next_tag
                continue

            line, column = _absolute_location(data, position, e)
            logger.debug(f"Element extraction stopped after {len(element_names)} names: {e}")
            raise ParseError(f"{expat.ErrorString(e.code)}: line {line}, column {column}",
                             line=line, column=column) from e

    return element_names


def _create_tokenizer(element_names: List[str]) -> expat.XMLParserType:
    # Forcing UTF-8 makes undecodable names a tokenizer error instead of
    # letting a document's own encoding declaration reinterpret them.
    parser = expat.ParserCreate("UTF-8")
    # With an (unread) external DTD assumed, undefined entities are skipped.
    parser.UseForeignDTD(True)
    parser.StartElementHandler = lambda name, _attributes: element_names.append(name)
    return parser


def _absolute_location(data: bytes, position: int, error: expat.ExpatError):
    """Maps an error location inside data[position:] back onto the whole buffer."""
    line = data.count(b"\n", 0, position) + error.lineno
    column = error.offset
    if error.lineno == 1:
        column += position - (data.rfind(b"\n", 0, position) + 1)
    return line, column


# --- Rendering Helpers ---

def is_hex_expandable(content: bytes) -> bool:
    """Whether the buffer is small enough for the full hex expansion."""
    return len(content) <= HEX_VIEW_LIMIT


def format_hex_dump(content: bytes, limit: int = HEX_VIEW_LIMIT) -> str:
    """
    Renders a canonical hex dump: offset, sixteen hex bytes split in two
    groups of eight, and the printable-ASCII column.

    Only the first `limit` bytes are expanded; a final line says how many
    bytes were left out.
    """
    shown = bytes(content[:limit])
    lines = []
    for offset in range(0, len(shown), HEX_BYTES_PER_ROW):
        row = shown[offset:offset + HEX_BYTES_PER_ROW]
        left = " ".join(f"{byte:02x}" for byte in row[:8])
        right = " ".join(f"{byte:02x}" for byte in row[8:])
        ascii_column = "".join(chr(byte) if 0x20 <= byte < 0x7f else "." for byte in row)
        lines.append(f"{offset:08x}  {left:<23}  {right:<23}  |{ascii_column}|")

    remaining = len(content) - len(shown)
    if remaining > 0:
        lines.append(f"... {remaining} more bytes not shown")
    return "\n".join(lines)


def format_text_preview(content: bytes) -> str:
    """Decodes the buffer for the text tab, replacing undecodable bytes."""
    return bytes(content).decode("utf-8", errors="replace")


# --- The Display Report ---

@dataclass
class ContentReport:
    """Everything the presentation layer shows about one loaded buffer."""
    file_name: str
    size: int
    is_text: bool
    is_xml: bool
    hex_expandable: bool
    element_names: Optional[List[str]] = None
    element_error: Optional[str] = None
    notes: List[str] = field(default_factory=list)

    @property
    def kind(self) -> str:
        if self.is_xml:
            return "XML"
        if self.is_text:
            return "Text"
        return "Binary"


def classify_content(details: FileDetails) -> ContentReport:
    """
    Runs the classifiers over a loaded file.

    Element extraction only runs for buffers that sniff as XML, and a
    ParseError is recorded on the report instead of propagating: the hex and
    text views stay valid even when the markup is broken.
    """
    content = details.file_content
    report = ContentReport(
        file_name=details.file_name,
        size=len(content),
        is_text=looks_like_text(content),
        is_xml=looks_like_xml(content),
        hex_expandable=is_hex_expandable(content),
    )

    if report.is_xml:
        try:
            report.element_names = extract_element_names(content)
        except ParseError as e:
            logger.warning(f"Could not list XML elements of '{details.file_name}': {e}")
            report.element_error = str(e)
    else:
        report.notes.append("Content does not look like XML; element listing skipped.")

    if not report.hex_expandable:
        report.notes.append(f"Hex view limited to the first {HEX_VIEW_LIMIT} bytes.")

    logger.debug(f"Classified '{details.file_name}' as {report.kind} ({report.size} bytes).")
    return report
