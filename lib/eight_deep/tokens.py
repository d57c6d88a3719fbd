# -*- coding: utf-8 -*- vim: fileencoding=utf-8 :

""" Grammar primitives for deb822 stanzas

Every recognizer works on a bytes buffer and an explicit position (the cursor)
into it.  Recognizers producing a result return a ``(new_pos, result)`` tuple
while recognizers that only skip filler return the new position.  When the
grammar does not match, a Deb822SyntaxError is raised; nothing is recovered.

    >>> buf = b'Package: zsync\\n'
    >>> pos, name = match_field_name(buf, 0)
    >>> name
    b'Package'
    >>> match_field(buf, 0)
    (15, RawField(name=b'Package', one_line=b'zsync', continuation=b'', offset=0))
"""

import collections
import logging
import re
from typing import List, Tuple

from eight_deep._util import syntax_error

# The ":" plus any horizontal whitespace before the value
_RE_SEPARATOR = re.compile(rb':[ \t]*')
# A line with nothing but whitespace (or the end of the input after whitespace)
_RE_BLANK_LINE = re.compile(rb'[ \t\r]*(?:\n|\Z)')
_RE_WHITESPACE = re.compile(rb'[ \t\r\n]*')
_RE_TRAILING_WHITESPACE = re.compile(rb'[ \t\r]*\Z')


RawField = collections.namedtuple('RawField', ['name', 'one_line', 'continuation', 'offset'])
RawField.__doc__ = """A field as seen by the grammar, before any decoding

name: the bytes of the field name.
one_line: the value on the same line as the field name (may be empty).
continuation: the continuation lines (without the leading space) joined by "\\n".
offset: byte offset of the field name in the input.
"""


def skip_orphan_continuation_lines(buf, pos):
    # type: (bytes, int) -> int
    """Skip lines starting with a space that do not belong to any value"""
    skipped = 0
    while buf.startswith(b' ', pos):
        newline = buf.find(b'\n', pos)
        if newline == -1:
            break
        pos = newline + 1
        skipped += 1
    if skipped:
        logging.debug("Skipped %d orphan continuation line(s) before offset %d", skipped, pos)
    return pos


def match_field_name(buf, pos):
    # type: (bytes, int) -> Tuple[int, bytes]
    pos = skip_orphan_continuation_lines(buf, pos)
    if pos >= len(buf):
        raise syntax_error(buf, pos, "Expected a field name, got end of input")
    if buf.startswith(b'\n', pos):
        raise syntax_error(buf, pos, "An empty line cannot start a field name")
    end = buf.find(b':', pos)
    newline = buf.find(b'\n', pos)
    # A field name never spans lines
    if end == -1 or -1 < newline < end:
        raise syntax_error(buf, pos, 'Missing ":" after the field name')
    if end == pos:
        raise syntax_error(buf, pos, "Empty field name")
    return end, buf[pos:end]


def match_separator(buf, pos):
    # type: (bytes, int) -> int
    m = _RE_SEPARATOR.match(buf, pos)
    if m is None:
        raise syntax_error(buf, pos, 'Expected ":" as field separator')
    return m.end()


def match_single_line(buf, pos):
    # type: (bytes, int) -> Tuple[int, bytes]
    """Match the rest of the line; the newline is consumed but not returned"""
    newline = buf.find(b'\n', pos)
    if newline == -1:
        raise syntax_error(buf, pos, "Unterminated line (no newline before end of input)")
    return newline + 1, buf[pos:newline]


def match_continuation_lines(buf, pos):
    # type: (bytes, int) -> Tuple[int, List[bytes]]
    """Match zero or more continuation lines

    Only the first space of a continuation line is syntax; any further
    indentation is part of the line.  Trailing whitespace at the end of the
    input (without a newline) is not a continuation line and is left alone.
    """
    lines = []
    while buf.startswith(b' ', pos):
        newline = buf.find(b'\n', pos)
        if newline == -1:
            if _RE_TRAILING_WHITESPACE.match(buf, pos):
                break
            raise syntax_error(buf, pos,
                               "Unterminated continuation line (no newline before end of input)")
        lines.append(buf[pos + 1:newline])
        pos = newline + 1
    return pos, lines


def skip_comment_blocks(buf, pos):
    # type: (bytes, int) -> int
    """Skip comment blocks of the form "--<anything>-\\n"

    The content of a block ends at the first "-" directly followed by a newline.
    """
    while buf.startswith(b'--', pos):
        end = buf.find(b'-\n', pos + 2)
        if end == -1:
            raise syntax_error(buf, pos,
                               'Malformed comment block (no "-" directly before a newline)')
        pos = end + 2
    return pos


def match_field(buf, pos):
    # type: (bytes, int) -> Tuple[int, RawField]
    pos, name = match_field_name(buf, pos)
    offset = pos - len(name)
    pos = match_separator(buf, pos)
    pos, one_line = match_single_line(buf, pos)
    pos, lines = match_continuation_lines(buf, pos)
    return pos, RawField(name, one_line, b'\n'.join(lines), offset)


def is_end_of_stanza(buf, pos):
    # type: (bytes, int) -> bool
    return pos >= len(buf) or _RE_BLANK_LINE.match(buf, pos) is not None


def skip_whitespace(buf, pos):
    # type: (bytes, int) -> int
    m = _RE_WHITESPACE.match(buf, pos)
    # The pattern accepts the empty string
    assert m is not None
    return m.end()
