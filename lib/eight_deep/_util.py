import logging
from typing import Callable, Iterable, Mapping, Optional, Tuple

from eight_deep.types import (
    Deb822EncodingError, Deb822SyntaxError, FieldValue, InputSequence,
)

# How much of the remaining input is kept on a syntax error
_ERROR_CONTEXT_LENGTH = 40


def as_bytes(sequence):
    # type: (InputSequence) -> bytes
    """Normalize the accepted input types into one UTF-8 encoded buffer

    :param sequence: A str, a bytes object or an iterable of lines (str or bytes).
      Lines must include their line ending ("\\n").
    """
    if isinstance(sequence, bytes):
        return sequence
    if isinstance(sequence, str):
        return _encode(sequence, 0)

    parts = []
    offset = 0
    for line in sequence:
        if isinstance(line, str):
            line = _encode(line, offset)
        parts.append(line)
        offset += len(line)
    return b''.join(parts)


def _encode(text, base_offset):
    # type: (str, int) -> bytes
    try:
        return text.encode('utf-8')
    except UnicodeEncodeError as e:
        offset = base_offset + len(text[:e.start].encode('utf-8', errors='surrogatepass'))
        raise Deb822EncodingError(e.reason, offset) from e


def line_and_column(buf, offset):
    # type: (bytes, int) -> Tuple[int, int]
    """Translate a byte offset into a 1-based (line, column) pair"""
    line_no = buf.count(b'\n', 0, offset) + 1
    line_start = buf.rfind(b'\n', 0, offset) + 1
    return line_no, offset - line_start + 1


def syntax_error(buf, pos, reason):
    # type: (bytes, int, str) -> Deb822SyntaxError
    line_no, column = line_and_column(buf, pos)
    return Deb822SyntaxError(reason, pos, line_no, column,
                             buf[pos:pos + _ERROR_CONTEXT_LENGTH])


def print_document(document,  # type: Iterable[Mapping[str, FieldValue]]
                   *,
                   output_function=None,  # type: Optional[Callable[[str], None]]
                   ):
    # type: (...) -> None
    """Debugging aid, which dumps the stanzas of a document with their field types

    :param document: A Document or any iterable of stanzas.
    :param output_function: Callable that receives a single str argument and is responsible
      for "displaying" that line. The callable may be invoked multiple times (one per line
      of output).  Defaults to logging.info if omitted.
    """
    if output_function is None:
        output_function = logging.info
    for no, stanza in enumerate(document, start=1):
        output_function("Stanza " + str(no))
        for key, value in stanza.items():
            output_function("  " + key + ": " + repr(value))
        output_function("# <-- END OF Stanza " + str(no))
