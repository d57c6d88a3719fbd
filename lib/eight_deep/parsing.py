# -*- coding: utf-8 -*- vim: fileencoding=utf-8 :

""" Ordered, typed dictionary-like interfaces to RFC822-like stanza files

This module parses the stanza based format used by Debian package metadata
(the dpkg status file, the output of ``dpkg -s`` and the ``Packages`` index
files of apt) into an ordered and typed representation.  It can also
serialize that representation back into its canonical form.

A field is either a :class:`OneLine` value (the value is on the same line as
the field name) or a :class:`MultiLine` value (the line of the field name has
no value and the value is given by the continuation lines below it)::

    >>> from eight_deep import parse_one
    >>> stanza = parse_one('''\\
    ... Package: plasma-workspace
    ... Conffiles:
    ...  /etc/pam.d/kde a33459447160292012baca99cb9820b3
    ...  /etc/xdg/plasmanotifyrc f9713a8fb2a4abb43e592f0c12f3fab5
    ... ''')
    >>> stanza['Package']
    OneLine('plasma-workspace')
    >>> stanza['Conffiles'].lines[1]
    '/etc/xdg/plasmanotifyrc f9713a8fb2a4abb43e592f0c12f3fab5'

Files with more than one stanza are parsed with :func:`parse_many`::

    >>> document = parse_many(status_text)
    >>> [stanza['Package'].text for stanza in document]
    ['zsync', 'hello']
    >>> print(serialize(document[1:]), end='')
    Package: hello
    Status: install ok installed
    Description:
      GNU hello
    <BLANKLINE>

Note that the serialized text is not necessarily identical to the input.
Continuation lines are always written with two leading spaces and a
document without stanzas becomes the empty string.

Ambiguous empty values
----------------------

The parser cannot tell a field with an empty value ("Key:" followed by
a newline) apart from a multi-line value without any continuation lines.  Both
become ``MultiLine([''])``.
"""

import collections
import collections.abc
import logging
from typing import IO, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from eight_deep._util import as_bytes, syntax_error
from eight_deep.tokens import (
    RawField, match_field, is_end_of_stanza, skip_comment_blocks, skip_whitespace,
)
from eight_deep.types import Deb822EncodingError, FieldValue, InputSequence


class OneLine:
    """A field value given on the same line as the field name"""

    __slots__ = ('_text',)

    def __init__(self, text):
        # type: (str) -> None
        if not isinstance(text, str):
            raise TypeError("OneLine values must be str, got " + type(text).__name__)
        self._text = text

    @property
    def text(self):
        # type: () -> str
        return self._text

    def convert_to_text(self):
        # type: () -> str
        """The serialized form of the value (everything after "Key:")"""
        return ' ' + self._text + '\n'

    def __eq__(self, other):
        # type: (object) -> bool
        if not isinstance(other, OneLine):
            return NotImplemented
        return self._text == other._text

    def __hash__(self):
        # type: () -> int
        return hash((OneLine, self._text))

    def __repr__(self):
        # type: () -> str
        return "{clsname}({text!r})".format(clsname=self.__class__.__name__, text=self._text)


class MultiLine:
    """A field value given as continuation lines

    The lines are stored without the leading space and without the newline.
    """

    __slots__ = ('_lines',)

    def __init__(self, lines):
        # type: (Iterable[str]) -> None
        if isinstance(lines, str):
            raise TypeError("MultiLine expects an iterable of lines, not a str")
        lines = tuple(lines)
        for line in lines:
            if not isinstance(line, str):
                raise TypeError("MultiLine lines must be str, got " + type(line).__name__)
        self._lines = lines

    @property
    def lines(self):
        # type: () -> Tuple[str, ...]
        return self._lines

    def convert_to_text(self):
        # type: () -> str
        """The serialized form of the value (everything after "Key:")"""
        return '\n' + ''.join('  ' + line + '\n' for line in self._lines)

    def __len__(self):
        # type: () -> int
        return len(self._lines)

    def __iter__(self):
        # type: () -> Iterator[str]
        return iter(self._lines)

    def __eq__(self, other):
        # type: (object) -> bool
        if not isinstance(other, MultiLine):
            return NotImplemented
        return self._lines == other._lines

    def __hash__(self):
        # type: () -> int
        return hash((MultiLine, self._lines))

    def __repr__(self):
        # type: () -> str
        return "{clsname}({lines!r})".format(clsname=self.__class__.__name__,
                                             lines=list(self._lines))


class Stanza(collections.abc.Mapping):
    """An ordered mapping from field names to field values

    Fields keep the position of their first appearance.  If a field name is
    given more than once, the last value wins but the position is unchanged.

        >>> s = Stanza([('A', OneLine('1')), ('B', OneLine('2')), ('A', OneLine('3'))])
        >>> list(s.items())
        [('A', OneLine('3')), ('B', OneLine('2'))]

    Stanzas are immutable; create a new one to change a field.
    """

    __slots__ = ('_fields',)

    def __init__(self, fields=None):
        # type: (Optional[Union[Mapping[str, FieldValue], Iterable[Tuple[str, FieldValue]]]]) -> None
        self._fields = collections.OrderedDict()  # type: collections.OrderedDict[str, FieldValue]
        if fields is None:
            return
        if isinstance(fields, collections.abc.Mapping):
            fields = fields.items()
        for key, value in fields:
            if not isinstance(key, str):
                raise TypeError("Field names must be str, got " + type(key).__name__)
            if not isinstance(value, (OneLine, MultiLine)):
                raise TypeError("Field values must be OneLine or MultiLine, got "
                                + type(value).__name__)
            self._fields[key] = value

    def __getitem__(self, key):
        # type: (str) -> FieldValue
        return self._fields[key]

    def __iter__(self):
        # type: () -> Iterator[str]
        return iter(self._fields)

    def __len__(self):
        # type: () -> int
        return len(self._fields)

    def __repr__(self):
        # type: () -> str
        return "{clsname}({fields!r})".format(clsname=self.__class__.__name__,
                                              fields=list(self._fields.items()))


class Document(collections.abc.Sequence):
    """An ordered sequence of stanzas (e.g. the content of a Packages file)"""

    __slots__ = ('_stanzas',)

    def __init__(self, stanzas=()):
        # type: (Iterable[Stanza]) -> None
        self._stanzas = tuple(stanzas)  # type: Tuple[Stanza, ...]

    def __getitem__(self, index):  # type: ignore
        if isinstance(index, slice):
            return Document(self._stanzas[index])
        return self._stanzas[index]

    def __len__(self):
        # type: () -> int
        return len(self._stanzas)

    def __eq__(self, other):
        # type: (object) -> bool
        if isinstance(other, (str, bytes)) \
                or not isinstance(other, collections.abc.Sequence):
            return NotImplemented
        return list(self._stanzas) == list(other)

    __hash__ = None  # type: ignore

    def __repr__(self):
        # type: () -> str
        return "{clsname}({stanzas!r})".format(clsname=self.__class__.__name__,
                                               stanzas=list(self._stanzas))

    def convert_to_text(self):
        # type: () -> str
        return serialize(self)

    def dump(self, fd):
        # type: (IO[bytes]) -> None
        fd.write(self.convert_to_text().encode('utf-8'))


def _decode(data, offset, field_name=None):
    # type: (bytes, int, Optional[str]) -> str
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise Deb822EncodingError(e.reason, offset, field_name=field_name) from e


def build_stanza(raw_fields):
    # type: (Iterable[RawField]) -> Stanza
    """Decode and classify the raw fields of one stanza

    A field with an empty value on the line of the field name is a MultiLine
    (even without any continuation lines); otherwise it is a OneLine and any
    continuation lines are ignored.
    """
    fields = []  # type: List[Tuple[str, FieldValue]]
    for raw_field in raw_fields:
        key = _decode(raw_field.name, raw_field.offset)
        if raw_field.one_line == b'':
            # Also the case for "Key:" without continuation lines
            lines = _decode(raw_field.continuation, raw_field.offset, key).split('\n')
            value = MultiLine(lines)  # type: FieldValue
        else:
            value = OneLine(_decode(raw_field.one_line, raw_field.offset, key))
        fields.append((key, value))
    return Stanza(fields)


def parse_stanza_fields(buf, pos):
    # type: (bytes, int) -> Tuple[int, List[RawField]]
    """Parse one stanza (at least one field) and the whitespace after it"""
    fields = []
    while True:
        pos, field = match_field(buf, pos)
        fields.append(field)
        if is_end_of_stanza(buf, pos):
            break
    return skip_whitespace(buf, pos), fields


def parse_document_fields(buf,  # type: bytes
                          pos=0,  # type: int
                          *,
                          max_stanzas=None,  # type: Optional[int]
                          ):
    # type: (...) -> Tuple[int, List[List[RawField]]]
    """Parse stanzas (each optionally preceded by comment blocks) until the input ends"""
    stanzas = []  # type: List[List[RawField]]
    while pos < len(buf):
        if max_stanzas is not None and len(stanzas) >= max_stanzas:
            logging.debug("Stopped parsing after %d stanza(s) at offset %d", len(stanzas), pos)
            break
        pos = skip_comment_blocks(buf, pos)
        pos, fields = parse_stanza_fields(buf, pos)
        stanzas.append(fields)
    return pos, stanzas


def parse_one(sequence):
    # type: (InputSequence) -> Stanza
    """Parse exactly one stanza

    :param sequence: A str, bytes or an iterable over lines of str or bytes
      (an open file for reading will do).  The lines must include the
      trailing line ending ("\\n").
    :raises Deb822SyntaxError: if the input is not exactly one well-formed
      stanza (optionally followed by whitespace).
    :raises Deb822EncodingError: if the input is not valid UTF-8.
    """
    buf = as_bytes(sequence)
    pos, fields = parse_stanza_fields(buf, 0)
    if pos != len(buf):
        raise syntax_error(buf, pos, "Expected end of input after the stanza")
    return build_stanza(fields)


def parse_many(sequence,  # type: InputSequence
               *,
               max_stanzas=None,  # type: Optional[int]
               ):
    # type: (...) -> Document
    """Parse zero or more stanzas separated by blank lines

    :param sequence: A str, bytes or an iterable over lines of str or bytes
      (an open file for reading will do).  The lines must include the
      trailing line ending ("\\n").  An empty input gives an empty Document.
    :param max_stanzas: The maximum number of stanzas to parse from the input.
      The rest of the input is neither parsed nor validated.  (Default: no limit)
    :raises Deb822SyntaxError: on the first part of the input that does not
      match the grammar.
    :raises Deb822EncodingError: if a field name or value is not valid UTF-8.
    """
    if max_stanzas is not None and max_stanzas < 0:
        raise ValueError("max_stanzas must not be negative")
    buf = as_bytes(sequence)
    _, raw_stanzas = parse_document_fields(buf, max_stanzas=max_stanzas)
    return Document(build_stanza(fields) for fields in raw_stanzas)


def serialize(document):
    # type: (Iterable[Mapping[str, FieldValue]]) -> str
    """Render stanzas in the canonical text form

    Every stanza is followed by a blank line.  OneLine values are written after
    a single space; MultiLine values start on the next line and each line is
    indented with two spaces.
    """
    parts = []
    for stanza in document:
        for key, value in stanza.items():
            if not isinstance(value, (OneLine, MultiLine)):
                raise TypeError("Cannot serialize field " + key + ": values must be OneLine or"
                                " MultiLine, got " + type(value).__name__)
            parts.append(key + ':' + value.convert_to_text())
        parts.append('\n')
    return ''.join(parts)


if __name__ == "__main__":  # pragma: no cover
    import doctest
    doctest.testmod()
