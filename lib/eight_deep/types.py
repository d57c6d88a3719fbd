import typing
from typing import Iterable, Optional, Union

if typing.TYPE_CHECKING:
    from eight_deep.parsing import MultiLine, OneLine


FieldValue = Union['OneLine', 'MultiLine']
"""The value of a single field; either a OneLine or a MultiLine"""

InputSequence = Union[str, bytes, Iterable[Union[str, bytes]]]
"""Anything accepted by the parse functions (text, raw bytes or an iterable of lines)"""


class Deb822ParseError(ValueError):
    """Base class of all errors raised while parsing a deb822 document"""

    is_user_error = True


class Deb822SyntaxError(Deb822ParseError):
    """The grammar could not match at some position in the input

    The offset is a byte offset into the UTF-8 encoded input.  Line and column
    numbers are 1-based and derived from the offset.
    """

    def __init__(self,
                 reason,  # type: str
                 offset,  # type: int
                 line_no,  # type: int
                 column,  # type: int
                 remaining,  # type: bytes
                 ):
        # type: (...) -> None
        self.reason = reason
        self.offset = offset
        self.line_no = line_no
        self.column = column
        self.remaining = remaining
        super().__init__(reason, offset, line_no, column, remaining)

    def __str__(self):
        # type: () -> str
        return "Syntax error at line {line_no}, column {column}: {reason} (near {remaining!r})".format(
            line_no=self.line_no,
            column=self.column,
            reason=self.reason,
            remaining=self.remaining,
        )


class Deb822EncodingError(Deb822ParseError):
    """A field name or value (or the input itself) is not valid UTF-8"""

    def __init__(self,
                 reason,  # type: str
                 offset,  # type: int
                 field_name=None,  # type: Optional[str]
                 ):
        # type: (...) -> None
        self.reason = reason
        self.offset = offset
        self.field_name = field_name
        super().__init__(reason, offset, field_name)

    def __str__(self):
        # type: () -> str
        if self.field_name is not None:
            return "Could not decode field \"{name}\" at offset {offset}: {reason}".format(
                name=self.field_name, offset=self.offset, reason=self.reason,
            )
        return "Could not decode input at offset {offset}: {reason}".format(
            offset=self.offset, reason=self.reason,
        )
