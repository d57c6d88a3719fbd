""" Parse and serialize the stanza format of dpkg status records and apt indices

    >>> from eight_deep import parse_many, serialize
    >>> document = parse_many('Package: zsync\\nDepends:\\n libc6\\n')
    >>> document[0]['Depends']
    MultiLine(['libc6'])
    >>> serialize(document)
    'Package: zsync\\nDepends:\\n  libc6\\n\\n'
"""

# pylint: disable=useless-import-alias
from eight_deep.parsing import (
    parse_one as parse_one,
    parse_many as parse_many,
    serialize as serialize,
    OneLine as OneLine,
    MultiLine as MultiLine,
    Stanza as Stanza,
    Document as Document,
)
from eight_deep.types import (
    Deb822ParseError as Deb822ParseError,
    Deb822SyntaxError as Deb822SyntaxError,
    Deb822EncodingError as Deb822EncodingError,
)

__all__ = [
    'parse_one',
    'parse_many',
    'serialize',
    'OneLine',
    'MultiLine',
    'Stanza',
    'Document',
    'Deb822ParseError',
    'Deb822SyntaxError',
    'Deb822EncodingError',
]
