#!/usr/bin/python3
# -*- coding: utf-8 -*- vim: fileencoding=utf-8 :

# Copyright (C) 2026 The eight-deep-parser developers
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA

"""Tests for the input normalisation and debugging helpers"""

import logging
import pickle

import pytest

from eight_deep import parse_many
from eight_deep._util import as_bytes, line_and_column, print_document, syntax_error
from eight_deep.types import Deb822EncodingError, Deb822SyntaxError


class TestUtil:

    def test_as_bytes(self):
        # type: () -> None
        assert as_bytes(b'A: b\n') == b'A: b\n'
        assert as_bytes('A: é\n') == 'A: é\n'.encode('utf-8')
        assert as_bytes(['A: b\n', b'C: d\n']) == b'A: b\nC: d\n'
        assert as_bytes(iter([])) == b''

    def test_as_bytes_rejects_surrogates(self):
        # type: () -> None
        with pytest.raises(Deb822EncodingError) as excinfo:
            as_bytes('é: \udc80\n')
        # "é" takes two bytes
        assert excinfo.value.offset == 4

    def test_line_and_column(self):
        # type: () -> None
        buf = b'A: b\nC: d\n\nE'
        assert line_and_column(buf, 0) == (1, 1)
        assert line_and_column(buf, 3) == (1, 4)
        assert line_and_column(buf, 5) == (2, 1)
        assert line_and_column(buf, 11) == (4, 1)

    def test_syntax_error(self):
        # type: () -> None
        buf = b'A: b\n' + b'x' * 100
        error = syntax_error(buf, 5, "Something went wrong")
        assert error.offset == 5
        assert (error.line_no, error.column) == (2, 1)
        assert error.remaining == b'x' * 40
        assert str(error) == "Syntax error at line 2, column 1: Something went wrong" \
                             " (near " + repr(b'x' * 40) + ")"

    def test_print_document(self):
        # type: () -> None
        document = parse_many('A: b\nC:\n d\n\nE: f\n')
        lines = []
        print_document(document, output_function=lines.append)
        assert lines == [
            "Stanza 1",
            "  A: OneLine('b')",
            "  C: MultiLine(['d'])",
            "# <-- END OF Stanza 1",
            "Stanza 2",
            "  E: OneLine('f')",
            "# <-- END OF Stanza 2",
        ]

    def test_print_document_logs_by_default(self, caplog):
        # type: (pytest.LogCaptureFixture) -> None
        with caplog.at_level(logging.INFO):
            print_document(parse_many('A: b\n'))
        assert "  A: OneLine('b')" in caplog.text

    def test_errors_survive_pickling(self):
        # type: () -> None
        error = syntax_error(b'A: b\nbroken\n', 5, "Missing colon")
        restored = pickle.loads(pickle.dumps(error))
        assert isinstance(restored, Deb822SyntaxError)
        assert (restored.offset, restored.line_no, restored.column) == (5, 2, 1)
        assert restored.remaining == b'broken\n'
        assert str(restored) == str(error)

        encoding_error = Deb822EncodingError("invalid start byte", 3, field_name="Key")
        restored_encoding = pickle.loads(pickle.dumps(encoding_error))
        assert restored_encoding.field_name == "Key"
        assert str(restored_encoding) == str(encoding_error)
