from typing import Any, Dict

import pytest


@pytest.fixture(autouse=True)
def doctest_add_status_text(doctest_namespace):
    # type: (Dict[str, Any]) -> None
    # Provide a small dpkg status file to the doctests so they need not
    # spell out a multi-stanza input inline.
    # - For this to work, the doctests MUST NOT assign the names listed here
    doctest_namespace['status_text'] = (
        'Package: zsync\n'
        'Status: install ok installed\n'
        'Version: 0.6.2-3\n'
        '\n'
        'Package: hello\n'
        'Status: install ok installed\n'
        'Description:\n'
        ' GNU hello\n'
    )
