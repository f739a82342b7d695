"""Global test configuration for litweb tests."""

from pathlib import Path

import pytest

from litweb.core.logging import setup_logging


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep logs at warning level and out of the way of CLI output."""
    for var in ["LITWEB_TARGET_DIR", "LITWEB_STRICT_CHUNKS", "LITWEB_SKIP_UNCHANGED", "LITWEB_WEAVE_SUFFIX", "LITWEB_SOURCE_ENCODING"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LITWEB_LOG_LEVEL", "warning")
    monkeypatch.setenv("LITWEB_LOG_FORMAT", "plain")
    setup_logging("plain", level="warning", no_color=True)
    yield


@pytest.fixture
def write_doc(tmp_path):
    """Write a literate document under tmp_path and return its path."""

    def _write(text: str, name: str = "doc.nw") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="")
        return path

    return _write


HELLO_DOC = """\
# Hello world

The program prints a greeting.

<<main.c>>=
#include <stdio.h>
<<includes>>

int main(void)
{
    <<body>>
}
@

Headers we need.

<<includes>>=
#include <string.h>
@

<<body>>=
puts("hello");
return 0;
@

<<lib/io.c>>=
int io(void) { return 1; }
@
"""


@pytest.fixture
def hello_doc(write_doc):
    return write_doc(HELLO_DOC, "hello.nw")
