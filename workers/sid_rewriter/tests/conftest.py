"""
Test fixtures for sid_rewriter.

Provides sample C sources with and without SID invocations.
"""
from __future__ import annotations

import pytest
import textwrap
from pathlib import Path


# ── Sample sources ──────────────────────────────────────────────────────────

SIMPLE_C = textwrap.dedent("""\
    #include "sid.h"

    void on_hit(Entity* e) {
        foo(SID( "hello" ));
    }
""")

SIMPLE_C_EXPECTED = textwrap.dedent("""\
    #include "sid.h"

    void on_hit(Entity* e) {
        foo(0x0f923099 /* "hello" */);
    }
""")

MULTI_C = textwrap.dedent("""\
    // two ids on one line, one split over lines
    static const unsigned ids[] = { SID("hello"), SID("x") };
    unsigned health = SID(
        "player_health"
    );
""")

MULTI_C_EXPECTED = textwrap.dedent("""\
    // two ids on one line, one split over lines
    static const unsigned ids[] = { 0x0f923099 /* "hello" */, 0x0002b61d /* "x" */ };
    unsigned health = 0xf3934dc7 /* "player_health" */;
""")

NO_MARKER_C = textwrap.dedent("""\
    /* plain file:\ttabs and CRLF endings survive */\r
    int SIDE = 3;\r
    int x = SIDX("a") + MYSID("b") + sid("c");\r
    const char* s = "SID";\r
""")

ESCAPED_C = 'SID("a\\"b")'

INVALID_C = textwrap.dedent("""\
    int ok = SID("fine");
    int bad = SID( 42 );
""")

MISSING_CLOSE_C = 'int v = SID( "x" ;\n'

UNTERMINATED_C = 'int v = SID( "never closed\n'

COLLIDING_C = textwrap.dedent("""\
    a = SID("stylist");
    b = SID("subgenera");
    c = SID("stylist");
""")


# ── Fixtures ────────────────────────────────────────────────────────────────

def _write(path: Path, text: str) -> Path:
    path.write_bytes(text.encode("utf-8"))
    return path


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    """Return a temporary directory for source files."""
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def simple_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "simple.c", SIMPLE_C)


@pytest.fixture
def multi_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "multi.c", MULTI_C)


@pytest.fixture
def no_marker_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "plain.c", NO_MARKER_C)


@pytest.fixture
def invalid_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "invalid.c", INVALID_C)


@pytest.fixture
def missing_close_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "missing_close.c", MISSING_CLOSE_C)


@pytest.fixture
def unterminated_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "unterminated.c", UNTERMINATED_C)


@pytest.fixture
def colliding_c_file(src_dir: Path) -> Path:
    return _write(src_dir / "colliding.c", COLLIDING_C)


@pytest.fixture
def source_tree(src_dir: Path) -> Path:
    """
    A small project tree::

        src/simple.c          (1 invocation)
        src/lib/plain.h       (none)
        src/lib/bad.cpp       (malformed)
        src/lib/notes.txt     (ignored by extension)
        src/.git/hidden.c     (ignored, hidden dir)
    """
    _write(src_dir / "simple.c", SIMPLE_C)
    lib = src_dir / "lib"
    lib.mkdir()
    _write(lib / "plain.h", NO_MARKER_C)
    _write(lib / "bad.cpp", INVALID_C)
    _write(lib / "notes.txt", SIMPLE_C)
    hidden = src_dir / ".git"
    hidden.mkdir()
    _write(hidden / "hidden.c", SIMPLE_C)
    return src_dir
