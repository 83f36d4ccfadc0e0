from __future__ import annotations

from pathlib import Path

import pytest

from xcfoundry.core.errors import HeaderReadError
from xcfoundry.fs import InMemoryFileSystem
from xcfoundry.umbrella import UmbrellaHeaderParser, parse_import_line

UMBRELLA = Path("/work/MyLib/Sources/MyLib.h")


@pytest.mark.parametrize(
    "line, expected",
    [
        ('#import "B.h"', "B.h"),
        ("#import <B.h>", "B.h"),
        ('   #import "B.h"   ', "B.h"),
        ("#import <MyLib/B.h>", "B.h"),
        ('#import "MyLib/B.h"', "B.h"),
        ("#import    <B.h> // trailing comment", "B.h"),
        ("#import <MyLib/Sub/Deep.h>", None),
        ("#import <OtherLib/B.h>", None),
        ("#import <UIKit/UIKit.h>", None),
        ("#import <Foundation/Foundation.h>", None),
        ('#import "UIKit"', None),
        ('#include "B.h"', None),
        ("// #import <B.h>", None),
        ("#import B.h", None),
        ('#import "B.h', None),
        ("#import <B.h", None),
        ('#import "B.h>', None),
        ('#import ""', None),
        ("#import </B.h>", None),
        ("", None),
    ],
)
def test_parse_import_line(line, expected):
    assert parse_import_line(line, "MyLib") == expected


def test_parse_import_line_without_product_accepts_bare_names_only():
    assert parse_import_line("#import <B.h>", None) == "B.h"
    assert parse_import_line("#import <MyLib/B.h>", None) is None


def test_parse_import_line_honours_custom_ignore_list():
    assert parse_import_line("#import <AppKit.h>", "MyLib", {"AppKit.h"}) is None
    assert parse_import_line("#import <UIKit.h>", "MyLib", {"AppKit.h"}) == "UIKit.h"


def test_extract_public_imports(memory_fs: InMemoryFileSystem):
    memory_fs.add_file(
        UMBRELLA,
        "\n".join(
            [
                "#import <UIKit/UIKit.h>",
                '#import "B.h"',
                "#import <MyLib/C.h>",
                "#import <MyLib/Sub/Deep.h>",
                '#import "B.h"',
                "",
                "FOUNDATION_EXPORT double MyLibVersionNumber;",
            ]
        ),
    )
    parser = UmbrellaHeaderParser(memory_fs, product_name="MyLib")

    assert parser.extract_public_imports(UMBRELLA) == frozenset({"B.h", "C.h"})


def test_extract_public_imports_handles_crlf(memory_fs: InMemoryFileSystem):
    memory_fs.add_file(UMBRELLA, '#import "A.h"\r\n#import "B.h"\r\n')
    parser = UmbrellaHeaderParser(memory_fs, product_name="MyLib")

    assert parser.extract_public_imports(UMBRELLA) == frozenset({"A.h", "B.h"})


def test_missing_umbrella_raises(memory_fs: InMemoryFileSystem):
    parser = UmbrellaHeaderParser(memory_fs, product_name="MyLib")

    with pytest.raises(HeaderReadError) as excinfo:
        parser.extract_public_imports(UMBRELLA)
    assert excinfo.value.path == UMBRELLA


def test_undecodable_umbrella_raises(memory_fs: InMemoryFileSystem):
    memory_fs.add_file(UMBRELLA, b"#import \"A.h\"\n\xff\xfe")
    parser = UmbrellaHeaderParser(memory_fs, product_name="MyLib")

    with pytest.raises(HeaderReadError, match="UTF-8"):
        parser.extract_public_imports(UMBRELLA)


def test_unreadable_umbrella_raises(memory_fs: InMemoryFileSystem):
    memory_fs.add_file(UMBRELLA, '#import "A.h"')
    memory_fs.mark_unreadable(UMBRELLA.parent)
    parser = UmbrellaHeaderParser(memory_fs, product_name="MyLib")

    with pytest.raises(HeaderReadError):
        parser.extract_public_imports(UMBRELLA)


def test_reads_umbrella_from_disk(tmp_path: Path):
    umbrella = tmp_path / "MyLib.h"
    umbrella.write_text('#import <MyLib/A.h>\n#import <Foundation/Foundation.h>\n', encoding="utf-8")

    assert UmbrellaHeaderParser(product_name="MyLib").extract_public_imports(umbrella) == frozenset({"A.h"})


def test_byte_order_mark_is_ignored(memory_fs: InMemoryFileSystem):
    memory_fs.add_file(UMBRELLA, b'\xef\xbb\xbf#import "A.h"\n#import <MyLib/B.h>\n')
    parser = UmbrellaHeaderParser(memory_fs, product_name="MyLib")

    assert parser.extract_public_imports(UMBRELLA) == frozenset({"A.h", "B.h"})
