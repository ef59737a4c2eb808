import io

import pytest

from mcart_core.blocks import BlockReader, BlockWriter
from mcart_core.errors import FieldOutOfRange, FieldTooLong, Truncated


def test_reads_big_endian_integers():
    r = BlockReader(bytes([0x01, 0x02, 0x03, 0x00, 0x01, 0x05, 0x02, 0xFF]))
    assert r.read_u16("a") == 0x0102
    assert r.read_u8("b") == 3
    assert r.read_u32("c") == 66818
    assert r.read_u8("d") == 255
    assert r.at_eof()


def test_short_read_names_field():
    r = BlockReader(b"\x00\x01\x02")
    with pytest.raises(Truncated) as exc:
        r.read_block(8, "main code")
    assert exc.value.field == "main code"
    assert exc.value.expected == 8
    assert exc.value.got == 3


def test_read_blocks_from_stream():
    r = BlockReader(io.BytesIO(b"abcdef"))
    assert r.read_blocks(2, 3, "bank") == (b"ab", b"cd", b"ef")
    assert r.consumed == 6


def test_truncated_len_string():
    with pytest.raises(Truncated):
        BlockReader(b"\x05abc").read_len_string("name")


def test_len_string_trims_and_prefixes():
    w = BlockWriter()
    w.write_len_string("  Ray ", "Author")
    assert w.getvalue() == b"\x03Ray"


def test_len_string_cap():
    w = BlockWriter()
    w.write_len_string("a" * 255, "Name")
    assert len(w) == 256
    with pytest.raises(FieldTooLong) as exc:
        w.write_len_string("b" * 256, "Name")
    assert (exc.value.field, exc.value.max, exc.value.actual) == ("Name", 255, 256)


def test_int_out_of_range():
    w = BlockWriter()
    with pytest.raises(FieldOutOfRange):
        w.write_u16(0x10000, "build")
    with pytest.raises(FieldOutOfRange):
        w.write_u8(-1, "count")
