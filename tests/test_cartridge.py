import warnings

import pytest

from mcart_core.cartridge import CartridgeCodec, GameFile, codec_for
from mcart_core.errors import CartridgeError, FieldTooLong, FormatMismatch, InvalidBank, InvalidHeader, Truncated
from mcart_core.layouts import StringIdLayout


def _assert_same_content(a: GameFile, b: GameFile):
    assert a.header == b.header
    assert a.main_code == b.main_code
    assert a.code_banks == b.code_banks
    assert a.atlases == b.atlases
    assert a.controller_graphics == b.controller_graphics


def test_write_length(v1_codec, tiny_profile, make_game):
    game = make_game(app_id="1", name="a", version="b", author="c", code_banks=[bytes(16)], atlases=[bytes(64)])
    data = v1_codec.write(game)
    p = tiny_profile
    assert len(data) == (
        23 + p.code_bank_size * 2 + p.atlas_bank_size + p.controller_graphics_bank_size * p.controller_count
    )


def test_round_trip_v1(v1_codec, make_game):
    game = make_game()
    _assert_same_content(v1_codec.read(v1_codec.write(game)), game)


def test_round_trip_v2_sized_atlases(v2_codec, make_game):
    game = make_game(
        app_id=4242,
        build_number=12,
        atlases=[b"\x01" * 5, b"\x02" * 300, b"\x03"],
        controller_graphics=None,
    )
    data = v2_codec.write(game)
    # Atlas length table follows the header strings
    header_len = len(v2_codec.headers.encode(game.header))
    assert data[header_len:header_len + 6] == bytes([0, 5, 1, 44, 0, 1])

    decoded = v2_codec.read(data)
    _assert_same_content(decoded, game)
    assert [len(a) for a in decoded.atlases] == [5, 300, 1]


def test_body_order(v1_codec, tiny_profile, make_game):
    game = make_game()
    data = v1_codec.write(game)
    body = data[len(v1_codec.headers.encode(game.header)):]
    expected = game.main_code + b"".join(game.code_banks) + b"".join(game.atlases) + b"".join(game.controller_graphics)
    assert body == expected


def test_identity_is_id_and_build(make_game):
    a = make_game(main_code=bytes(16))
    b = make_game(main_code=bytes([0xFF]) * 16, name="Other")
    c = make_game(build_number=8)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_truncated_main_code(v1_codec, make_game):
    game = make_game()
    data = v1_codec.write(game)
    header_len = len(v1_codec.headers.encode(game.header))
    with pytest.raises(Truncated) as exc:
        v1_codec.read(data[:header_len + 5])
    assert exc.value.field == "main code"


def test_truncated_last_section(v1_codec, make_game):
    data = v1_codec.write(make_game())
    with pytest.raises(Truncated) as exc:
        v1_codec.read(data[:-1])
    assert exc.value.field == "controller graphics[8]"


def test_invalid_header_on_read(v1_codec, make_game):
    game = make_game()
    data = bytearray(v1_codec.write(game))
    header_len = len(v1_codec.headers.encode(game.header))
    # Last header byte is the controller graphics count
    data[header_len - 1] = 3
    with pytest.raises(InvalidHeader) as exc:
        v1_codec.read(bytes(data))
    assert exc.value.reasons == ["Incorrect number of controller graphics (expected 9, found 3)"]


def test_magic_gate(v1_codec, make_game):
    data = bytearray(v1_codec.write(make_game()))
    data[0] = 0
    with pytest.raises(FormatMismatch):
        v1_codec.read(bytes(data))


def test_trailing_bytes_warn(v1_codec, make_game):
    game = make_game()
    data = v1_codec.write(game) + b"junk"
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        decoded = v1_codec.read(data)
    _assert_same_content(decoded, game)
    assert any("Trailing bytes" in str(w.message) for w in caught)


def test_write_rejects_bad_banks(v1_codec, make_game):
    with pytest.raises(InvalidBank) as exc:
        v1_codec.write(make_game(main_code=bytes(15)))
    assert exc.value.section == "main code"

    with pytest.raises(InvalidBank) as exc:
        v1_codec.write(make_game(code_banks=[bytes(16), bytes(17)]))
    assert (exc.value.section, exc.value.index) == ("code bank", 1)

    with pytest.raises(InvalidBank):
        v1_codec.write(make_game(atlases=[bytes(63)]))


def test_write_rejects_invalid_header(v1_codec, make_game):
    with pytest.raises(InvalidHeader) as exc:
        v1_codec.write(make_game(build_number=0, atlases=[]))
    assert len(exc.value.reasons) == 2


def test_v2_rejects_controller_graphics(v2_codec, make_game):
    game = make_game(app_id=1, atlases=[b"x"])
    with pytest.raises(InvalidHeader) as exc:
        v2_codec.write(game)
    assert exc.value.reasons == ["Controller graphics are not supported in this format"]


def test_write_reports_overlong_field(v1_codec, make_game):
    with pytest.raises(FieldTooLong) as exc:
        v1_codec.write(make_game(name="n" * 256))
    assert (exc.value.field, exc.value.max, exc.value.actual) == ("Name", 255, 256)

    with pytest.raises(FieldTooLong) as exc:
        v1_codec.write(make_game(author="  " + "a" * 300 + " "))
    assert (exc.value.field, exc.value.actual) == ("Author", 300)


def test_write_rejects_id_of_the_wrong_kind(v1_codec, make_game):
    with pytest.raises(CartridgeError) as exc:
        v1_codec.write(make_game(app_id=5))
    assert exc.value.code == "E_INVALID_HEADER"


def test_read_write_path(tmp_path, v1_codec, make_game):
    game = make_game()
    path = tmp_path / "game.mcart"
    v1_codec.write_path(game, path)
    _assert_same_content(v1_codec.read_path(path), game)

    summary = v1_codec.read_summary(path)
    assert summary.id == "com.example.test"
    assert summary.version_formatted() == "Ver 1.0 (#7)"


def test_section_offsets(v1_codec, make_game):
    game = make_game()
    data = v1_codec.write(game)
    sections = list(v1_codec.section_offsets(game))
    assert [s[0] for s in sections[:4]] == ["main_code", "code_bank", "atlas", "atlas"]
    assert len(sections) == 1 + 1 + 2 + 9
    for section, index, offset, length in sections:
        if section == "atlas":
            assert data[offset:offset + length] == game.atlases[index]
    last = sections[-1]
    assert last[2] + last[3] == len(data)


def test_codec_for_default_profile():
    codec = codec_for()
    assert isinstance(codec.layout, StringIdLayout)
    assert codec.guard.min_file_size == 23 + 0x2000
    with pytest.raises(ValueError):
        codec_for(9)


def test_default_codec_round_trip(make_game):
    codec = CartridgeCodec()
    game = make_game(profile=codec.profile)
    _assert_same_content(codec.read(codec.write(game)), game)
