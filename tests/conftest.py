import pytest

from mcart_core.cartridge import CartridgeCodec, GameFile
from mcart_core.layouts import NumericIdLayout, StringIdLayout
from mcart_core.profile import PlatformProfile

# Small banks keep fixtures readable; controller count matches the stock console.
TINY = PlatformProfile(
    code_bank_size=16,
    ram_bank_size=16,
    atlas_bank_size=64,
    controller_graphics_bank_size=8,
    controller_count=9,
    atlas_sprite_size=32,
)


@pytest.fixture
def tiny_profile():
    return TINY


@pytest.fixture
def v1_codec():
    return CartridgeCodec(StringIdLayout(), TINY)


@pytest.fixture
def v2_codec():
    return CartridgeCodec(NumericIdLayout(), TINY)


@pytest.fixture
def make_game():
    def _make(profile=TINY, **overrides):
        kwargs = dict(
            app_id="com.example.test",
            build_number=7,
            min_console_version=1,
            target_console_version=16,
            name="Test",
            version="1.0",
            author="Ray",
            main_code=bytes([1]) * profile.code_bank_size,
            code_banks=[bytes([2]) * profile.code_bank_size],
            atlases=[bytes([3]) * profile.atlas_bank_size, bytes([9]) * profile.atlas_bank_size],
            controller_graphics=[
                bytes([10 + i]) * profile.controller_graphics_bank_size for i in range(profile.controller_count)
            ],
        )
        kwargs.update(overrides)
        return GameFile.assemble(**kwargs)

    return _make
