import json

import pytest

from mcart_core.errors import ProfileError
from mcart_core.profile import DEFAULT_PROFILE, PlatformProfile, load_profile


def test_default():
    assert load_profile(None) is DEFAULT_PROFILE
    assert DEFAULT_PROFILE.controller_count == 9


def test_overrides(tmp_path):
    p = tmp_path / "profile.json"
    p.write_text(json.dumps({"code_bank_size": 64, "controller_count": 4}), encoding="utf-8")
    profile = load_profile(p)
    assert profile.code_bank_size == 64
    assert profile.controller_count == 4
    assert profile.atlas_bank_size == DEFAULT_PROFILE.atlas_bank_size


@pytest.mark.parametrize("body", ['{"bank": 1}', '{"code_bank_size": 0}', '{"code_bank_size": "8"}', "[1]", "{"])
def test_bad_profiles(tmp_path, body):
    p = tmp_path / "profile.json"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ProfileError):
        load_profile(p)


def test_direct_construction_is_checked():
    with pytest.raises(ProfileError):
        PlatformProfile(atlas_sprite_size=-1)
