"""Bundle packaging and signing."""
from __future__ import annotations

import json
from pathlib import Path

from nacl.signing import SigningKey

from mcart_core.bundle import Bundle
from mcart_core.cartridge import CartridgeCodec, GameFile

# Deterministic demo publisher key.
# Bundles signed with it verify out-of-the-box; production keys come from the caller.
CANONICAL_TEST_KEY = bytes.fromhex(
    "a665a45920422f9d417e4867efdc4fb8a04a1f3fff1fa07e998e86f7f7a27ae3"
)


def bundle_from_cartridge(
    game: GameFile,
    codec: CartridgeCodec,
    description: str = "",
    image: bytes = b"",
    screenshot: bytes = b"",
    age_rating: int = 0,
    special_notes: str = "",
) -> Bundle:
    h = game.header
    return Bundle(
        name=h.name,
        id=str(h.app_id),
        version=h.version,
        description=description,
        image=image,
        screenshot=screenshot,
        age_rating=age_rating,
        special_notes=special_notes,
        file=codec.write(game),
    )


def sign_bundle(bundle: Bundle, seed: bytes) -> tuple[bytes, bytes]:
    """Return ``(signature, public_key)`` over the bundle's canonical bytes."""
    sk = SigningKey(seed)
    return sk.sign(bundle.to_bytes()).signature, bytes(sk.verify_key)


def write_bundle(bundle: Bundle, out_path: Path, seed: bytes | None = None) -> None:
    signature, public_key = sign_bundle(bundle, CANONICAL_TEST_KEY if seed is None else seed)

    out_path.mkdir(parents=True, exist_ok=True)
    (out_path / "sig").mkdir(exist_ok=True)

    (out_path / "bundle.json").write_bytes(bundle.to_bytes())
    (out_path / "sig/bundle.sig").write_bytes(signature)
    (out_path / "sig/publisher.pub").write_bytes(public_key)


def trust_publisher(public_key: bytes, store_path: Path) -> bool:
    """Add ``public_key`` to a trust store, creating it if needed.

    Returns False when the key was already trusted.
    """
    if store_path.exists():
        trust = json.loads(store_path.read_text(encoding="utf-8"))
    else:
        trust = {"trusted_publishers": []}
    keys = trust.setdefault("trusted_publishers", [])
    pub_hex = public_key.hex().lower()
    if pub_hex in keys:
        return False
    keys.append(pub_hex)
    store_path.parent.mkdir(parents=True, exist_ok=True)
    store_path.write_text(json.dumps(trust, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return True
