import json
import warnings
from pathlib import Path

from mcart_core.bundle import Bundle
from mcart_core.cartridge import CartridgeCodec
from mcart_core.errors import CartridgeError, InvalidHeader
from mcart_core.palette import read_palette
from .const import ERRORS
from .crypto import verify_ed25519

TRUST_STORE = Path("governance") / "trust_store.json"


def _fail(errors: list) -> dict:
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}


def _error(e: CartridgeError) -> dict:
    err = {"code": e.code, "message": ERRORS.get(e.code, str(e)), "detail": str(e)}
    if isinstance(e, InvalidHeader):
        err["reasons"] = e.reasons
    return err


def _io_error(e: OSError, path: Path) -> dict:
    return {"code": "E_IO", "message": ERRORS["E_IO"], "path": str(path), "detail": str(e)}


def find_trust_store(start: Path) -> Path | None:
    # Bundles may live anywhere on disk; walk upward looking for a trust store.
    cur = start.resolve()
    for p in (cur,) + tuple(cur.parents):
        if (p / TRUST_STORE).exists():
            return p / TRUST_STORE
    return None


def load_trusted_publishers(path: Path | None) -> set[str]:
    if path is None:
        return set()
    trust = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(trust, dict):
        raise ValueError("trust store must be a JSON object")
    return set([x.lower() for x in trust.get("trusted_publishers", [])])


def verify_cartridge(path: Path, codec: CartridgeCodec | None = None) -> dict:
    codec = codec or CartridgeCodec()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            game = codec.read_path(path)
        except CartridgeError as e:
            return _fail([_error(e)])
        except OSError as e:
            return _fail([_io_error(e, path)])

    h = game.header
    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "warnings": [str(w.message) for w in caught],
        "cartridge": {
            "format_version": codec.layout.version,
            "id": h.app_id,
            "build": h.build_number,
            "name": h.name,
            "version": h.version,
            "author": h.author,
            "min_console_version": h.min_console_version,
            "target_console_version": h.target_console_version,
            "code_banks": h.code_bank_count,
            "ram_banks": h.ram_bank_count,
            "atlas_banks": h.atlas_bank_count,
            "controller_graphics": len(game.controller_graphics),
        },
    }


def verify_palette(path: Path) -> dict:
    try:
        palette = read_palette(path)
    except CartridgeError as e:
        return _fail([_error(e)])
    except OSError as e:
        return _fail([_io_error(e, path)])
    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "palette": {"file": palette.filename, "colors": [list(c) for c in palette.colors]},
    }


def verify_bundle(bundle_dir: Path, codec: CartridgeCodec | None = None, trust_store: Path | None = None) -> dict:
    """Check a bundle directory: signature, payload, cartridge and publisher trust.

    Without an explicit ``trust_store`` the nearest ``governance/trust_store.json``
    above the bundle is used; with none at all, no publisher is trusted.
    """
    codec = codec or CartridgeCodec()
    bundle_path = bundle_dir / "bundle.json"
    sig_path = bundle_dir / "sig" / "bundle.sig"
    pub_path = bundle_dir / "sig" / "publisher.pub"

    for p in [bundle_path, sig_path, pub_path]:
        if not p.exists():
            return _fail([{"code": "E_NOT_FOUND", "message": ERRORS["E_NOT_FOUND"], "path": str(p)}])

    payload = bundle_path.read_bytes()
    pub = pub_path.read_bytes()
    if not verify_ed25519(pub, payload, sig_path.read_bytes()):
        return _fail([{"code": "E_SIG_INVALID", "message": ERRORS["E_SIG_INVALID"]}])

    try:
        bundle = Bundle.from_bytes(payload)
    except (ValueError, UnicodeDecodeError) as e:
        return _fail([{"code": "E_BUNDLE_JSON", "message": ERRORS["E_BUNDLE_JSON"], "detail": str(e)}])

    try:
        game = codec.read(bundle.file)
    except CartridgeError as e:
        return _fail([_error(e)])

    store = trust_store or find_trust_store(bundle_dir)
    try:
        trusted = load_trusted_publishers(store)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        return _fail([
            {"code": "E_TRUST_STORE", "message": ERRORS["E_TRUST_STORE"], "path": str(store), "detail": str(e)}
        ])
    pub_hex = pub.hex().lower()
    if pub_hex not in trusted:
        return _fail([{"code": "E_POLICY_TRUST", "message": ERRORS["E_POLICY_TRUST"], "publisher_pub": pub_hex}])

    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "bundle": {
            "name": bundle.name,
            "id": bundle.id,
            "version": bundle.version,
            "build": game.header.build_number,
            "publisher_pub": pub_hex,
        },
    }


def report_json(result: dict) -> str:
    return json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
