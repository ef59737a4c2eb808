"""mcart - Manifest to Cartridge Compiler."""
from __future__ import annotations

from pathlib import Path

import click

from mcart_core.cartridge import CartridgeCodec, codec_for
from mcart_core.layouts import LAYOUTS
from mcart_core.profile import load_profile
from mcart_compile.layout import section_rows, write_layout
from mcart_compile.manifest import Manifest, build_game_file
from mcart_compile.package import bundle_from_cartridge, trust_publisher, write_bundle


def compile_manifest(manifest_path: Path, out_path: Path, codec: CartridgeCodec) -> None:
    """Compile a manifest and its payload files into a cartridge."""
    print(f"Compiling Manifest: {manifest_path}")

    # 1. Read manifest; payload paths are relative to it
    manifest = Manifest.from_file(manifest_path)
    game = build_game_file(manifest, manifest_path.parent, codec.layout, codec.profile)

    # 2. Encode (validates header and bank sizes) and write
    codec.write_path(game, out_path)

    h = game.header
    print(f"PASS: Cartridge generated at {out_path}")
    print(f"  Format: v{codec.layout.version} ({codec.layout.name})")
    print(f"  Game: {h.name} {h.version} (#{h.build_number}) by {h.author}")
    print(f"  Code banks: {h.code_bank_count}")
    print(f"  Atlas banks: {h.atlas_bank_count}")


def _fatal(e: Exception) -> None:
    # Fail closed, with a single-line reason.
    # Avoid stack traces in demos and in automated pipelines.
    print(f"FATAL: {e}".replace("\n", " "))
    raise SystemExit(1)


@click.group()
@click.option("--profile", "profile_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              envvar="MCART_PROFILE", help="JSON platform profile overrides")
@click.option("--format-version", type=click.Choice([str(v) for v in sorted(LAYOUTS)]), default="1",
              show_default=True, help="Cartridge format generation")
@click.pass_context
def main(ctx: click.Context, profile_path: Path | None, format_version: str) -> None:
    """Compile and package cartridges."""
    try:
        ctx.obj = codec_for(int(format_version), load_profile(profile_path))
    except Exception as e:
        _fatal(e)


@main.command("build")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
@click.pass_obj
def build_cmd(codec: CartridgeCodec, manifest: Path, out: Path) -> None:
    """Compile MANIFEST into the cartridge file OUT."""
    try:
        compile_manifest(manifest, out, codec)
    except Exception as e:
        _fatal(e)


@main.command("layout")
@click.argument("cartridge", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
@click.pass_obj
def layout_cmd(codec: CartridgeCodec, cartridge: Path, out: Path) -> None:
    """Write a section layout report for CARTRIDGE under OUT."""
    try:
        rows = section_rows(codec.read_path(cartridge), codec)
        target = write_layout(rows, out)
    except Exception as e:
        _fatal(e)
    print(f"PASS: Layout written to {target} ({len(rows)} sections)")


@main.command("bundle")
@click.argument("cartridge", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
@click.option("--description", default="", help="Store description")
@click.option("--age-rating", type=int, default=0, show_default=True)
@click.option("--notes", "special_notes", default="", help="Special notes shown before install")
@click.option("--image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--screenshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--signing-key", help="Hex ed25519 seed; defaults to the demo publisher key")
@click.pass_obj
def bundle_cmd(
    codec: CartridgeCodec,
    cartridge: Path,
    out: Path,
    description: str,
    age_rating: int,
    special_notes: str,
    image: Path | None,
    screenshot: Path | None,
    signing_key: str | None,
) -> None:
    """Package CARTRIDGE into a signed bundle directory OUT."""
    try:
        game = codec.read_path(cartridge)
        bundle = bundle_from_cartridge(
            game,
            codec,
            description=description,
            image=image.read_bytes() if image else b"",
            screenshot=screenshot.read_bytes() if screenshot else b"",
            age_rating=age_rating,
            special_notes=special_notes,
        )
        write_bundle(bundle, out, bytes.fromhex(signing_key) if signing_key else None)
    except Exception as e:
        _fatal(e)
    print(f"PASS: Bundle generated at {out}")


@main.command("trust")
@click.argument("bundle_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("store", type=click.Path(dir_okay=False, path_type=Path))
def trust_cmd(bundle_dir: Path, store: Path) -> None:
    """Add the publisher key of BUNDLE_DIR to the trust store STORE."""
    try:
        added = trust_publisher((bundle_dir / "sig/publisher.pub").read_bytes(), store)
    except Exception as e:
        _fatal(e)
    print(f"PASS: Publisher {'added to' if added else 'already in'} {store}")


if __name__ == "__main__":
    main()
