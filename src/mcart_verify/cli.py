from pathlib import Path
import click
from mcart_core.cartridge import codec_for
from mcart_core.errors import ProfileError
from mcart_core.layouts import LAYOUTS
from mcart_core.profile import load_profile
from .logic import report_json, verify_bundle, verify_cartridge, verify_palette

@click.group()
@click.option("--profile", "profile_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              envvar="MCART_PROFILE", help="JSON platform profile overrides")
@click.option("--format-version", type=click.Choice([str(v) for v in sorted(LAYOUTS)]), default="1",
              show_default=True, help="Cartridge format generation")
@click.pass_context
def main(ctx, profile_path, format_version):
    try:
        profile = load_profile(profile_path)
    except ProfileError as e:
        raise click.UsageError(str(e))
    ctx.obj = codec_for(int(format_version), profile)

@main.command("cartridge")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def cartridge_cmd(codec, path: Path):
    click.echo(report_json(verify_cartridge(path, codec)))

@main.command("palette")
@click.argument("path", type=click.Path(path_type=Path))
def palette_cmd(path: Path):
    click.echo(report_json(verify_palette(path)))

@main.command("bundle")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--trust-store", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              envvar="MCART_TRUST_STORE", help="JSON trust store; defaults to the nearest governance/trust_store.json")
@click.pass_obj
def bundle_cmd(codec, path: Path, trust_store):
    click.echo(report_json(verify_bundle(path, codec, trust_store)))

if __name__ == "__main__":
    main()
