"""
cargo-set-rust-version CLI.

Installed as a Cargo subcommand: ``cargo set-rust-version`` runs this
executable with ``set-rust-version`` as its first argument.
"""

import logging
from pathlib import Path

import click

from cargo_set_rust_version import __version__
from cargo_set_rust_version.errors import SetRustVersionError
from cargo_set_rust_version.manifest import Manifest, load, locate_root, serialize, write
from cargo_set_rust_version.resolver import DEFAULT_CHANNEL, DEFAULT_DIST_SERVER, resolve_latest_stable
from cargo_set_rust_version.updater import apply
from cargo_set_rust_version.workspace import is_workspace, members


def _read(path: Path) -> Manifest:
    click.echo(f"{path}: reading")
    return load(path)


def _set_version(manifest: Manifest, version: str, dry_run: bool, workspace: bool = False) -> None:
    path = manifest.path
    updates = apply(manifest.doc, version)
    if not updates and not workspace:
        click.echo(f"{path}: no [package] section, skipping")

    for update in updates:
        field = "rust-version" if update.table == "package" else f"{update.table}.rust-version"
        if update.inherited:
            click.echo(f"{path}: rust-version inherited from workspace")
        elif update.changed:
            click.echo(f"{path}: updating {field}: {update.previous or '<not set>'} => {update.current}")
        else:
            click.echo(f"{path}: up-to-date {field}: {update.current}")

    if any(update.changed for update in updates) and not dry_run:
        write(path, serialize(manifest.doc))


def run(manifest: Path | None, channel: str, dist_server: str, dry_run: bool = False) -> None:
    click.echo(f"channel: {channel}")
    version = resolve_latest_stable(channel, dist_server)
    click.echo(f"latest rust-version: {version}")

    root = _read(manifest if manifest is not None else locate_root(Path.cwd()))
    workspace = is_workspace(root)
    if workspace:
        click.echo(f"{root.path}: found workspace")
    # expand before writing anything so a bad member aborts with no changes
    member_paths = members(root)

    _set_version(root, version, dry_run, workspace=workspace)
    for member_path in member_paths:
        _set_version(_read(member_path), version, dry_run)

    if dry_run:
        click.echo("dry run: no files written")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
def main() -> None:
    """Set rust-version in Cargo.toml to the latest toolchain release."""


@main.command("set-rust-version")
@click.option(
    "--manifest",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Cargo.toml file path (default: nearest Cargo.toml upward from the current directory)",
)
@click.option(
    "--channel",
    default=DEFAULT_CHANNEL,
    show_default=True,
    envvar="CARGO_SET_RUST_VERSION_CHANNEL",
    help="Channel to use latest version of (stable, beta, nightly, or a release like 1.62)",
)
@click.option(
    "--dist-server",
    default=DEFAULT_DIST_SERVER,
    show_default=True,
    envvar="RUSTUP_DIST_SERVER",
    help="Server hosting the channel manifests",
)
@click.option("--dry-run", is_flag=True, help="Report changes without writing any file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def set_rust_version(
    manifest: Path | None,
    channel: str,
    dist_server: str,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Update rust-version in the manifest and all workspace members."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        run(manifest, channel, dist_server, dry_run=dry_run)
    except SetRustVersionError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
