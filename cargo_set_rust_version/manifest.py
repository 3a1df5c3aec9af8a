"""Reading, editing and writing ``Cargo.toml`` files.

Documents are kept as :mod:`tomlkit` trees so untouched keys, comments and
whitespace survive a load/serialize cycle byte for byte.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit  # type: ignore
from tomlkit import TOMLDocument  # type: ignore
from tomlkit.exceptions import TOMLKitError  # type: ignore

from cargo_set_rust_version.errors import ManifestIOError, NotFoundError, ParseError

MANIFEST_NAME = "Cargo.toml"


@dataclass
class Manifest:
    path: Path
    doc: TOMLDocument


def locate_root(start_dir: Path) -> Path:
    directory = start_dir.resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    raise NotFoundError(f"could not find {MANIFEST_NAME} in {directory} or any parent directory")


def load(path: Path) -> Manifest:
    try:
        # newline="" keeps CRLF files intact on the way back out
        with path.open(encoding="utf-8", newline="") as f:
            text = f.read()
    except FileNotFoundError as exc:
        raise NotFoundError(f"{path}: manifest does not exist") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestIOError(path, f"reading: {exc}") from exc

    try:
        doc = tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ParseError(path, f"loading manifest: {exc}") from exc
    return Manifest(path=path, doc=doc)


def get_table(doc: TOMLDocument, table: str) -> Any:
    """Return the table at dotted path ``table`` or ``None``."""
    node: Any = doc
    for part in table.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, dict) else None


def get_field(doc: TOMLDocument, key: str, table: str = "package") -> str | None:
    container = get_table(doc, table)
    if container is None:
        return None
    value = container.get(key)
    if not isinstance(value, str):
        return None
    return str(value)


def set_field(doc: TOMLDocument, key: str, value: str, table: str = "package") -> None:
    container: Any = doc
    for part in table.split("."):
        if part not in container:
            container[part] = tomlkit.table()
        container = container[part]
    # tomlkit carries the old item's indent and trailing comment over to the new one
    container[key] = value


def serialize(doc: TOMLDocument) -> str:
    return tomlkit.dumps(doc)


def write(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8", newline="")
    except OSError as exc:
        raise ManifestIOError(path, f"writing file: {exc}") from exc
