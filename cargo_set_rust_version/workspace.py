import logging
from pathlib import Path

from cargo_set_rust_version.errors import InvalidMemberError, ParseError
from cargo_set_rust_version.manifest import MANIFEST_NAME, Manifest, get_table

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")


def _is_glob(pattern: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in pattern)


def _string_list(root: Manifest, key: str) -> list[str]:
    workspace = get_table(root.doc, "workspace")
    if workspace is None or key not in workspace:
        return []
    entries = workspace[key]
    if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
        raise ParseError(root.path, f"workspace.{key} must be an array of strings")
    return [str(e) for e in entries]


def is_workspace(root: Manifest) -> bool:
    return get_table(root.doc, "workspace") is not None


def members(root: Manifest) -> list[Path]:
    """Resolve ``workspace.members`` of ``root`` to member manifest paths.

    Glob entries follow Cargo: directories without a manifest are skipped, but
    the pattern as a whole must match at least one.
    """
    root_dir = root.path.parent
    excluded = {(root_dir / entry).resolve() for entry in _string_list(root, "exclude")}
    skip = {root.path.resolve()}

    found: list[Path] = []
    for entry in _string_list(root, "members"):
        if _is_glob(entry):
            candidates = [
                d / MANIFEST_NAME for d in sorted(root_dir.glob(entry)) if (d / MANIFEST_NAME).is_file()
            ]
            logger.debug("member pattern %r matched %d manifest(s)", entry, len(candidates))
            if not candidates:
                raise InvalidMemberError(root.path, entry)
        else:
            candidate = root_dir / entry / MANIFEST_NAME
            if not candidate.is_file():
                raise InvalidMemberError(root.path, entry)
            candidates = [candidate]

        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved in skip or resolved.parent in excluded:
                continue
            skip.add(resolved)
            found.append(candidate)
    return found
