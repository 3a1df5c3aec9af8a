from dataclasses import dataclass

from tomlkit import TOMLDocument  # type: ignore

from cargo_set_rust_version.manifest import get_field, get_table, set_field

FIELD = "rust-version"


@dataclass(frozen=True)
class Update:
    table: str
    previous: str | None
    current: str | None
    inherited: bool = False

    @property
    def changed(self) -> bool:
        return not self.inherited and self.previous != self.current


def _inherits(container) -> bool:
    value = container.get(FIELD)
    return isinstance(value, dict) and value.get("workspace") is True


def _update(doc: TOMLDocument, table: str, version: str) -> Update:
    previous = get_field(doc, FIELD, table)
    if previous != version:
        set_field(doc, FIELD, version, table)
    return Update(table=table, previous=previous, current=version)


def apply(doc: TOMLDocument, version: str) -> list[Update]:
    """Set ``rust-version`` in ``doc`` to ``version``.

    ``[package]`` gets the key whether or not it had one. ``[workspace.package]``
    is only touched when it already declares the key, since members opt in to
    inheriting it. An empty list means the document has neither.
    """
    updates = []

    workspace_package = get_table(doc, "workspace.package")
    if workspace_package is not None and FIELD in workspace_package and not _inherits(workspace_package):
        updates.append(_update(doc, "workspace.package", version))

    package = get_table(doc, "package")
    if package is not None:
        if _inherits(package):
            updates.append(Update(table="package", previous=None, current=None, inherited=True))
        else:
            updates.append(_update(doc, "package", version))

    return updates
