from pathlib import Path


class SetRustVersionError(Exception):
    pass


class ResolutionError(SetRustVersionError):
    pass


class NotFoundError(SetRustVersionError):
    pass


class ParseError(SetRustVersionError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class InvalidMemberError(SetRustVersionError):
    def __init__(self, root: Path, member: str) -> None:
        super().__init__(f"{root}: workspace member {member!r} has no Cargo.toml")
        self.root = root
        self.member = member


class ManifestIOError(SetRustVersionError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
