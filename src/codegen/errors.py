from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    pass


class InputNotFoundError(GeneratorError):
    def __init__(self, path: str | Path) -> None:
        super().__init__(f"Input document not found: {path}")
        self.path = Path(path)


class ParseError(GeneratorError):
    pass


class MissingFieldError(ParseError):
    def __init__(self, fields: tuple[str, ...], index: int | None = None) -> None:
        where = "record" if index is None else f"record {index}"
        super().__init__(f"{where} missing required field(s): {', '.join(fields)}")
        self.fields = fields
        self.index = index


class ConfigError(GeneratorError):
    pass
