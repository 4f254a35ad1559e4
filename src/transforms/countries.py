from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from codegen.errors import MissingFieldError, ParseError

# Input keys, in the order every renderer emits them.
REQUIRED_FIELDS: tuple[str, ...] = ("name", "flag", "code", "dial_code")


class Country(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    name: str
    flag: str
    code: str
    dial_code: str


def parse_country(item: Any, *, index: int | None = None) -> Country:
    """
    One input mapping -> Country.

    Values are copied verbatim. Absent and null keys are both reported as
    missing; extra keys are ignored.
    """
    where = "record" if index is None else f"record {index}"
    if not isinstance(item, dict):
        raise ParseError(f"{where} is not an object (got {type(item).__name__})")

    missing = tuple(f for f in REQUIRED_FIELDS if item.get(f) is None)
    if missing:
        raise MissingFieldError(missing, index=index)

    try:
        return Country.model_validate({f: item[f] for f in REQUIRED_FIELDS})
    except ValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(p) for p in err.get("loc") or ())
        raise ParseError(f"{where} field {field}: {err.get('msg')}") from exc


def transform_countries(document: Any) -> list[Country]:
    """
    RAW document -> ordered list of Country values.
    Top level must be a JSON array; order is preserved, nothing is deduplicated.
    """
    if not isinstance(document, list):
        raise ParseError(f"Top-level document must be an array (got {type(document).__name__})")

    return [parse_country(item, index=i) for i, item in enumerate(document)]
