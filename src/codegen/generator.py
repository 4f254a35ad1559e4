from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from codegen.errors import InputNotFoundError, ParseError
from codegen.render import render_module
from transforms.countries import transform_countries
from utils.config import GeneratorConfig, load_generator_config
from utils.logging import get_logger


def load_document(path: str | Path) -> Any:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputNotFoundError(p) from None
    except UnicodeDecodeError as exc:
        raise ParseError(f"Input is not UTF-8 text: {p}: {exc}") from exc

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in {p}: {exc}") from exc


def write_atomic(path: str | Path, text: str) -> None:
    """
    Replace `path` with `text` in one step.
    Readers see either the previous file or the complete new one.
    """
    p = Path(path)
    try:
        mode = stat.S_IMODE(p.stat().st_mode)
    except FileNotFoundError:
        mode = 0o644

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def generate(config: GeneratorConfig | None = None) -> int:
    """
    read -> transform -> write. Returns the number of records written.
    Nothing touches the output file until every record has been parsed and rendered.
    """
    cfg = config or load_generator_config()
    logger = get_logger(component="generator")

    document = load_document(cfg.input_path)
    countries = transform_countries(document)
    text = render_module(
        countries,
        target=cfg.target,
        constant_name=cfg.constant_name,
        import_line=cfg.import_line,
    )

    write_atomic(cfg.output_path, text)
    logger.info(
        "countries_generated",
        count=len(countries),
        target=cfg.target,
        input=str(cfg.input_path),
        output=str(cfg.output_path),
    )
    return len(countries)
