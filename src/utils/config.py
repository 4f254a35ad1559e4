from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import os
import yaml

from codegen.errors import ConfigError
from codegen.render import get_target

DEFAULT_INPUT = "countries.json"
DEFAULT_TARGET = "dart"


@dataclass(frozen=True)
class GeneratorConfig:
    input_path: Path = Path(DEFAULT_INPUT)
    output_path: Path = Path("generated_country_list.dart")
    target: str = DEFAULT_TARGET
    # None -> the target's own default.
    constant_name: str | None = None
    import_line: str | None = None


def _project_root() -> Path:
    # Resolve from this file: .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def load_generator_config(path: str | Path | None = None) -> GeneratorConfig:
    """
    Load generator config from YAML.

    Precedence:
    - explicit `path`
    - env `COUNTRY_CODEGEN_CONFIG`
    - project default `config/generator.yaml`

    A missing project default means built-in defaults; a missing explicit file is an error.
    Relative input/output paths are left relative (resolved against the CWD at run time).
    """
    explicit = path or os.getenv("COUNTRY_CODEGEN_CONFIG")
    cfg_path = Path(explicit) if explicit else _project_root() / "config" / "generator.yaml"
    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {cfg_path}")
        return GeneratorConfig()

    try:
        cfg = load_yaml(cfg_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc

    gen = cfg.get("generator") or {}
    if not isinstance(gen, dict):
        raise ConfigError(f"generator must be a mapping in {cfg_path}")

    keys = ("input_path", "output_path", "target", "constant_name", "import_line")
    bad = [f"generator.{k}" for k in keys if gen.get(k) is not None and not isinstance(gen[k], str)]
    if bad:
        raise ConfigError(f"Expected string values for {', '.join(bad)} in {cfg_path}")

    constant_name = gen.get("constant_name")
    if constant_name and not constant_name.isidentifier():
        raise ConfigError(f"generator.constant_name must be an identifier (got {constant_name!r}) in {cfg_path}")

    target_name = gen.get("target") or DEFAULT_TARGET
    target = get_target(target_name)

    return GeneratorConfig(
        input_path=Path(gen.get("input_path") or DEFAULT_INPUT),
        output_path=Path(gen.get("output_path") or target.default_output),
        target=target_name,
        constant_name=constant_name or None,
        import_line=gen.get("import_line") or None,
    )


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping in {p}")
    return data
