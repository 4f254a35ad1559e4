from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from codegen.errors import ConfigError
from transforms.countries import Country

_DART_ESCAPES = {"\\": "\\\\", '"': '\\"', "$": "\\$", "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_PYTHON_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _needs_code_escape(ch: str) -> bool:
    cp = ord(ch)
    return cp < 0x20 or cp == 0x7F or 0xD800 <= cp <= 0xDFFF


def dart_string(value: str) -> str:
    out: list[str] = []
    for ch in value:
        if ch in _DART_ESCAPES:
            out.append(_DART_ESCAPES[ch])
        elif _needs_code_escape(ch):
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def python_string(value: str) -> str:
    out: list[str] = []
    for ch in value:
        if ch in _PYTHON_ESCAPES:
            out.append(_PYTHON_ESCAPES[ch])
        elif _needs_code_escape(ch):
            out.append(f"\\u{ord(ch):04x}" if ord(ch) > 0xFF else f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def render_country_dart(country: Country) -> str:
    return (
        "  Country(\n"
        f"    name: {dart_string(country.name)},\n"
        f"    flag: {dart_string(country.flag)},\n"
        f"    code: {dart_string(country.code)},\n"
        f"    dialCode: {dart_string(country.dial_code)},\n"
        "  )"
    )


def render_country_python(country: Country) -> str:
    return (
        "    Country(\n"
        f"        name={python_string(country.name)},\n"
        f"        flag={python_string(country.flag)},\n"
        f"        code={python_string(country.code)},\n"
        f"        dial_code={python_string(country.dial_code)},\n"
        "    )"
    )


def _dart_module(items: list[str], *, constant_name: str, import_line: str) -> str:
    # Separator only between records: an empty list stays `[]`.
    body = "[\n" + ",\n".join(items) + "\n]" if items else "[]"
    return f"{import_line}\n\nconst {constant_name} = {body};\n"


def _python_module(items: list[str], *, constant_name: str, import_line: str) -> str:
    # Every record keeps its trailing comma so a single record is still a tuple.
    body = "(\n" + "".join(f"{item},\n" for item in items) + ")" if items else "()"
    return f"{import_line}\n\n{constant_name}: tuple[Country, ...] = {body}\n"


@dataclass(frozen=True)
class Target:
    constant_name: str
    import_line: str
    default_output: str
    render_country: Callable[[Country], str]
    render_module: Callable[..., str]


TARGETS: dict[str, Target] = {
    "dart": Target(
        constant_name="countries",
        import_line="import 'country.dart';",
        default_output="generated_country_list.dart",
        render_country=render_country_dart,
        render_module=_dart_module,
    ),
    "python": Target(
        constant_name="COUNTRIES",
        import_line="from transforms.countries import Country",
        default_output="generated_country_list.py",
        render_country=render_country_python,
        render_module=_python_module,
    ),
}


def get_target(name: str) -> Target:
    try:
        return TARGETS[name]
    except KeyError:
        raise ConfigError(f"Unknown target {name!r} (expected one of: {', '.join(sorted(TARGETS))})") from None


def render_module(
    countries: Iterable[Country],
    *,
    target: str = "dart",
    constant_name: str | None = None,
    import_line: str | None = None,
) -> str:
    """
    Full output file text: import line, blank line, constant declaration.
    Records keep input order; fields are always name, flag, code, dial code.
    """
    t = get_target(target)
    items = [t.render_country(c) for c in countries]
    return t.render_module(
        items,
        constant_name=constant_name or t.constant_name,
        import_line=import_line or t.import_line,
    )
