"""YAML document → :class:`~voboost_config.models.Config`.

The on-disk format is a YAML mapping with two sections::

    settings:
      language: en          # en | ru
      theme: auto           # auto | light | dark
      interface-shift-x: 0
      interface-shift-y: 0
    vehicle:
      fuel-mode: electric   # intellectual | electric | fuel | save
      drive-mode: comfort   # eco | comfort | sport | snow | outing | individual

Unknown keys are ignored and missing keys leave the field unset. Parsing
is all-or-nothing: any malformed structure, wrong value type or illegal
value raises and no partial model is returned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pydantic
import yaml

from voboost_config.exceptions import ConfigIoError, ConfigParseError, ConfigValidationError
from voboost_config.fields import field_spec
from voboost_config.models import Config
from voboost_config.validator import validate

_logger = logging.getLogger(__name__)

# pydantic error types that mean "right type, illegal value".
_VALUE_ERROR_TYPES = frozenset(
    {
        "enum",
        "greater_than",
        "greater_than_equal",
        "less_than",
        "less_than_equal",
    }
)


def _key_line(raw_text: str, loc: tuple[Any, ...]) -> int | None:
    """Return the 1-based line of the key addressed by *loc*, if it can be found."""
    try:
        node = yaml.compose(raw_text, Loader=yaml.SafeLoader)
    except yaml.YAMLError:
        return None
    line: int | None = None
    for part in loc:
        if not isinstance(node, yaml.MappingNode):
            break
        for key_node, value_node in node.value:
            if key_node.value == str(part):
                line = key_node.start_mark.line + 1
                node = value_node
                break
        else:
            break
    return line


def _is_value_error(error: dict[str, Any]) -> bool:
    if error["type"] not in _VALUE_ERROR_TYPES:
        return False
    value = error.get("input")
    if isinstance(value, bool):
        return False
    if error["type"] == "enum":
        return isinstance(value, str)
    return isinstance(value, int)


def _translate(exc: pydantic.ValidationError, raw_text: str) -> ConfigParseError | ConfigValidationError:
    error = exc.errors(include_url=False)[0]
    loc = tuple(error["loc"])
    location = ".".join(str(part) for part in loc) or "<document>"
    spec = field_spec(location)
    field = spec.path if spec is not None else location
    line = _key_line(raw_text, loc)

    where = f"{location} (line {line})" if line is not None else location
    message = f"{where}: {error['msg']}"
    if _is_value_error(error):
        return ConfigValidationError(message, field=field, value=error.get("input"))
    return ConfigParseError(message, line=line, field=field)


def parse(raw_text: str) -> Config:
    """Parse and validate a configuration document.

    Raises
    ------
    ConfigParseError
        Malformed YAML, a non-mapping document or section, or a value of
        the wrong type (e.g. text where a number is expected).
    ConfigValidationError
        A correctly typed value outside its legal set or range.
    """
    try:
        document = yaml.safe_load(raw_text)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        line = mark.line + 1 if mark is not None else None
        problem = exc.problem or exc.context or "invalid syntax"
        raise ConfigParseError(f"Malformed document at line {line}: {problem}", line=line) from exc
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Malformed document: {exc}") from exc

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ConfigParseError(
            f"Expected a mapping of sections at the top level, got {type(document).__name__}",
            line=1,
        )
    # Non-string keys can never name a section.
    document = {key: value for key, value in document.items() if isinstance(key, str)}

    try:
        config = Config.model_validate(document, by_alias=True, by_name=False)
    except pydantic.ValidationError as exc:
        raise _translate(exc, raw_text) from exc

    validate(config)
    return config


def parse_file(path: str | Path, *, encoding: str = "utf-8") -> Config:
    """Read *path* and :func:`parse` it.

    Raises :class:`ConfigIoError` when the file is missing, unreadable or
    not valid text in *encoding*.
    """
    path = Path(path)
    _logger.debug("Reading configuration from %s", path)
    try:
        raw_text = path.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise ConfigIoError(f"Configuration file not found: {path}", path=path) from exc
    except PermissionError as exc:
        raise ConfigIoError(f"Permission denied reading {path}", path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigIoError(f"Cannot read configuration file {path}: {exc}", path=path) from exc
    return parse(raw_text)
