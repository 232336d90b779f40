"""Project configuration support for the lexgen CLI."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

DEFAULT_OUTPUT = Path("lib/atproto")

CONFIG_FILES = ("lexgen.toml", ".lexgenrc", "pyproject.toml")


@dataclass
class GeneratorConfig:
    """Resolved settings for one ``lexgen generate`` run."""

    inputs: List[str] = field(default_factory=list)
    output: Path = DEFAULT_OUTPUT
    package: Optional[str] = None
    delete: bool = False
    jobs: int = 1
    check_refs: bool = False
    source: Optional[Path] = None


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _read_section(path: Path) -> Optional[Dict[str, Any]]:
    """Settings stored in ``path``; ``None`` when a pyproject has no ``[tool.lexgen]``."""
    if path.name == "pyproject.toml":
        section = _read_toml_config(path).get("tool", {}).get("lexgen")
        return section if isinstance(section, dict) else None
    if path.suffix == ".toml":
        return _read_toml_config(path)
    return _read_json_config(path)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_FILES:
        path = root / candidate
        if not path.exists():
            continue
        if candidate == "pyproject.toml" and _read_section(path) is None:
            continue
        return path
    return None


def _parse_inputs(raw: Any) -> List[str]:
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    return []


def _parse_config(data: Dict[str, Any], root: Path) -> GeneratorConfig:
    inputs = [
        entry if Path(entry).is_absolute() else str(root / entry)
        for entry in _parse_inputs(data.get("inputs"))
    ]
    output = Path(data.get("output") or DEFAULT_OUTPUT)
    if not output.is_absolute():
        output = root / output
    package = data.get("package")
    return GeneratorConfig(
        inputs=inputs,
        output=output,
        package=str(package) if package else None,
        delete=bool(data.get("delete", False)),
        jobs=int(data.get("jobs") or 1),
        check_refs=bool(data.get("check_refs", False)),
    )


def load_config(root: Path, explicit: Optional[Path] = None) -> GeneratorConfig:
    """
    Load generator settings for the project at ``root``.

    Looks for ``lexgen.toml``, ``.lexgenrc`` (JSON) and a ``[tool.lexgen]``
    table in ``pyproject.toml``, in that order. Relative paths are resolved
    against the directory of the file they come from.

    Raises:
        FileNotFoundError: If ``explicit`` is given but does not exist
    """
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        if explicit is not None:
            raise FileNotFoundError(f"Config file not found: {explicit}")
        return GeneratorConfig()
    data = _read_section(config_path) or {}
    config = _parse_config(data, config_path.resolve().parent)
    config.source = config_path
    return config


def apply_cli_overrides(
    config: GeneratorConfig,
    *,
    inputs: Optional[Sequence[str]] = None,
    output: Optional[str] = None,
    package: Optional[str] = None,
    delete: Optional[bool] = None,
    jobs: Optional[int] = None,
    check_refs: Optional[bool] = None,
) -> GeneratorConfig:
    """Return ``config`` with every flag given on the command line applied."""
    return replace(
        config,
        inputs=list(inputs) if inputs else list(config.inputs),
        output=Path(output) if output else config.output,
        package=package or config.package,
        delete=config.delete if delete is None else delete,
        jobs=config.jobs if jobs is None else jobs,
        check_refs=config.check_refs if check_refs is None else check_refs,
    )


__all__ = [
    "CONFIG_FILES",
    "DEFAULT_OUTPUT",
    "GeneratorConfig",
    "apply_cli_overrides",
    "load_config",
    "locate_config_file",
]
