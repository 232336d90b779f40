"""
lexgen: Python code generation for AT Protocol Lexicons.

The package turns Lexicon JSON documents into Python source:

* ``lexicon`` loads a document and compiles its ``defs`` into the value
  objects of ``ir``, resolving field types through ``types``.
* ``generator`` renders those objects through the Jinja2 templates in
  ``templates`` and writes one directory of modules per document.
* ``tid`` implements the sortable timestamp identifiers used as record keys.
* ``cli`` ties everything together as the ``lexgen`` command.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - unreadable source tree
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    return match.group(1) if match else None


try:  # pragma: no cover - installed distribution
    __version__ = _metadata.version("lexgen")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "1.0.0"

from .errors import InvalidTIDError, LexgenError, MalformedDocumentError  # noqa: E402
from .generator import GenerationReport, build_code, generate  # noqa: E402
from .lexicon import load, parse  # noqa: E402
from .tid import TID  # noqa: E402

__all__ = [
    "GenerationReport",
    "InvalidTIDError",
    "LexgenError",
    "MalformedDocumentError",
    "TID",
    "__version__",
    "build_code",
    "generate",
    "load",
    "parse",
]
