"""
Orchestrates Lexicon code generation.

``generate`` expands path patterns, loads every document and hands the
compiled lexicons to ``build_code``, which writes the shared runtime files
once and then one directory of artifacts per document::

    <output>/__init__.py
    <output>/runtime.py
    <output>/tid.py
    <output>/app/bsky/feed/post/schema.py
    <output>/app/bsky/feed/getFeed/xrpc.py
"""

from __future__ import annotations

import glob
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union, assert_never

from .codegen.names import python_name
from .errors import MalformedDocumentError
from .ir import CompiledDefinition, Lexicon, ProcedureDef, QueryDef, SchemaDef, StructDef
from .lexicon import load
from .templates import CodeTemplateEngine, get_default_engine

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

COMMON_FILES: Tuple[str, ...] = ("__init__.py", "runtime.py", "tid.py")

STRUCTS_FILE = "structs.py"
SCHEMA_FILE = "schema.py"
XRPC_FILE = "xrpc.py"

# Emission order inside a document directory.
_ARTIFACT_ORDER = (STRUCTS_FILE, SCHEMA_FILE, XRPC_FILE)


@dataclass
class GenerationReport:
    """Outcome of one generation run."""

    written: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def default_package(output: PathLike) -> str:
    """Import name of the generated package: the output directory's name."""
    return python_name(Path(output).resolve().name)


def read_lexicon(path: PathLike) -> Lexicon:
    """Read one Lexicon file and compile it."""
    data = Path(path).read_bytes()
    try:
        return load(data)
    except MalformedDocumentError as exc:
        if exc.path is None:
            exc.path = str(path)
        raise


def expand(pattern: PathLike) -> List[Path]:
    """Expand a glob pattern (``**`` is recursive) into sorted file paths."""
    matches = glob.glob(str(pattern), recursive=True)
    return sorted(Path(match) for match in matches if Path(match).is_file())


def read_lexicons(
    pattern: PathLike,
    report: Optional[GenerationReport] = None,
) -> List[Lexicon]:
    """
    Read every Lexicon matching ``pattern``.

    Malformed documents are logged and, when a report is given, recorded in
    ``report.failed``; the remaining documents are still returned. Without a
    report the first malformed document raises.
    """
    lexicons: List[Lexicon] = []
    for path in expand(pattern):
        logger.debug("Reading %s", path)
        try:
            lexicons.append(read_lexicon(path))
        except MalformedDocumentError as exc:
            if report is None:
                raise
            logger.error("Skipping %s: %s", path, exc.format())
            report.failed.append((str(path), exc.format()))
    return lexicons


def artifacts_for(
    lexicon: Lexicon,
    *,
    package: str,
    engine: Optional[CodeTemplateEngine] = None,
) -> Dict[str, str]:
    """
    Render the artifact files for one document without touching the disk.

    Returns:
        File name to source text, in emission order. Empty when the
        document has no recognized definitions.
    """
    engine = engine or get_default_engine()
    definitions = lexicon.definitions
    bindings = {"lexicon": lexicon, "package": package}
    templates: Dict[str, Dict[str, object]] = {}

    definition: CompiledDefinition
    for definition in definitions:
        if isinstance(definition, StructDef):
            templates[STRUCTS_FILE] = bindings
        elif isinstance(definition, SchemaDef):
            templates[SCHEMA_FILE] = bindings
        elif isinstance(definition, (QueryDef, ProcedureDef)):
            templates[XRPC_FILE] = {**bindings, "operations": definitions.operations}
        else:
            assert_never(definition)

    return {
        name: engine.render(f"{name}.j2", templates[name])
        for name in _ARTIFACT_ORDER
        if name in templates
    }


def lexicon_dir(lexicon: Lexicon, output: PathLike) -> Path:
    return Path(output).joinpath(*lexicon.path_segments)


def write_common_files(
    output: PathLike,
    *,
    package: Optional[str] = None,
    engine: Optional[CodeTemplateEngine] = None,
) -> List[Path]:
    """Write the shared runtime modules at the output root."""
    engine = engine or get_default_engine()
    root = Path(output)
    root.mkdir(parents=True, exist_ok=True)
    package = package or default_package(root)
    written = []
    for name in COMMON_FILES:
        path = root / name
        path.write_text(
            engine.render(f"common/{name}.j2", {"package": package}),
            encoding="utf-8",
        )
        written.append(path)
    return written


def write_lexicon(
    lexicon: Lexicon,
    output: PathLike,
    *,
    package: Optional[str] = None,
    engine: Optional[CodeTemplateEngine] = None,
) -> List[Path]:
    """
    Write one document's artifacts under ``<output>/<nsid as path>/``.

    Existing files are overwritten. Nothing is created for a document with
    no recognized definitions.
    """
    artifacts = artifacts_for(
        lexicon,
        package=package or default_package(output),
        engine=engine,
    )
    if not artifacts:
        return []
    dest = lexicon_dir(lexicon, output)
    dest.mkdir(parents=True, exist_ok=True)
    written = []
    for name, code in artifacts.items():
        path = dest / name
        path.write_text(code, encoding="utf-8")
        written.append(path)
    return written


def build_code(
    lexicons: Sequence[Lexicon],
    output: PathLike,
    *,
    package: Optional[str] = None,
    engine: Optional[CodeTemplateEngine] = None,
    jobs: int = 1,
    report: Optional[GenerationReport] = None,
) -> GenerationReport:
    """
    Generate Python sources for ``lexicons`` into ``output``.

    Args:
        lexicons: Compiled documents
        output: Root directory of the generated package
        package: Import name the generated modules use for the shared
            runtime (default: the output directory's name)
        engine: Template engine (default: the packaged templates)
        jobs: Number of documents emitted concurrently
        report: Report to extend (default: a new one)

    Returns:
        The generation report

    Raises:
        OSError: If a file cannot be written
    """
    report = report if report is not None else GenerationReport()
    if not lexicons:
        logger.info("No lexicons found in input files.")
        return report

    engine = engine or get_default_engine()
    package = package or default_package(output)

    logger.info("Generating common modules...")
    report.written.extend(write_common_files(output, package=package, engine=engine))

    emittable = []
    for lexicon in lexicons:
        if lexicon.definitions.is_empty():
            logger.info("%s has no recognized definitions; nothing to generate", lexicon.nsid)
            report.skipped.append(lexicon.nsid)
        else:
            emittable.append(lexicon)

    logger.info("Generating %d lexicons...", len(emittable))

    def emit(lexicon: Lexicon) -> List[Path]:
        logger.debug("Writing %s", lexicon.nsid)
        return write_lexicon(lexicon, output, package=package, engine=engine)

    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = list(pool.map(emit, emittable))
    else:
        results = [emit(lexicon) for lexicon in emittable]

    for paths in results:
        report.written.extend(paths)
    return report


def generate(
    patterns: Union[PathLike, Iterable[PathLike]],
    output: PathLike,
    *,
    package: Optional[str] = None,
    engine: Optional[CodeTemplateEngine] = None,
    jobs: int = 1,
) -> GenerationReport:
    """Read every Lexicon matching ``patterns`` and generate code for them."""
    if isinstance(patterns, (str, Path)):
        patterns = [patterns]
    report = GenerationReport()
    lexicons: List[Lexicon] = []
    for pattern in patterns:
        logger.info("-> %s", pattern)
        lexicons.extend(read_lexicons(pattern, report))
    return build_code(
        lexicons,
        output,
        package=package,
        engine=engine,
        jobs=jobs,
        report=report,
    )


__all__ = [
    "COMMON_FILES",
    "GenerationReport",
    "artifacts_for",
    "build_code",
    "default_package",
    "expand",
    "generate",
    "lexicon_dir",
    "read_lexicon",
    "read_lexicons",
    "write_common_files",
    "write_lexicon",
]
