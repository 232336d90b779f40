"""
Optional referential-integrity pass.

Compilation resolves references purely by naming convention, so a document
can point at an NSID or a definition that was never compiled. This pass
cross-checks every reference against the set of loaded documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Set

from .ir import Lexicon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DanglingReference:
    """A reference whose target is not among the loaded documents."""

    source: str
    target: str
    reason: str

    def format(self) -> str:
        return f"{self.source} -> {self.target}: {self.reason}"


def check_references(lexicons: Iterable[Lexicon]) -> List[DanglingReference]:
    """
    Return every reference that does not resolve to a loaded definition.

    A reference is dangling when its NSID was not loaded (``unknown
    document``) or the document exists but has no such ``defs`` entry
    (``unknown definition``). Each (source, target) pair is reported once.
    """
    lexicons = list(lexicons)
    known = {lexicon.nsid: set(lexicon.def_names) for lexicon in lexicons}
    dangling: List[DanglingReference] = []
    seen: Set[tuple] = set()
    for lexicon in lexicons:
        for reference in lexicon.references:
            if (lexicon.nsid, reference) in seen:
                continue
            seen.add((lexicon.nsid, reference))
            target, _, name = reference.partition("#")
            if target not in known:
                reason = "unknown document"
            elif name not in known[target]:
                reason = "unknown definition"
            else:
                continue
            logger.debug("Dangling reference %s -> %s (%s)", lexicon.nsid, reference, reason)
            dangling.append(DanglingReference(lexicon.nsid, reference, reason))
    return dangling


__all__ = ["DanglingReference", "check_references"]
