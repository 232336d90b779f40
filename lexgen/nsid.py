"""Helpers for namespaced identifiers (NSIDs)."""

from __future__ import annotations

from typing import Tuple


def titlecase(segment: str) -> str:
    """Upper-case the first character only: ``getFeed`` -> ``GetFeed``."""
    return segment[:1].upper() + segment[1:]


def title_nsid(nsid: str) -> str:
    """
    Convert an NSID into a title-cased dotted name.

    For example, ``app.bsky.feed.getFeed`` becomes ``App.Bsky.Feed.GetFeed``.
    """
    return ".".join(titlecase(segment) for segment in nsid.split("."))


def split_nsid(nsid: str) -> Tuple[str, str]:
    """
    Split an NSID into its namespace and its final segment.

    For example, ``app.bsky.feed.getFeed`` splits into ``app.bsky.feed`` and
    ``getFeed``.
    """
    namespace, _, name = nsid.rpartition(".")
    return namespace, name


def split_ref(nsid: str, ref: str) -> Tuple[str, str]:
    """
    Qualify a reference against the enclosing document.

    ``#label`` stays in ``nsid``; ``com.atproto.repo.strongRef`` points at
    that document's ``main``; ``com.atproto.label.defs#label`` names a
    definition inside another document.
    """
    target, sep, name = ref.partition("#")
    if not sep:
        return target, "main"
    return (target or nsid), name


__all__ = ["split_nsid", "split_ref", "title_nsid", "titlecase"]
