"""Grapheme-cluster helpers; cursor columns count clusters, not code points."""

from __future__ import annotations

from typing import Iterator, List

import regex

_CLUSTER = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    if not text:
        return []
    return _CLUSTER.findall(text)


def grapheme_count(text: str) -> int:
    return len(split_graphemes(text))


def iter_cluster_offsets(clusters: List[str]) -> Iterator[tuple[int, int]]:
    """Yield ``(cluster_index, code_point_offset)`` for each cluster start."""

    offset = 0
    for index, cluster in enumerate(clusters):
        yield index, offset
        offset += len(cluster)


__all__ = ["split_graphemes", "grapheme_count", "iter_cluster_offsets"]
