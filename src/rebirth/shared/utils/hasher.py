"""
Path and dimension hashing.

Nodes reference their parent by hash, not by key. The hashes produced here
are compatible with the content repository the data originates from:

- path hash: md5 of the path string
- dimensions hash: md5 of the canonical JSON of the dimension values
  (keys sorted, value lists sorted, compact, slashes escaped, ``[]`` if empty)
"""

import hashlib
import json
from typing import Dict, Iterable, List, Mapping

ROOT_PATH = "/"
SITES_PATH = "/sites"


def md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def path_hash(path: str) -> str:
    """Hash of a node path."""
    return md5(path)


def parent_path(path: str) -> str:
    """
    Parent of a slash-delimited path.

    Examples:
        >>> parent_path("/sites/demo/about")
        '/sites/demo'
        >>> parent_path("/sites")
        '/'
        >>> parent_path("/")
        ''
    """
    if path == ROOT_PATH:
        return ""
    parent = path.rstrip("/").rsplit("/", 1)[0]
    return parent or ROOT_PATH


def join_path(parent: str, name: str) -> str:
    return f"{parent.rstrip('/')}/{name}"


def is_descendant_path(path: str, ancestor: str) -> bool:
    """True if ``path`` is ``ancestor`` itself or lies below it."""
    if ancestor == ROOT_PATH:
        return True
    return path == ancestor or path.startswith(ancestor.rstrip("/") + "/")


def site_node_path(path: str) -> str | None:
    """
    Path of the site node a path belongs to.

    Sites live below ``/sites``; paths outside of it use their first segment.
    """
    segments = [s for s in path.split("/") if s]
    if not segments:
        return None
    if join_path("", segments[0]) == SITES_PATH:
        if len(segments) < 2:
            return None
        return join_path(SITES_PATH, segments[1])
    return join_path("", segments[0])


def canonical_dimensions(dimensions: Mapping[str, Iterable[str]]) -> Dict[str, List[str]]:
    """Dimension values with sorted keys and sorted value lists."""
    return {name: sorted(dimensions[name]) for name in sorted(dimensions)}


def serialize_dimensions(dimensions: Mapping[str, Iterable[str]]) -> str:
    canonical = canonical_dimensions(dimensions)
    if not canonical:
        return "[]"
    return json.dumps(canonical, separators=(",", ":")).replace("/", "\\/")


def dimensions_hash(dimensions: Mapping[str, Iterable[str]]) -> str:
    """Hash identifying one dimension combination."""
    return md5(serialize_dimensions(dimensions))


# Hash of the empty combination, carried by dimension-less nodes
DIMENSIONLESS_HASH = dimensions_hash({})
