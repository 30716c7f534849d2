"""
Text outputs: the merged document and the ASCII directory tree.

Both are pure functions of the store snapshot (and the header template for
the document), recomputed whenever either changes.
"""

import re
from datetime import date
from typing import Dict, Iterable, List, Optional

from . import config
from .store import FileRecord
from .tree import sort_key

# Nested name map: a folder maps to another dict, a file maps to None.
_Folder = Dict[str, Optional[dict]]

BRANCH = "├── "
CORNER = "└── "
PIPE = "│   "
BLANK = "    "


def render_document(
    records: Iterable[FileRecord],
    template: str,
    token: str = config.PLACEHOLDER_TOKEN,
) -> str:
    """
    One block per record: the header (``template`` with every ``token``
    replaced by the record name), a newline, then the content. Blocks are
    separated by a blank line.
    """
    blocks = [f"{template.replace(token, r.name)}\n{r.content}" for r in records]
    return "\n\n".join(blocks)


def document_stats(document: str, file_count: int) -> dict:
    return {
        "files": file_count,
        "lines": len(document.splitlines()),
        "words": len(re.findall(r"\S+", document)),
        "characters": len(document),
    }


def download_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"merged_code_{today.isoformat()}.txt"


def _name_map(names: Iterable[str]) -> _Folder:
    root: _Folder = {}
    for name in names:
        parts = name.split("/")
        current = root
        for i, part in enumerate(parts):
            is_last = i == len(parts) - 1
            if is_last:
                current.setdefault(part, None)
                continue
            # A name used both as a file and as a folder renders once, as a folder.
            if current.get(part) is None:
                current[part] = {}
            current = current[part]
    return root


def _walk(node: _Folder, prefix: str, out: List[str]) -> None:
    keys = sorted(node, key=lambda k: sort_key(k, node[k] is not None))
    for i, key in enumerate(keys):
        last = i == len(keys) - 1
        out.append(f"{prefix}{CORNER if last else BRANCH}{key}")
        child = node[key]
        if child is not None:
            _walk(child, prefix + (BLANK if last else PIPE), out)


def render_structure(names: Iterable[str]) -> str:
    """
    ASCII tree of the given paths, rooted at a ``.`` line::

        .
        ├── a
        │   └── b.txt
        └── z.txt

    An empty collection renders as an empty string.
    """
    root = _name_map(names)
    if not root:
        return ""
    out = ["."]
    _walk(root, "", out)
    return "\n".join(out)
