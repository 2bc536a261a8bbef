"""Reader for Java-style ``.properties`` files."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

_SEPARATOR = re.compile(r"\s*[=:]\s*|\s+")


def normalize_key(key: str) -> str:
    """Map a dotted or dashed key (``project.mode``) to its field name (``project_mode``)."""
    return key.strip().lower().replace(".", "_").replace("-", "_")


def _split_entry(line: str) -> Tuple[str, str]:
    match = _SEPARATOR.search(line)
    if match is None:
        return line, ""
    return line[:match.start()], line[match.end():]


def parse_properties(text: str) -> Dict[str, str]:
    """Parse properties text into a mapping keyed by normalized key.

    Supports ``#``/``!`` comments, ``=``, ``:`` or whitespace separators and
    backslash line continuations. Later entries win over earlier ones.
    """
    properties: Dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        # an odd run of trailing backslashes ends in a continuation marker
        if (len(line) - len(line.rstrip("\\"))) % 2 == 1:
            pending += line[:-1]
            continue
        line = pending + line
        pending = ""
        key, value = _split_entry(line)
        if key:
            properties[normalize_key(key)] = value
    if pending:
        key, value = _split_entry(pending)
        if key:
            properties[normalize_key(key)] = value
    return properties


def load_properties(path: Optional[Union[str, Path]]) -> Dict[str, str]:
    """Read a properties file. A missing file reads as empty."""
    if path is None:
        return {}
    path = Path(path)
    if not path.is_file():
        return {}
    return parse_properties(path.read_text(encoding="utf-8"))
