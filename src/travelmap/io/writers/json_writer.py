"""JSON writer for cluster summaries.

Parent directories are created as needed.  ``indent=0`` writes compact JSON.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

PathLikeStr = os.PathLike[str]


def write_json(
    path: str | PathLikeStr,
    data: Any,
    *,
    encoding: str = "utf-8",
    indent: int = 2,
) -> None:
    """Serialize ``data`` to ``path``."""

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding=encoding) as f:
        json.dump(data, f, ensure_ascii=False, indent=indent or None)
        f.write("\n")


__all__ = ["write_json"]
