from __future__ import annotations

import os
from pathlib import Path


def load_dotenv(path: str = ".env") -> list[str]:
    """
    Read KEY=VALUE lines into os.environ without overriding variables that are
    already set. Returns the names that were set.
    """
    p = Path(path)
    if not p.is_file():
        return []
    loaded: list[str] = []
    for raw in p.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k and k not in os.environ:
            os.environ[k] = v
            loaded.append(k)
    return loaded
