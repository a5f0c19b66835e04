"""Path helpers shared by the churn and import scans."""

import re
from pathlib import PurePosixPath
from typing import Iterable

# "src/{old => new}/f.ts" or "old.ts => new.ts"
_BRACE_RENAME_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def in_excluded_dir(path: str, excluded_dirs: Iterable[str]) -> bool:
    """True if any directory component of ``path`` is excluded."""
    parts = PurePosixPath(to_posix(path)).parts[:-1]
    excluded = set(excluded_dirs)
    return any(part in excluded for part in parts)


def has_extension(path: str, extensions: Iterable[str]) -> bool:
    name = PurePosixPath(to_posix(path)).name.lower()
    return any(name.endswith(ext.lower()) for ext in extensions)


def rename_target(path: str) -> str:
    """Resolve git's rename notation to the post-rename path."""
    if "=>" not in path:
        return path
    if "{" in path:
        resolved = _BRACE_RENAME_RE.sub(lambda m: m.group(2).strip(), path)
        return resolved.replace("//", "/")
    return path.split("=>", 1)[1].strip()
