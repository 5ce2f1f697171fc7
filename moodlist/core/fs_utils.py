import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional


def write_json(path: str | Path, data: Any) -> None:
    """
    Write a JSON document with an atomic replace.

    The payload goes to a temporary file next to the target, is fsynced, then
    moved over the target with os.replace. Readers see either the previous
    document or the new one in full, never a truncated file, so a failed
    write leaves the store exactly as it was.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=str(target.parent),
        prefix=target.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Read a JSON document.

    - missing file  -> default
    - invalid JSON  -> default (on_error is called with the decode error)
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        if on_error:
            on_error(e)
        return default
