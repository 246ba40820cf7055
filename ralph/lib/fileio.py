"""Atomic file writes for durable state."""

import os
import shutil
from pathlib import Path

from ralph.lib.errors import PersistenceError


def atomic_write_text(path: Path, text: str) -> None:
    """Write text via a sibling temp file and os.replace.

    A crash mid-write leaves the previous file intact. An existing file keeps
    its permission bits.

    Raises:
        PersistenceError: on any OS error
    """
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        try:
            tmp_path.unlink()
        except OSError:
            pass
        raise PersistenceError(path, str(e)) from None
