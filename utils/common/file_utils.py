from __future__ import annotations

import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def _new_file_mode() -> int:
    """Mode a plain open(path, "w") would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_output_path(path: str | Path) -> Iterator[Path]:
    """
    Yield a temporary path next to `path` and move it into place on success.

    The temporary file keeps the suffix of `path`, so writers that infer the
    format from the extension (e.g. matplotlib) behave the same. The final
    file keeps the mode of the file it replaces, or the umask default for a
    new file. If the body raises, the temporary file is removed and `path`
    is left untouched.
    """
    path = Path(path)
    if not path.parent.exists():
        raise FileNotFoundError(f"Output directory not found: {path.parent}")

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.stem}_", suffix=path.suffix
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        yield tmp_path
        # mkstemp creates the file as 0600
        mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else _new_file_mode()
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
        logger.debug("Moved %s -> %s (mode %o)", tmp_path, path, mode)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
