"""
File replacement helpers
"""
import os
import tempfile
from contextlib import contextmanager
from .logger import get_logger
logger = get_logger(__name__)

TEMP_SUFFIX = ".sd-rg"


@contextmanager
def atomic_replace(path: str):
    """
    Open a sibling temporary file and rename it over ``path`` on success
    Args:
        path: File to replace
    Yields:
        Binary file object to write the new content into
    The temporary file lives in the same directory so os.replace stays on one
    filesystem. On any exception it is removed and the original is untouched.
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=f".{os.path.basename(path)}.", suffix=TEMP_SUFFIX, dir=directory)
    try:
        with os.fdopen(fd, "wb") as tmp_file:
            yield tmp_file
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        try:
            os.chmod(tmp_path, os.stat(path).st_mode & 0o7777)
        except FileNotFoundError:
            pass
        os.replace(tmp_path, path)
        logger.debug("Replaced %s via %s", path, tmp_path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
