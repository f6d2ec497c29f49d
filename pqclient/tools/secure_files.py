"""pqclient.tools.secure_files

Create, write and securely delete the files primusquery reads.

Secure delete overwrites the file ten times with digit patterns before
unlinking it. This hinders casual recovery of credentials left in query files;
it is not a cryptographic wipe (journaling filesystems and SSDs may keep copies).

Error split:
- failing to open a file for secure delete is a normal QueryFileError
- any failure after the file was opened raises SecureDeleteFatalError, since
  the file may be left partially overwritten
"""

from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import Optional

from pqclient.errors import QueryFileError, SecureDeleteFatalError
from pqclient.paths import query_temp_dir

OVERWRITE_PASSES = 10
FILE_MODE = 0o644


class SecureFileTool:
    """Filesystem wrapper for query and import files."""

    def __init__(self, logger, temp_dir: Optional[str] = None):
        self.logger = logger
        self.temp_dir = temp_dir

    def create_file(self, path: str, content: str | bytes) -> None:
        """Write text as UTF-8, or bytes verbatim (tool output keeps its own charset)."""
        data = content if isinstance(content, bytes) else content.encode("utf-8")
        try:
            with open(path, "wb") as f:
                f.write(data)
            os.chmod(path, FILE_MODE)
        except OSError as e:
            self.logger.debug(f"creating the file {path} failed: {e}")
            raise QueryFileError(f"cannot create file: {e}", filename=path, operation="create") from e

    def create_temp_file(self, prefix: str, content: str) -> str:
        """Write content to a new uniquely named temp file and return its path."""
        directory = str(query_temp_dir(self.temp_dir))
        try:
            fd, path = tempfile.mkstemp(prefix=prefix, dir=directory)
        except OSError as e:
            self.logger.debug(f"creating tmp-file in {directory} failed: {e}")
            raise QueryFileError(f"cannot create tmp-file: {e}", filename=directory, operation="create") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            self.logger.debug(f"writing on the tmp-file {path} failed: {e}")
            try:
                os.remove(path)
            except OSError:
                self.logger.warning(f"could not remove half-written tmp-file {path}")
            raise QueryFileError(f"cannot write tmp-file: {e}", filename=path, operation="write") from e
        return path

    @staticmethod
    def file_exists(path: str) -> bool:
        return Path(path).is_file()

    def secure_delete(self, path: str) -> None:
        try:
            f = open(path, "r+b")
        except OSError as e:
            self.logger.debug(f"system failure, cannot open file {path}: {e}")
            raise QueryFileError(f"cannot open file for secure delete: {e}", filename=path, operation="open") from e

        try:
            with f:
                size = os.fstat(f.fileno()).st_size
                for i in range(OVERWRITE_PASSES):
                    pattern = str(i).encode("ascii")
                    f.seek(0)
                    f.write((pattern * size)[:size])
                    f.flush()
                    os.fsync(f.fileno())
            os.remove(path)
        except OSError as e:
            self.logger.error(f"system failure, secure delete of {path} aborted: {e}")
            raise SecureDeleteFatalError(f"secure delete failed after open: {e}", filename=path, operation="secure_delete") from e

    def remove_file(self, path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            self.logger.debug(f"removing file {path} failed: {e}")
            raise QueryFileError(f"cannot remove file: {e}", filename=path, operation="remove") from e
