"""Filesystem access for detection and output: exists, read, find, write."""

import fnmatch
import logging
import os

from config.defaults import DEFAULTS
from core.errors import NotFound, ProbeError, WriteError

logger = logging.getLogger(__name__)


class FileProbe:
    """Reads and writes files relative to a single project root."""

    def __init__(self, root, exclude_dirs=None):
        self.root = os.path.realpath(root)
        if exclude_dirs is None:
            exclude_dirs = DEFAULTS["exclude_dirs"]
        self.exclude_dirs = set(exclude_dirs)

    def path(self, name):
        return os.path.join(self.root, name)

    def exists(self, name) -> bool:
        return os.path.isfile(self.path(name))

    def read_text(self, name) -> str:
        """Return the whole file as text.

        Raises:
            NotFound: the file does not exist.
            ProbeError: the file exists but cannot be read or decoded.
        """
        full_path = self.path(name)
        try:
            with open(full_path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            raise NotFound(f"{name} not found") from None
        except (OSError, UnicodeDecodeError) as e:
            raise ProbeError(f"Cannot read {name}: {e}") from e

    def find_files(self, pattern) -> list:
        """Recursively find files whose name matches *pattern*.

        Returns root-relative paths, sorted so the first hit does not depend
        on directory enumeration order. Unreadable directories are skipped.
        """

        def _on_error(err):
            logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror)

        matches = []
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_on_error):
            dirnames[:] = [d for d in dirnames if d not in self.exclude_dirs]
            for filename in filenames:
                if fnmatch.fnmatch(filename, pattern):
                    rel = os.path.relpath(os.path.join(dirpath, filename), self.root)
                    matches.append(rel.replace(os.sep, "/"))
        return sorted(matches)

    def write_file(self, name, content) -> str:
        """Write *content* to *name* under the root, overwriting any existing file."""
        full_path = self.path(name)
        resolved = os.path.realpath(full_path)
        if not resolved.startswith(self.root + os.sep):
            raise WriteError(name, "path escapes target directory")
        try:
            os.makedirs(os.path.dirname(resolved), exist_ok=True)
            with open(resolved, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise WriteError(name, e.strerror or str(e)) from e
        return name
