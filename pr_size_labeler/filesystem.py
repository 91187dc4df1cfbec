"""File access used for configuration, event payloads and .gitattributes."""

import os
from typing import Dict, Union


class FileSystem:
    """Read-only file access interface."""

    def read_file(self, path: str, errors: str = 'strict') -> str:
        """Read a UTF-8 text file.

        Args:
            path: Path of the file
            errors: Decoding error handler, as for `open()`

        Raises:
            UnicodeDecodeError: If the file is not UTF-8 and errors is 'strict'
        """
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    """Reads files from disk relative to a root directory."""

    def __init__(self, root: str = '.'):
        """Initialize the file system.

        Args:
            root: Directory that relative paths are resolved against
        """
        self.root = root

    def _resolve(self, path: str) -> str:
        return os.path.join(self.root, path)

    def read_file(self, path: str, errors: str = 'strict') -> str:
        with open(self._resolve(path), 'r', encoding='utf-8', errors=errors) as f:
            return f.read()

    def exists(self, path: str) -> bool:
        return os.path.isfile(self._resolve(path))


class MemoryFileSystem(FileSystem):
    """Serves file contents from an in-memory mapping of path to text or raw bytes."""

    def __init__(self, files: Dict[str, Union[str, bytes]] = None):
        self.files = dict(files or {})

    def write_file(self, path: str, content: Union[str, bytes]):
        self.files[path] = content

    def read_file(self, path: str, errors: str = 'strict') -> str:
        try:
            content = self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None
        if isinstance(content, bytes):
            return content.decode('utf-8', errors=errors)
        return content

    def exists(self, path: str) -> bool:
        return path in self.files
