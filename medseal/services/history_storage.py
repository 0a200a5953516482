"""Named storage slots backing the history cache"""
import os
from pathlib import Path
from typing import Optional, Union


class FileStorage:
    """Slot stored as a single text file"""

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        """Return the slot content, or None if the slot was never written"""
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, content: str) -> None:
        """Replace the slot content"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise


class MemoryStorage:
    """In-process slot, for tests and ephemeral sessions"""

    def __init__(self, content: Optional[str] = None):
        self.content = content

    def read(self) -> Optional[str]:
        return self.content

    def write(self, content: str) -> None:
        self.content = content
