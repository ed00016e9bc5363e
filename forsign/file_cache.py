"""
Uploaded File Cache

In-memory lookup of file references returned by document uploads,
so a caller can rebuild a FileInformation from an ID later in the
same process. Not thread-safe; one client, one call path.
"""

from typing import Dict, Optional

from .types import FileInformation


class FileInformationCache:

    def __init__(self):
        self._files: Dict[str, FileInformation] = {}

    def remember(self, file_information: FileInformation) -> None:
        self._files[file_information.file_id] = file_information

    def get(self, file_id: str) -> Optional[FileInformation]:
        return self._files.get(file_id)

    def all(self) -> Dict[str, FileInformation]:
        return dict(self._files)

    def clear(self) -> None:
        self._files.clear()

    def __len__(self) -> int:
        return len(self._files)
