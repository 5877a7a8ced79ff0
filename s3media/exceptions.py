"""
Exceptions raised by the upload and delete pipelines.
"""

from typing import List, Optional, Tuple


class CodecError(Exception):
    """An image could not be decoded, resized or encoded."""
    
    def __init__(self, file_hash: str, size_name: Optional[str], message: str):
        self.file_hash = file_hash
        self.size_name = size_name
        where = f" (size '{size_name}')" if size_name else ""
        super().__init__(f"Codec failure for {file_hash}{where}: {message}")


class DeletionError(Exception):
    """
    One or more store deletes failed.
    
    Attributes:
        failures: List of (key, exception) pairs, in the order attempted
    """
    
    def __init__(self, failures: List[Tuple[str, Exception]]):
        self.failures = failures
        keys = ', '.join(key for key, _ in failures)
        super().__init__(f"Failed to delete {len(failures)} object(s): {keys}")
    
    @property
    def keys(self) -> List[str]:
        return [key for key, _ in self.failures]
