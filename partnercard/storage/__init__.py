"""Local persistence for saved form progress."""
from partnercard.storage.progress import (
    PROGRESS_KEY,
    FileStorage,
    MemoryStorage,
    StoragePort,
    clear_progress,
    retrieve_progress,
    save_progress,
)

__all__ = [
    "PROGRESS_KEY",
    "FileStorage",
    "MemoryStorage",
    "StoragePort",
    "clear_progress",
    "retrieve_progress",
    "save_progress",
]
