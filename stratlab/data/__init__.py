from .file_source import FileDataSource
from .interfaces import DataSource, DataStorage
from .storage import InMemoryStorage
from .types import SERIES_COLUMNS, Bar, bars_to_frame, frame_to_bars

__all__ = [
    "Bar",
    "SERIES_COLUMNS",
    "bars_to_frame",
    "frame_to_bars",
    "DataSource",
    "DataStorage",
    "FileDataSource",
    "InMemoryStorage",
]
