"""File-based persistence for raw provider data and run status.

Public API:
    - RawDataSink: best-effort audit of validated raw records per provider
    - RunStatusWriter: writes the run summary JSON
    - PersistenceError / StoreWriteError: write failures

Example usage:
    >>> from jobdigest.persistence import RawDataSink
    >>> sink = RawDataSink("data", timezone="Europe/Berlin")
    >>> sink.save("remoteok", [{"id": "1", "position": "Engineer"}])
"""

from .exceptions import PersistenceError, StoreWriteError
from .raw_data import RawDataSink, write_json
from .run_status import DEFAULT_STATUS_PATH, RunStatusWriter

__all__ = [
    "RawDataSink",
    "RunStatusWriter",
    "DEFAULT_STATUS_PATH",
    "write_json",
    "PersistenceError",
    "StoreWriteError",
]
