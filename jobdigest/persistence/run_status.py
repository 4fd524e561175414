"""Run status file written after every CLI run."""

from pathlib import Path
from typing import Union

from jobdigest.domain.models import RunStatus
from jobdigest.logging import get_logger

from .raw_data import write_json

logger = get_logger(__name__, component="persistence")

DEFAULT_STATUS_PATH = Path("data") / "last_run_status.json"


class RunStatusWriter:
    """Serializes a ``RunStatus`` to a JSON file for monitoring."""

    def __init__(self, path: Union[str, Path] = DEFAULT_STATUS_PATH):
        self.path = Path(path)

    def write(self, status: RunStatus) -> Path:
        """Write ``status``, replacing any previous file.

        Raises:
            StoreWriteError: If the file cannot be written
        """
        write_json(self.path, status.model_dump(mode="json"))
        logger.info(
            f"Run status written to {self.path}",
            extra={
                "event": "persistence.status.written",
                "path": str(self.path),
                "success": status.success,
            },
        )
        return self.path
