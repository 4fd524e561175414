"""Best-effort audit trail of validated raw provider records."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jobdigest.logging import get_logger
from jobdigest.utils.timestamps import file_timestamp

from .exceptions import StoreWriteError

logger = get_logger(__name__, component="persistence")


def write_json(path: Path, document: Any) -> None:
    """Write ``document`` as pretty-printed JSON, creating parent directories.

    Raises:
        StoreWriteError: If the directory or file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(document, indent=2, ensure_ascii=False)
        path.write_text(payload + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise StoreWriteError(f"Failed to write {path}: {e}", path=path) from e


class RawDataSink:
    """Writes each adapter's validated records to a timestamped JSON file.

    Files are named ``<provider>-<YYYY-MM-DDTHH-MM-SS>.json`` using the local
    time of the configured timezone. Failures are logged and swallowed: the
    audit trail never affects a run.
    """

    def __init__(self, data_dir: Union[str, Path], timezone: str = "UTC"):
        self.data_dir = Path(data_dir)
        self.timezone = timezone

    def path_for(self, provider: str) -> Path:
        return self.data_dir / f"{provider}-{file_timestamp(self.timezone)}.json"

    def save(self, provider: str, records: List[Dict[str, Any]]) -> Optional[Path]:
        """Persist ``records`` for ``provider``.

        Returns:
            Path of the written file, or None if writing failed
        """
        path = self.path_for(provider)
        try:
            write_json(path, records)
        except StoreWriteError as e:
            logger.warning(
                f"Could not save raw data for {provider}: {e}",
                extra={"event": "persistence.raw.failed", "provider": provider},
            )
            return None

        logger.info(
            f"Saved {len(records)} raw records to {path}",
            extra={
                "event": "persistence.raw.saved",
                "provider": provider,
                "count": len(records),
                "path": str(path),
            },
        )
        return path
