import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Union

from .errors import CorruptDataError, InvalidFilenameError, NotFoundError, StorageError
from .models import ComparisonResult

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"


def new_filename() -> str:
    # 2024-05-01T12:30:45.123456+00:00 -> comparison-2024-05-01T12-30-45-123456Z.json
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    stamp = stamp.replace(":", "-").replace(".", "-")
    return f"comparison-{stamp}{JSON_SUFFIX}"


def check_filename(filename: str) -> str:
    """Only bare file names that live directly in the data directory."""
    if (
        not filename
        or filename != os.path.basename(filename)
        or "/" in filename
        or "\\" in filename
        or filename.startswith(".")
    ):
        raise InvalidFilenameError(f"Invalid filename: {filename!r}")
    return filename


class Archive:
    """Flat directory of saved comparisons, one JSON file each."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        os.makedirs(self.data_dir, exist_ok=True)

    def save(self, data: Any) -> str:
        if isinstance(data, ComparisonResult):
            data = data.to_json_dict()

        filename = new_filename()
        path = self.data_dir / filename
        try:
            text = json.dumps(data, ensure_ascii=False, indent=2)
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to save %s", path)
            raise StorageError("Failed to save JSON") from e

        logger.info("Saved %s", filename)
        return filename

    def load(self, filename: str) -> Any:
        path = self.data_dir / check_filename(filename)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise NotFoundError(f"{filename} not found") from e
        except (ValueError, UnicodeDecodeError) as e:
            raise CorruptDataError(f"{filename} is not valid JSON") from e
        except OSError as e:
            raise StorageError(f"Failed to read {filename}") from e

    def load_comparison(self, filename: str) -> ComparisonResult:
        return ComparisonResult.model_validate(self.load(filename))

    def list(self) -> List[str]:
        try:
            names = os.listdir(self.data_dir)
        except OSError as e:
            raise StorageError("Failed to list JSON files") from e
        return [n for n in names if n.endswith(JSON_SUFFIX)]
