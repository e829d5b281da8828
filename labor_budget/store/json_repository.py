"""JSON file persistence for project snapshots.

The whole project lives in one JSON document: the project record and the six
collections, each under its own fixed key. Writes go to a temporary file in
the same directory which then replaces the target, so an interrupted save
never leaves a truncated document behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from labor_budget.models.snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

PROJECT_KEY = "gestor_project"
TEAM_KEY = "gestor_team"
BUDGET_KEY = "gestor_budget"
LOGS_KEY = "gestor_logs"
PLANS_KEY = "gestor_plans"
QUANTITATIVE_KEY = "gestor_quantitative"
FINANCIAL_KEY = "gestor_financial"

# Storage key -> ProjectSnapshot collection field
COLLECTION_KEYS = {
    TEAM_KEY: "team",
    BUDGET_KEY: "budget",
    LOGS_KEY: "logs",
    PLANS_KEY: "plans",
    QUANTITATIVE_KEY: "quantitative_logs",
    FINANCIAL_KEY: "financial_records",
}


class StorageError(Exception):
    """Raised when the data file cannot be read, parsed or written."""


class JsonRepository:
    """Loads and saves a ProjectSnapshot as a JSON document.

    Example:
        >>> repository = JsonRepository("obra.json")
        >>> snapshot = repository.load()
        >>> repository.save(snapshot)
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def exists(self) -> bool:
        return self.file_path.exists()

    def load(self) -> ProjectSnapshot:
        """Read the snapshot from disk.

        A missing file is an empty project; missing keys are empty
        collections.

        Raises:
            StorageError: If the file is not valid JSON or holds invalid records
        """
        if not self.file_path.exists():
            logger.info(f"Data file not found, starting empty: {self.file_path}")
            return ProjectSnapshot()

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse data file (corrupted JSON): {e}")
            raise StorageError(f"Data file {self.file_path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            logger.error(f"Data file is not UTF-8 text: {e}")
            raise StorageError(f"Data file {self.file_path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read data file {self.file_path}: {e}") from e

        if not isinstance(document, dict):
            raise StorageError(f"Data file {self.file_path} must hold a JSON object")

        try:
            snapshot = self.from_document(document)
        except ValidationError as e:
            logger.error(f"Data file holds invalid records: {e}")
            raise StorageError(f"Data file {self.file_path} holds invalid records: {e}") from e

        logger.debug(
            f"Loaded {len(snapshot.budget)} budget items and {len(snapshot.logs)} "
            f"daily entries from {self.file_path}"
        )
        return snapshot

    def save(self, snapshot: ProjectSnapshot) -> None:
        """Write the snapshot to disk atomically (temp file + rename).

        Raises:
            StorageError: If the file cannot be written
        """
        document = self.to_document(snapshot)

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.file_path.parent, suffix=".tmp"
            )
        except OSError as e:
            raise StorageError(f"Cannot write data file {self.file_path}: {e}") from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.file_path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise StorageError(f"Cannot write data file {self.file_path}: {e}") from e

        logger.debug(f"Saved snapshot to {self.file_path}")

    @staticmethod
    def to_document(snapshot: ProjectSnapshot) -> Dict[str, Any]:
        """Serialize a snapshot to the JSON-compatible storage layout.

        Decimals are written as strings so that no precision is lost. The
        project key is omitted until a project has been set up.
        """
        data = snapshot.model_dump(mode="json")
        document: Dict[str, Any] = {}
        if data["project"] is not None:
            document[PROJECT_KEY] = data["project"]
        for key, field in COLLECTION_KEYS.items():
            document[key] = data[field]
        return document

    @staticmethod
    def from_document(document: Dict[str, Any]) -> ProjectSnapshot:
        """Build a snapshot from the storage layout.

        Raises:
            ValidationError: If any record is malformed
        """
        fields: Dict[str, Any] = {
            field: document.get(key) or [] for key, field in COLLECTION_KEYS.items()
        }
        fields["project"] = document.get(PROJECT_KEY)
        return ProjectSnapshot.model_validate(fields)
