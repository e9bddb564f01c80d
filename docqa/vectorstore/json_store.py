"""Read-only vector store backed by a JSON file.

The file is produced by an external indexer and holds an array of
document records. It is read fresh on every call; nothing is cached.
"""

import json
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from docqa.exceptions import ErrorCode, VectorStoreError
from docqa.logging_config import get_logger
from docqa.vectorstore.models import DocumentRecord

logger = get_logger(__name__)

STORE_NOT_FOUND_MESSAGE = "Vector store not found. Please run reindex."


class JSONVectorStore:
    """Loads document records from a JSON array on disk."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file.
            encoding: Text encoding of the file.
        """
        self.path = Path(path)
        self.encoding = encoding

    def exists(self) -> bool:
        """Check whether the store file is present."""
        return self.path.is_file()

    def load(self) -> list[DocumentRecord]:
        """Read and validate every record in the store.

        Returns:
            Records in file order.

        Raises:
            VectorStoreError: If the file is missing, unreadable, not a JSON
                array, holds a malformed record, or mixes embedding sizes.
        """
        if not self.exists():
            raise VectorStoreError(
                STORE_NOT_FOUND_MESSAGE,
                code=ErrorCode.VECTOR_STORE_NOT_FOUND,
                details={"path": str(self.path)},
            )

        try:
            raw = json.loads(self.path.read_text(encoding=self.encoding))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise VectorStoreError(
                "Failed to read vector store",
                code=ErrorCode.VECTOR_STORE_INVALID,
                details={"path": str(self.path), "error": str(e)},
            ) from e

        if not isinstance(raw, list):
            raise VectorStoreError(
                "Vector store must contain a JSON array of records",
                code=ErrorCode.VECTOR_STORE_INVALID,
                details={"path": str(self.path), "type": type(raw).__name__},
            )

        records: list[DocumentRecord] = []
        dimensions: int | None = None

        for index, item in enumerate(raw):
            try:
                record = DocumentRecord.model_validate(item)
            except PydanticValidationError as e:
                raise VectorStoreError(
                    f"Invalid vector store record at index {index}",
                    code=ErrorCode.VECTOR_STORE_INVALID,
                    details={
                        "path": str(self.path),
                        "index": index,
                        "errors": e.errors(include_url=False),
                    },
                ) from e

            if dimensions is None:
                dimensions = record.dimensions
            elif record.dimensions != dimensions:
                raise VectorStoreError(
                    f"Vector store record at index {index} has {record.dimensions} "
                    f"dimensions, expected {dimensions}",
                    code=ErrorCode.VECTOR_STORE_INVALID,
                    details={
                        "path": str(self.path),
                        "index": index,
                        "expected": dimensions,
                        "actual": record.dimensions,
                    },
                )

            records.append(record)

        logger.debug(
            f"Loaded {len(records)} records from vector store",
            extra={"path": str(self.path), "dimensions": dimensions},
        )
        return records
