import json
from dataclasses import dataclass, field

import structlog
from django.db import DatabaseError

from ..config import IMPORT_BATCH_SIZE, IMPORT_SAMPLE_ROWS
from ..domain.imports import HeaderNameClassifier, extract_row
from ..errors import SchedulerError, UpstreamFailure, ValidationFailure
from .cards import create_card


@dataclass
class ImportResult:
    success: int = 0
    failed: int = 0
    errors: list = field(default_factory=list)


class CardImporter:
    """
    Turns already-decoded tabular rows into cards.

    The column classifier is a collaborator: anything with
    ``classify(headers, sample_rows) -> ColumnMapping``.

    Rows are taken in batches of ``batch_size`` and run one after another
    inside each batch: ORM connections are bound to their thread, so rows
    share the caller's connection and transaction. Each row commits or
    rolls back on its own savepoint.
    """

    def __init__(self, classifier=None, logger=None, batch_size=IMPORT_BATCH_SIZE):
        self.classifier = classifier or HeaderNameClassifier()
        self.logger = logger or structlog.get_logger()
        self.batch_size = batch_size

    def _classify(self, headers, rows):
        try:
            mapping = self.classifier.classify(headers, rows[:IMPORT_SAMPLE_ROWS])
        except UpstreamFailure:
            raise
        except Exception as exc:
            self.logger.error("column_classification_failed", headers=headers, error=str(exc))
            raise UpstreamFailure("Failed to analyze import columns") from exc

        missing = mapping.missing_required
        if missing:
            self.logger.warning("column_mapping_incomplete", headers=headers, missing=missing)
            found = ", ".join(f'"{h}"' for h in headers)
            raise UpstreamFailure(
                f"Could not identify the {' and '.join(missing)} column(s). Found columns: {found}"
            )
        return mapping

    def _import_row(self, user_id, row, number, mapping, word_list_id, result):
        word, definition, details = extract_row(row, mapping)
        if not word or not definition:
            message = f"Row {number} missing required fields: {json.dumps(row, default=str)}"
            self.logger.warning("import_row_invalid", row=number)
            result.failed += 1
            result.errors.append(message)
            return

        try:
            create_card(user_id, word, definition, word_list_id=word_list_id, word_details=details)
        except (SchedulerError, DatabaseError) as exc:
            self.logger.warning("import_row_failed", row=number, error=str(exc))
            result.failed += 1
            result.errors.append(f"Error processing row {number}: {exc}")
            return
        result.success += 1

    def run(self, user_id, rows, headers=None, word_list_id=None) -> ImportResult:
        rows = list(rows)
        if not rows:
            raise ValidationFailure("No data found to import")
        headers = list(headers or rows[0].keys())

        self.logger.info("import_started", user_id=str(user_id), rows=len(rows), headers=headers)
        mapping = self._classify(headers, rows)
        self.logger.info("import_columns_mapped", user_id=str(user_id), mapping=vars(mapping))

        result = ImportResult()
        for offset in range(0, len(rows), self.batch_size):
            batch = rows[offset:offset + self.batch_size]
            for index, row in enumerate(batch):
                self._import_row(user_id, row, offset + index + 1, mapping, word_list_id, result)
            self.logger.debug("import_batch_done",
                user_id=str(user_id),
                batch_start=offset + 1,
                success=result.success,
                failed=result.failed,
            )

        self.logger.info("import_finished",
            user_id=str(user_id),
            success=result.success,
            failed=result.failed,
        )
        return result
