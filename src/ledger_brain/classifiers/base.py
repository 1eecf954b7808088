from abc import ABC, abstractmethod
from typing import Any

from ledger_brain.classifiers.text_filter import TransactionTextClassifier
from ledger_brain.domain.timefmt import current_iso_datetime, normalize_datetime
from ledger_brain.models import BulkParseResult, ExtractedTransaction


class TransactionParser(ABC):
    @abstractmethod
    def parse(
        self,
        text: str,
        current_datetime: str | None = None,
        custom_categories: list[Any] | None = None,
    ) -> BulkParseResult:
        """Extract every transaction found in the text."""
        pass


class LocalTransactionParser(TransactionParser):
    """Single-transaction parser backed by the rule-based text filter."""

    def __init__(self, classifier: TransactionTextClassifier | None = None):
        self.classifier = classifier or TransactionTextClassifier()

    def parse(
        self,
        text: str,
        current_datetime: str | None = None,
        custom_categories: list[Any] | None = None,
    ) -> BulkParseResult:
        validation = self.classifier.validate_input(text)
        if not validation.is_valid:
            return BulkParseResult(error="Invalid input", reason=validation.reason)

        parsed = self.classifier.parse_transaction(text)
        if parsed is None:
            return BulkParseResult(error="No valid transactions", reason="Could not extract an amount")

        return BulkParseResult(transactions=[
            ExtractedTransaction(
                amount=parsed.amount,
                currency=parsed.currency,
                category=parsed.category,
                merchant=parsed.merchant,
                transaction_datetime=normalize_datetime(current_datetime, current_iso_datetime()),
                direction=parsed.direction,
                notes=validation.reason,
                source="local",
            )
        ])
