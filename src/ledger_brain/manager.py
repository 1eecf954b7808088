from time import perf_counter
from typing import Any

from ledger_brain.classifiers.base import LocalTransactionParser
from ledger_brain.classifiers.llm import LLMTransactionParser, is_configured
from ledger_brain.classifiers.text_filter import TransactionTextClassifier
from ledger_brain.core import settings
from ledger_brain.domain.timefmt import format_duration
from ledger_brain.logger import get_logger
from ledger_brain.models import BulkParseResult, ParsedTransaction, ValidationResult

logger = get_logger(__name__)


class ParserService:
    def __init__(self, classifier: TransactionTextClassifier | None = None):
        self.classifier = classifier or TransactionTextClassifier()
        self.local = LocalTransactionParser(self.classifier)
        self.llm: LLMTransactionParser | None = None
        self.refresh_llm()

    @property
    def ai_enabled(self) -> bool:
        return self.llm is not None

    def refresh_llm(self) -> None:
        api_key, model, base_url = settings.get_openai_settings()
        if is_configured(api_key, base_url):
            self.llm = LLMTransactionParser(
                api_key=api_key,
                model=model,
                base_url=base_url,
                category_threshold=settings.get_category_match_threshold(),
            )
            logger.info(f"LLM parser enabled: model={model}, base_url={base_url or 'default'}")
        else:
            self.llm = None
            logger.warning("OPENAI_API_KEY not configured. LLM parser disabled.")

    def validate(self, text: str | None) -> ValidationResult:
        return self.classifier.validate_input(text)

    def parse_local(self, text: str | None) -> ParsedTransaction | None:
        return self.classifier.parse_transaction(text)

    def analyze(
        self,
        text: str,
        current_datetime: str | None = None,
        custom_categories: list[Any] | None = None,
    ) -> BulkParseResult:
        """
        Validate locally, then enrich with the LLM parser when available.

        Text rejected by the local filter never reaches the LLM. When the LLM
        is disabled or returns an error, the local parse is returned instead.
        """
        validation = self.validate(text)
        if not validation.is_valid:
            logger.debug(f"Input rejected ({validation.confidence}): {validation.reason}")
            return BulkParseResult(error="Invalid input", reason=validation.reason)

        if self.llm is not None:
            started = perf_counter()
            result = self.llm.parse(
                text,
                current_datetime=current_datetime,
                custom_categories=custom_categories,
            )
            elapsed = format_duration(perf_counter() - started)
            if not result.is_error:
                logger.debug(f"LLM parsed {len(result.transactions)} transaction(s) in {elapsed}")
                return result
            logger.warning(f"LLM parse failed after {elapsed} ({result.error}: {result.reason}); using local parser")

        return self.local.parse(
            text,
            current_datetime=current_datetime,
            custom_categories=custom_categories,
        )
