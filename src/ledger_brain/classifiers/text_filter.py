"""
Rule-based transaction text filter.

Decides whether free-form text (bank SMS, a note like "Coffee 25 SAR")
describes a financial transaction and, when it does, extracts the amount,
currency, direction and category with keyword and regex heuristics.

Every outcome is a value: the filter never raises for bad input.
"""
from ledger_brain.logger import get_logger
from ledger_brain.models import Direction, ParsedTransaction, ValidationResult
from ledger_brain.rules import FilterRules

logger = get_logger(__name__)

REASON_TOO_SHORT = "Input is too short. Please provide more details."
REASON_TOO_LONG = "Input is too long. Please paste only the transaction message."
REASON_LOW_CONFIDENCE = (
    "No currency or transaction keywords detected. Please confirm this is a transaction."
)
REASON_NO_AMOUNT = "No monetary amount detected. Please include the transaction amount."


def _parse_number(raw: str) -> float | None:
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None


class TransactionTextClassifier:
    def __init__(self, rules: FilterRules | None = None):
        self.rules = rules or FilterRules.default()

    def contains_exclude_keyword(self, text: str) -> str | None:
        """Return the first exclude keyword found in the text, if any."""
        lower_text = text.lower()
        for keyword in self.rules.exclude_keywords:
            if keyword in lower_text:
                return keyword
        return None

    def contains_include_keyword(self, text: str) -> bool:
        lower_text = text.lower()
        return any(keyword in lower_text for keyword in self.rules.include_keywords)

    def contains_currency(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.rules.currency_patterns)

    def extract_amount(self, text: str) -> float | None:
        """
        Extract the most likely transaction amount.

        Numbers anchored to a currency code or symbol are tried first, in
        pattern order. Otherwise the first number in the text within the
        fallback range is returned.
        """
        amount_pattern = self.rules.amount_pattern

        for pattern in self.rules.currency_patterns:
            match = pattern.search(text)
            if not match:
                continue
            number = amount_pattern.search(match.group(0))
            if not number:
                continue
            amount = _parse_number(number.group(0))
            if amount is not None and amount > 0:
                return amount

        for number in amount_pattern.finditer(text):
            amount = _parse_number(number.group(0))
            if amount is None:
                continue
            if self.rules.min_fallback_amount <= amount <= self.rules.max_fallback_amount:
                return amount

        return None

    def infer_category(self, text: str) -> str:
        for category, patterns in self.rules.category_patterns:
            if any(pattern.search(text) for pattern in patterns):
                return category
        return self.rules.default_category

    def infer_direction(self, text: str) -> Direction:
        lower_text = text.lower()
        if any(keyword in lower_text for keyword in self.rules.income_keywords):
            return "in"
        # Most messages are spend notifications.
        return "out"

    def detect_currency(self, text: str) -> str:
        """
        Currency for a parsed transaction.

        Independent of the currency patterns used by extract_amount, so the
        two may disagree (e.g. "SAR 50 but paid with $ backup card" anchors
        the amount on SAR while this returns USD).
        """
        for code, pattern in self.rules.parse_currency_checks:
            if pattern.search(text):
                return code
        return self.rules.default_currency

    def validate_input(self, text: str | None) -> ValidationResult:
        """
        Judge whether text describes a transaction.

        Rules are evaluated in order and the first applicable one decides:
        length checks, exclude keywords, then currency, include keywords and
        a bare amount give high, medium and low confidence respectively.
        """
        if not text or len(text.strip()) < self.rules.min_length:
            return ValidationResult(is_valid=False, reason=REASON_TOO_SHORT, confidence="high")

        if len(text) > self.rules.max_length:
            return ValidationResult(is_valid=False, reason=REASON_TOO_LONG, confidence="medium")

        excluded = self.contains_exclude_keyword(text)
        if excluded:
            if "otp" in excluded or "code" in excluded:
                kind = "security message"
            else:
                kind = "promotional/informational message"
            logger.debug(f"Rejected on exclude keyword '{excluded}'")
            return ValidationResult(
                is_valid=False,
                reason=f"This appears to be a {kind}, not a transaction.",
                confidence="high",
            )

        has_currency = self.contains_currency(text)
        has_include_keyword = self.contains_include_keyword(text)
        amount = self.extract_amount(text)

        if has_currency and amount:
            return ValidationResult(
                is_valid=True,
                confidence="high",
                suggested_category=self.infer_category(text),
            )

        if has_include_keyword and amount:
            return ValidationResult(
                is_valid=True,
                confidence="medium",
                suggested_category=self.infer_category(text),
            )

        if amount and amount >= 1:
            return ValidationResult(
                is_valid=True,
                confidence="low",
                reason=REASON_LOW_CONFIDENCE,
                suggested_category=self.infer_category(text),
            )

        return ValidationResult(is_valid=False, reason=REASON_NO_AMOUNT, confidence="high")

    def parse_transaction(self, text: str | None) -> ParsedTransaction | None:
        validation = self.validate_input(text)
        if not validation.is_valid or text is None:
            return None

        amount = self.extract_amount(text)
        if not amount:
            logger.warning("Validated text yielded no amount on re-extraction")
            return None

        return ParsedTransaction(
            amount=amount,
            currency=self.detect_currency(text),
            direction=self.infer_direction(text),
            category=self.infer_category(text),
            merchant=None,
            raw_text=text,
        )


_default_classifier = TransactionTextClassifier()


def extract_amount(text: str) -> float | None:
    return _default_classifier.extract_amount(text)


def infer_category(text: str) -> str:
    return _default_classifier.infer_category(text)


def infer_direction(text: str) -> Direction:
    return _default_classifier.infer_direction(text)


def validate_input(text: str | None) -> ValidationResult:
    return _default_classifier.validate_input(text)


def parse_transaction(text: str | None) -> ParsedTransaction | None:
    return _default_classifier.parse_transaction(text)
