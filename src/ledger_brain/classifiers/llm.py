import json
import math
import re
from typing import Any

from openai import OpenAI, OpenAIError

from ledger_brain.classifiers.base import TransactionParser
from ledger_brain.domain.categories import get_all_categories, match_category
from ledger_brain.domain.currency import normalize_currency
from ledger_brain.domain.timefmt import current_iso_datetime, normalize_datetime
from ledger_brain.logger import get_logger
from ledger_brain.models import BulkParseResult, ExtractedTransaction

logger = get_logger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

_DATETIME_KEYS = ("transaction_datetime", "transaction_date", "date", "datetime")

SYSTEM_PROMPT = """You are a financial transaction parser for a Saudi Arabian personal finance app. Extract structured data from text messages (bank SMS, receipts, manual notes).

RULES:
1. Return ONLY valid JSON with a "transactions" array, even for a single transaction.
2. The input may contain several transactions separated by newlines, commas, or listed together.

DATE & TIME:
- Keep the exact date and time from the input when given, as ISO 8601 "YYYY-MM-DDTHH:MM:SS".
- Date without time: use "T00:00:00". Time without date: use today's date.
- No date or time: use the current timestamp given in the message.
- Accept future dates as-is.

AMOUNT:
- Each amount is a positive number.
- direction is "in" for income/received/deposit/salary and "out" for expense/payment/purchase/spent.

CATEGORY AND DETAILS:
- Identify the merchant or source when mentioned.
- payment_hint is any card name, bank name, last 4 digits or wallet mentioned ("on my Visa" -> "Visa", "card ending 8844" -> "8844", "paid cash" -> "cash").
- Categorize into one of: {categories}
- Default currency is SAR. Recognize SAR, USD, EUR, GBP, AED, ريال, $, €, £.

Return this structure:
{{"transactions": [{{"amount": <number>, "currency": "<code>", "category": "<string>", "merchant": "<string or null>", "transaction_datetime": "<ISO 8601>", "direction": "<in or out>", "payment_hint": "<string or null>", "notes": "<string or null>"}}]}}

Example: "Coffee 25 SAR on 2026-01-04 at 2:30pm" ->
{{"transactions": [{{"amount": 25, "currency": "SAR", "category": "Food & Dining", "merchant": "Coffee", "transaction_datetime": "2026-01-04T14:30:00", "direction": "out", "payment_hint": null, "notes": null}}]}}

If nothing can be parsed, return:
{{"transactions": [], "error": "Could not parse transactions", "reason": "<brief explanation>"}}"""


def is_configured(api_key: str | None, base_url: str | None = None) -> bool:
    """An OpenAI key, or any key when pointed at a compatible provider."""
    if not api_key:
        return False
    return api_key.startswith("sk-") or bool(base_url)


def _optional_text(value: Any) -> str | None:
    """Strings and finite numbers as text; blanks and anything else as None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _error(error: str, reason: str) -> BulkParseResult:
    return BulkParseResult(transactions=[], error=error, reason=reason)


class LLMTransactionParser(TransactionParser):
    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        category_threshold: float = 85.0,
    ):
        self.client = OpenAI(api_key=api_key, base_url=base_url or None)
        self.model = model
        self.category_threshold = category_threshold

    def parse(
        self,
        text: str,
        current_datetime: str | None = None,
        custom_categories: list[Any] | None = None,
    ) -> BulkParseResult:
        now = normalize_datetime(current_datetime, current_iso_datetime())
        categories = get_all_categories(custom_categories)

        try:
            response = self.client.responses.create(
                model=self.model,
                instructions=SYSTEM_PROMPT.format(categories=", ".join(categories)),
                input=(
                    f"Current date/time: {now}\n\n"
                    f"Parse these financial transactions:\n\n{text}"
                ),
                temperature=0.1,
                max_output_tokens=2000,
            )
        except OpenAIError as e:
            logger.error(f"LLM Error: {e}")
            return _error("AI service error", str(e) or e.__class__.__name__)

        content = self._extract_output_text(response)
        if not content:
            return _error("Empty response", "AI returned no content")

        json_match = _JSON_OBJECT.search(content)
        if not json_match:
            return _error("Invalid response format", "Could not find JSON in AI response")

        try:
            parsed = json.loads(json_match.group(0))
        except json.JSONDecodeError:
            logger.warning("LLM returned malformed JSON")
            return _error("Parse error", "AI response was not valid JSON")

        try:
            return self._build_result(parsed, categories, fallback_datetime=now)
        except (TypeError, ValueError) as e:
            logger.warning(f"Unexpected AI transaction payload: {e}")
            return _error("Parse error", "AI response had an unexpected structure")

    def _build_result(
        self,
        parsed: dict[str, Any],
        categories: list[str],
        *,
        fallback_datetime: str,
    ) -> BulkParseResult:
        # _JSON_OBJECT only captures objects, so parsed is always a dict here.
        raw_transactions = parsed.get("transactions")
        if parsed.get("error") and not raw_transactions:
            return _error(str(parsed["error"]), str(parsed.get("reason") or "Unknown error"))
        if raw_transactions is None:
            raw_transactions = [parsed]
        elif not isinstance(raw_transactions, list):
            logger.warning(f"Unexpected transactions payload: {raw_transactions!r}")
            raw_transactions = []

        transactions: list[ExtractedTransaction] = []
        for item in raw_transactions:
            tx = self._normalize_item(item, categories, fallback_datetime)
            if tx is None:
                logger.warning(f"Skipping AI transaction without a usable amount: {item!r}")
                continue
            transactions.append(tx)

        if not transactions:
            return _error(
                "No valid transactions",
                "Could not extract any valid transactions from the text",
            )
        return BulkParseResult(transactions=transactions)

    def _normalize_item(
        self,
        item: Any,
        categories: list[str],
        fallback_datetime: str,
    ) -> ExtractedTransaction | None:
        if not isinstance(item, dict):
            return None
        amount = item.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return None
        try:
            value = float(amount)
        except OverflowError:
            return None
        if not math.isfinite(value) or value <= 0:
            return None

        raw_datetime = next((item[key] for key in _DATETIME_KEYS if item.get(key)), None)

        return ExtractedTransaction(
            amount=value,
            currency=normalize_currency(item.get("currency")),
            category=match_category(item.get("category"), categories, self.category_threshold),
            merchant=_optional_text(item.get("merchant")),
            transaction_datetime=normalize_datetime(raw_datetime, fallback_datetime),
            direction="in" if item.get("direction") == "in" else "out",
            payment_hint=_optional_text(item.get("payment_hint")) or _optional_text(item.get("account_hint")),
            notes=_optional_text(item.get("notes")),
            source="llm",
        )

    @staticmethod
    def _extract_output_text(response: object) -> str | None:
        output_text = getattr(response, "output_text", None)
        if output_text:
            return output_text

        output = getattr(response, "output", None)
        if not output:
            return None

        parts: list[str] = []
        for item in output:
            for block in getattr(item, "content", None) or []:
                if getattr(block, "type", None) in {"output_text", "text"}:
                    text = getattr(block, "text", None)
                    if text:
                        parts.append(text)

        return "".join(parts) or None
