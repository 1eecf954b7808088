import re
from dataclasses import dataclass
from re import Pattern

# Phrases that mark a message as security, promotional, balance-only or an
# account notification rather than a transaction.
EXCLUDE_KEYWORDS: tuple[str, ...] = (
    # Security/OTP
    "otp",
    "verification code",
    "security code",
    "one-time password",
    "one time password",
    "2fa",
    "two-factor",
    # Promotional
    "offer",
    "discount",
    "promo",
    "promotion",
    "sale",
    "cashback offer",
    "reward points",
    "loyalty",
    "free",
    "win",
    "winner",
    "congratulations",
    # Balance/info only
    "available balance",
    "current balance",
    "account balance",
    "balance is",
    "card expiry",
    "expiry date",
    "expires on",
    "valid till",
    "valid until",
    # Account notifications
    "password changed",
    "login detected",
    "logged in",
    "signed in",
    "profile updated",
    "settings changed",
)

INCLUDE_KEYWORDS: tuple[str, ...] = (
    # Verbs
    "purchase",
    "purchased",
    "spent",
    "paid",
    "payment",
    "transferred",
    "transfer",
    "sent",
    "received",
    "deposit",
    "deposited",
    "withdrawal",
    "withdrew",
    "debited",
    "credited",
    "charged",
    "refund",
    "refunded",
    # Nouns
    "transaction",
    "txn",
    "trx",
    "amount",
    "bill",
    "invoice",
    "receipt",
)

INCOME_KEYWORDS: tuple[str, ...] = (
    "received",
    "credited",
    "deposit",
    "salary",
    "refund",
    "cashback",
    "earned",
    "income",
    "bonus",
)

_NUM = r"[0-9,.]+"

CURRENCY_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(rf"\bSAR\s*{_NUM}", re.IGNORECASE),
    re.compile(rf"{_NUM}\s*SAR\b", re.IGNORECASE),
    re.compile(rf"\bUSD\s*{_NUM}", re.IGNORECASE),
    re.compile(rf"{_NUM}\s*USD\b", re.IGNORECASE),
    re.compile(rf"\bAED\s*{_NUM}", re.IGNORECASE),
    re.compile(rf"{_NUM}\s*AED\b", re.IGNORECASE),
    re.compile(rf"\bEUR\s*{_NUM}", re.IGNORECASE),
    re.compile(rf"{_NUM}\s*EUR\b", re.IGNORECASE),
    re.compile(rf"\bGBP\s*{_NUM}", re.IGNORECASE),
    re.compile(rf"{_NUM}\s*GBP\b", re.IGNORECASE),
    re.compile(rf"\${_NUM}"),
    re.compile(rf"{_NUM}\s*ريال"),
    re.compile(rf"ر\.س\.?\s*{_NUM}"),
    re.compile(rf"{_NUM}\s*ر\.س\.?"),
)

# Digits and thousands separators with at most one decimal point.
AMOUNT_PATTERN: Pattern[str] = re.compile(r"[0-9,]+\.?[0-9]*")


def _patterns(*sources: str) -> tuple[Pattern[str], ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


# Priority order: the first category with a matching pattern wins.
CATEGORY_PATTERNS: tuple[tuple[str, tuple[Pattern[str], ...]], ...] = (
    ("Food & Dining", _patterns(
        "restaurant", "cafe", "coffee", "starbucks", "mcdonald", "burger",
        "pizza", "food", "meal", "lunch", "dinner", "breakfast", "delivery",
        "hungerstation", "jahez", r"careem.*food",
    )),
    ("Transportation", _patterns(
        "uber", "careem", "taxi", "fuel", "petrol", "gas station", "parking",
        "metro", "bus", "flight", "airline",
    )),
    ("Shopping", _patterns(
        "amazon", "noon", "jarir", "extra", "ikea", "mall", "store", "shop",
        "purchase",
    )),
    ("Bills & Utilities", _patterns(
        "electricity", "water", "internet", "stc", "mobily", "zain", "bill",
        "subscription", "netflix", "spotify",
    )),
    ("Groceries", _patterns(
        "panda", "danube", "tamimi", "carrefour", "lulu", "grocery",
        "supermarket",
    )),
    ("Health", _patterns(
        "pharmacy", "hospital", "clinic", "doctor", "medical", "medicine",
    )),
    ("Transfer", _patterns(
        "transfer", "sent to", "received from", "p2p",
    )),
)

# Currency detection used when packaging a parsed transaction. Checked in
# order, independently of CURRENCY_PATTERNS.
PARSE_CURRENCY_CHECKS: tuple[tuple[str, Pattern[str]], ...] = (
    ("USD", re.compile(r"USD|\$", re.IGNORECASE)),
    ("AED", re.compile(r"AED", re.IGNORECASE)),
    ("EUR", re.compile(r"EUR|€", re.IGNORECASE)),
    ("GBP", re.compile(r"GBP|£", re.IGNORECASE)),
)


@dataclass(frozen=True)
class FilterRules:
    exclude_keywords: tuple[str, ...] = EXCLUDE_KEYWORDS
    include_keywords: tuple[str, ...] = INCLUDE_KEYWORDS
    income_keywords: tuple[str, ...] = INCOME_KEYWORDS
    currency_patterns: tuple[Pattern[str], ...] = CURRENCY_PATTERNS
    amount_pattern: Pattern[str] = AMOUNT_PATTERN
    category_patterns: tuple[tuple[str, tuple[Pattern[str], ...]], ...] = CATEGORY_PATTERNS
    parse_currency_checks: tuple[tuple[str, Pattern[str]], ...] = PARSE_CURRENCY_CHECKS
    min_length: int = 5
    max_length: int = 2000
    min_fallback_amount: float = 1.0
    max_fallback_amount: float = 1_000_000.0
    default_currency: str = "SAR"
    default_category: str = "Other"

    @classmethod
    def default(cls) -> "FilterRules":
        return _DEFAULT_RULES


_DEFAULT_RULES = FilterRules()
