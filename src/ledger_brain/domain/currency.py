from typing import NamedTuple

DEFAULT_CURRENCY = "SAR"


class CurrencyInfo(NamedTuple):
    name: str
    symbol: str


CURRENCIES: dict[str, CurrencyInfo] = {
    "SAR": CurrencyInfo("Saudi Riyal", "ر.س"),
    "USD": CurrencyInfo("US Dollar", "$"),
    "EUR": CurrencyInfo("Euro", "€"),
    "GBP": CurrencyInfo("British Pound", "£"),
    "AED": CurrencyInfo("UAE Dirham", "د.إ"),
    "KWD": CurrencyInfo("Kuwaiti Dinar", "د.ك"),
    "BHD": CurrencyInfo("Bahraini Dinar", "د.ب"),
    "QAR": CurrencyInfo("Qatari Riyal", "ر.ق"),
    "OMR": CurrencyInfo("Omani Rial", "ر.ع"),
    "EGP": CurrencyInfo("Egyptian Pound", "ج.م"),
}


def normalize_currency(code: str | None, default: str = DEFAULT_CURRENCY) -> str:
    if not code:
        return default
    normalized = str(code).strip().upper()
    if normalized in CURRENCIES:
        return normalized
    return default
