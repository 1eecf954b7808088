import pytest

from ledger_brain.domain.payment import (
    Account,
    AccountCard,
    PaymentMatch,
    get_default_account,
    get_default_card,
    match_payment_hint,
)

ACCOUNTS = [
    Account(id="acc-bank", name="AlRajhi", type="bank"),
    Account(id="acc-cash", name="Drawer", type="cash"),
    Account(id="acc-wallet", name="Phone", type="wallet", is_default=True),
]

CARDS = [
    AccountCard(id="card-plat", account_id="acc-bank", name="Platinum Visa", last_4_digits="4321", type="credit"),
    AccountCard(id="card-mada", account_id="acc-bank", name="Mada", last_4_digits="9876", type="debit"),
]


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("Card ending 4321", PaymentMatch("acc-bank", "card-plat", "card_digits")),
        ("my Platinum Visa", PaymentMatch("acc-bank", "card-plat", "card_name")),
        ("mada", PaymentMatch("acc-bank", "card-mada", "card_name")),
        ("from AlRajhi", PaymentMatch("acc-bank", None, "account_name")),
        ("paid in cash", PaymentMatch("acc-cash", None, "account_type")),
        ("Apple Pay", PaymentMatch("acc-wallet", None, "account_type")),
        ("credit", PaymentMatch("acc-bank", "card-plat", "card_name")),
        ("debit", PaymentMatch("acc-bank", "card-mada", "card_name")),
        ("mastercard", PaymentMatch("acc-bank", "card-plat", "card_name")),
        ("bank transfer", PaymentMatch()),
    ],
)
def test_match_payment_hint_tiers(hint: str, expected: PaymentMatch) -> None:
    assert match_payment_hint(hint, ACCOUNTS, CARDS) == expected


def test_card_digits_win_over_names() -> None:
    # "alrajhi" would match the account, but the digits come first.
    match = match_payment_hint("AlRajhi 9876", ACCOUNTS, CARDS)

    assert match == PaymentMatch("acc-bank", "card-mada", "card_digits")


def test_generic_card_falls_back_to_first_card() -> None:
    debit_only = [CARDS[1]]

    assert match_payment_hint("visa", [], debit_only) == PaymentMatch("acc-bank", "card-mada", "card_name")


def test_type_words_need_matching_account() -> None:
    bank_only = [ACCOUNTS[0]]

    assert match_payment_hint("cash", bank_only, []) == PaymentMatch()
    assert match_payment_hint("stc pay", bank_only, []) == PaymentMatch()


@pytest.mark.parametrize("hint", [None, "", "   "])
def test_match_payment_hint_without_hint(hint: str | None) -> None:
    assert match_payment_hint(hint, ACCOUNTS, CARDS) == PaymentMatch()


def test_match_payment_hint_without_accounts_or_cards() -> None:
    assert match_payment_hint("AlRajhi", [], []) == PaymentMatch()


def test_blank_card_fields_never_match() -> None:
    blank = AccountCard(id="card-blank", account_id="acc-bank", name=" ", last_4_digits="", type="debit")

    assert match_payment_hint("Netflix", [], [blank]) == PaymentMatch()


def test_get_default_account() -> None:
    assert get_default_account(ACCOUNTS) == ACCOUNTS[2]
    assert get_default_account(ACCOUNTS[:2]) == ACCOUNTS[0]
    assert get_default_account([]) is None


def test_get_default_card() -> None:
    default_mada = AccountCard(
        id="card-mada", account_id="acc-bank", name="Mada", last_4_digits="9876", type="debit", is_default=True
    )

    assert get_default_card(CARDS, "acc-bank") == CARDS[0]
    assert get_default_card([CARDS[0], default_mada], "acc-bank") == default_mada
    assert get_default_card(CARDS, "acc-cash") is None
