"""
Payment hint matching.

Maps the free-text payment hint extracted from a transaction ("paid with my
Platinum Visa", "card ending 4321", "cash") onto one of the user's accounts
or cards. Tiers, first hit wins: card digits, card name, account name,
account type, card type, then any card for generic card words.
"""
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Optional

AccountType = Literal["bank", "cash", "wallet"]
CardType = Literal["credit", "debit"]
MatchedBy = Literal["card_digits", "card_name", "account_name", "account_type"]

WALLET_WORDS = ("wallet", "apple", "stc", "pay")
GENERIC_CARD_WORDS = ("visa", "master", "card")


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    type: AccountType = "bank"
    is_default: bool = False


@dataclass(frozen=True)
class AccountCard:
    id: str
    account_id: str
    name: str
    last_4_digits: str
    type: CardType = "credit"
    is_default: bool = False


@dataclass(frozen=True)
class PaymentMatch:
    account_id: Optional[str] = None
    card_id: Optional[str] = None
    matched_by: Optional[MatchedBy] = None


def _names_overlap(hint: str, name: str) -> bool:
    name = name.strip().lower()
    if not name:
        return False
    return name in hint or hint in name


def _card_match(card: AccountCard, matched_by: MatchedBy) -> PaymentMatch:
    return PaymentMatch(account_id=card.account_id, card_id=card.id, matched_by=matched_by)


def match_payment_hint(
    hint: str | None,
    accounts: Sequence[Account],
    cards: Sequence[AccountCard],
) -> PaymentMatch:
    if not hint or not hint.strip() or (not accounts and not cards):
        return PaymentMatch()

    lower_hint = hint.strip().lower()

    for card in cards:
        digits = card.last_4_digits.strip()
        if digits and digits in lower_hint:
            return _card_match(card, "card_digits")

    for card in cards:
        if _names_overlap(lower_hint, card.name):
            return _card_match(card, "card_name")

    for account in accounts:
        if _names_overlap(lower_hint, account.name):
            return PaymentMatch(account_id=account.id, matched_by="account_name")

    if "cash" in lower_hint:
        cash = next((a for a in accounts if a.type == "cash"), None)
        if cash:
            return PaymentMatch(account_id=cash.id, matched_by="account_type")

    if any(word in lower_hint for word in WALLET_WORDS):
        wallet = next((a for a in accounts if a.type == "wallet"), None)
        if wallet:
            return PaymentMatch(account_id=wallet.id, matched_by="account_type")

    # Card type words still report as a card name match.
    for card_type in ("credit", "debit"):
        if card_type in lower_hint:
            card = next((c for c in cards if c.type == card_type), None)
            if card:
                return _card_match(card, "card_name")

    if any(word in lower_hint for word in GENERIC_CARD_WORDS) and cards:
        card = next((c for c in cards if c.type == "credit"), cards[0])
        return _card_match(card, "card_name")

    return PaymentMatch()


def get_default_account(accounts: Sequence[Account]) -> Account | None:
    """The account flagged as default, else the first one."""
    if not accounts:
        return None
    return next((a for a in accounts if a.is_default), accounts[0])


def get_default_card(cards: Sequence[AccountCard], account_id: str) -> AccountCard | None:
    account_cards = [c for c in cards if c.account_id == account_id]
    if not account_cards:
        return None
    return next((c for c in account_cards if c.is_default), account_cards[0])
