from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Confidence = Literal["high", "medium", "low"]
Direction = Literal["in", "out"]


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    reason: Optional[str] = None
    confidence: Confidence
    suggested_category: Optional[str] = None


class ParsedTransaction(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    amount: float = Field(gt=0)
    currency: str
    direction: Direction
    category: str
    merchant: Optional[str] = None # left for future enrichment
    raw_text: str


class ExtractedTransaction(BaseModel):
    """A transaction as returned by the bulk parsers (AI or local)."""

    amount: float = Field(gt=0)
    currency: str = "SAR"
    category: str = "Other"
    merchant: Optional[str] = None
    transaction_datetime: str # ISO 8601, no milliseconds
    direction: Direction = "out"
    payment_hint: Optional[str] = None
    notes: Optional[str] = None
    source: str # "llm", "local"


class BulkParseResult(BaseModel):
    transactions: list[ExtractedTransaction] = Field(default_factory=list)
    error: Optional[str] = None
    reason: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return not self.transactions and bool(self.error)
