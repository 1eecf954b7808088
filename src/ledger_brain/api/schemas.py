from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TextRequest(BaseModel):
    text: str


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    current_datetime: str | None = Field(default=None, alias="currentDateTime")
    custom_categories: list[str | dict[str, Any]] | None = Field(
        default=None, alias="customCategories"
    )
