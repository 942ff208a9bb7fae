"""Profile field editor schemas."""

from typing import Literal

from pydantic import BaseModel


class FieldOption(BaseModel):
    value: str
    label: str


class ProfileField(BaseModel):
    name: str
    label: str
    kind: Literal["text", "select", "readonly"]
    section: str
    value: str | None = None
    options: list[FieldOption] = []


class FieldUpdate(BaseModel):
    value: str
