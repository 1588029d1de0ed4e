from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    ok: Literal[True] = True
    data: T


class ErrorDetail(BaseModel):
    field: str | None = None
    message: str


class ErrorOut(BaseModel):
    ok: Literal[False] = False
    code: str
    message: str
    details: list[ErrorDetail] = Field(default_factory=list)


def envelope(data) -> dict:
    return {"ok": True, "data": data}
