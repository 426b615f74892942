"""Pydantic models describing the Gmail v1 payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GmailModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MessageRef(GmailModel):
    id: str
    thread_id: str | None = Field(default=None, alias="threadId")


class MessageListResponse(GmailModel):
    messages: list[MessageRef] = Field(default_factory=list[MessageRef])
    next_page_token: str | None = Field(default=None, alias="nextPageToken")
    result_size_estimate: int | None = Field(default=None, alias="resultSizeEstimate")


class Header(GmailModel):
    name: str
    value: str = ""


class PartBody(GmailModel):
    data: str | None = None
    size: int = 0


class MessagePart(GmailModel):
    mime_type: str | None = Field(default=None, alias="mimeType")
    headers: list[Header] = Field(default_factory=list[Header])
    body: PartBody | None = None
    parts: list[MessagePart] = Field(default_factory=list["MessagePart"])


class GmailMessage(GmailModel):
    id: str
    thread_id: str | None = Field(default=None, alias="threadId")
    label_ids: list[str] = Field(default_factory=list[str], alias="labelIds")
    snippet: str = ""
    internal_date: int | None = Field(default=None, alias="internalDate")
    payload: MessagePart | None = None

    @field_validator("internal_date", mode="before")
    @classmethod
    def _parse_epoch_millis(cls, value: int | str | None) -> int | None:
        if value is None or value == "":
            return None
        return int(value)

    def header(self, name: str) -> str:
        if self.payload is None:
            return ""
        wanted = name.lower()
        for header in self.payload.headers:
            if header.name.lower() == wanted:
                return header.value
        return ""


class ErrorDetail(GmailModel):
    code: int
    message: str = ""


class ErrorResponse(GmailModel):
    error: ErrorDetail
