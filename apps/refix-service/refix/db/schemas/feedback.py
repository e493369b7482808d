from .base import DocumentSchema


class FeedbackCreate(DocumentSchema):
    id: str | None = None
    name: str | None = None
    request: str | None = None
    comments: str | None = None
    timestamp: str | None = None
