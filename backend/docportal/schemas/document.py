from pydantic import BaseModel


class DocumentSummary(BaseModel):
    id: int
    filename: str
    filesize: int
    created_at: str


class UploadFailure(BaseModel):
    filename: str
    error: str


class UploadResponse(BaseModel):
    message: str
    documents: list[DocumentSummary]
    failed: list[UploadFailure] = []


class MessageResponse(BaseModel):
    message: str
