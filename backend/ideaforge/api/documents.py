"""Documents API - CRUD over a user's saved documents."""

from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ideaforge.api.deps import DbDep, UserDep
from ideaforge.storage.documents import (
    create_document_async,
    delete_document_async,
    get_document_async,
    list_documents_async,
    update_document_async,
)

router = APIRouter()


class DocumentCreate(BaseModel):
    """Request body for creating a document."""

    id: str | None = Field(None, description="Client-chosen id; generated when absent")
    title: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="prd, specs, design, plans, ...")
    content: str


class DocumentUpdate(BaseModel):
    """Request body for updating a document."""

    title: str | None = None
    content: str | None = None


class DocumentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    type: str
    created_at: datetime | None = None


class DocumentResponse(DocumentSummary):
    content: str


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Not found")


@router.get("/documents", response_model=list[DocumentSummary])
async def list_documents(db: DbDep, user_id: UserDep) -> list[DocumentSummary]:
    """List the user's documents, newest first."""
    docs = await list_documents_async(db, user_id)
    return [DocumentSummary.model_validate(d) for d in docs]


@router.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: str, db: DbDep, user_id: UserDep) -> DocumentResponse:
    doc = await get_document_async(db, user_id, document_id)
    if doc is None:
        raise _not_found()
    return DocumentResponse.model_validate(doc)


@router.post("/documents", response_model=DocumentResponse, status_code=201)
async def create_document(body: DocumentCreate, db: DbDep, user_id: UserDep) -> DocumentResponse:
    doc = await create_document_async(
        db,
        user_id,
        title=body.title,
        doc_type=body.type,
        content=body.content,
        document_id=body.id,
    )
    return DocumentResponse.model_validate(doc)


@router.put("/documents/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str, body: DocumentUpdate, db: DbDep, user_id: UserDep
) -> DocumentResponse:
    doc = await update_document_async(
        db, user_id, document_id, title=body.title, content=body.content
    )
    if doc is None:
        raise _not_found()
    return DocumentResponse.model_validate(doc)


@router.delete("/documents/{document_id}")
async def delete_document(document_id: str, db: DbDep, user_id: UserDep) -> dict[str, str]:
    if not await delete_document_async(db, user_id, document_id):
        raise _not_found()
    return {"message": "Document deleted"}
