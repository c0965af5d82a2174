"""Storage functions for documents. Every query is scoped to the owner."""

import uuid
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ideaforge.models import Document


async def list_documents_async(db: AsyncSession, user_id: str) -> Sequence[Document]:
    """List a user's documents, newest first."""
    result = await db.execute(
        select(Document).where(Document.user_id == user_id).order_by(Document.created_at.desc())
    )
    return result.scalars().all()


async def get_document_async(db: AsyncSession, user_id: str, document_id: str) -> Document | None:
    """Get one document if it exists and belongs to the user."""
    result = await db.execute(
        select(Document).where(Document.id == document_id, Document.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_document_async(
    db: AsyncSession,
    user_id: str,
    title: str,
    doc_type: str,
    content: str,
    document_id: str | None = None,
) -> Document:
    """Create a document. A UUID is generated when no id is supplied."""
    doc = Document(
        id=document_id or str(uuid.uuid4()),
        user_id=user_id,
        title=title,
        type=doc_type,
        content=content,
    )
    db.add(doc)
    await db.commit()
    await db.refresh(doc)
    return doc


async def update_document_async(
    db: AsyncSession,
    user_id: str,
    document_id: str,
    title: str | None = None,
    content: str | None = None,
) -> Document | None:
    """Update title/content. Returns None if the document is missing."""
    doc = await get_document_async(db, user_id, document_id)
    if doc is None:
        return None
    if title is not None:
        doc.title = title
    if content is not None:
        doc.content = content
    await db.commit()
    await db.refresh(doc)
    return doc


async def delete_document_async(db: AsyncSession, user_id: str, document_id: str) -> bool:
    """Delete a document. Returns False if nothing was deleted."""
    result = await db.execute(
        delete(Document).where(Document.id == document_id, Document.user_id == user_id)
    )
    await db.commit()
    return result.rowcount > 0
