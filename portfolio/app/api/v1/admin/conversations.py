"""
Admin conversation endpoints - browse, export and delete stored chat sessions.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from portfolio.app.core.dependencies import get_current_admin, get_db
from portfolio.app.services.conversation_service import (
    DateRange,
    SortOrder,
    delete_conversation,
    export_conversation,
    list_conversations,
)

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("")
def get_conversations(
    search: str = "",
    date_range: DateRange = Query("all", alias="range"),
    sort: SortOrder = Query("recent"),
    db: Session = Depends(get_db),
) -> list[dict]:
    return list_conversations(db, search=search, date_range=date_range, sort=sort)


@router.get("/{session_id}/export")
def export(session_id: str, db: Session = Depends(get_db)) -> dict:
    data = export_conversation(db, session_id)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")
    return data


@router.delete("/{session_id}")
def delete(session_id: str, db: Session = Depends(get_db)) -> dict:
    if not delete_conversation(db, session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")
    return {"ok": True}
