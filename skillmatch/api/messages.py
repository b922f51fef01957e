from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skillmatch.database import get_db
from skillmatch.schemas.message import Conversation, Message, MessageCreate
from skillmatch.services import conversation_service

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("/", response_model=Message, status_code=status.HTTP_201_CREATED)
def send_message(payload: MessageCreate, db: Session = Depends(get_db)):
    return conversation_service.send_message(
        db,
        sender_id=payload.sender_id,
        receiver_id=payload.receiver_id,
        content=payload.content,
    )


@router.get("/{user_id}/conversations", response_model=List[Conversation])
def list_conversations(user_id: int, db: Session = Depends(get_db)):
    return conversation_service.list_conversations(db, user_id)


@router.get("/{user_id}/with/{counterpart_id}", response_model=List[Message])
def get_thread(user_id: int, counterpart_id: int, db: Session = Depends(get_db)):
    return conversation_service.get_thread(db, user_id, counterpart_id)
