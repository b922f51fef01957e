from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class MessageCreate(BaseModel):
    sender_id: int
    receiver_id: int
    content: str


class Message(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    sent_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Conversation(BaseModel):
    """Derived thread between a user and one counterpart"""
    counterpart_id: int
    counterpart_name: Optional[str] = None  # None once the counterpart is deleted
    last_message: Message
    messages: List[Message]
