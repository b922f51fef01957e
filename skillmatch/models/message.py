# skillmatch/models/message.py
from sqlalchemy import Column, DateTime, Integer, Text

from skillmatch.database import Base
from skillmatch.models.user import _utcnow


class Message(Base):
    """
    Append-only chat record.

    Participant ids are plain columns rather than foreign keys: deleting a
    user leaves their messages in place as soft orphans.
    """

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, nullable=False, index=True)
    receiver_id = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    sent_at = Column(DateTime, default=_utcnow, nullable=False, index=True)
