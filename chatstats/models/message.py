"""
ORM mappings for the chat message store.

The report service only reads these tables; they are declared here so the
schema can be created for development and tests.
"""
from sqlalchemy import Column, BigInteger, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from chatstats.core.database import Base

# SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")


class Group(Base):
    """A chat group or channel."""

    __tablename__ = "gt_groups"

    id = Column(IdType, primary_key=True)
    name = Column(String(255), nullable=False)

    messages = relationship("Message", back_populates="group")

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name!r})>"


class Message(Base):
    """A message posted to a group."""

    __tablename__ = "gt_messages"

    id = Column(IdType, primary_key=True)
    chat_id = Column(IdType, ForeignKey("gt_groups.id"), nullable=False, index=True)

    group = relationship("Group", back_populates="messages")
    content = relationship("MessageContent", back_populates="message", uselist=False)

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, chat_id={self.chat_id})>"


class MessageContent(Base):
    """Payload of a message; shares its primary key with the message row."""

    __tablename__ = "gt_message_content"

    id = Column(IdType, ForeignKey("gt_messages.id"), primary_key=True)
    text = Column(Text, nullable=True)

    # Local wall-clock time the message was sent
    tg_date = Column(DateTime, nullable=False, index=True)

    message = relationship("Message", back_populates="content")

    def __repr__(self) -> str:
        return f"<MessageContent(id={self.id}, tg_date={self.tg_date})>"
