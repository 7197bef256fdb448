from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from notification_service.core.db import Base


class AccountId(TypeDecorator):
    """
    Caller-supplied account identifier, numeric or not.
    Stored as text; values that are the text of an integer come back as int.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            number = int(value)
        except ValueError:
            return value
        # "007" stays a string so it reads back exactly as sent
        return number if str(number) == value else value


class Notification(Base):
    __tablename__ = "notifications"
    # Ids are never reused after a delete, SQLite included
    __table_args__ = {"sqlite_autoincrement": True}

    notification_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(AccountId, nullable=False, index=True)
    message = Column(Text, nullable=False)
    channel = Column(String, nullable=False, default="email", server_default="email")  # e.g. "email", "sms"
    status = Column(String, nullable=False, default="pending", server_default="pending")  # e.g. "pending", "sent", "failed"
