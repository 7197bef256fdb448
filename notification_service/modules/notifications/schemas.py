from typing import Optional, Union

from pydantic import BaseModel

DEFAULT_CHANNEL = "email"
DEFAULT_STATUS = "pending"


class NotificationCreate(BaseModel):
    # Required fields are checked by the handlers so a missing one is a 400, not a schema error
    account_id: Optional[Union[int, str]] = None
    message: Optional[str] = None
    channel: str = DEFAULT_CHANNEL
    status: str = DEFAULT_STATUS

    @property
    def is_complete(self) -> bool:
        return bool(self.account_id) and bool(self.message)


class NotificationStatusUpdate(BaseModel):
    status: Optional[str] = None


class NotificationRead(BaseModel):
    notification_id: int
    account_id: Union[int, str]
    message: str
    channel: str
    status: str

    class Config:
        from_attributes = True


class NotificationResponse(BaseModel):
    message: str
    notification: NotificationRead


class MessageResponse(BaseModel):
    message: str
