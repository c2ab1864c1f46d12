# schemas/schedule_schema.py
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ScheduleCreate(BaseModel):
    # 필수 여부는 저장소에서 검사한다(누락 시 400)
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    priority: Optional[Priority] = None
    enableNotification: Optional[bool] = None
    notified: Optional[bool] = None


class ScheduleUpdate(BaseModel):
    """
    PUT 본문. 넘어온 필드만 기존 일정 위에 덮어쓴다.
    id/createdAt/updatedAt 같은 서버 필드는 무시된다.
    """
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[str] = Field(None, min_length=1)
    time: Optional[str] = Field(None, min_length=1)
    priority: Optional[Priority] = None
    completed: Optional[bool] = None
    notified: Optional[bool] = None
    enableNotification: Optional[bool] = None


class Schedule(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    title: str
    description: str = ""
    date: str
    time: str
    priority: Priority = Priority.medium
    completed: bool = False
    notified: Optional[bool] = None
    enableNotification: Optional[bool] = None
    createdAt: str
    updatedAt: str


class NotifyIn(BaseModel):
    apiKey: Optional[str] = None
    scheduleId: Optional[str] = None


class MessageOut(BaseModel):
    message: str
