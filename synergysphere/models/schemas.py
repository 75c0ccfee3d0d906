from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Тела запросов API уведомлений (ключи в camelCase)
class NotificationCreate(ApiModel):
    message: Optional[str] = None
    type: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="projectId")
    task_id: Optional[str] = Field(None, alias="taskId")


class MarkReadRequest(ApiModel):
    notification_ids: Optional[List[str]] = Field(None, alias="notificationIds")
    mark_all_as_read: bool = Field(False, alias="markAllAsRead")


class DeadlineCheckRequest(ApiModel):
    days_ahead: Optional[int] = Field(None, alias="daysAhead", ge=0, le=365)
    for_all_users: bool = Field(False, alias="forAllUsers")


class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
