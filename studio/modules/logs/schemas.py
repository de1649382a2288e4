from pydantic import BaseModel, ConfigDict
from typing import Optional, Literal
from datetime import datetime

LogLevel = Literal["error", "warning", "info", "debug"]


class LogCreate(BaseModel):
    deployment_id: str
    level: LogLevel
    message: str
    function_name: Optional[str] = None
    request_id: Optional[str] = None


class LogResponse(BaseModel):
    id: str
    deployment_id: str
    level: LogLevel
    message: str
    timestamp: datetime
    function_name: Optional[str] = None
    request_id: Optional[str] = None
    user_id: str

    model_config = ConfigDict(from_attributes=True)


class LogClearResponse(BaseModel):
    deployment_id: str
    deleted: int
