import httpx
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional, Literal
from datetime import datetime

DeploymentEnvironment = Literal["dev", "staging", "prod"]
DeploymentStatus = Literal["connected", "error", "pending"]


class DeploymentCreate(BaseModel):
    name: str
    url: str
    deploy_key: str
    environment: DeploymentEnvironment = "dev"

    @model_validator(mode="after")
    def check_fields(self):
        self.name = self.name.strip()
        self.url = self.url.strip()
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.url.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        try:
            httpx.URL(self.url)
        except httpx.InvalidURL:
            raise ValueError("url is not a valid URL")
        if not self.deploy_key.strip():
            raise ValueError("deploy_key must not be empty")
        return self


class DeploymentStatusUpdate(BaseModel):
    status: DeploymentStatus
    error_message: Optional[str] = None


class DeploymentResponse(BaseModel):
    id: str
    name: str
    url: str
    environment: DeploymentEnvironment
    status: DeploymentStatus
    last_checked: Optional[datetime] = None
    error_message: Optional[str] = None
    user_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentQueryRequest(BaseModel):
    table_name: str
    cursor: Optional[str] = None
    limit: Optional[int] = None


class ActionResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class DocumentQueryResponse(BaseModel):
    success: bool
    documents: Optional[str] = None
    error: Optional[str] = None
