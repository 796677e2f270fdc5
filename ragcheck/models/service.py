"""
RAG service response models.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str


class PluginInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None
    status: Optional[str] = None
    capabilities: List[Any] = []


class PluginListResponse(BaseModel):
    data: List[PluginInfo] = []


class StatusResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: Optional[bool] = None
    data: Optional[Dict[str, Any]] = None
