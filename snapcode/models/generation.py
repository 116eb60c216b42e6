# FILE: snapcode/models/generation.py
"""
Code generation models
"""
from dataclasses import dataclass
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ImageRecord:
    """Uploaded image kept in the ephemeral image store"""
    data_url: str
    description: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class InlineImage:
    """Image bytes sent inline to the model (base64 payload + media type)"""
    data: str
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class RemoteImage:
    """Image sent to the model by reference"""
    uri: str
    mime_type: Optional[str] = None


PromptPart = Union[str, InlineImage, RemoteImage]


class GenerateCodeRequest(BaseModel):
    """Generate code request (field names follow the web client)"""
    model_config = ConfigDict(populate_by_name=True)

    model: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    image_id: Optional[str] = Field(default=None, alias="imageId")
    image_description: Optional[str] = Field(default=None, alias="imageDescription")
    shadcn: bool = Field(default=False, description="Offer the pre-styled component library in the prompt")


class UploadResponse(BaseModel):
    """Upload response"""
    model_config = ConfigDict(populate_by_name=True)

    url: str
    name: Optional[str] = None
    image_id: str = Field(alias="imageId")
    description: Optional[str] = None
