"""
请求体校验模型 (pydantic)

所有模型都允许额外字段：作品 / 故事是宽松结构的 JSON 记录，
未声明的字段原样保留并写入存储。
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

IP_PATTERN = r'^(\d{1,3}\.){3}\d{1,3}$|^([0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}$'


class Payload(BaseModel):
    model_config = ConfigDict(extra='allow')

    def to_record(self):
        """导出为存储用的 dict，只包含客户端实际提交的字段"""
        return self.model_dump(mode='json', exclude_unset=True, by_alias=True)


# Auth
class LoginRequest(Payload):
    username: str = Field(min_length=3)
    password: str = Field(min_length=1)


class PasswordChangeRequest(Payload):
    currentPassword: str = Field(min_length=1)
    newPassword: str = Field(min_length=8)


# Content blocks (按 type 区分)
class _Block(Payload):
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


class ImageBlock(_Block):
    type: Literal['image']
    image: Optional[str] = None


class TextBlock(_Block):
    type: Literal['text']


class ImageTextBlock(_Block):
    type: Literal['image-text']
    image: Optional[str] = None


class VideoBlock(_Block):
    type: Literal['video']
    video: Optional[str] = None


ContentBlock = Annotated[
    Union[ImageBlock, TextBlock, ImageTextBlock, VideoBlock],
    Field(discriminator='type'),
]


def _check_link(value):
    if value and not value.startswith(('http://', 'https://')):
        raise ValueError('Link must be a valid URL')
    return value


Link = Annotated[Optional[str], AfterValidator(_check_link)]


# Projects
class ProjectCreate(Payload):
    id: Optional[str] = None
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1)
    year: Optional[str] = None
    coverImage: Optional[str] = None
    images: Optional[List[str]] = None
    role: Optional[str] = None
    tools: Optional[List[str]] = None
    challenges: Optional[str] = None
    solution: Optional[str] = None
    contentBlocks: Optional[List[ContentBlock]] = None
    link: Link = None
    featured: Optional[bool] = None


class ProjectUpdate(Payload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    year: Optional[str] = None
    coverImage: Optional[str] = None
    images: Optional[List[str]] = None
    role: Optional[str] = None
    tools: Optional[List[str]] = None
    challenges: Optional[str] = None
    solution: Optional[str] = None
    contentBlocks: Optional[List[ContentBlock]] = None
    link: Link = None
    featured: Optional[bool] = None


# Stories
class StoryCreate(Payload):
    id: Optional[str] = None
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    coverImage: Optional[str] = None
    images: Optional[List[str]] = None
    category: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    content: Optional[str] = None
    contentBlocks: Optional[List[ContentBlock]] = None


class StoryUpdate(Payload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    coverImage: Optional[str] = None
    images: Optional[List[str]] = None
    category: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    content: Optional[str] = None
    contentBlocks: Optional[List[ContentBlock]] = None


# Messages
class MessageCreate(Payload):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)


# Categories
class CategoryPayload(Payload):
    label: str = Field(min_length=1, max_length=100)

    @field_validator('label')
    @classmethod
    def _strip_label(cls, value):
        if not value.strip():
            raise ValueError('Category label is required')
        return value


# Banned IPs
class BannedIpCreate(Payload):
    ip: str = Field(min_length=7, pattern=IP_PATTERN)
    reason: Optional[str] = Field(default=None, max_length=500)

