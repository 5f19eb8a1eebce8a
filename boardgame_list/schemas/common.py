from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Link(CamelModel):
    href: str
    rel: str
    type: str


class RestEnvelope(CamelModel, Generic[T]):
    data: T
    page_index: Optional[int] = None
    page_size: Optional[int] = None
    record_count: Optional[int] = None
    links: List[Link] = []
