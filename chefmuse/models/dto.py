from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chefmuse.models.schema_registry import SchemaDescriptor


@dataclass(frozen=True)
class ImageAttachment:
    data: bytes
    mime_type: str = "image/jpeg"


@dataclass(frozen=True)
class GenerationRequest:
    """One instruction bound to the schema the answer must follow."""

    instruction: str
    schema: SchemaDescriptor
    persona_id: Optional[str] = None
    exclusions: Optional[str] = None
    flavor: Optional[str] = None
    style: Optional[str] = None
    image: Optional[ImageAttachment] = None

    @property
    def kind(self) -> str:
        return self.schema.name
