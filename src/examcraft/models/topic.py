"""Topic models for examcraft.

Topics group flashcards. A card without a topic belongs to the
implicit "general" topic.
"""

from pydantic import BaseModel, Field

__all__ = [
    "GENERAL_TOPIC_ID",
    "GENERAL_TOPIC_NAME",
    "TopicDTO",
]

GENERAL_TOPIC_ID = "general"
GENERAL_TOPIC_NAME = "General"


class TopicDTO(BaseModel, frozen=True):
    """Study topic.

    Attributes:
        topic_id: Unique topic ID
        name: Display name
        description: Optional free-form description
        schema_version: Schema version for forward compatibility
    """

    topic_id: str = Field(description="Unique topic ID")
    name: str
    description: str | None = Field(default=None)
    schema_version: int = Field(default=1)
