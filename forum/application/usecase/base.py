"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class CamelModel(BaseModel):
    """Base for response models sent to clients.

    Fields are snake_case in Python and camelCase on the wire
    (``user_vote`` is serialized as ``userVote``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
