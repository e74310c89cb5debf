"""User aggregate root.

Users register with a username, email and password.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId
from forum.domain.value.types import Email, Username


class User(DomainModel):
    """User aggregate root.

    The password is only ever held as a bcrypt hash.
    """

    id: UserId
    username: Username
    email: Email
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=datetime.now)
