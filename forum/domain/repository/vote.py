"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from forum.domain.model.vote import Vote
from forum.domain.value import CommentId, PostId, UserId, VotableType


class VoteRepository(ABC):
    """Repository for the vote ledger.

    The ledger is the source of truth for every score. Implementations
    must enforce at most one row per (user, votable) pair.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> List[Vote]:
        """Find all votes on a specific item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            List of votes on the item
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, CommentId]],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (post or comment)
            votable_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a ledger row.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already has a vote on this item
        """
        pass

    @abstractmethod
    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> bool:
        """Delete a vote by user and votable.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def replace_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        vote: Optional[Vote],
    ) -> None:
        """Swap a user's ledger row for a new one as a single unit.

        The user's existing row on the item is deleted and ``vote`` is
        inserted in its place; ``None`` only deletes. If the insert fails,
        the delete is undone too and the ledger is left as it was.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            vote: The replacement row, or None to retract

        Raises:
            IntegrityError: If the replacement collides with another row
        """
        pass

    @abstractmethod
    async def delete_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, CommentId]],
    ) -> int:
        """Delete every vote on the given items.

        Used when posts or comments are removed.

        Args:
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items

        Returns:
            Number of deleted votes
        """
        pass

    @abstractmethod
    async def tally(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> int:
        """Sum the ledger for one item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            Number of upvotes minus number of downvotes
        """
        pass
