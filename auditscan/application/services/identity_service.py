"""
Identity service.

Resolves the session asserted by the upstream authentication layer to a
stable internal user id, creating the user on first sight.

Dependencies: auditscan.boundary.db.CRUD
System role: Identity resolution
"""

import logging
from typing import Awaitable, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.CRUD.user_crud import user_crud
from auditscan.core.exceptions import IdentityError, UnauthorizedError
from auditscan.models.identity import SessionIdentity

logger = logging.getLogger(__name__)

ResolveStrategy = Callable[[SessionIdentity], Awaitable[UUID | None]]


class IdentityService:
    """
    Identity resolver.

    Tries each strategy in order and returns the first id found:
    an asserted user id that still exists, then an upsert by email.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize identity service.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.strategies: list[ResolveStrategy] = [
            self._resolve_by_id,
            self._resolve_by_email,
        ]

    async def resolve(self, identity: SessionIdentity) -> UUID:
        """
        Resolve a session to an internal user id.

        Args:
            identity: Session identity from the request

        Returns:
            UUID: Internal user id

        Raises:
            UnauthorizedError: If the session has neither id nor email
            IdentityError: If an asserted id is stale and no email is available
        """
        if not identity.is_authenticated:
            raise UnauthorizedError()

        for strategy in self.strategies:
            user_id = await strategy(identity)
            if user_id is not None:
                return user_id

        logger.warning(
            "Session user id is stale and no email is available",
            extra={"asserted_user_id": identity.asserted_user_id},
        )
        raise IdentityError(
            "Unable to resolve user from session",
            {"user_id": identity.asserted_user_id},
        )

    async def _resolve_by_id(self, identity: SessionIdentity) -> UUID | None:
        if not identity.asserted_user_id:
            return None
        try:
            user_id = UUID(identity.asserted_user_id)
        except ValueError:
            return None
        user = await user_crud.get_by_id(self.db, user_id)
        return user.id if user else None

    async def _resolve_by_email(self, identity: SessionIdentity) -> UUID | None:
        if not identity.normalized_email:
            return None
        user = await user_crud.upsert_by_email(
            self.db,
            email=identity.normalized_email,
            name=identity.name,
            image=identity.image,
        )
        logger.debug(
            "Resolved user by email",
            extra={"user_id": str(user.id)},
        )
        return user.id
