"""
User CRUD operations.

Provides lookup by email and an email-keyed upsert used by the
identity resolver.

Dependencies: sqlalchemy, auditscan.boundary.db.models
System role: User persistence operations
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auditscan.boundary.db.models.user_model import UserModel
from auditscan.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """
    CRUD operations for UserModel.

    Extends BaseCRUD with email lookups and upsert.
    """

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> UserModel | None:
        """
        Retrieve user by unique email.

        Args:
            session: Async database session
            email: Email address

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_by_email(
        self,
        session: AsyncSession,
        email: str,
        name: str | None = None,
        image: str | None = None,
    ) -> UserModel:
        """
        Update or create the user identified by email.

        Existing rows only take name/image values that are non-empty, so a
        session lacking a display name never blanks a stored one. A
        concurrent insert of the same email is absorbed by re-reading the
        row after the unique constraint fires, which rolls back any pending
        work in the session; call it before other writes.

        Args:
            session: Async database session
            email: Email address (identity key)
            name: Display name from the session
            image: Avatar reference from the session

        Returns:
            UserModel: Existing or newly created user
        """
        user = await self.get_by_email(session, email)
        if user is None:
            try:
                return await self.create(session, email=email, name=name or None, image=image or None)
            except IntegrityError:
                # Lost a race with another first-sight request for this email
                await session.rollback()
                user = await self.get_by_email(session, email)
                if user is None:
                    raise

        changes = {}
        if name:
            changes["name"] = name
        if image:
            changes["image"] = image
        if changes:
            for field, value in changes.items():
                setattr(user, field, value)
            await session.flush()
        return user


user_crud = UserCRUD()
