"""
Resolve User Use Case

Maps an already-verified external identity onto a local User row.
"""

import logging

from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import User
from engagement.domain.errors import ValidationError
from engagement.libs.result import Result, Return

from .dtos import CurrentUser

logger = logging.getLogger(__name__)


class ResolveUserUseCase:
    """
    Use case for resolving (upserting) the caller's User row.

    Business Rules:
    - Credentials are never re-validated here; the identity is trusted
    - A first sighting creates the user
    - An email change at the identity provider is mirrored locally
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, external_id: str, email: str) -> Result[CurrentUser]:
        if not external_id:
            raise ValidationError("Identity has no subject")

        async with self.uow:
            user = await self.uow.users.get_by_external_id(external_id)

            if user is None:
                user = await self.uow.users.create(
                    User(external_id=external_id, email=(email or "").lower())
                )
                logger.info("Created user %s for external identity %s", user.id, external_id)
                await self.uow.commit()
            elif email and user.email != email.lower():
                user.email = email.lower()
                user = await self.uow.users.update(user)
                await self.uow.commit()

            return Return.ok(
                CurrentUser(id=user.id, external_id=user.external_id, email=user.email)
            )
