from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.verification_token_repository import IVerificationTokenRepository
from src.domain.entities import TokenSubject, VerificationToken


class VerificationTokenRepository(IVerificationTokenRepository):
    """VerificationToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: VerificationToken) -> VerificationToken:
        """Persist a new token row"""
        self.session.add(token)
        await self.session.flush()
        return token

    async def get(self, subject: TokenSubject, token_hash: str) -> Optional[VerificationToken]:
        """Look up a token row without consuming it"""
        stmt = select(VerificationToken).where(
            VerificationToken.purpose == subject.purpose,
            VerificationToken.identifier == subject.email,
            VerificationToken.token_hash == token_hash,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def consume(self, subject: TokenSubject, token_hash: str) -> Optional[VerificationToken]:
        """
        Read the row, then delete it with a conditional DELETE.

        The DELETE is the race-breaker: when two transactions read the same
        row, the store lets only one of them delete it, and the loser sees
        rowcount == 0 and gets None back.
        """
        token = await self.get(subject, token_hash)
        if token is None:
            return None

        stmt = (
            delete(VerificationToken)
            .where(
                VerificationToken.purpose == subject.purpose,
                VerificationToken.identifier == subject.email,
                VerificationToken.token_hash == token_hash,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None

        self.session.expunge(token)
        return token
