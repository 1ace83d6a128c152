"""Review service functions."""

from typing import List
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from api.schemas.reviews import ReviewCreate
from core.exceptions import ConflictError, NotFoundError
from core.utils.formatting import round_rating
from database.models.contracts import Contract, ContractStatus
from database.models.reviews import Review
from database.models.users import User

logger = logging.getLogger(__name__)


async def create_review(session: AsyncSession, data: ReviewCreate) -> Review:
    """
    Leave a review on a completed contract and refresh the reviewee's rating.

    The reviewer must be the contract's talent or company and the reviewee
    must be the other party.

    Args:
        session: Database session
        data: Validated review payload

    Returns:
        The persisted review

    Raises:
        NotFoundError: If the contract does not exist
        PermissionError: If the reviewer is not a party to the contract
        ValueError: If the contract is not completed or the reviewee is wrong
        ConflictError: If the reviewer already reviewed this contract
    """
    contract = await session.get(Contract, data.contract_id)
    if not contract:
        raise NotFoundError(f"Contract {data.contract_id} not found")
    if not contract.is_party(data.reviewer_id):
        raise PermissionError("Only parties to the contract can leave a review")
    if contract.status != ContractStatus.COMPLETED:
        raise ValueError("Only completed contracts can be reviewed")
    if data.reviewee_id != contract.counterparty_id(data.reviewer_id):
        raise ValueError("Reviewee must be the other party on the contract")

    existing = await session.execute(
        select(Review.id).where(
            Review.contract_id == data.contract_id,
            Review.reviewer_id == data.reviewer_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("You have already reviewed this contract")

    review = Review(**data.model_dump())
    session.add(review)
    await session.flush()

    await _refresh_user_rating(session, data.reviewee_id)
    await session.commit()
    await session.refresh(review)

    logger.info(
        f"User {review.reviewer_id} rated user {review.reviewee_id} "
        f"{review.rating}/5 on contract {review.contract_id}"
    )
    return review


async def _refresh_user_rating(session: AsyncSession, user_id: int) -> None:
    """Recompute a user's cached rating from the reviews they received."""
    result = await session.execute(
        select(func.avg(Review.rating)).where(Review.reviewee_id == user_id)
    )
    user = await session.get(User, user_id)
    if user:
        user.rating = round_rating(result.scalar())


async def get_reviews_by_user(session: AsyncSession, user_id: int) -> List[Review]:
    """Reviews received by a user, newest first, with the reviewer loaded."""
    result = await session.execute(
        select(Review)
        .options(selectinload(Review.reviewer))
        .where(Review.reviewee_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())
