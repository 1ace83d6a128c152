"""
Contract service functions.

Contracts move ACTIVE -> COMPLETED or TERMINATED. Payments accumulate in
``amount_paid`` and ``payment_status`` follows from the running total.
"""

from typing import List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.contracts import ContractCreate
from core.exceptions import NotFoundError
from database.models.contracts import Contract, ContractStatus, PaymentStatus
from database.models.jobs import Job
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)


def derive_payment_status(amount_paid: float, total_amount: float) -> PaymentStatus:
    """PENDING at zero, PAID once the total is reached, PARTIALLY_PAID in between."""
    if amount_paid <= 0:
        return PaymentStatus.PENDING
    if amount_paid >= total_amount:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIALLY_PAID


async def create_contract(session: AsyncSession, data: ContractCreate) -> Contract:
    """
    Create a contract between a company and a talent for one of the company's jobs.

    New contracts always start ACTIVE, with PENDING payment and nothing paid,
    whatever the payload says.

    Raises:
        NotFoundError: If the job or talent does not exist
        PermissionError: If the company does not own the job
        ValueError: If talent_id is not a talent account
    """
    job = await session.get(Job, data.job_id)
    if not job:
        raise NotFoundError(f"Job {data.job_id} not found")
    if job.company_id != data.company_id:
        raise PermissionError("You can only create contracts for your own jobs")

    talent = await session.get(User, data.talent_id)
    if not talent:
        raise NotFoundError(f"User {data.talent_id} not found")
    if talent.role != UserRole.TALENT:
        raise ValueError("Contracts can only be created with talent accounts")

    values = data.model_dump(exclude={"status", "payment_status", "amount_paid"})
    contract = Contract(
        **values,
        status=ContractStatus.ACTIVE,
        payment_status=PaymentStatus.PENDING,
        amount_paid=0,
    )
    session.add(contract)
    await session.commit()
    await session.refresh(contract)

    logger.info(
        f"Contract {contract.id} created for job {contract.job_id} "
        f"between company {contract.company_id} and talent {contract.talent_id}"
    )
    return contract


async def get_contract_by_id(session: AsyncSession, contract_id: int) -> Optional[Contract]:
    return await session.get(Contract, contract_id)


async def get_contracts_by_talent(session: AsyncSession, talent_id: int) -> List[Contract]:
    result = await session.execute(
        select(Contract)
        .where(Contract.talent_id == talent_id)
        .order_by(Contract.created_at.desc(), Contract.id.desc())
    )
    return list(result.scalars().all())


async def get_contracts_by_company(session: AsyncSession, company_id: int) -> List[Contract]:
    result = await session.execute(
        select(Contract)
        .where(Contract.company_id == company_id)
        .order_by(Contract.created_at.desc(), Contract.id.desc())
    )
    return list(result.scalars().all())


async def record_payment(session: AsyncSession, contract_id: int, amount: float) -> Contract:
    """
    Add a payment installment to a contract.

    Args:
        session: Database session
        contract_id: Contract ID
        amount: Installment amount, must be positive

    Returns:
        The updated contract with the derived payment status

    Raises:
        NotFoundError: If the contract does not exist
        ValueError: If the amount is not positive, the contract was terminated,
            or the payment would exceed the total
    """
    contract = await session.get(Contract, contract_id)
    if not contract:
        raise NotFoundError(f"Contract {contract_id} not found")
    if amount <= 0:
        raise ValueError("Payment amount must be positive")
    if contract.status == ContractStatus.TERMINATED:
        raise ValueError("Cannot record payments on a terminated contract")

    new_total = round(contract.amount_paid + amount, 2)
    if new_total > contract.total_amount:
        raise ValueError("Amount paid cannot exceed total amount")

    contract.amount_paid = new_total
    contract.payment_status = derive_payment_status(new_total, contract.total_amount)
    await session.commit()
    await session.refresh(contract)

    logger.info(
        f"Recorded payment of {amount} on contract {contract_id} "
        f"({contract.amount_paid}/{contract.total_amount}, {contract.payment_status.value})"
    )
    return contract


async def update_contract_status(
    session: AsyncSession,
    contract_id: int,
    status: Optional[ContractStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
) -> Contract:
    """
    Change a contract's lifecycle or payment status.

    Completing a contract credits the talent with one more completed job.
    Only ACTIVE contracts can change lifecycle status.

    Raises:
        NotFoundError: If the contract does not exist
        ValueError: If the transition is not allowed
    """
    contract = await session.get(Contract, contract_id)
    if not contract:
        raise NotFoundError(f"Contract {contract_id} not found")

    if status is not None and status != contract.status:
        if contract.status != ContractStatus.ACTIVE:
            raise ValueError(
                f"Cannot change status of a {contract.status.value.lower()} contract"
            )
        contract.status = status

        if status == ContractStatus.COMPLETED:
            talent = await session.get(User, contract.talent_id)
            if talent:
                talent.jobs_completed = (talent.jobs_completed or 0) + 1

    if payment_status is not None:
        contract.payment_status = payment_status

    await session.commit()
    await session.refresh(contract)

    logger.info(
        f"Contract {contract_id} is now {contract.status.value} / {contract.payment_status.value}"
    )
    return contract
