"""
Contract endpoints.

Companies create contracts for their own jobs, record payments and close
contracts out; either party can review a completed contract.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_active_user, require_company
from api.schemas.contracts import (
    ContractCreate,
    ContractCreateRequest,
    ContractResponse,
    ContractStatusUpdate,
    PaymentCreate,
)
from api.schemas.reviews import ReviewCreate, ReviewCreateRequest, ReviewResponse
from api.services import contracts as contract_service
from api.services import jobs as job_service
from api.services import reviews as review_service
from database.engine import get_db
from database.models.contracts import Contract
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["contracts"])


async def _get_contract(db: AsyncSession, contract_id: int) -> Contract:
    contract = await contract_service.get_contract_by_id(db, contract_id)
    if not contract:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contract not found")
    return contract


def _require_company_side(contract: Contract, user: User) -> None:
    if user.role != UserRole.ADMIN and contract.company_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the contracting company can do this",
        )


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    contract_data: ContractCreateRequest,
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    """Create a contract with a talent for one of the caller's jobs."""
    company_id = current_user.id
    if current_user.role == UserRole.ADMIN:
        job = await job_service.get_job_by_id(db, contract_data.job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
        company_id = job.company_id

    contract = await contract_service.create_contract(
        db, ContractCreate(**contract_data.model_dump(), company_id=company_id)
    )
    return ContractResponse.model_validate(contract)


@router.get("/me", response_model=list[ContractResponse])
async def list_my_contracts(
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Contracts where the caller is the talent or the company, depending on role."""
    if current_user.role == UserRole.COMPANY:
        contracts = await contract_service.get_contracts_by_company(db, current_user.id)
    else:
        contracts = await contract_service.get_contracts_by_talent(db, current_user.id)
    return [ContractResponse.model_validate(c) for c in contracts]


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: int = Path(..., description="Contract ID"),
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    contract = await _get_contract(db, contract_id)
    if current_user.role != UserRole.ADMIN and not contract.is_party(current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this contract",
        )
    return ContractResponse.model_validate(contract)


@router.post("/{contract_id}/payments", response_model=ContractResponse)
async def record_payment(
    payment: PaymentCreate,
    contract_id: int = Path(..., description="Contract ID"),
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    """Record a payment installment. Payment status follows the running total."""
    contract = await _get_contract(db, contract_id)
    _require_company_side(contract, current_user)

    contract = await contract_service.record_payment(db, contract_id, payment.amount)
    return ContractResponse.model_validate(contract)


@router.patch("/{contract_id}/status", response_model=ContractResponse)
async def update_contract_status(
    status_data: ContractStatusUpdate,
    contract_id: int = Path(..., description="Contract ID"),
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    """Complete or terminate a contract. Only admins may override the payment status."""
    contract = await _get_contract(db, contract_id)
    _require_company_side(contract, current_user)

    if status_data.payment_status is not None and current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can change the payment status directly",
        )

    contract = await contract_service.update_contract_status(
        db,
        contract_id,
        status=status_data.status,
        payment_status=status_data.payment_status,
    )
    return ContractResponse.model_validate(contract)


@router.post(
    "/{contract_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def review_contract(
    review_data: ReviewCreateRequest,
    contract_id: int = Path(..., description="Contract ID"),
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Review the other party on a completed contract."""
    contract = await _get_contract(db, contract_id)
    if not contract.is_party(current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only parties to the contract can leave a review",
        )

    review = await review_service.create_review(
        db,
        ReviewCreate(
            **review_data.model_dump(),
            contract_id=contract_id,
            reviewer_id=current_user.id,
            reviewee_id=contract.counterparty_id(current_user.id),
        ),
    )
    return ReviewResponse.model_validate(review)
