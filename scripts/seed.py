"""
Reset the database and fill it with demo marketplace data.

Every row goes through the service layer, so seeded data obeys the same
rules as data created over the API. Values come from a seeded
``random.Random`` and are identical between runs with the same ``--seed``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import string
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.applications import ApplicationCreate
from api.schemas.contracts import ContractCreate
from api.schemas.jobs import JobCreate, JobUpdate
from api.schemas.reviews import ReviewCreate
from api.schemas.tickets import TicketCreate, TicketUpdate
from api.schemas.users import UserCreate
from api.services import (
    create_application,
    create_contract,
    create_job,
    create_review,
    create_ticket,
    create_user,
    record_payment,
    update_application_status,
    update_contract_status,
    update_job,
    update_ticket,
)
from core.config import settings
from core.middleware.logging import setup_logging
from database.engine import AsyncSessionLocal, close_db, init_db
from database.models import (
    Application,
    ApplicationStatus,
    Contract,
    ContractStatus,
    Job,
    JobCategory,
    JobStatus,
    PayType,
    Review,
    Ticket,
    TicketPriority,
    TicketStatus,
    User,
    UserRole,
)

logger = logging.getLogger("scripts.seed")

ADMIN_EMAIL = "admin@opskill.com"
ADMIN_PASSWORD = "Admin@12345"
DEMO_PASSWORD = "Password@123"

CITIES = [
    ("Mumbai", "Maharashtra"),
    ("Pune", "Maharashtra"),
    ("Bengaluru", "Karnataka"),
    ("Chennai", "Tamil Nadu"),
    ("Hyderabad", "Telangana"),
    ("New Delhi", "Delhi"),
    ("Jaipur", "Rajasthan"),
    ("Kolkata", "West Bengal"),
    ("Ahmedabad", "Gujarat"),
    ("Kochi", "Kerala"),
]
FIRST_NAMES = [
    "Aarav", "Vivaan", "Aditya", "Ishaan", "Rohan", "Kabir", "Arjun", "Karan",
    "Ananya", "Diya", "Priya", "Meera", "Saanvi", "Kavya", "Nisha", "Riya",
]
LAST_NAMES = [
    "Sharma", "Verma", "Iyer", "Nair", "Reddy", "Patel", "Gupta", "Mehta",
    "Singh", "Das", "Kulkarni", "Joshi",
]
COMPANY_PREFIXES = ["Sterling", "Lotus", "Saffron", "Crescent", "Banyan", "Monsoon", "Peacock"]
COMPANY_SUFFIXES = ["Events", "Hospitality", "Services", "Ventures", "Caterers"]
SKILL_POOL = [
    "Event Planning", "Guest Relations", "Bartending", "Photography", "Videography",
    "Catering", "Crowd Control", "First Aid", "Housekeeping", "Sound Engineering",
    "Stage Lighting", "Customer Support", "Hindi", "English", "Tamil", "Driving",
]
JOB_ROLES = ["Coordinator", "Assistant", "Lead", "Specialist", "Supervisor", "Crew Member"]
TICKET_SUBJECTS = [
    "Payment not reflected in dashboard",
    "Unable to update profile photo",
    "Company not responding to messages",
    "Request to verify Aadhaar details",
    "Job posting shows wrong location",
    "Contract end date needs correction",
    "Dispute over completed work",
]
LOREM = (
    "We are looking for reliable people who can work flexible hours and "
    "communicate clearly with guests and clients. Prior experience is a plus "
    "but training is provided on site for the right candidates."
)

PAY_RANGES = {
    PayType.HOURLY: (100, 1000),
    PayType.DAILY: (800, 5000),
    PayType.FIXED: (5000, 50000),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the database with demo data")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--companies", type=int, default=5, help="Number of companies")
    parser.add_argument("--talents", type=int, default=20, help="Number of talents")
    parser.add_argument("--jobs", type=int, default=30, help="Number of jobs")
    parser.add_argument("--tickets", type=int, default=15, help="Number of support tickets")
    return parser.parse_args(argv)


def _phone(rng: random.Random) -> str:
    return f"+91-{rng.choice('6789')}{''.join(rng.choices(string.digits, k=9))}"


def _aadhaar(rng: random.Random) -> str:
    return f"{rng.randint(2, 9)}{''.join(rng.choices(string.digits, k=11))}"


def _gst(rng: random.Random) -> str:
    return (
        f"{rng.randint(1, 37):02d}"
        f"{''.join(rng.choices(string.ascii_uppercase, k=5))}"
        f"{''.join(rng.choices(string.digits, k=4))}"
        f"{rng.choice(string.ascii_uppercase)}"
        f"{rng.randint(1, 9)}Z"
        f"{rng.choice(string.ascii_uppercase + string.digits)}"
    )


def _pincode(rng: random.Random) -> str:
    return str(rng.randint(110001, 855999))


async def clear_data(session: AsyncSession) -> None:
    """Delete all rows, children first."""
    for model in (Ticket, Review, Contract, Application, Job, User):
        await session.execute(delete(model))
    await session.commit()
    logger.info("Cleared existing data")


async def seed_users(
    session: AsyncSession, rng: random.Random, companies: int, talents: int
) -> tuple[User, list[User], list[User]]:
    city, state = rng.choice(CITIES)
    admin = await create_user(
        session,
        UserCreate(
            email=ADMIN_EMAIL,
            password=ADMIN_PASSWORD,
            name="Admin User",
            role=UserRole.ADMIN,
            phone=_phone(rng),
            city=city,
            state=state,
            pincode=_pincode(rng),
        ),
    )

    company_users = []
    for i in range(companies):
        city, state = rng.choice(CITIES)
        name = f"{rng.choice(COMPANY_PREFIXES)} {rng.choice(COMPANY_SUFFIXES)}"
        company = await create_user(
            session,
            UserCreate(
                email=f"company{i + 1}@opskill.com",
                password=DEMO_PASSWORD,
                name=name,
                role=UserRole.COMPANY,
                phone=_phone(rng),
                address=f"{rng.randint(1, 200)}, MG Road",
                city=city,
                state=state,
                pincode=_pincode(rng),
                gst_number=_gst(rng),
            ),
        )
        company.gst_verified = rng.random() < 0.8
        company_users.append(company)

    talent_users = []
    for i in range(talents):
        city, state = rng.choice(CITIES)
        talent = await create_user(
            session,
            UserCreate(
                email=f"talent{i + 1}@opskill.com",
                password=DEMO_PASSWORD,
                name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                role=UserRole.TALENT,
                phone=_phone(rng),
                city=city,
                state=state,
                pincode=_pincode(rng),
                aadhaar_number=_aadhaar(rng),
                skills=rng.sample(SKILL_POOL, rng.randint(3, 6)),
                bio="Experienced event professional available for short engagements.",
                experience_years=rng.randint(0, 20),
                hourly_rate=rng.randint(100, 2000),
            ),
        )
        talent.aadhaar_verified = rng.random() < 0.7
        talent_users.append(talent)

    admin.aadhaar_verified = True
    admin.gst_verified = True
    await session.commit()

    logger.info(f"Created admin, {len(company_users)} companies and {len(talent_users)} talents")
    return admin, company_users, talent_users


async def seed_jobs(
    session: AsyncSession, rng: random.Random, companies: list[User], count: int
) -> list[Job]:
    now = datetime.now(timezone.utc)
    jobs = []
    for _ in range(count):
        category = rng.choice(list(JobCategory))
        pay_type = rng.choice(list(PayType))
        low, high = PAY_RANGES[pay_type]
        city, state = rng.choice(CITIES)
        start = now + timedelta(days=rng.randint(1, 7))
        job = await create_job(
            session,
            JobCreate(
                company_id=rng.choice(companies).id,
                title=f"{category.value} {rng.choice(JOB_ROLES)}",
                description=LOREM,
                category=category,
                location=f"{city}, {state}",
                pay_type=pay_type,
                pay_amount=rng.randint(low, high),
                start_date=start,
                end_date=start + timedelta(days=rng.randint(1, 30)),
            ),
        )
        jobs.append(job)

    logger.info(f"Created {len(jobs)} jobs")
    return jobs


async def seed_applications(
    session: AsyncSession, rng: random.Random, jobs: list[Job], talents: list[User]
) -> list[Application]:
    statuses = list(ApplicationStatus)
    created = []
    for job in jobs:
        applicants = rng.sample(talents, min(rng.randint(1, 5), len(talents)))
        for talent in applicants:
            application = await create_application(
                session,
                ApplicationCreate(
                    job_id=job.id,
                    talent_id=talent.id,
                    cover_letter=f"I would love to work as your {job.title.lower()}.",
                    proposed_rate=job.pay_amount,
                    estimated_days=rng.randint(1, 30),
                ),
            )
            status = rng.choice(statuses)
            if status != ApplicationStatus.PENDING:
                application = await update_application_status(session, application.id, status)
            created.append(application)

    logger.info(f"Created {len(created)} applications")
    return created


async def seed_contracts(
    session: AsyncSession,
    rng: random.Random,
    jobs: list[Job],
    applications: list[Application],
) -> list[Contract]:
    jobs_by_id = {job.id: job for job in jobs}
    contracts = []
    for application in applications:
        if application.status != ApplicationStatus.HIRED:
            continue
        job = jobs_by_id[application.job_id]
        total = float(rng.randint(5000, 50000))
        contract = await create_contract(
            session,
            ContractCreate(
                job_id=job.id,
                talent_id=application.talent_id,
                company_id=job.company_id,
                total_amount=total,
                terms="Payment on milestone completion.",
                start_date=job.start_date,
                end_date=job.start_date + timedelta(days=rng.randint(1, 60)),
            ),
        )

        outcome = rng.choice(list(ContractStatus))
        if outcome == ContractStatus.COMPLETED:
            contract = await record_payment(session, contract.id, total)
        elif outcome == ContractStatus.ACTIVE and rng.random() < 0.5:
            contract = await record_payment(session, contract.id, round(total * rng.uniform(0.1, 0.9), 2))
        if outcome != ContractStatus.ACTIVE:
            contract = await update_contract_status(session, contract.id, status=outcome)
        contracts.append(contract)

        if job.status == JobStatus.OPEN:
            await update_job(session, job.id, JobUpdate(status=JobStatus.IN_PROGRESS))

    for job in jobs:
        if job.status == JobStatus.OPEN and rng.random() < 0.15:
            await update_job(session, job.id, JobUpdate(status=JobStatus.CANCELLED))

    logger.info(f"Created {len(contracts)} contracts")
    return contracts


async def seed_reviews(
    session: AsyncSession, rng: random.Random, contracts: list[Contract]
) -> int:
    count = 0
    for contract in contracts:
        if contract.status != ContractStatus.COMPLETED:
            continue
        for reviewer_id, reviewee_id in (
            (contract.company_id, contract.talent_id),
            (contract.talent_id, contract.company_id),
        ):
            await create_review(
                session,
                ReviewCreate(
                    contract_id=contract.id,
                    reviewer_id=reviewer_id,
                    reviewee_id=reviewee_id,
                    rating=rng.randint(1, 5),
                    comment="Smooth engagement, would work together again.",
                ),
            )
            count += 1

    logger.info(f"Created {count} reviews")
    return count


async def seed_tickets(
    session: AsyncSession, rng: random.Random, users: list[User], count: int
) -> int:
    for _ in range(count):
        ticket = await create_ticket(
            session,
            TicketCreate(
                user_id=rng.choice(users).id,
                subject=rng.choice(TICKET_SUBJECTS),
                description="Please look into this at the earliest, details are in my account history.",
                priority=rng.choice(list(TicketPriority)),
            ),
        )
        status = rng.choice(list(TicketStatus))
        if status != TicketStatus.OPEN:
            await update_ticket(session, ticket.id, TicketUpdate(status=status))

    logger.info(f"Created {count} support tickets")
    return count


async def seed(args: argparse.Namespace) -> dict[str, int]:
    rng = random.Random(args.seed)
    await init_db()

    async with AsyncSessionLocal() as session:
        await clear_data(session)
        admin, companies, talents = await seed_users(session, rng, args.companies, args.talents)
        jobs = await seed_jobs(session, rng, companies, args.jobs)
        applications = await seed_applications(session, rng, jobs, talents)
        contracts = await seed_contracts(session, rng, jobs, applications)
        reviews = await seed_reviews(session, rng, contracts)
        tickets = await seed_tickets(session, rng, [admin, *companies, *talents], args.tickets)

    await close_db()
    return {
        "companies": len(companies),
        "talents": len(talents),
        "jobs": len(jobs),
        "applications": len(applications),
        "contracts": len(contracts),
        "reviews": reviews,
        "tickets": tickets,
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(log_level=settings.log_level, json_logs=False)

    summary = asyncio.run(seed(args))
    print("Database seeded:")
    for name, value in summary.items():
        print(f"  {name}: {value}")
    print(f"\nAdmin login: {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
    print(f"Demo users: company1@opskill.com, talent1@opskill.com / {DEMO_PASSWORD}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
