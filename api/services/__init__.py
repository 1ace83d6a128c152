"""
API Services Layer.

Query helpers and business rules over the ORM models. Every function takes
an ``AsyncSession`` first so routes, scripts and tests share one code path.
"""

from api.services.users import (
    get_user_by_id,
    get_user_by_email,
    create_user,
    update_user,
    set_user_banned,
    login_user,
)

from api.services.jobs import (
    create_job,
    get_job_by_id,
    get_jobs_by_company,
    get_job_with_company,
    update_job,
    search_jobs,
    count_open_jobs,
)

from api.services.applications import (
    create_application,
    get_application_by_id,
    get_applications_by_job,
    get_applications_by_talent,
    update_application_status,
)

from api.services.contracts import (
    create_contract,
    get_contract_by_id,
    get_contracts_by_talent,
    get_contracts_by_company,
    record_payment,
    update_contract_status,
    derive_payment_status,
)

from api.services.reviews import (
    create_review,
    get_reviews_by_user,
)

from api.services.tickets import (
    create_ticket,
    get_ticket_by_id,
    get_tickets_by_user,
    get_all_tickets,
    update_ticket,
)

from api.services.search import search_talents

from api.services.dashboard import get_dashboard


__all__ = [
    # Users
    "get_user_by_id",
    "get_user_by_email",
    "create_user",
    "update_user",
    "set_user_banned",
    "login_user",
    # Jobs
    "create_job",
    "get_job_by_id",
    "get_jobs_by_company",
    "get_job_with_company",
    "update_job",
    "search_jobs",
    "count_open_jobs",
    # Applications
    "create_application",
    "get_application_by_id",
    "get_applications_by_job",
    "get_applications_by_talent",
    "update_application_status",
    # Contracts
    "create_contract",
    "get_contract_by_id",
    "get_contracts_by_talent",
    "get_contracts_by_company",
    "record_payment",
    "update_contract_status",
    "derive_payment_status",
    # Reviews
    "create_review",
    "get_reviews_by_user",
    # Tickets
    "create_ticket",
    "get_ticket_by_id",
    "get_tickets_by_user",
    "get_all_tickets",
    "update_ticket",
    # Search
    "search_talents",
    # Dashboard
    "get_dashboard",
]
