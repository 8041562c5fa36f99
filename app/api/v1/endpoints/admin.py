"""Admin dashboard endpoints."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.inquiry import AdminOverview
from app.services.inquiry import AdmissionService, ContactService, NewsletterService
from app.services.result import ResultService

router = APIRouter()


@router.get("/overview", response_model=AdminOverview)
def get_overview(
    db: Annotated[Session, Depends(get_db)],
):
    """
    Admissions, contact messages, newsletter subscribers and result counts for the admin dashboard.
    """
    results = ResultService(db)
    return AdminOverview(
        admissions=AdmissionService(db).list_all(),
        contacts=ContactService(db).list_all(),
        newsletters=NewsletterService(db).list_all(),
        total_results=results.count_results(),
        total_students=len(results.list_unique_students()),
        timestamp=datetime.now(timezone.utc),
    )
