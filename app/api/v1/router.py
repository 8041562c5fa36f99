"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    admissions,
    contacts,
    newsletter,
    results,
)

api_router = APIRouter()

# Exam results (lookup is public, writes are admin-only)
api_router.include_router(
    results.router,
    prefix="/results",
    tags=["Results"],
)

# Public contact form
api_router.include_router(
    contacts.router,
    prefix="/contacts",
    tags=["Contacts"],
)

# Public admission inquiries
api_router.include_router(
    admissions.router,
    prefix="/admissions",
    tags=["Admissions"],
)

# Public newsletter sign-up
api_router.include_router(
    newsletter.router,
    prefix="/newsletter",
    tags=["Newsletter"],
)

# Admin dashboard
api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
)
