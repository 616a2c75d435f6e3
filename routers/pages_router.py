"""
Pages Router - server-rendered subscription pages
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request, Query
from fastapi.templating import Jinja2Templates

from config.settings import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Seconds between subscription status polls on the payment page
STATUS_POLL_SECONDS = 30

pages_router = APIRouter(tags=["pages"])


@pages_router.get("/payment")
async def payment_page(
    request: Request,
    user_id: Optional[str] = Query(default=None, alias="userId"),
):
    """Subscription status page with the pay button for expired trials"""
    return templates.TemplateResponse(
        request,
        "payment.html",
        {
            "user_id": user_id or "",
            "amount": settings.subscription_price,
            "poll_seconds": STATUS_POLL_SECONDS,
        },
    )


@pages_router.get("/payment-success")
async def payment_success(
    request: Request,
    session_id: Optional[str] = Query(default=None),
):
    return templates.TemplateResponse(
        request, "payment_success.html", {"session_id": session_id}
    )


@pages_router.get("/payment-cancelled")
async def payment_cancelled(request: Request):
    return templates.TemplateResponse(request, "payment_cancelled.html", {})
