"""Admin review moderation."""
from functools import partial

from fastapi import APIRouter, Depends, Form, Request

from app.backend.client import BackendClient, BackendError
from app.services import review_service
from app.utils.dependencies import get_backend
from app.utils.list_controller import ListQuery, after_delete_url, fetch_list, safe_next
from app.utils.templating import redirect, render, render_list

BASE_PATH = "/admin/reviews"
PAGE_SIZE = 10
STATUSES = ("pending", "approved")

router = APIRouter()


@router.get("")
async def list_reviews(request: Request, api: BackendClient = Depends(get_backend)):
    query = ListQuery.from_params(
        request.query_params,
        limit=PAGE_SIZE,
        filter_keys=("status",),
        default_sort="newest",
        limit_options=review_service.LIMIT_OPTIONS,
    )
    status = query.filters.get("status")
    if status and status not in STATUSES:
        query = query.with_filter("status", None)
    if query.sort not in review_service.SORT_FIELDS:
        query = query.with_sort("newest")

    page = await fetch_list(partial(review_service.list_reviews, api), query, BASE_PATH)
    return render_list(
        request,
        "admin/reviews/list.html",
        page,
        {"statuses": STATUSES, "limit_options": review_service.LIMIT_OPTIONS},
    )


@router.post("/{review_id}/status")
async def update_review_status(
    review_id: str,
    status: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
):
    next_url = safe_next(next, BASE_PATH)
    if status not in STATUSES:
        return redirect(next_url, "Failed to update status", "error")
    try:
        await review_service.update_status(api, review_id, status)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(next_url, "Review approved" if status == "approved" else "Review set to pending")


@router.get("/{review_id}/delete")
async def confirm_delete_review(
    request: Request,
    review_id: str,
    name: str = "",
    next: str = "",
    page: int = 1,
    count: int = 1,
):
    return render(
        request,
        "admin/confirm.html",
        {
            "heading": "Delete Review",
            "prompt": f"Delete the review by {name}? This cannot be undone." if name else "Delete this review? This cannot be undone.",
            "action": f"{BASE_PATH}/{review_id}/delete",
            "confirm_label": "Delete",
            "danger": True,
            "next_url": safe_next(next, BASE_PATH),
            "page": page,
            "count": count,
        },
    )


@router.post("/{review_id}/delete")
async def delete_review(
    review_id: str,
    next: str = Form(""),
    page: int = Form(1),
    count: int = Form(1),
    api: BackendClient = Depends(get_backend),
):
    next_url = safe_next(next, BASE_PATH)
    try:
        await review_service.delete_review(api, review_id)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(after_delete_url(next_url, BASE_PATH, page, count), "Review deleted successfully")
