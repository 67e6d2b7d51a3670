"""Admin user list and role management."""
from functools import partial

from fastapi import APIRouter, Depends, Form, Request

from app.backend.client import BackendClient, BackendError
from app.models.user_model import ROLES
from app.services import user_service
from app.utils.dependencies import get_backend
from app.utils.list_controller import ListQuery, fetch_list, safe_next
from app.utils.templating import redirect, render, render_list

BASE_PATH = "/admin/users"
PAGE_SIZE = 5

router = APIRouter()


@router.get("")
async def list_users(request: Request, api: BackendClient = Depends(get_backend)):
    query = ListQuery.from_params(request.query_params, limit=PAGE_SIZE, filter_keys=("role",))
    role = query.filters.get("role")
    if role and role not in ROLES:
        query = query.with_filter("role", None)
    page = await fetch_list(partial(user_service.list_users, api), query, BASE_PATH)
    return render_list(request, "admin/users/list.html", page, {"roles": ROLES})


@router.get("/{user_id}/role")
async def confirm_role_change(request: Request, user_id: str, role: str = "user", name: str = "", next: str = ""):
    new_role = user_service.toggled_role(role)
    label = "Make Admin" if new_role == "admin" else "Make User"
    who = name or "this user"
    return render(
        request,
        "admin/confirm.html",
        {
            "heading": "Update Role",
            "prompt": f"Change the role of {who} to {new_role}?",
            "action": f"{BASE_PATH}/{user_id}/role",
            "confirm_label": label,
            "danger": False,
            "next_url": safe_next(next, BASE_PATH),
            "fields": {"role": new_role},
        },
    )


@router.post("/{user_id}/role")
async def update_role(
    user_id: str,
    role: str = Form(""),
    next: str = Form(""),
    api: BackendClient = Depends(get_backend),
):
    next_url = safe_next(next, BASE_PATH)
    if role not in ROLES:
        return redirect(next_url, "Invalid role", "error")
    try:
        await user_service.update_role(api, user_id, role)
    except BackendError as exc:
        return redirect(next_url, exc.message, "error")
    return redirect(next_url, "User role updated")
