"""Reader tutorial videos."""
from functools import partial

from fastapi import APIRouter, Depends, Request

from app.backend.client import BackendClient
from app.services import tutorial_service
from app.utils.dependencies import get_backend
from app.utils.list_controller import ListQuery, fetch_list
from app.utils.templating import render_list

BASE_PATH = "/user/tutorials"
PAGE_SIZE = 6

router = APIRouter()


@router.get("")
async def tutorials(request: Request, api: BackendClient = Depends(get_backend)):
    query = ListQuery.from_params(request.query_params, limit=PAGE_SIZE)
    page = await fetch_list(partial(tutorial_service.list_tutorials, api), query, BASE_PATH)
    return render_list(request, "user/tutorials.html", page)
