"""Generic list state shared by every paginated page.

Each list page keeps its state in the query string (page, limit, search, filters
and sort). ``ListQuery`` parses and re-serialises that state, ``fetch_list`` runs
the backend call, and ``ListPage`` carries the result plus the pagination
arithmetic the templates need.
"""
import math
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from starlette.datastructures import QueryParams

from app.backend.client import BackendError
from app.models.pagination_model import Pagination
from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ALL = "all"
MAX_VISIBLE_PAGES = 5


def _to_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value not in (None, "") else default
    except ValueError:
        return default


@dataclass
class ListQuery:
    page: int = 1
    limit: int = 10
    search: str = ""
    filters: Dict[str, str] = field(default_factory=dict)
    sort: str = ""
    default_limit: int = 10

    @classmethod
    def from_params(
        cls,
        params: QueryParams,
        limit: int = 10,
        filter_keys: Sequence[str] = (),
        default_sort: str = "",
        limit_options: Sequence[int] = (),
    ) -> "ListQuery":
        """Parse list state from a request query string."""
        requested_limit = _to_int(params.get("limit"), limit)
        if requested_limit not in limit_options:
            requested_limit = limit
        filters = {}
        for key in filter_keys:
            value = (params.get(key) or "").strip()
            if value and value != ALL:
                filters[key] = value
        return cls(
            page=max(1, _to_int(params.get("page"), 1)),
            limit=requested_limit,
            search=(params.get("search") or "").strip(),
            filters=filters,
            sort=(params.get("sort") or default_sort).strip(),
            default_limit=limit,
        )

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=max(1, page))

    def with_search(self, search: str) -> "ListQuery":
        return replace(self, search=search.strip(), page=1)

    def with_filter(self, key: str, value: Optional[str]) -> "ListQuery":
        filters = dict(self.filters)
        if value and value != ALL:
            filters[key] = value
        else:
            filters.pop(key, None)
        return replace(self, filters=filters, page=1)

    def with_sort(self, sort: str) -> "ListQuery":
        return replace(self, sort=sort, page=1)

    def with_limit(self, limit: int) -> "ListQuery":
        return replace(self, limit=limit, page=1)

    def filter(self, key: str, default: str = ALL) -> str:
        return self.filters.get(key, default)

    def to_params(self) -> Dict[str, Any]:
        """Backend query parameters; empty values and ``all`` filters are omitted."""
        params: Dict[str, Any] = {"page": self.page, "limit": self.limit}
        if self.search:
            params["search"] = self.search
        params.update(self.filters)
        return params

    def query_string(self, **overrides: Any) -> str:
        """Page URL query string, used for links and redirects back to the list."""
        params: Dict[str, Any] = {"page": self.page}
        if self.limit != self.default_limit:
            params["limit"] = self.limit
        if self.search:
            params["search"] = self.search
        params.update(self.filters)
        if self.sort:
            params["sort"] = self.sort
        params.update(overrides)
        return urlencode({k: v for k, v in params.items() if v not in (None, "")})


def showing_range(page: int, limit: int, total: int) -> Tuple[int, int]:
    """First and last 1-based item index shown on ``page``."""
    if total <= 0:
        return 0, 0
    start = (page - 1) * limit + 1
    end = min(page * limit, total)
    return min(start, end), end


def page_numbers(current: int, pages: int, max_visible: int = MAX_VISIBLE_PAGES) -> List[Optional[int]]:
    """Page buttons to render; ``None`` marks an ellipsis."""
    if pages <= max_visible:
        return list(range(1, pages + 1))
    if current <= 3:
        return [1, 2, 3, 4, None, pages]
    if current >= pages - 2:
        return [1, None] + list(range(pages - 3, pages + 1))
    return [1, None, current - 1, current, current + 1, None, pages]


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(page, max(pages, 1)))


def page_after_delete(page: int, items_on_page: int) -> int:
    """Deleting the only item of a page past the first goes back one page."""
    if items_on_page <= 1 and page > 1:
        return page - 1
    return page


def safe_next(next_url: Optional[str], base_path: str) -> str:
    """Return URL for a form, restricted to the list it was opened from."""
    if not next_url:
        return base_path
    parts = urlsplit(next_url)
    if parts.scheme or parts.netloc or parts.path != base_path:
        return base_path
    return next_url


def replace_page(url: str, page: int) -> str:
    parts = urlsplit(url)
    params = [(k, v) for k, v in parse_qsl(parts.query) if k != "page"]
    params.insert(0, ("page", str(page)))
    return urlunsplit(("", "", parts.path, urlencode(params), ""))


def after_delete_url(next_url: Optional[str], base_path: str, page: int, items_on_page: int) -> str:
    return replace_page(safe_next(next_url, base_path), page_after_delete(page, items_on_page))


def paginate_local(items: Sequence[T], page: int, per_page: int) -> Tuple[List[T], Pagination]:
    """Slice an already-fetched list into one page."""
    total = len(items)
    pages = max(1, math.ceil(total / per_page))
    page = clamp_page(page, pages)
    start = (page - 1) * per_page
    return list(items[start:start + per_page]), Pagination(total=total, page=page, limit=per_page, pages=pages)


@dataclass
class ListPage(Generic[T]):
    items: List[T]
    pagination: Pagination
    query: ListQuery
    base_path: str
    error: Optional[str] = None

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def showing(self) -> Tuple[int, int]:
        return showing_range(self.page, self.pagination.limit, self.pagination.total)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pagination.pages

    @property
    def page_numbers(self) -> List[Optional[int]]:
        return page_numbers(self.page, self.pagination.pages)

    def row_number(self, index: int) -> int:
        """1-based position of the ``index``-th item across all pages."""
        return (self.page - 1) * self.pagination.limit + index + 1

    def url_for_page(self, page: int) -> str:
        return f"{self.base_path}?{self.query.query_string(page=page)}"

    def url(self, **overrides: Any) -> str:
        return f"{self.base_path}?{self.query.query_string(**overrides)}"


Fetcher = Callable[[ListQuery], Awaitable[Tuple[List[T], Pagination]]]


async def fetch_list(fetcher: Fetcher, query: ListQuery, base_path: str) -> ListPage:
    """Run a list call; a backend failure yields an empty page carrying the message."""
    try:
        items, pagination = await fetcher(query)
    except BackendError as exc:
        logger.warning("List fetch for %s failed: %s", base_path, exc.message)
        return ListPage(
            items=[],
            pagination=Pagination.empty(query.page, query.limit),
            query=query,
            base_path=base_path,
            error=exc.message,
        )
    return ListPage(items=items, pagination=pagination, query=query, base_path=base_path)
