"""Plain-text rendering of explorer items and pager state."""

from typing import Any

from .models import Item, Source, ViewState
from .pagination import page_window


def truncate_text(text: Any, length: int) -> str:
    """Shorten `text` to `length` characters, marking the cut with an ellipsis."""
    text = "" if text is None else str(text)
    if len(text) <= length:
        return text
    return text[: max(length - 3, 0)].rstrip() + "..."


def _format_post(item: Item) -> str:
    return f"#{item.get('id')} {truncate_text(item.get('title'), 60)} (User {item.get('userId')})"


def _format_user(item: Item) -> str:
    company = (item.get("company") or {}).get("name", "")
    city = (item.get("address") or {}).get("city", "")
    return f"{item.get('name')} <{item.get('email')}> {company}, {city}".rstrip(", ")


def _format_product(item: Item) -> str:
    rating = item.get("rating")
    stars = f"{rating:.1f}" if isinstance(rating, (int, float)) else "-"
    return f"{truncate_text(item.get('title'), 50)} ${item.get('price')} * {stars} [{item.get('category')}]"


def _format_quote(item: Item) -> str:
    return f'"{item.get("quote")}" - {item.get("author")}'


_FORMATTERS = {
    Source.POSTS: _format_post,
    Source.USERS: _format_user,
    Source.PRODUCTS: _format_product,
    Source.QUOTES: _format_quote,
}


def format_item(source: Source, item: Item) -> str:
    return _FORMATTERS[source](item)


def render_state(state: ViewState) -> str:
    """Render a view state the way the explorer page lays it out."""
    label = state.source.label.lower()
    if state.loading:
        return "Loading..."
    if state.error:
        return f"Error Loading Data\n{state.error}"
    if not state.items:
        if state.search_text:
            return f'No Results Found\nNo {label} found matching "{state.search_text}"'
        return f"No Results Found\nNo {label} available"

    lines = [format_item(state.source, item) for item in state.items]
    lines.append("")
    lines.append(f"Showing {state.first_index} to {state.last_index} of {state.total} results")
    if state.total_pages > 1:
        pager = " ".join(f"[{n}]" if n == state.page else str(n) for n in page_window(state.page, state.total_pages))
        lines.append(f"Pages: {pager}")
    return "\n".join(lines)
