from typing import Any
from urllib.parse import urlencode

API_ENDPOINT = "https://spacetraveling.cdn.prismic.io/api/v2"
API_HOST = "spacetraveling.cdn.prismic.io"
MASTER_REF = "YMKq4xIAACMAkXyB"
SEARCH_PATH = "/api/v2/documents/search"


def page_url(page: int, page_size: int = 1) -> str:
    return f"{API_ENDPOINT}/documents/search?" + urlencode(
        {"ref": MASTER_REF, "page": page, "pageSize": page_size}
    )


def search_response(
    documents: list[dict[str, Any]], page: int = 1, total_pages: int = 1
) -> dict[str, Any]:
    return {
        "page": page,
        "results_per_page": len(documents),
        "results_size": len(documents),
        "total_results_size": len(documents) * total_pages,
        "total_pages": total_pages,
        "next_page": page_url(page + 1) if page < total_pages else None,
        "prev_page": page_url(page - 1) if page > 1 else None,
        "results": documents,
    }


def paragraph(text: str, spans: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {"type": "paragraph", "text": text, "spans": spans or []}
