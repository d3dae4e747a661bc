# tracker_mcp/providers/monday_client.py
"""Monday.com GraphQL client."""

from typing import Any, Optional

import httpx

from ..config import Config
from ..errors import NotFoundError, UpstreamError
from .http import HttpClient

ITEM_QUERY = """
query($boardId: ID!, $itemId: ID!) {
    boards(ids: [$boardId]) {
        items_page(query_params: {ids: [$itemId]}) {
            items {
                id
                name
                board { id name }
                description { blocks { id content } }
                column_values { id type text value }
                updates { id body text_body created_at creator { id name } }
            }
        }
    }
}
"""

ALL_ITEMS_QUERY = """
query($limit: Int!) {
    boards(limit: 50) {
        id
        name
        items_page(limit: $limit) {
            items {
                id
                name
                column_values { id text value }
            }
        }
    }
}
"""

BOARD_ITEMS_QUERY = """
query($boardId: ID!, $limit: Int!) {
    boards(ids: [$boardId]) {
        id
        name
        items_page(limit: $limit) {
            items {
                id
                name
                column_values { id text value }
            }
        }
    }
}
"""

TIME_TRACKING_QUERY = """
query($limit: Int!) {
    boards(limit: 50) {
        id
        name
        items_page(limit: $limit) {
            items {
                id
                name
                column_values {
                    id
                    text
                    ... on TimeTrackingValue {
                        duration
                        running
                        started_at
                        updated_at
                    }
                }
            }
        }
    }
}
"""

ASSET_QUERY = """
query($assetId: ID!) {
    assets(ids: [$assetId]) {
        id
        name
        file_size
        file_extension
        public_url
        url
        created_at
        uploaded_by { id name }
    }
}
"""


def _board_items(boards: list) -> list[dict]:
    """Flatten boards[].items_page.items, tagging each item with its board."""
    items = []
    for board in boards or []:
        for item in (board.get("items_page") or {}).get("items") or []:
            items.append({**item, "board": {"id": board.get("id"), "name": board.get("name")}})
    return items


class MondayClient(HttpClient):
    provider = "Monday.com"

    def __init__(
        self,
        api_token: str,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            api_url or Config.MONDAY_API_URL,
            headers={"Authorization": api_token, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def query(self, query: str, variables: Optional[dict] = None) -> dict:
        """Run one GraphQL query; GraphQL-level errors raise UpstreamError."""
        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        result = self.post_json(self.base_url, body)
        errors = result.get("errors") if isinstance(result, dict) else None
        if errors:
            message = errors[0].get("message") if isinstance(errors[0], dict) else str(errors[0])
            raise UpstreamError(f"Monday.com API error: {message}")
        return (result or {}).get("data") or {}

    def get_me(self) -> dict:
        return self.query("{ me { id name email } }").get("me") or {}

    def get_boards(self, limit: int = 100) -> list[dict]:
        data = self.query("query($limit: Int!) { boards(limit: $limit) { id name } }", {"limit": limit})
        return data.get("boards") or []

    def get_board_items(self, board_id, limit: int = 50) -> list[dict]:
        data = self.query(BOARD_ITEMS_QUERY, {"boardId": str(board_id), "limit": limit})
        return _board_items(data.get("boards"))

    def get_all_items(self, limit: int = 100) -> list[dict]:
        return _board_items(self.query(ALL_ITEMS_QUERY, {"limit": limit}).get("boards"))

    def get_item(self, item_id) -> dict:
        """Item with description, columns and updates.

        Descriptions are only reachable through boards.items_page, so the
        item's board is looked up first.
        """
        lookup = self.query("query($itemId: ID!) { items(ids: [$itemId]) { board { id } } }", {"itemId": str(item_id)})
        items = lookup.get("items") or []
        board_id = ((items[0] or {}).get("board") or {}).get("id") if items else None
        if not board_id:
            raise NotFoundError(f"Monday.com item {item_id} not found")

        data = self.query(ITEM_QUERY, {"boardId": str(board_id), "itemId": str(item_id)})
        boards = data.get("boards") or []
        found = ((boards[0] or {}).get("items_page") or {}).get("items") if boards else None
        if not found:
            raise NotFoundError(f"Monday.com item {item_id} not found")
        return found[0]

    def get_items_with_time_tracking(self, limit: int = 100) -> list[dict]:
        """Items whose time tracking column holds a positive duration."""
        items = _board_items(self.query(TIME_TRACKING_QUERY, {"limit": limit}).get("boards"))
        return [
            item for item in items
            if any((column.get("duration") or 0) > 0 for column in item.get("column_values") or [])
        ]

    def get_asset(self, asset_id) -> dict:
        assets = self.query(ASSET_QUERY, {"assetId": str(asset_id)}).get("assets") or []
        if not assets:
            raise NotFoundError(f"Monday.com asset {asset_id} not found")
        return assets[0]

    def download_asset(self, public_url: str) -> bytes:
        return self.fetch_external(public_url)
