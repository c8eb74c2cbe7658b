"""Dictionary response DTOs."""

from __future__ import annotations

from pydantic import BaseModel, JsonValue


class DictionaryItemsResponse(BaseModel):
    """``{"items": [...]}`` as returned by every dictionary operation.

    Items keep their loose shape since ``z`` pruning decides which keys survive.
    """

    items: list[dict[str, JsonValue]]
