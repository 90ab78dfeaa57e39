import json
from typing import Any

from fastapi.responses import JSONResponse


class SortedJSONResponse(JSONResponse):
    """Compact JSON with lexicographically sorted keys."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
            sort_keys=True,
        ).encode("utf-8")
