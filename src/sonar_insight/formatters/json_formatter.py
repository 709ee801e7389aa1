"""JSON formatter for Sonar Insight."""

import json
from typing import Any

from .base import BaseFormatter, to_plain


class JsonFormatter(BaseFormatter):
    """Render data as indented JSON."""

    name = "json"
    extension = ".json"

    def format(self, data: Any) -> str:
        return json.dumps(to_plain(data), indent=2, ensure_ascii=False)
