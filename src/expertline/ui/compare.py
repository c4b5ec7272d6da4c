"""
Comparisons API over the bridge.
"""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from expertline.errors import BridgeError, MalformedResponseError
from expertline.ui.client import RequestClient

DEFAULT_API_URL = "https://expertline.xamples.xyz/api/compare"
INVALID_STRUCTURE_MESSAGE = "Received invalid data from API server. Please try again."


class CompareResponse(BaseModel):
    mode: str = ""
    comparisons: list[dict[str, Any]]
    message: Optional[str] = None


class CompareAPI:
    def __init__(self, client: RequestClient, url: str = DEFAULT_API_URL, max_alternatives: int = 3):
        self._client = client
        self._url = url
        self._max_alternatives = max_alternatives

    @staticmethod
    def build_request(code: str, mode: str, details: str = "", max_alternatives: int = 3) -> dict[str, Any]:
        return {
            "code": code.strip(),
            "details": details.strip(),
            "categories": [],
            "maxAlternatives": max_alternatives,
            "mode": mode,
        }

    async def compare(self, code: str, mode: str = "expert", details: str = "") -> CompareResponse:
        if not code.strip():
            raise BridgeError("empty_selection", "Please select some code first")
        body = await self._client.call(
            self._url, self.build_request(code, mode, details, self._max_alternatives),
        )
        try:
            return CompareResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(INVALID_STRUCTURE_MESSAGE, details={"errors": e.error_count()})
