"""REST client for the LearnIT backend."""

from learnit.api.client import ApiClient
from learnit.api.exceptions import ApiError, ApiResponseError, ApiUnavailableError

__all__ = ["ApiClient", "ApiError", "ApiResponseError", "ApiUnavailableError"]
