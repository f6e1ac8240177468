"""Evidence Manager Core Module"""

from .config import api_settings, db_settings, storage_settings
from .responses import BaseResponse, BaseResponseWithValue, ResponseMessage


__all__ = [
    "BaseResponse",
    "BaseResponseWithValue",
    "ResponseMessage",
    "api_settings",
    "db_settings",
    "storage_settings",
]
