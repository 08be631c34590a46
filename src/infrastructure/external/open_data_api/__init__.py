"""国民議会オープンデータAPIクライアントパッケージ."""

from .client import OpenDataApiClient, OpenDataApiError
from .converter import OpenDataConverter
from .service import OpenDataServiceImpl
from .types import JsonPayload, MandateRecord, OrganRecord


__all__ = [
    "JsonPayload",
    "MandateRecord",
    "OpenDataApiClient",
    "OpenDataApiError",
    "OpenDataConverter",
    "OpenDataServiceImpl",
    "OrganRecord",
]
