"""
================================================================================
Schemas de Request/Response da API
================================================================================

Define os modelos Pydantic para validação de entrada e documentação de saída.
"""

from .collections import (
    CollectionCreate,
    CollectionListResponse,
    CollectionSchema,
    SavedRequestCreate,
    SavedRequestListResponse,
    SavedRequestSchema,
)
from .common import (
    DeleteResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from .history import (
    HistoryEntrySchema,
    HistoryListResponse,
)
from .preferences import (
    PreferencesResponse,
    PreferenceValue,
)
from .send import (
    HeaderSchema,
    SendRequest,
    SendResponse,
)

__all__ = [
    # Common
    "DeleteResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Send
    "HeaderSchema",
    "SendRequest",
    "SendResponse",
    # History
    "HistoryEntrySchema",
    "HistoryListResponse",
    # Collections / saved
    "CollectionCreate",
    "CollectionListResponse",
    "CollectionSchema",
    "SavedRequestCreate",
    "SavedRequestListResponse",
    "SavedRequestSchema",
    # Preferences
    "PreferencesResponse",
    "PreferenceValue",
]
