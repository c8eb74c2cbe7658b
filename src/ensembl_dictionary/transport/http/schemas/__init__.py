"""HTTP request/response DTOs."""

from ensembl_dictionary.transport.http.schemas.dictionary import (
    DictionaryItemsResponse,
)
from ensembl_dictionary.transport.http.schemas.health import HealthResponse

__all__ = ["DictionaryItemsResponse", "HealthResponse"]
