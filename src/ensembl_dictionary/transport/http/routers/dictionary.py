"""Dictionary query endpoints.

Query parameters map onto dictionary options: repeated ``id`` and ``dictID``
become ``filter.id`` / ``filter.dictID``; repeated ``z`` selects ``z`` keys,
while a single ``z=true`` / ``z=false`` keeps or drops the whole block.
Pagination values that are not positive integers are ignored, as they would
be by the dictionary itself.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from ensembl_dictionary.transport.http.deps import Dictionary
from ensembl_dictionary.transport.http.schemas import DictionaryItemsResponse

router = APIRouter(prefix="/api/v1/dictionary", tags=["dictionary"])

IdsQuery = Annotated[list[str] | None, Query(alias="id")]
DictIdsQuery = Annotated[list[str] | None, Query(alias="dictID")]
PerPageQuery = Annotated[str | None, Query(alias="perPage")]
ZQuery = Annotated[list[str] | None, Query()]


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _z_option(values: list[str] | None) -> object:
    if not values:
        return None
    if len(values) == 1 and values[0].lower() in ("true", "false"):
        return values[0].lower() == "true"
    return values


def _build_options(
    *,
    ids: list[str] | None = None,
    dict_ids: list[str] | None = None,
    page: str | None = None,
    per_page: str | None = None,
    sort: str | None = None,
    z: list[str] | None = None,
) -> dict[str, object]:
    options: dict[str, object] = {}
    filters: dict[str, object] = {}
    if ids:
        filters["id"] = ids
    if dict_ids:
        filters["dictID"] = dict_ids
    if filters:
        options["filter"] = filters
    if (page_i := _int_or_none(page)) is not None:
        options["page"] = page_i
    if (per_page_i := _int_or_none(per_page)) is not None:
        options["perPage"] = per_page_i
    if sort:
        options["sort"] = sort
    if (z_opt := _z_option(z)) is not None:
        options["z"] = z_opt
    return options


@router.get("/infos", response_model=DictionaryItemsResponse)
async def get_dict_infos(
    dictionary: Dictionary, ids: IdsQuery = None
) -> DictionaryItemsResponse:
    """List the dictionaries served here, optionally filtered by ID."""
    result = await dictionary.get_dict_infos(_build_options(ids=ids))
    return DictionaryItemsResponse.model_validate(result)


@router.get("/entries", response_model=DictionaryItemsResponse)
async def get_entries(
    dictionary: Dictionary,
    ids: IdsQuery = None,
    dict_ids: DictIdsQuery = None,
    page: str | None = None,
    per_page: PerPageQuery = None,
    sort: str | None = None,
    z: ZQuery = None,
) -> DictionaryItemsResponse:
    """Entries by ID, or every gene page by page when no ID is given."""
    result = await dictionary.get_entries(
        _build_options(
            ids=ids,
            dict_ids=dict_ids,
            page=page,
            per_page=per_page,
            sort=sort,
            z=z,
        )
    )
    return DictionaryItemsResponse.model_validate(result)


@router.get("/matches", response_model=DictionaryItemsResponse)
async def get_entry_matches(
    dictionary: Dictionary,
    query: Annotated[str, Query(alias="str")] = "",
    dict_ids: DictIdsQuery = None,
    page: str | None = None,
    per_page: PerPageQuery = None,
    z: ZQuery = None,
) -> DictionaryItemsResponse:
    """Entries matching a free-text string."""
    result = await dictionary.get_entry_matches_for_string(
        query,
        _build_options(dict_ids=dict_ids, page=page, per_page=per_page, z=z),
    )
    return DictionaryItemsResponse.model_validate(result)
