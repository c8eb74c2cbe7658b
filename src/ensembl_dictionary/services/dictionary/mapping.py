"""Normalise EBI Search ``ensembl_gene`` records into dictionary entries.

Every EBI Search field is multi-valued (a list of strings, possibly empty),
so each mapped attribute is taken from the first value when there is one and
omitted otherwise.
"""

from __future__ import annotations

import re
from typing import cast

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ensembl_dictionary.platform.errors import EmptyTermsError, ResponseParseError
from ensembl_dictionary.platform.logging import get_logger
from ensembl_dictionary.platform.types import JSONArray, JSONObject, JSONValue
from ensembl_dictionary.services.dictionary.strings import remove_duplicates

logger = get_logger(__name__)

ENSEMBL_DICT_ID = "https://www.ensembl.org"

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class EbiSearchEntry(BaseModel):
    """One EBI Search hit."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    source: str | None = None
    fields: dict[str, list[str]] = Field(default_factory=dict)

    def values(self, name: str) -> list[str]:
        return self.fields.get(name, [])

    def first(self, name: str) -> str | None:
        values = self.values(name)
        return values[0] if values else None


class EbiSearchResponse(BaseModel):
    """Top-level EBI Search JSON body."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    hit_count: int | None = Field(default=None, alias="hitCount")
    entries: list[EbiSearchEntry]


def parse_search_response(payload: JSONValue) -> EbiSearchResponse:
    """Validate a decoded EBI Search body.

    :raises ResponseParseError: If the payload does not have the expected shape.
    """
    try:
        return EbiSearchResponse.model_validate(payload)
    except PydanticValidationError as exc:
        errors: JSONArray = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise ResponseParseError(
            f"Unexpected EBI Search payload ({exc.error_count()} validation errors)",
            errors=errors,
        ) from exc


def get_main_term(name: list[str], gene: list[str], gene_synonyms: list[str]) -> str:
    """Pick the canonical label: gene name, else name, else first synonym.

    :raises EmptyTermsError: If all three lists are empty.
    """
    if gene:
        return gene[0]
    if name:
        return name[0]
    if gene_synonyms:
        # Not expected for Ensembl genes, which always carry a gene name or name.
        return gene_synonyms[0]
    raise EmptyTermsError("Record has no gene name, name or synonym")


def build_terms(
    name: list[str], gene: list[str], gene_synonyms: list[str]
) -> list[JSONObject]:
    """Canonical term first, then every other distinct label in source order."""
    main_term = get_main_term(name, gene, gene_synonyms)
    synonyms = [
        s for s in remove_duplicates([*gene, *name, *gene_synonyms]) if s != main_term
    ]
    return [{"str": main_term}, *({"str": s} for s in synonyms)]


def build_descr(
    species: list[str],
    terms: list[JSONObject],
    description: list[str],
    *,
    optimap: bool = False,
) -> str | None:
    """Assemble the ``descr`` string, or ``None`` when there is nothing to say.

    Without *optimap* this is just the first description value. With it, the
    species and synonyms are packed in front of the description so that a
    picker can show them on one line::

        Homo sapiens; RAC|PRKBA|PKB|AKT|ENSG00000142208 (HGNC: AKT1); AKT serine/...

    The first synonym (the record's ``name`` whenever a gene name exists)
    goes last, after the gene synonyms.
    """
    if not optimap:
        return description[0] if description and description[0] else None

    parts: list[str] = []
    if species and species[0]:
        parts.append(species[0])
    synonyms = [str(t["str"]) for t in terms[1:]]
    if synonyms:
        parts.append("|".join([*synonyms[1:], synonyms[0]]))
    if description and description[0]:
        parts.append(description[0])
    return "; ".join(parts) or None


def parse_transcript_count(value: str) -> int | None:
    """Read the leading integer of *value* (``"20"`` -> 20, ``"n/a"`` -> None)."""
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def _build_z(entry: EbiSearchEntry) -> JSONObject:
    z: JSONObject = {}
    transcript_count = entry.first("transcript_count")
    if transcript_count is not None:
        count = parse_transcript_count(transcript_count)
        if count is not None:
            z["transcriptCount"] = count
    species = entry.first("species")
    if species is not None:
        z["species"] = species
    return z


def _build_entry(
    entry: EbiSearchEntry,
    *,
    dict_id: str,
    optimap: bool,
    query: str | None = None,
) -> JSONObject:
    record_id = entry.first("id") or entry.id
    if not record_id:
        raise ResponseParseError("EBI Search record without an id field")

    try:
        terms = build_terms(
            entry.values("name"),
            entry.values("gene_name"),
            entry.values("gene_synonym"),
        )
    except EmptyTermsError as exc:
        raise EmptyTermsError(f"Record {record_id} has no usable term") from exc
    main_term = str(terms[0]["str"])

    result: JSONObject = {"id": f"{dict_id}/id/{record_id}", "dictID": dict_id}
    if query is not None:
        result["str"] = main_term
    descr = build_descr(
        entry.values("species"),
        terms,
        entry.values("description"),
        optimap=optimap,
    )
    if descr is not None:
        result["descr"] = descr
    if query is not None:
        result["type"] = "S" if main_term.startswith(query) else "T"
    result["terms"] = cast(JSONValue, terms)
    result["z"] = _build_z(entry)
    return result


def _build_entries(
    response: EbiSearchResponse,
    *,
    dict_id: str,
    optimap: bool,
    query: str | None = None,
) -> list[JSONObject]:
    entries: list[JSONObject] = []
    for entry in response.entries:
        try:
            entries.append(
                _build_entry(entry, dict_id=dict_id, optimap=optimap, query=query)
            )
        except EmptyTermsError as exc:
            logger.warning("Skipping EBI Search record", reason=exc.detail)
    return entries


def map_to_entities(
    response: EbiSearchResponse,
    *,
    dict_id: str = ENSEMBL_DICT_ID,
    optimap: bool = False,
) -> list[JSONObject]:
    """One entry object per EBI Search record, in response order.

    Records without any label are skipped (and logged) rather than failing
    the whole page.
    """
    return _build_entries(response, dict_id=dict_id, optimap=optimap)


def map_to_matches(
    response: EbiSearchResponse,
    query: str,
    *,
    dict_id: str = ENSEMBL_DICT_ID,
    optimap: bool = False,
) -> list[JSONObject]:
    """Like :func:`map_to_entities`, plus ``str`` and a prefix-match ``type``.

    ``type`` is ``"S"`` when the canonical term starts with *query* (case
    sensitive) and ``"T"`` otherwise.
    """
    return _build_entries(response, dict_id=dict_id, optimap=optimap, query=query)
