from ensembl_dictionary.platform.types import JSONObject
from ensembl_dictionary.services.dictionary import (
    DictionarySource,
    EnsemblDictionary,
    z_prop_prune,
)
from ensembl_dictionary.services.dictionary.base import (
    excludes_dict_id,
    filter_dict_infos,
)
from ensembl_dictionary.services.dictionary.options import QueryOptions
from ensembl_dictionary.tests.fixtures.recording_fetcher import RecordingFetcher

ITEMS: list[JSONObject] = [
    {"id": "x1", "z": {"transcriptCount": 3, "species": "Homo sapiens"}},
    {"id": "x2", "z": {"species": "Mus musculus"}},
    {"id": "x3"},
]


def test_z_prop_prune_keeps_everything_when_unset_or_true() -> None:
    assert z_prop_prune(ITEMS, None) == ITEMS
    assert z_prop_prune(ITEMS, True) == ITEMS
    assert z_prop_prune(ITEMS, {"odd": 1}) == ITEMS


def test_z_prop_prune_drops_z_when_false_or_empty() -> None:
    expected = [{"id": "x1"}, {"id": "x2"}, {"id": "x3"}]
    assert z_prop_prune(ITEMS, False) == expected
    assert z_prop_prune(ITEMS, []) == expected


def test_z_prop_prune_selects_keys() -> None:
    assert z_prop_prune(ITEMS, ["transcriptCount"]) == [
        {"id": "x1", "z": {"transcriptCount": 3}},
        {"id": "x2"},
        {"id": "x3"},
    ]
    assert z_prop_prune(ITEMS, "species") == [
        {"id": "x1", "z": {"species": "Homo sapiens"}},
        {"id": "x2", "z": {"species": "Mus musculus"}},
        {"id": "x3"},
    ]


def test_z_prop_prune_does_not_mutate_input() -> None:
    z_prop_prune(ITEMS, False)
    assert ITEMS[0]["z"] == {"transcriptCount": 3, "species": "Homo sapiens"}


def test_filter_dict_infos() -> None:
    infos: list[JSONObject] = [{"id": "https://www.ensembl.org"}, {"id": "other"}]
    assert filter_dict_infos(infos, QueryOptions()) == infos
    only = QueryOptions.from_raw({"filter": {"id": [" ", "https://www.ensembl.org"]}})
    assert filter_dict_infos(infos, only) == [{"id": "https://www.ensembl.org"}]


def test_excludes_dict_id() -> None:
    dict_id = "https://www.ensembl.org"
    assert not excludes_dict_id(QueryOptions(), dict_id)
    assert not excludes_dict_id(
        QueryOptions.from_raw({"filter": {"dictID": ["a", dict_id]}}), dict_id
    )
    assert excludes_dict_id(QueryOptions.from_raw({"filter": {"dictID": [""]}}), dict_id)


def test_ensembl_dictionary_is_a_dictionary_source() -> None:
    assert isinstance(EnsemblDictionary(fetch=RecordingFetcher()), DictionarySource)
