from ensembl_dictionary.services.dictionary.options import QueryOptions


def test_from_raw_handles_missing_options() -> None:
    opts = QueryOptions.from_raw(None)
    assert opts == QueryOptions()
    assert not opts.has_id_filter


def test_from_raw_discards_blank_ids() -> None:
    opts = QueryOptions.from_raw({"filter": {"id": ["", " a ", "  ", "b"]}})
    assert opts.filter_ids == (" a ", "b")
    assert opts.has_id_filter


def test_from_raw_only_blank_ids_is_not_an_id_filter() -> None:
    assert not QueryOptions.from_raw({"filter": {"id": ["", "  "]}}).has_id_filter


def test_from_raw_ignores_malformed_filter() -> None:
    assert QueryOptions.from_raw({"filter": "x"}).filter_ids == ()
    assert QueryOptions.from_raw({"filter": {"id": "abc"}}).filter_ids == ()
    assert QueryOptions.from_raw({"filter": {"id": [1, None, "x"]}}).filter_ids == (
        "x",
    )


def test_from_raw_pagination_falls_back_to_none() -> None:
    for bad in ("String", 0, -1, 1.5, True, ["Str"], None):
        opts = QueryOptions.from_raw({"page": bad, "perPage": bad})
        assert opts.page is None
        assert opts.per_page is None

    opts = QueryOptions.from_raw({"page": 3, "perPage": 20})
    assert (opts.page, opts.per_page) == (3, 20)


def test_from_raw_sort_accepts_only_known_keys() -> None:
    for good in ("id", "dictID", "str"):
        assert QueryOptions.from_raw({"sort": good}).sort == good
    for bad in ([], {}, "", 45, "somethingThatDoesNotExist"):
        assert QueryOptions.from_raw({"sort": bad}).sort is None


def test_from_raw_dict_id_filter() -> None:
    assert QueryOptions.from_raw({}).filter_dict_ids is None
    assert QueryOptions.from_raw({"filter": {"dictID": []}}).filter_dict_ids is None
    assert QueryOptions.from_raw({"filter": {"dictID": [""]}}).filter_dict_ids == ("",)


def test_from_raw_passes_z_through() -> None:
    assert QueryOptions.from_raw({"z": ["species"]}).z == ["species"]
    assert QueryOptions.from_raw({}).z is None
