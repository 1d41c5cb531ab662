import pytest

from pokevault.bot.handlers.admin import format_refresh_result, parse_refresh_args
from pokevault.bot.handlers.pokedex import DexQuery, describe_filters, parse_dex_args
from pokevault.core.fetcher import RefreshResult
from pokevault.scripts.refresh_catalog import parse_args


class TestParseDexArgs:
    def test_empty(self):
        assert parse_dex_args(None) == DexQuery()
        assert parse_dex_args("") == DexQuery()

    def test_plain_search(self):
        assert parse_dex_args("Pika").search == "pika"

    def test_key_value_filters(self):
        query = parse_dex_args("char gen:1 type:fire,flying page:2")
        assert query.search == "char"
        assert query.generation == 1
        assert query.types == ["fire", "flying"]
        assert query.page == 2

    def test_flag_generation(self):
        assert parse_dex_args("--gen 3").generation == 3

    def test_out_of_range_generation_is_ignored(self):
        assert parse_dex_args("gen:12").generation is None
        assert parse_dex_args("--gen 0").generation is None

    def test_unknown_key_is_search_text(self):
        assert parse_dex_args("mr:mime").search == "mr:mime"

    def test_describe_filters_escapes(self):
        query = DexQuery(search="<b>", generation=9)
        text = describe_filters(query)
        assert "&lt;b&gt;" in text
        assert "Paldea" in text
        assert describe_filters(DexQuery()) == "All Pokemon"


class TestParseRefreshArgs:
    def test_defaults(self):
        assert parse_refresh_args(None) == (151, 0)

    def test_limit_and_offset(self):
        assert parse_refresh_args("100 151") == (100, 151)
        assert parse_refresh_args("50") == (50, 0)

    def test_result_mentions_failures(self):
        assert "errors" not in format_refresh_result(RefreshResult(cached=3, fetched=3))
        assert "Skipped after errors: 1" in format_refresh_result(RefreshResult(cached=3, failed=1))


class TestCliArgs:
    def test_defaults(self):
        assert parse_args([]) == {"limit": 151, "offset": 0, "dex": None, "suffix": None}

    def test_range(self):
        args = parse_args(["--limit", "100", "--offset", "151"])
        assert args["limit"] == 100
        assert args["offset"] == 151

    def test_dex(self):
        args = parse_args(["--dex", "paldea", "--suffix", "paldea"])
        assert args["dex"] == "paldea"
        assert args["suffix"] == "paldea"

    @pytest.mark.parametrize("argv", [["--limit"], ["--limit", "ten"], ["--colour", "red"], ["--dex"]])
    def test_bad_arguments(self, argv):
        with pytest.raises(ValueError):
            parse_args(argv)
