"""Unit tests for option merging."""

import pytest

from .errors import MissingValueError
from .options import (
    DEFAULT_CLIENT_OPTIONS,
    ClientOptions,
    FetchOptions,
    MultiFetchOptions,
    PostOptions,
    merge_options,
    resolve_count,
    resolve_post_target,
    resolve_target,
)


def describe_merge_options():
    @pytest.fixture
    def base():
        return ClientOptions(cache=True, token="base-token", bot_id="111", version=2)

    def it_inherits_missing_keys(base: ClientOptions):
        result = merge_options(ClientOptions, {}, base)

        assert result == base

    def it_overrides_present_keys(base: ClientOptions):
        result = merge_options(ClientOptions, {"bot_id": "222", "log": True}, base)

        assert result.bot_id == "222"
        assert result.log is True
        assert result.token == "base-token"

    def it_treats_explicit_none_as_present(base: ClientOptions):
        result = merge_options(ClientOptions, {"token": None}, base)

        assert result.token is None

    def it_unsets_booleans_with_the_sentinel(base: ClientOptions):
        result = merge_options(ClientOptions, {"cache": "none"}, base)

        assert result.cache is False

    def it_unsets_strings_with_the_sentinel(base: ClientOptions):
        result = merge_options(ClientOptions, {"token": "none", "bot_id": "none"}, base)

        assert result.token is None
        assert result.bot_id is None

    def it_keeps_numbers_on_the_sentinel(base: ClientOptions):
        result = merge_options(ClientOptions, {"version": "none", "cache_update_timer": "none"}, base)

        assert result.version == 2
        assert result.cache_update_timer == base.cache_update_timer

    def it_accepts_camel_case_keys(base: ClientOptions):
        result = merge_options(ClientOptions, {"botID": "333", "statsLimit": 10}, base)

        assert result.bot_id == "333"
        assert result.stats_limit == 10

    def it_rejects_non_mappings(base: ClientOptions):
        with pytest.raises(TypeError, match="mapping"):
            merge_options(ClientOptions, ["cache"], base)

    def it_rejects_unknown_keys(base: ClientOptions):
        with pytest.raises(TypeError, match="Unknown option"):
            merge_options(ClientOptions, {"colour": "red"}, base)

    def it_does_not_mutate_the_base(base: ClientOptions):
        merge_options(ClientOptions, {"bot_id": "222"}, base)

        assert base.bot_id == "111"


def describe_ClientOptions():
    def it_has_defaults():
        assert DEFAULT_CLIENT_OPTIONS.cache is False
        assert DEFAULT_CLIENT_OPTIONS.cache_update_timer == 180_000
        assert DEFAULT_CLIENT_OPTIONS.version == 1
        assert DEFAULT_CLIENT_OPTIONS.token is None

    def it_falls_back_to_token_for_bot_routes():
        assert ClientOptions(token="t").effective_bot_token == "t"
        assert ClientOptions(token="t", bot_token="b").effective_bot_token == "b"

    @pytest.mark.parametrize(
        "override",
        [
            {"cache": "yes"},
            {"log": 1},
            {"token": 123},
            {"bot_id": 111},
            {"version": "2"},
            {"version": 0},
            {"stats_limit": 0},
            {"cache_update_timer": -1},
            {"cache_update_timer": True},
        ],
    )
    def it_rejects_bad_types(override):
        with pytest.raises(TypeError):
            DEFAULT_CLIENT_OPTIONS.merge(override)


def describe_call_options():
    @pytest.fixture
    def client_options():
        return ClientOptions(cache=True, version=3, token="t", user_token="u")

    def it_derives_fetch_defaults_from_the_client(client_options: ClientOptions):
        opts = FetchOptions.from_client(client_options)

        assert opts == FetchOptions(cache=True, raw=False, version=3, user_token="u", bot_token="t")

    def it_overlays_call_overrides(client_options: ClientOptions):
        opts = MultiFetchOptions.from_client(client_options).merge({"page": 4, "mapify": True, "cache": False})

        assert opts.page == 4
        assert opts.mapify is True
        assert opts.cache is False
        assert opts.version == 3

    def it_rejects_non_numeric_pages(client_options: ClientOptions):
        with pytest.raises(TypeError, match="page"):
            MultiFetchOptions.from_client(client_options).merge({"page": "2"})

    def it_rejects_list_options_on_single_fetches(client_options: ClientOptions):
        with pytest.raises(TypeError, match="Unknown option"):
            FetchOptions.from_client(client_options).merge({"page": 2})

    def it_derives_post_defaults(client_options: ClientOptions):
        opts = PostOptions.from_client(client_options).merge({"countOrShards": 5})

        assert opts.bot_token == "t"
        assert opts.count_or_shards == 5


def describe_resolve_target():
    def it_uses_the_given_id():
        assert resolve_target("123", None, "999") == ("123", {})

    def it_falls_back_to_the_default():
        assert resolve_target(None, {"raw": True}, "999") == ("999", {"raw": True})

    def it_treats_a_mapping_as_options():
        assert resolve_target({"raw": True}, None, "999") == ("999", {"raw": True})

    def it_matches_the_explicit_form():
        assert resolve_target({"raw": True}, None, "999") == resolve_target(None, {"raw": True}, "999")

    def it_rejects_non_mapping_options():
        with pytest.raises(TypeError):
            resolve_target("123", "raw", "999")


def describe_resolve_post_target():
    def it_treats_a_number_as_the_count():
        assert resolve_post_target(42, None, None, "999") == ("999", {"count_or_shards": 42})

    def it_treats_a_list_as_shards():
        assert resolve_post_target([1, 2], None, None, "999") == ("999", {"count_or_shards": [1, 2]})

    def it_keeps_an_explicit_id_and_count():
        assert resolve_post_target("123", 7, None, None) == ("123", {"count_or_shards": 7})


def describe_resolve_count():
    def it_builds_a_shards_body():
        assert resolve_count([1, 2, 3]) == {"shards": [1, 2, 3]}

    def it_builds_a_server_count_body():
        assert resolve_count(42) == {"server_count": 42}

    def it_requires_a_value():
        with pytest.raises(MissingValueError):
            resolve_count(None)

    @pytest.mark.parametrize("value", ["42", True, 4.2, [1, "2"]])
    def it_rejects_other_shapes(value):
        with pytest.raises(TypeError):
            resolve_count(value)
