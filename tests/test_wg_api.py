from __future__ import annotations

import pytest
import requests

from wgapi.api.endpoints import API_WGN, API_WOT, API_WOWP
from wgapi.api.exceptions import InvalidConfiguration, MissingArgument, TransportError
from wgapi.api.wg_api import WGAPIClient, clamp_limit


def test_account_list_defaults(client, fake_session) -> None:
    assert client.tld == "com"

    body = client.account_list(API_WOT, "timroden")

    assert body == '{"status": "ok"}'
    call = fake_session.last
    assert call["method"] == "GET"
    assert call["url"].startswith("http://api.worldoftanks.com/wot/account/list/?")
    assert fake_session.sent_params() == {
        "search": "timroden",
        "application_id": "K1",
        "language": "en",
    }


@pytest.mark.parametrize("limit, expected", [(150, None), ("20", None), (2.5, None), (100, None), (25, "25")])
def test_account_list_limit_clamp(client, fake_session, limit, expected) -> None:
    client.account_list(search="tim", limit=limit)
    assert fake_session.sent_params().get("limit") == expected


def test_selector_comes_first(client, fake_session) -> None:
    client.account_list(API_WOT, "timroden", 20, ["nickname"])

    assert fake_session.sent_params() == {
        "search": "timroden",
        "limit": "20",
        "fields": "nickname",
        "application_id": "K1",
        "language": "en",
    }


def test_search_without_selector_rejected_before_request(client, fake_session) -> None:
    with pytest.raises(InvalidConfiguration):
        client.account_list("timroden")
    assert fake_session.calls == []


def test_selector_in_search_slot_rejected(client, fake_session) -> None:
    with pytest.raises(MissingArgument):
        client.account_list(API_WOT, API_WOT)
    with pytest.raises(MissingArgument):
        client.clan_list(API_WOT, "RDDT")
    assert fake_session.calls == []


def test_clamp_limit() -> None:
    assert clamp_limit(101) == 100
    assert clamp_limit("x") == 100
    assert clamp_limit(True) == 100
    assert clamp_limit(60, 50) == 50
    assert clamp_limit(7) == 7


def test_fields_are_comma_joined(client, fake_session) -> None:
    client.account_info(API_WOT, 1001, fields=["nickname", "global_rating"])
    assert fake_session.sent_params()["fields"] == "nickname,global_rating"


def test_single_string_field_sent_whole(client, fake_session) -> None:
    client.account_info(API_WOT, 1001, fields="nickname")
    assert fake_session.sent_params()["fields"] == "nickname"


def test_empty_fields_omitted(client, fake_session) -> None:
    client.clan_info("500", fields=[])
    assert "fields" not in fake_session.sent_params()


def test_multiple_ids_are_comma_joined(client, fake_session) -> None:
    client.account_info(account_id=[1001, 1002])
    assert fake_session.sent_params()["account_id"] == "1001,1002"


def test_post_moves_params_into_body(client, fake_session) -> None:
    client.account_list(API_WOT, "timroden")
    get_url = fake_session.last["url"]

    client.set_method("POST")
    client.account_list(API_WOT, "timroden")
    call = fake_session.last

    assert call["method"] == "POST"
    assert call["url"] == get_url.split("?")[0]
    assert "?" not in call["url"]
    assert call["headers"] == {"Content-Type": "application/x-www-form-urlencoded"}
    assert fake_session.sent_params()["search"] == "timroden"


def test_tls_and_language_setters(client, fake_session) -> None:
    client.set_use_tls(True)
    client.set_language("ru")
    client.clan_top()

    assert fake_session.last["url"].startswith("https://api.worldoftanks.com/wot/clan/top/")
    assert fake_session.sent_params() == {"application_id": "K1", "language": "ru"}


def test_invalid_method_leaves_config_untouched(client) -> None:
    with pytest.raises(InvalidConfiguration):
        client.set_method("PATCH")
    assert client.config.method == "GET"


def test_access_token_attached_to_account_and_clan_requests(client, fake_session) -> None:
    client.set_access_token("tok")

    client.account_vehicles("1001")
    assert fake_session.sent_params()["access_token"] == "tok"
    assert "/wot/account/tanks/" in fake_session.last["url"]

    client.clan_battles("500")
    assert fake_session.sent_params()["access_token"] == "tok"

    client.clan_list("RDDT")
    assert "access_token" not in fake_session.sent_params()


def test_api_selector_picks_family(client, fake_session) -> None:
    client.account_info(API_WOWP, "1001")
    assert fake_session.last["url"].startswith("http://api.worldofwarplanes.com/wowp/account/info/")

    client.account_list(API_WGN, "tim")
    assert fake_session.last["url"].startswith("http://api.worldoftanks.com/wgn/account/list/")


def test_unsupported_family_rejected_before_request(client, fake_session) -> None:
    with pytest.raises(InvalidConfiguration):
        client.rating_types(API_WGN)
    assert fake_session.calls == []


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.account_list(API_WOT, None),
        lambda c: c.account_info(API_WOT),
        lambda c: c.account_vehicles([]),
        lambda c: c.clan_list(""),
        lambda c: c.clan_info(None),
        lambda c: c.clan_provinces(None),
        lambda c: c.clan_victory_points(None),
        lambda c: c.clan_victory_points_history(None),
        lambda c: c.clan_member_info(None),
        lambda c: c.rating_accounts(API_WOT, None, "1001"),
        lambda c: c.rating_neighbors(API_WOT, "all", "1001", None),
        lambda c: c.rating_top(API_WOT, "all", None),
        lambda c: c.rating_dates(API_WOWP),
    ],
)
def test_missing_arguments_raise_before_network(client, fake_session, call) -> None:
    with pytest.raises(MissingArgument):
        call(client)
    assert fake_session.calls == []


@pytest.mark.parametrize(
    "limit, expected",
    [(5, "20"), (20, "20"), (50, "50"), (150, "100"), (0, None), ("many", "100"), (True, "100")],
)
def test_victory_points_history_limit(client, fake_session, limit, expected) -> None:
    client.clan_victory_points_history(clan_id="500", limit=limit)

    params = fake_session.sent_params()
    assert params.get("limit") == expected
    assert params["clan_id"] == "500"


def test_victory_points_history_optional_params(client, fake_session) -> None:
    client.clan_victory_points_history("500", since=1400000000, until=1400100000, offset=0)

    params = fake_session.sent_params()
    assert params["since"] == "1400000000"
    assert params["until"] == "1400100000"
    assert params["offset"] == "0"


def test_clan_list_order_by_and_clan_top_time(client, fake_session) -> None:
    client.clan_list("RDDT", limit=10, order_by="name")
    assert fake_session.sent_params()["order_by"] == "name"
    assert fake_session.sent_params()["limit"] == "10"

    client.clan_top(time="previous_season")
    assert fake_session.sent_params()["time"] == "previous_season"


def test_clan_member_info(client, fake_session) -> None:
    client.clan_member_info(["1", "2"], fields=["role"])

    assert "/wot/clan/membersinfo/" in fake_session.last["url"]
    assert fake_session.sent_params()["member_id"] == "1,2"


def test_rating_requests(client, fake_session) -> None:
    client.rating_types()
    assert "/wot/ratings/types/" in fake_session.last["url"]

    client.rating_accounts(API_WOT, "28", "1001", date=1400000000)
    assert fake_session.sent_params()["type"] == "28"
    assert fake_session.sent_params()["date"] == "1400000000"

    client.rating_neighbors(API_WOWP, "28", "1001", "global_rating", limit=80)
    assert "/wowp/ratings/neighbors/" in fake_session.last["url"]
    assert fake_session.sent_params()["limit"] == "50"

    client.rating_top(rating_type="all", rank_field="global_rating", page_no=2)
    assert "limit" not in fake_session.sent_params()
    assert fake_session.sent_params()["page_no"] == "2"

    client.rating_dates(API_WOT, "all", account_id="1001")
    assert fake_session.sent_params()["account_id"] == "1001"


def test_error_payload_returned_as_is(client, fake_session, make_response) -> None:
    error_body = '{"status":"error","error":{"code":407,"message":"INVALID_APPLICATION_ID"}}'
    fake_session.response = make_response(error_body, status_code=407)

    assert client.account_list(API_WOT, "tim") == error_body


def test_empty_body_raises_transport_error(client, fake_session, make_response) -> None:
    fake_session.response = make_response("", status_code=502)

    with pytest.raises(TransportError) as exc:
        client.account_list(API_WOT, "tim")
    assert exc.value.code == "502"


def test_request_exception_raises_transport_error(make_session) -> None:
    session = make_session(error=requests.ConnectionError("connection refused"))
    client = WGAPIClient("K1", "eu")
    client.session = session

    with pytest.raises(TransportError) as exc:
        client.clan_info("500")
    assert exc.value.code == "ConnectionError"
    assert "connection refused" in exc.value.message


def test_context_manager_closes_session(make_session) -> None:
    session = make_session()
    with WGAPIClient("K1", "ru") as client:
        client.session = session
    assert session.closed is True
