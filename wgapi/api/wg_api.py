"""Wargaming API client for accounts, clans and ratings.

This module provides a thin client for the Wargaming public API. Every
endpoint method validates its arguments, builds a parameter mapping and
hands it to a single request executor which returns the raw response body.
"""

import logging
from typing import Optional, Dict, Any, Sequence, Union
from urllib.parse import urlencode

import requests

from .config import ClientConfig
from .endpoints import ApiFamily, Endpoint, lookup
from .exceptions import MissingArgument, TransportError

Ids = Union[str, int, Sequence[Union[str, int]]]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def clamp_limit(limit: Any, maximum: int = 100) -> int:
    """Clamp a result limit, falling back to ``maximum`` for non-integers."""
    if not isinstance(limit, int) or isinstance(limit, bool) or limit > maximum:
        return maximum
    return limit


def _require(name: str, value: Any) -> None:
    if value is None or value == "" or (isinstance(value, (list, tuple)) and not value):
        raise MissingArgument(name)
    # A selector in an identifier slot means the arguments were shifted
    if isinstance(value, ApiFamily):
        raise MissingArgument(name)


def _serialize(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return value


class WGAPIClient:
    """Client for the Wargaming public API.

    The client holds an immutable ``ClientConfig``; the ``set_*`` methods
    validate their input and swap in a new config value. Mutating a client
    shared between threads is not thread-safe, give each thread its own
    client (they may share the same ``ClientConfig``).

    Attributes:
        config (ClientConfig): Current configuration
        logger (logging.Logger): Logger for this client
        session (requests.Session): HTTP session for requests
    """

    def __init__(self, api_key: Optional[str] = None, region: str = "na",
                 config: Optional[ClientConfig] = None) -> None:
        """Initialize the client.

        Args:
            api_key: Application id (ignored when ``config`` is given)
            region: Region name: NA, RU, EU, SEA or ASIA
            config: Ready-made configuration

        Raises:
            InvalidConfiguration: If the key or region is invalid
        """
        self.config = config or ClientConfig(api_key=api_key, region=region)
        self.logger = logging.getLogger(__name__)
        self.session = requests.Session()
        self.logger.info(f"Wargaming API client initialized for region: {self.config.region}")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "WGAPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def tld(self) -> str:
        return self.config.tld

    # Configuration setters

    def set_language(self, language: str) -> None:
        """Set the desired response language."""
        self.config = self.config.with_language(language)

    def set_method(self, method: str) -> None:
        """Set the HTTP method used for requests. Must be GET or POST."""
        self.config = self.config.with_method(method)

    def set_use_tls(self, use_tls: bool) -> None:
        """Choose whether requests are sent over HTTPS."""
        self.config = self.config.with_https(use_tls)

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Set the access token used for private player data."""
        self.config = self.config.with_access_token(access_token)

    # Account functions

    def account_list(self, api: ApiFamily = ApiFamily.WOT, search: Optional[str] = None,
                     limit: int = 100, fields: Sequence[str] = ()) -> str:
        """
        Get a partial list of players filtered by name.

        Args:
            api: API family to query
            search: Initial characters of the player name
            limit: Number of returned entries, at most 100
            fields: Response fields to return

        Returns:
            Raw response body
        """
        endpoint = lookup(api, "account", "list")
        _require('search', search)

        params: Dict[str, Any] = {'search': search}
        limit = clamp_limit(limit)
        if limit != 100:
            params['limit'] = limit
        return self._make_request(endpoint, self._with_fields(params, fields))

    def account_info(self, api: ApiFamily = ApiFamily.WOT, account_id: Optional[Ids] = None,
                     fields: Sequence[str] = ()) -> str:
        """
        Get player details.

        Args:
            api: API family to query
            account_id: A single account id or a list of them
            fields: Response fields to return

        Returns:
            Raw response body
        """
        return self._account_request("info", account_id, fields, api)

    def account_vehicles(self, account_id: Ids, fields: Sequence[str] = ()) -> str:
        """Get details on a player's vehicles."""
        return self._account_request("tanks", account_id, fields, ApiFamily.WOT)

    # Clan functions

    def clan_list(self, search: str, limit: int = 100, order_by: str = "",
                  fields: Sequence[str] = ()) -> str:
        """
        Get a partial list of clans filtered by name or tag.

        Args:
            search: Initial characters of the clan name or tag
            limit: Number of returned entries, at most 100
            order_by: Sorting, see the developer docs for valid values
            fields: Response fields to return

        Returns:
            Raw response body
        """
        _require('search', search)

        params: Dict[str, Any] = {'search': search}
        limit = clamp_limit(limit)
        if limit != 100:
            params['limit'] = limit
        if order_by:
            params['order_by'] = order_by
        return self._make_request(lookup(ApiFamily.WOT, "clan", "list"),
                                  self._with_fields(params, fields))

    def clan_info(self, clan_id: Ids, fields: Sequence[str] = ()) -> str:
        return self._clan_request("info", clan_id, fields)

    def clan_battles(self, clan_id: Ids, fields: Sequence[str] = ()) -> str:
        return self._clan_request("battles", clan_id, fields)

    def clan_provinces(self, clan_id: Ids, fields: Sequence[str] = ()) -> str:
        return self._clan_request("provinces", clan_id, fields)

    def clan_victory_points(self, clan_id: Ids, fields: Sequence[str] = ()) -> str:
        return self._clan_request("victorypoints", clan_id, fields)

    def clan_top(self, time: str = "current_season", fields: Sequence[str] = ()) -> str:
        """Get the top 100 clans sorted by rating."""
        params: Dict[str, Any] = {}
        if time and time != "current_season":
            params['time'] = time
        return self._make_request(lookup(ApiFamily.WOT, "clan", "top"),
                                  self._with_fields(params, fields))

    def clan_victory_points_history(self, clan_id: Ids, limit: int = 0, since: int = 0,
                                    until: int = 0, offset: Optional[int] = None,
                                    fields: Sequence[str] = ()) -> str:
        """
        Get a log of a clan's victory points.

        Args:
            clan_id: A single clan id or a list of them
            limit: Number of results, clamped to 20..100; 0 leaves it unset
            since: Stage start time
            until: Stage end time
            offset: Result offset
            fields: Response fields to return

        Returns:
            Raw response body
        """
        _require('clan_id', clan_id)

        params: Dict[str, Any] = {'clan_id': clan_id}
        if limit:
            params['limit'] = max(clamp_limit(limit), 20)
        if since:
            params['since'] = since
        if until:
            params['until'] = until
        if offset is not None:
            params['offset'] = offset
        return self._make_request(lookup(ApiFamily.WOT, "clan", "victorypointshistory"),
                                  self._with_fields(params, fields))

    def clan_member_info(self, member_id: Ids, fields: Sequence[str] = ()) -> str:
        """Get clan membership details for one or more players."""
        _require('member_id', member_id)
        return self._make_request(lookup(ApiFamily.WOT, "clan", "membersinfo"),
                                  self._with_fields({'member_id': member_id}, fields))

    # Player rating functions

    def rating_types(self, api: ApiFamily = ApiFamily.WOT, fields: Sequence[str] = ()) -> str:
        """Get the available rating periods and their rank fields."""
        return self._make_request(lookup(api, "ratings", "types"),
                                  self._with_fields({}, fields))

    def rating_accounts(self, api: ApiFamily = ApiFamily.WOT, rating_type: Optional[str] = None,
                        account_id: Optional[Ids] = None, date: Optional[int] = None,
                        fields: Sequence[str] = ()) -> str:
        """Get player ratings for a rating period."""
        endpoint = lookup(api, "ratings", "accounts")
        _require('type', rating_type)
        _require('account_id', account_id)

        params: Dict[str, Any] = {'type': rating_type, 'account_id': account_id}
        if date:
            params['date'] = date
        return self._make_request(endpoint, self._with_fields(params, fields))

    def rating_neighbors(self, api: ApiFamily = ApiFamily.WOT, rating_type: Optional[str] = None,
                         account_id: Optional[Ids] = None, rank_field: Optional[str] = None,
                         date: Optional[int] = None, limit: int = 5,
                         fields: Sequence[str] = ()) -> str:
        """
        Get players adjacent to a player in a rating.

        Args:
            api: API family to query
            rating_type: Rating period
            account_id: Player account id
            rank_field: Rating category
            date: Ratings calculation date
            limit: Number of neighbors, at most 50
            fields: Response fields to return

        Returns:
            Raw response body
        """
        endpoint = lookup(api, "ratings", "neighbors")
        _require('type', rating_type)
        _require('account_id', account_id)
        _require('rank_field', rank_field)

        params: Dict[str, Any] = {
            'type': rating_type,
            'account_id': account_id,
            'rank_field': rank_field,
        }
        if date:
            params['date'] = date
        limit = clamp_limit(limit, 50)
        if limit != 5:
            params['limit'] = limit
        return self._make_request(endpoint, self._with_fields(params, fields))

    def rating_top(self, api: ApiFamily = ApiFamily.WOT, rating_type: Optional[str] = None,
                   rank_field: Optional[str] = None, date: Optional[int] = None,
                   limit: int = 10, page_no: Optional[int] = None,
                   fields: Sequence[str] = ()) -> str:
        """Get the top players in a rating category."""
        endpoint = lookup(api, "ratings", "top")
        _require('type', rating_type)
        _require('rank_field', rank_field)

        params: Dict[str, Any] = {'type': rating_type, 'rank_field': rank_field}
        if date:
            params['date'] = date
        limit = clamp_limit(limit, 1000)
        if limit != 10:
            params['limit'] = limit
        if page_no is not None:
            params['page_no'] = page_no
        return self._make_request(endpoint, self._with_fields(params, fields))

    def rating_dates(self, api: ApiFamily = ApiFamily.WOT, rating_type: Optional[str] = None,
                     account_id: Optional[Ids] = None, fields: Sequence[str] = ()) -> str:
        """Get the dates with available ratings."""
        endpoint = lookup(api, "ratings", "dates")
        _require('type', rating_type)

        params: Dict[str, Any] = {'type': rating_type}
        if account_id:
            params['account_id'] = account_id
        return self._make_request(endpoint, self._with_fields(params, fields))

    # Web request related functions

    def _with_fields(self, params: Dict[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
        if isinstance(fields, str):
            fields = [fields]
        if fields:
            params['fields'] = list(fields)
        return params

    def _account_request(self, action: str, account_id: Ids, fields: Sequence[str],
                         api: ApiFamily) -> str:
        endpoint = lookup(api, "account", action)
        _require('account_id', account_id)

        params: Dict[str, Any] = {'account_id': account_id}
        if self.config.access_token:
            params['access_token'] = self.config.access_token
        return self._make_request(endpoint, self._with_fields(params, fields))

    def _clan_request(self, action: str, clan_id: Ids, fields: Sequence[str]) -> str:
        _require('clan_id', clan_id)

        params: Dict[str, Any] = {'clan_id': clan_id}
        if self.config.access_token:
            params['access_token'] = self.config.access_token
        return self._make_request(lookup(ApiFamily.WOT, "clan", action),
                                  self._with_fields(params, fields))

    def build_request(self, endpoint: Endpoint, params: Dict[str, Any],
                      force_https: bool = False) -> Dict[str, Any]:
        """
        Resolve the URL, body and headers for a request without sending it.

        Args:
            endpoint: Target endpoint
            params: Endpoint parameters
            force_https: Use HTTPS regardless of the configured preference

        Returns:
            Dictionary with ``method``, ``url``, ``data`` and ``headers`` keys
        """
        config = self.config
        scheme = "https" if config.use_https or force_https else "http"

        data = dict(params)
        data['application_id'] = config.api_key
        data['language'] = config.language
        query = urlencode({key: _serialize(value) for key, value in data.items()})

        url = f"{scheme}://{endpoint.path(config.tld)}"
        if config.method == "GET":
            return {'method': "GET", 'url': f"{url}?{query}", 'data': None, 'headers': {}}
        return {
            'method': "POST",
            'url': url,
            'data': query,
            'headers': {'Content-Type': FORM_CONTENT_TYPE},
        }

    def _make_request(self, endpoint: Endpoint, params: Dict[str, Any],
                      force_https: bool = False) -> str:
        """
        Send a request to the Wargaming API and return the raw body.

        Args:
            endpoint: Target endpoint
            params: Endpoint parameters
            force_https: Use HTTPS regardless of the configured preference

        Returns:
            Raw response body

        Raises:
            TransportError: If the request fails or the body is empty
        """
        request = self.build_request(endpoint, params, force_https)
        target = f"{request['method']} {endpoint.path(self.config.tld)}"
        self.logger.debug(f"Requesting {target} with params: {sorted(params)}")

        try:
            response = self.session.request(
                request['method'],
                request['url'],
                data=request['data'],
                headers=request['headers'],
                timeout=self.config.timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            self.logger.error(f"Network error for {target}: {e}")
            raise TransportError(str(e), code=type(e).__name__) from e

        if not response.content:
            self.logger.error(f"Empty response for {target}: {response.status_code}")
            raise TransportError("empty response body", code=str(response.status_code))

        if response.status_code >= 400:
            self.logger.warning(f"API request {target} returned {response.status_code}")

        return response.text
