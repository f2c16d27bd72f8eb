"""Endpoint table for the Wargaming public API.

Each remote action is identified by an (API family, resource, action)
tuple and rendered against a region's top-level domain.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .exceptions import InvalidConfiguration


class ApiFamily(Enum):
    """Remote API families, as (product host, path prefix)."""

    WOT = ("worldoftanks", "wot")
    WGN = ("worldoftanks", "wgn")
    WOWP = ("worldofwarplanes", "wowp")

    @property
    def product(self) -> str:
        return self.value[0]

    @property
    def prefix(self) -> str:
        return self.value[1]


API_WOT = ApiFamily.WOT
API_WGN = ApiFamily.WGN
API_WOWP = ApiFamily.WOWP


@dataclass(frozen=True)
class Endpoint:
    """A single remote action."""

    family: ApiFamily
    resource: str
    action: str

    def path(self, tld: str) -> str:
        """Render host and path, e.g. ``api.worldoftanks.com/wot/account/list/``."""
        return f"api.{self.family.product}.{tld}/{self.family.prefix}/{self.resource}/{self.action}/"


_SUPPORTED: Dict[ApiFamily, Dict[str, Tuple[str, ...]]] = {
    ApiFamily.WOT: {
        'account': ('list', 'info', 'tanks'),
        'clan': ('list', 'info', 'battles', 'top', 'provinces', 'victorypoints',
                 'victorypointshistory', 'membersinfo'),
        'ratings': ('types', 'accounts', 'neighbors', 'top', 'dates'),
    },
    ApiFamily.WGN: {
        'account': ('list', 'info'),
    },
    ApiFamily.WOWP: {
        'account': ('list', 'info'),
        'ratings': ('types', 'accounts', 'neighbors', 'top', 'dates'),
    },
}

ENDPOINTS: Dict[Tuple[ApiFamily, str, str], Endpoint] = {
    (family, resource, action): Endpoint(family, resource, action)
    for family, resources in _SUPPORTED.items()
    for resource, actions in resources.items()
    for action in actions
}


def lookup(family: ApiFamily, resource: str, action: str) -> Endpoint:
    """Find the endpoint for a family/resource/action combination.

    Raises:
        InvalidConfiguration: If the family does not provide the action
    """
    if not isinstance(family, ApiFamily):
        raise InvalidConfiguration(f"invalid API selector: {family!r}")

    try:
        return ENDPOINTS[(family, resource, action)]
    except KeyError:
        raise InvalidConfiguration(
            f"{resource}/{action} is not available in the {family.prefix} API"
        ) from None
