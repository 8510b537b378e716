"""
Common data types and base models for lolscout.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Region(str, Enum):
    """Riot API regional routing values."""

    AMERICAS = "americas"
    EUROPE = "europe"
    ASIA = "asia"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API Platforms (game servers)."""

    BR1 = "br1"  # Brazil
    EUN1 = "eun1"  # Europe Nordic & East
    EUW1 = "euw1"  # Europe West
    JP1 = "jp1"  # Japan
    KR = "kr"  # Korea
    LA1 = "la1"  # Latin America North
    LA2 = "la2"  # Latin America South
    NA1 = "na1"  # North America
    OC1 = "oc1"  # Oceania
    PH2 = "ph2"  # Philippines
    RU = "ru"  # Russia
    SG2 = "sg2"  # Singapore
    TH2 = "th2"  # Thailand
    TR1 = "tr1"  # Turkey
    TW2 = "tw2"  # Taiwan
    VN2 = "vn2"  # Vietnam


_PLATFORM_ROUTES: dict[Platform, Region] = {
    Platform.NA1: Region.AMERICAS,
    Platform.BR1: Region.AMERICAS,
    Platform.LA1: Region.AMERICAS,
    Platform.LA2: Region.AMERICAS,
    Platform.OC1: Region.AMERICAS,
    Platform.EUW1: Region.EUROPE,
    Platform.EUN1: Region.EUROPE,
    Platform.TR1: Region.EUROPE,
    Platform.RU: Region.EUROPE,
    Platform.KR: Region.ASIA,
    Platform.JP1: Region.ASIA,
    Platform.PH2: Region.SEA,
    Platform.SG2: Region.SEA,
    Platform.TH2: Region.SEA,
    Platform.TW2: Region.SEA,
    Platform.VN2: Region.SEA,
}


def regional_route(platform: str) -> Region:
    """Map a platform id (e.g. 'euw1') to its regional routing value.

    Unknown platforms fall back to AMERICAS.
    """
    try:
        return _PLATFORM_ROUTES[Platform(platform.lower())]
    except ValueError:
        return Region.AMERICAS


def account_route(platform: str) -> Region:
    """Regional host for Account-V1, which has no SEA cluster.

    SEA platforms resolve their Riot IDs through ASIA.
    """
    route = regional_route(platform)
    return Region.ASIA if route is Region.SEA else route


class Queue(int, Enum):
    """Game queue types."""

    RANKED_SOLO_5x5 = 420
    RANKED_FLEX_SR = 440
    NORMAL_DRAFT_PICK = 400
    NORMAL_BLIND_PICK = 430
    ARAM = 450
    CLASH = 700


QUEUE_LABELS: dict[int, str] = {
    Queue.RANKED_SOLO_5x5: "Ranked Solo/Duo",
    Queue.RANKED_FLEX_SR: "Ranked Flex",
    Queue.NORMAL_DRAFT_PICK: "Normal Draft",
    Queue.NORMAL_BLIND_PICK: "Normal Blind",
    Queue.ARAM: "ARAM",
    Queue.CLASH: "Clash",
}


def queue_label(queue_id: int) -> str:
    return QUEUE_LABELS.get(queue_id, f"Queue {queue_id}")


class Tier(str, Enum):
    """Ranked tiers, declared in ascending order."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def ordinal(self) -> int:
        return list(Tier).index(self)


APEX_TIERS = frozenset({Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER})


def tier_ordinal(tier: str | None) -> int:
    """IRON=0 ... CHALLENGER=9.

    UNRANKED, missing and unrecognised tier strings all map to 0, which makes
    them indistinguishable from IRON for threshold comparisons.
    """
    if not tier:
        return 0
    try:
        return Tier(tier.upper()).ordinal
    except ValueError:
        return 0


class Severity(str, Enum):
    """Highlight severity."""

    NEUTRAL = "neutral"
    GREEN = "green"
    RED = "red"


class RiotPayload(BaseModel):
    """Base model for upstream Riot payloads.

    Accepts camelCase keys from the wire or snake_case field names, and
    ignores fields we do not consume.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class BaseContract(BaseModel):
    """Base model for outgoing contracts with common configuration."""

    model_config = ConfigDict(
        # Validate data on assignment
        validate_assignment=True,
        # Use enum values in JSON
        use_enum_values=True,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )
