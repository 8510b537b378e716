"""Unit tests for PlayerAnalysisService.

Ports are replaced with in-memory fakes; the stats core runs for real.
"""

import asyncio
from typing import Any

import pytest

from lolscout.adapters.riot_api import RateLimitError, RiotAPIError
from lolscout.contracts.common import Severity
from lolscout.contracts.summoner import Account, LeagueEntry, MasteryEntry, SummonerProfile
from lolscout.core.ports import ChampionCatalogPort, RiotAPIPort
from lolscout.core.services import (
    ChampionCatalogCache,
    ConfigurationMissingError,
    PlayerAnalysisService,
    UpstreamLookupError,
)
from lolscout.core.stats import MasterySort

PLAYER_PUUID = "player-puuid-0001"


class _FakeRiotAPI(RiotAPIPort):
    def __init__(self) -> None:
        self.account: Account | None = Account(puuid=PLAYER_PUUID, game_name="Tester", tag_line="NA1")
        self.summoner: SummonerProfile | None = SummonerProfile(
            puuid=PLAYER_PUUID, profile_icon_id=4568, summoner_level=212
        )
        self.league: list[LeagueEntry] | None | Exception = []
        self.masteries: list[MasteryEntry] | None = []
        self.match_ids: list[str] = []
        self.details: dict[str, Any] = {}
        self.delays: dict[str, float] = {}
        self.account_calls: list[tuple[str, str, str]] = []
        self.history_calls: list[dict[str, Any]] = []

    async def get_account_by_riot_id(self, game_name, tag_line, region="americas"):
        self.account_calls.append((game_name, tag_line, region))
        if isinstance(self.account, Exception):
            raise self.account
        return self.account

    async def get_summoner_by_puuid(self, puuid, platform):
        return self.summoner

    async def get_league_entries(self, puuid, platform):
        if isinstance(self.league, Exception):
            raise self.league
        return self.league

    async def get_champion_masteries(self, puuid, platform):
        return self.masteries

    async def get_match_history(self, puuid, platform, count=20, queue_type=None):
        self.history_calls.append({"count": count, "queue_type": queue_type})
        return self.match_ids[:count]

    async def get_match_details(self, match_id, platform):
        if match_id in self.delays:
            await asyncio.sleep(self.delays[match_id])
        detail = self.details.get(match_id)
        if isinstance(detail, Exception):
            raise detail
        return detail


class _FakeDDragon(ChampionCatalogPort):
    def __init__(self, catalog: dict[int, str] | None = None) -> None:
        self.catalog = catalog if catalog is not None else {1: "Annie", 103: "Ahri", 238: "Zed"}

    async def get_champion_catalog(self):
        return self.catalog

    def get_champion_image_url(self, champion_key):
        return f"https://cdn.test/champion/{champion_key}.png"

    def get_profile_icon_url(self, icon_id):
        return f"https://cdn.test/profileicon/{icon_id}.png"


@pytest.fixture
def riot():
    return _FakeRiotAPI()


@pytest.fixture
def service(riot, settings):
    ddragon = _FakeDDragon()
    return PlayerAnalysisService(
        riot_api=riot,
        ddragon=ddragon,
        catalog_cache=ChampionCatalogCache(ddragon.get_champion_catalog),
        settings=settings,
    )


class TestInputValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,tag,region", [("", "NA1", "na1"), ("Tester", "  ", "na1"), (None, None, "na1"), ("Tester", "NA1", ""), ("Tester", "NA1", None)])
    async def test_missing_identity_is_bad_request(self, service, riot, name, tag, region):
        with pytest.raises(ConfigurationMissingError) as exc_info:
            await service.analyze(name, tag, region)

        assert exc_info.value.status_code == 400
        assert riot.account_calls == []

    @pytest.mark.asyncio
    async def test_unknown_region_is_bad_request(self, service):
        with pytest.raises(ConfigurationMissingError) as exc_info:
            await service.analyze("Tester", "NA1", "mars1")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_api_key_is_server_error(self, riot, settings):
        settings.riot_api_key = None
        service = PlayerAnalysisService(riot_api=riot, ddragon=_FakeDDragon(), settings=settings)

        with pytest.raises(ConfigurationMissingError) as exc_info:
            await service.analyze("Tester", "NA1", "na1")

        assert exc_info.value.status_code == 500
        assert riot.account_calls == []

    @pytest.mark.asyncio
    async def test_input_is_normalized(self, service, riot):
        await service.analyze("  Tester ", "#NA1", "EUW1")

        assert riot.account_calls == [("Tester", "NA1", "europe")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("platform", ["ph2", "sg2", "th2", "tw2", "vn2"])
    async def test_sea_platform_resolves_account_through_asia(self, service, riot, platform):
        report = await service.analyze("Tester", "NA1", platform)

        assert riot.account_calls == [("Tester", "NA1", "asia")]
        assert report.platform == platform


class TestRequiredLookups:
    @pytest.mark.asyncio
    async def test_account_not_found(self, service, riot):
        riot.account = None

        with pytest.raises(UpstreamLookupError) as exc_info:
            await service.analyze("Nobody", "NA1", "na1")

        assert exc_info.value.status_code == 500
        assert "Riot ID not found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_rate_limited_account_lookup(self, service, riot):
        riot.account = RateLimitError(retry_after=3)

        with pytest.raises(UpstreamLookupError):
            await service.analyze("Tester", "NA1", "na1")

    @pytest.mark.asyncio
    async def test_summoner_not_found(self, service, riot):
        riot.summoner = None

        with pytest.raises(UpstreamLookupError, match="Summoner data not found"):
            await service.analyze("Tester", "NA1", "na1")


class TestReport:
    @pytest.mark.asyncio
    async def test_no_matches_gives_zeroed_report(self, service):
        report = await service.analyze("Tester", "NA1", "na1")

        assert report.riot_id == "Tester#NA1"
        assert report.account_level == 212
        assert report.icon_is_default is False
        assert report.profile_icon_url == "https://cdn.test/profileicon/4568.png"
        assert report.rank.status == "unranked"
        assert report.rank_display == "UNRANKED"
        assert report.all_games.games == 0
        assert report.all_games.win_rate == 0.0
        assert report.all_games.flash_label == "None"
        assert report.duo_partners == []
        assert report.match_history == []
        assert len(report.mastery) == 3
        assert all(m.points == 0 for m in report.mastery)

    @pytest.mark.asyncio
    async def test_full_report(self, service, riot, make_match_payload, make_participant):
        riot.league = [
            LeagueEntry(queue_type="RANKED_FLEX_SR", tier="SILVER", rank="I", wins=5, losses=5),
            LeagueEntry(queue_type="RANKED_SOLO_5x5", tier="BRONZE", rank="II", wins=40, losses=10),
        ]
        riot.masteries = [MasteryEntry(champion_id=103, champion_level=7, champion_points=90000)]
        riot.match_ids = ["NA1_1", "NA1_2", "NA1_3"]
        duo = dict(puuid="duo", game_name="Duo", tag_line="NA1")
        riot.details = {
            "NA1_1": make_match_payload(
                "NA1_1",
                participants=[
                    make_participant(kills=10, deaths=0, assists=5, champion_name="Ahri", damage=42000, minions=150),
                    make_participant(**duo),
                ],
                duration=1800,
                queue_id=420,
                team_kills={100: 20},
            ),
            "NA1_2": make_match_payload(
                "NA1_2",
                participants=[make_participant(win=False, kills=2, deaths=5, champion_name="Zed"), make_participant(**duo)],
                duration=1200,
                queue_id=450,
            ),
            "NA1_3": make_match_payload("NA1_3", duration=200),
        }

        report = await service.analyze("Tester", "NA1", "na1")

        assert report.rank.status == "ranked"
        assert report.rank_display == "SILVER I"
        assert report.season.games == 10
        assert report.all_games.games == 2
        assert report.ranked_games.games == 1
        assert report.ranked_games.kda == 15.0
        assert [(d.riot_id, d.games) for d in report.duo_partners] == [("Duo#NA1", 2)]
        assert report.mastery[0].name == "Ahri"
        assert report.mastery[0].points == 90000

        assert [m.match_id for m in report.match_history] == ["NA1_1", "NA1_2"]
        first, second = report.match_history
        assert first.queue_label == "Ranked Solo/Duo"
        assert first.duration_minutes == 30
        assert first.kda == 15.0
        assert first.champion_icon_url == "https://cdn.test/champion/Ahri.png"
        assert second.queue_label == "ARAM"
        assert second.duration_minutes == 20

        # Ranked window: 1400 dpm at SILVER
        assert report.highlights["dpm"] == Severity.RED
        assert set(report.highlights) >= {"kp", "flash", "championPool"}

    @pytest.mark.asyncio
    async def test_rank_fetch_failure_is_marked(self, service, riot):
        riot.league = None

        report = await service.analyze("Tester", "NA1", "na1")

        assert report.rank.status == "fetch_failed"
        assert report.rank_display == "UNKNOWN"
        assert report.highlights["rankedGamesPlayed"] == Severity.NEUTRAL

    @pytest.mark.asyncio
    async def test_rank_fetch_exception_is_marked(self, service, riot):
        riot.league = RiotAPIError("boom", status_code=500)

        report = await service.analyze("Tester", "NA1", "na1")

        assert report.rank.status == "fetch_failed"
        assert "boom" in report.rank.reason

    @pytest.mark.asyncio
    async def test_mastery_failure_degrades(self, service, riot):
        riot.masteries = None

        report = await service.analyze("Tester", "NA1", "na1")

        assert len(report.mastery) == 3
        assert all(m.level == 0 for m in report.mastery)

    @pytest.mark.asyncio
    async def test_empty_catalog_gives_empty_mastery(self, riot, settings):
        service = PlayerAnalysisService(riot_api=riot, ddragon=_FakeDDragon({}), settings=settings)
        riot.masteries = [MasteryEntry(champion_id=103, champion_level=7, champion_points=90000)]

        report = await service.analyze("Tester", "NA1", "na1")

        assert report.mastery == []

    @pytest.mark.asyncio
    async def test_mastery_sort_order(self, service, riot):
        report = await service.analyze("Tester", "NA1", "na1", mastery_sort=MasterySort.NAME_DESC)

        assert [m.name for m in report.mastery] == ["Zed", "Annie", "Ahri"]

    @pytest.mark.asyncio
    async def test_default_icon_flag(self, service, riot):
        riot.summoner = SummonerProfile(puuid=PLAYER_PUUID, profile_icon_id=12, summoner_level=30)

        report = await service.analyze("Tester", "NA1", "na1")

        assert report.icon_is_default is True
        assert report.highlights["profileIcon"] == Severity.RED

    @pytest.mark.asyncio
    async def test_match_count_and_queue_filter(self, service, riot, settings):
        settings.match_id_queue_type = "ranked"

        await service.analyze("Tester", "NA1", "na1", match_count=7)

        assert riot.history_calls == [{"count": 7, "queue_type": "ranked"}]

    @pytest.mark.asyncio
    async def test_duo_ranked_only(self, service, riot, settings, make_match_payload, make_participant):
        settings.duo_ranked_only = True
        duo = dict(puuid="duo", game_name="Duo", tag_line="NA1")
        riot.match_ids = ["NA1_1", "NA1_2"]
        riot.details = {
            "NA1_1": make_match_payload("NA1_1", participants=[make_participant(), make_participant(**duo)], queue_id=420),
            "NA1_2": make_match_payload("NA1_2", participants=[make_participant(), make_participant(**duo)], queue_id=450),
        }

        report = await service.analyze("Tester", "NA1", "na1")

        assert report.duo_partners == []


class TestMatchFetching:
    @pytest.mark.asyncio
    async def test_failed_and_malformed_matches_are_skipped(self, service, riot, make_match_payload):
        riot.match_ids = ["NA1_ok", "NA1_err", "NA1_missing", "NA1_bad"]
        riot.details = {
            "NA1_ok": make_match_payload("NA1_ok"),
            "NA1_err": RiotAPIError("Forbidden", status_code=403),
            "NA1_bad": {"metadata": {}, "info": "garbage"},
        }

        report = await service.analyze("Tester", "NA1", "na1")

        assert [m.match_id for m in report.match_history] == ["NA1_ok"]

    @pytest.mark.asyncio
    async def test_history_keeps_match_list_order(self, service, riot, make_match_payload):
        riot.match_ids = ["NA1_3", "NA1_2", "NA1_1"]
        riot.details = {mid: make_match_payload(mid) for mid in riot.match_ids}
        # Newest match finishes last
        riot.delays = {"NA1_3": 0.05}

        report = await service.analyze("Tester", "NA1", "na1")

        assert [m.match_id for m in report.match_history] == ["NA1_3", "NA1_2", "NA1_1"]

    @pytest.mark.asyncio
    async def test_deadline_skips_slow_matches(self, service, riot, settings, make_match_payload):
        settings.analysis_deadline_seconds = 0.2
        riot.match_ids = ["NA1_fast", "NA1_slow"]
        riot.details = {mid: make_match_payload(mid) for mid in riot.match_ids}
        riot.delays = {"NA1_slow": 10}

        report = await service.analyze("Tester", "NA1", "na1")

        assert [m.match_id for m in report.match_history] == ["NA1_fast"]
        assert report.all_games.games == 1
