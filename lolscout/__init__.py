"""lolscout - Riot ID profile scouting: recent-match aggregation and highlight flags."""

__version__ = "0.1.0"
