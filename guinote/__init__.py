"""Rules engine for four-player Guiñote."""

__all__ = [
    "actions",
    "cards",
    "deck",
    "declarations",
    "game",
    "match",
    "mechanics",
    "rejections",
    "rules_schema",
    "scoring",
    "service",
    "snapshot",
    "state",
    "trick",
]
