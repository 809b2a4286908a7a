"""Simple bot arena: play complete Guiñote matches between two bot teams."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Optional, Sequence

from guinote.rules_schema import DEFAULT_RULES, RuleSet
from guinote.service import ActionRejected, MatchService
from guinote.state import Phase, partner_seat

from .base import BotStrategy
from .lowest_card_bot import LowestCardBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

PLAYER_IDS = ("p0", "p1", "p2", "p3")

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "random": RandomBot,
    "lowest": LowestCardBot,
    "base": BotStrategy,
}


def _declare(service: MatchService, bots: Sequence[BotStrategy], seat: int) -> bool:
    """Let ``seat`` make declarations until it has none left. Returns True if the hand ended."""
    player_id = service.state.players[seat].id
    hands_played = len(service.hand_history)
    while True:
        action = bots[seat].declaration(service.state, player_id, service.rules)
        if action is None:
            return False
        try:
            service.submit(action)
        except ActionRejected as exc:
            logger.warning("Bot %s proposed a refused declaration: %s", bots[seat].name, exc.rejection.reason)
            return False
        if len(service.hand_history) != hands_played:
            return True


def _take_turn(service: MatchService, bots: Sequence[BotStrategy]) -> None:
    state = service.state
    seat = state.current_player
    if not state.current_trick:
        for declarer in (seat, partner_seat(seat)):
            if _declare(service, bots, declarer):
                return
    state = service.state
    player_id = state.current_player_id
    card = bots[state.current_player].play_card(state, player_id, service.rules)
    service.play_card(player_id, card.card_id)


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    seed: Optional[int] = None,
    rules: RuleSet = DEFAULT_RULES,
    max_hands: int = 200,
) -> dict:
    """Play a full match; ``bot_a`` holds seats 0 and 2, ``bot_b`` seats 1 and 3."""
    service = MatchService(PLAYER_IDS, seed=seed, rules=rules, bots=PLAYER_IDS)
    bots = [bot_a, bot_b, bot_a, bot_b]
    for bot in set(bots):
        bot.on_hand_start(service.state)

    hands_seen = 0
    while not service.is_complete():
        if len(service.hand_history) >= max_hands:
            logger.warning("Stopping match after %d hands without a winner.", max_hands)
            break
        _take_turn(service, bots)
        if len(service.hand_history) != hands_seen:
            hands_seen = len(service.hand_history)
            if service.state.phase is Phase.PLAYING:
                for bot in set(bots):
                    bot.on_hand_start(service.state)

    return {
        "winner": service.get_view(PLAYER_IDS[0]).match_winner,
        "cotos": service.match_score.cotos,
        "partidas": service.match_score.partidas,
        "history": [
            {
                "final_scores": result.final_scores,
                "winner": result.winner,
                "malas_applied": result.malas_applied,
                "vueltas": result.vueltas,
                "declared": result.declared,
            }
            for result in service.hand_history
        ],
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a Guiñote bot match.")
    parser.add_argument("--bot-a", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--bot-b", default="lowest", choices=BOT_REGISTRY.keys())
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--max-hands", type=int, default=200, help="Safety cap on hands per match.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    bot_a = BOT_REGISTRY[args.bot_a]()
    bot_b = BOT_REGISTRY[args.bot_b]()
    results = run_match(bot_a, bot_b, seed=args.seed, max_hands=args.max_hands)

    print(f"Winner: team {results['winner']}  cotos={results['cotos']}")
    vueltas = sum(1 for entry in results["history"] if entry["vueltas"])
    print(f"Hands played: {len(results['history'])} ({vueltas} in vueltas)")


if __name__ == "__main__":
    main()
