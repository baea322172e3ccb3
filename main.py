from __future__ import annotations

import argparse
import logging
import random
from typing import Callable, Dict, List

from sorelgame import config
from sorelgame.engine import apply_action, chance_outcomes, enumerate_legal_actions, new_game
from sorelgame.models import GameState
from sorelgame.pretty import pretty_event, state_to_string


def random_policy(state: GameState, legal: List[int], rng: random.Random) -> int:
    return rng.choice(legal)


def greedy_policy(state: GameState, legal: List[int], rng: random.Random) -> int:
    """Pick the action with the best immediate reward, ending the game last."""
    scored = []
    for action in legal:
        if action == config.END_ACTION and len(legal) > 1:
            continue
        child, _, _ = apply_action(state, action)
        scored.append((child.rewards()[0], action))
    best = max(reward for reward, _ in scored)
    return rng.choice([action for reward, action in scored if reward == best])


POLICIES: Dict[str, Callable[[GameState, List[int], random.Random], int]] = {
    "random": random_policy,
    "greedy": greedy_policy,
}


def play(state: GameState, policy: Callable[[GameState, List[int], random.Random], int], rng: random.Random, show_board: bool) -> GameState:
    colored = state.params.is_colored
    while not state.is_terminal():
        if state.is_chance_node():
            action = rng.choice([outcome for outcome, _ in chance_outcomes(state)])
        else:
            if show_board:
                print(state_to_string(state))
            action = policy(state, enumerate_legal_actions(state), rng)
        state, _, event = apply_action(state, action)
        if event.get("type") != "reveal" or show_board:
            print(pretty_event(event, colored))
    return state


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a game of Agnes Sorel with a scripted policy")
    parser.add_argument("--seed", type=int, default=11)
    parser.add_argument("--policy", choices=sorted(POLICIES), default="greedy")
    parser.add_argument("--depth-limit", type=int, default=config.DEFAULT_DEPTH_LIMIT)
    parser.add_argument("--color", action="store_true", help="Enable ANSI colours in the output")
    parser.add_argument("--board", action="store_true", help="Print the board before every decision")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show engine debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed)
    state = new_game(depth_limit=args.depth_limit, is_colored=args.color)
    final = play(state, POLICIES[args.policy], rng, args.board)
    print(state_to_string(final))
    print(f"Return: {final.returns()[0]:.1f} after {final.current_depth} steps")


if __name__ == "__main__":
    main()
