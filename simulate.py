"""
Simple simulation script: a random human plays the computer at every difficulty.
"""

import requests
import random
import time
import sys


def wait_for_computer(base_url, game_id, timeout=5.0):
    """Poll until the computer has answered or the game is over."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        state = requests.get(f"{base_url}/games/{game_id}").json()
        if state["status"] == "completed" or state["current_player"] == "X":
            return state
        time.sleep(0.1)
    return state


def main():
    BASE_URL = "http://localhost:8000/api/v1"
    GAMES_PER_DIFFICULTY = 5

    print("=== Tic Tac Toe Simulation ===\n")

    for difficulty in ["easy", "medium", "hard"]:
        print(f"\nPlaying {GAMES_PER_DIFFICULTY} games on {difficulty}...")

        for game_num in range(GAMES_PER_DIFFICULTY):
            response = requests.post(
                f"{BASE_URL}/games",
                json={"mode": "ai", "difficulty": difficulty, "player_x_name": "Sim"}
            )
            if response.status_code != 200:
                print(f"Failed to create game: {response.text}")
                sys.exit(1)

            state = response.json()
            game_id = state["id"]

            while state["status"] != "completed":
                available_moves = [i for i, cell in enumerate(state["board"]) if cell is None]
                index = random.choice(available_moves)

                response = requests.post(
                    f"{BASE_URL}/games/{game_id}/move",
                    json={"index": index, "mark": "X"}
                )
                if response.status_code != 200:
                    print(f"Move failed: {response.text}")
                    break

                state = wait_for_computer(BASE_URL, game_id)

            if state["winner"]:
                print(f"  Game {game_num + 1}: {state['winner']} won")
            else:
                print(f"  Game {game_num + 1}: Draw")

    # Display results
    print("\n=== Results ===\n")

    for difficulty in ["easy", "medium", "hard"]:
        response = requests.get(
            f"{BASE_URL}/stats/win-rate",
            params={"mode": "ai", "difficulty": difficulty}
        )
        if response.status_code == 200:
            print(f"  Human win rate vs {difficulty}: {response.json()['win_rate']}%")

    stats = requests.get(f"{BASE_URL}/stats").json()
    print(f"\n  Total games: {stats['total_games']}")
    print(f"  Best streak: {stats['streaks']['best']}")

    print("\n Simulation complete!")


if __name__ == "__main__":
    main()
