"""Seed an election data file with fake members and ballots.

Generates fake candidates and voters using faker with a fixed seed, runs a
full election through the service (register, start, vote, end) and prints
the results with the fake names, so the bot can be tried out without a
real community.

Usage:
    python scripts/seed_demo.py demo.json
    python scripts/seed_demo.py demo.json --candidates 5 --voters 40 --keep-open
"""

import argparse
import random
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.ballot import MAX_CHOICES  # noqa: E402
from core.directory import StaticDirectory  # noqa: E402
from core.election import ElectionService  # noqa: E402
from core.store import JsonFileStore  # noqa: E402

SEED = 20241018


def fake_member_id(fake: Faker) -> str:
    """A Discord-style snowflake: 18 digits, no leading zero."""
    return fake.numerify("1#################")


def seed(path: Path, num_candidates: int, num_voters: int, keep_open: bool = False,
         seed_value: int = SEED) -> tuple[ElectionService, StaticDirectory]:
    fake = Faker()
    Faker.seed(seed_value)
    rng = random.Random(seed_value)

    names: dict[str, str] = {}
    candidates = []
    for _ in range(num_candidates):
        member_id = fake_member_id(fake)
        names[member_id] = fake.user_name()
        candidates.append(member_id)

    directory = StaticDirectory(names)
    service = ElectionService(JsonFileStore(path), directory)
    for candidate in candidates:
        service.register_candidate(candidate)
    service.start_election(is_admin=True)

    for _ in range(num_voters):
        voter = fake_member_id(fake)
        names[voter] = fake.user_name()
        length = rng.randint(1, min(num_candidates, MAX_CHOICES))
        service.cast_vote(voter, rng.sample(candidates, length))

    if not keep_open:
        service.end_election(is_admin=True)
    return service, directory


def main():
    parser = argparse.ArgumentParser(description="Seed a demo election data file")
    parser.add_argument("output", type=Path, help="Election data file to write")
    parser.add_argument("--candidates", type=int, default=4)
    parser.add_argument("--voters", type=int, default=25)
    parser.add_argument("--keep-open", action="store_true",
                        help="Leave the election active instead of ending it")
    args = parser.parse_args()

    if args.candidates < 1:
        parser.error("--candidates must be at least 1")

    service, directory = seed(args.output, args.candidates, args.voters, args.keep_open)
    print(f"Wrote {args.output}")

    if not args.keep_open:
        results = service.get_results()
        print(f"Total votes cast: {results.total_votes}")
        for standing in results.standings:
            print(f"{standing.rank}. {directory.resolve(standing.candidate)}: "
                  f"{standing.score} points")


if __name__ == "__main__":
    main()
