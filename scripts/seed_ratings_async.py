"""
Async seeding script that posts random ratings for one tour to the running API.

Usage:
    python -m scripts.seed_ratings_async --tour-id 1 --count 25 --base-url http://localhost:8000

The API must be running and the tour must already exist.
"""

import argparse
import asyncio
import os
import random

import httpx

DEFAULT_BASE_URL = os.getenv("SEED_BASE_URL", "http://localhost:8000")

COMMENTS = [
    "Great guide, would book again",
    "Too much walking for the kids",
    "Worth every penny",
    "Ok",
    None,
]


async def create_rating(
    client: httpx.AsyncClient,
    tour_id: int,
    customer_id: int,
    semaphore: asyncio.Semaphore,
) -> int:
    async with semaphore:
        payload = {
            "score": random.randint(0, 5),
            "comment": random.choice(COMMENTS),
            "customerId": customer_id,
        }
        resp = await client.post(f"/tours/{tour_id}/ratings", json=payload)
        if resp.status_code == 409:
            return 0
        resp.raise_for_status()
        return 1


async def seed(base_url: str, tour_id: int, count: int, first_customer: int, concurrency: int):
    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        semaphore = asyncio.Semaphore(max(concurrency, 1))
        tasks = [
            create_rating(client, tour_id, customer_id, semaphore)
            for customer_id in range(first_customer, first_customer + count)
        ]
        created = sum(await asyncio.gather(*tasks))

        resp = await client.get(f"/tours/{tour_id}/ratings/average")
        resp.raise_for_status()

    print(
        f"Seeded {created} ratings for tour {tour_id} at {base_url}; "
        f"average is now {resp.json()['average']}"
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Async rating seeder for the Explore Tours API")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    parser.add_argument("--tour-id", type=int, required=True, help="Tour to rate")
    parser.add_argument("--count", type=int, default=10, help="Number of ratings to create")
    parser.add_argument(
        "--first-customer",
        type=int,
        default=1,
        help="Customer id of the first rating; the rest follow sequentially",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=5,
        help="Max concurrent requests",
    )
    return parser.parse_args()


def main():
    args = parse_args()
    asyncio.run(
        seed(
            base_url=args.base_url,
            tour_id=args.tour_id,
            count=args.count,
            first_customer=args.first_customer,
            concurrency=args.concurrency,
        )
    )


if __name__ == "__main__":
    main()
