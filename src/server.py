"""Protean Engine runner for the availability domain.

Only needed when PROTEAN_ENV selects asynchronous event processing (the
production overlay); the engine then drives the low stock projector from the
broker instead of inside the unit of work.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from availability.domain import availability

    availability.init()
    await Engine(availability).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
