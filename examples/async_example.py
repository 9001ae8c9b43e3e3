#!/usr/bin/env python3
"""
Async Namecheap Client Example

Demonstrates concurrent API calls with the asyncio client.
"""

import asyncio
import logging
import os

from namecheap_client import AsyncNamecheapClient, NamecheapError

logging.basicConfig(level=logging.INFO)


def make_client() -> AsyncNamecheapClient:
    return AsyncNamecheapClient(
        api_user="your_api_user",
        api_key=os.environ.get("NAMECHEAP_API_KEY", "your_api_key"),
        client_ip="203.0.113.10",
        sandbox=True,
    )


async def concurrent_checks():
    """Check several batches of names concurrently."""
    print("\n--- Concurrent Domain Checks ---")

    client = make_client()
    batches = [
        ["example1.com", "example2.com", "example3.com"],
        ["example1.net", "example2.net", "example3.net"],
        ["example1.org", "example2.org", "example3.org"],
    ]

    results = await asyncio.gather(*(client.domain_check(batch) for batch in batches))
    for result in results:
        for item in result.results:
            status = "available" if item.available else "taken"
            print(f"  {item.domain}: {status}")


async def domain_overview(name: str):
    """Fetch info, contacts and lock status in parallel."""
    print(f"\n--- Overview of {name} ---")

    client = make_client()
    try:
        info, contacts, locked = await asyncio.gather(
            client.domain_info(name),
            client.domain_get_contacts(name),
            client.domain_get_registrar_lock(name),
        )
    except NamecheapError as e:
        print(f"  Failed: {e}")
        return

    print(f"  Expires: {info.expired_date}")
    print(f"  Nameservers: {', '.join(info.nameservers)}")
    print(f"  Registrant: {contacts.registrant.first_name} {contacts.registrant.last_name}")
    print(f"  Locked: {locked}")


async def main():
    await concurrent_checks()
    await domain_overview("example.com")


if __name__ == "__main__":
    asyncio.run(main())
