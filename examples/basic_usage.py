#!/usr/bin/env python3
"""
Basic Namecheap Client Usage Example

Demonstrates the fundamental operations with the Namecheap client
against the sandbox endpoint.
"""

import logging
import os
import sys

from namecheap_client import (
    ContactInfo,
    DomainCreateRequest,
    NamecheapAPIError,
    NamecheapClient,
    NamecheapConnectionError,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def main():
    """Main example function."""

    # Credentials - replace with your actual values
    client = NamecheapClient(
        api_user="your_api_user",
        api_key=os.environ.get("NAMECHEAP_API_KEY", "your_api_key"),
        client_ip="203.0.113.10",
        sandbox=True,
    )

    print("=" * 60)
    print("Namecheap Client Basic Usage Example")
    print("=" * 60)

    try:
        # Check domain availability
        print("\n1. Checking domain availability...")
        result = client.domain_check(["example-test-123.com", "google.com", "not a domain"])
        for item in result.results:
            status = "available" if item.available else "taken"
            premium = " (premium)" if item.is_premium_name else ""
            print(f"   {item.domain}: {status}{premium}")
        for name in result.invalid_names:
            print(f"   {name}: skipped (invalid)")

        # Register if available
        if result.is_available("example-test-123.com"):
            print("\n2. Registering example-test-123.com...")
            registrant = ContactInfo(
                first_name="John",
                last_name="Smith",
                address1="8939 S. Cross Blvd",
                city="Los Angeles",
                state_province="CA",
                postal_code="90045",
                country="US",
                phone="+1.6613102107",
                email_address="john@example.com",
            )
            created = client.domain_create(
                DomainCreateRequest(domain_name="example-test-123.com", registrant=registrant)
            )
            print(f"   Registered: {created.registered}, charged {created.charged_amount:.2f}")

        # List domains
        print("\n3. Listing domains...")
        domains = client.domain_list(page_size=20)
        for domain in domains.domains:
            print(f"   {domain.name} expires {domain.expires:%Y-%m-%d}")
        print(f"   {domains.total_items} domain(s) in account")

        # Registrar lock
        if domains.domains:
            name = domains.domains[0].name
            print(f"\n4. Registrar lock for {name}...")
            print(f"   Locked: {client.domain_get_registrar_lock(name)}")

        # Pricing
        print("\n5. .com registration pricing...")
        pricing = client.user_pricing(action_name="REGISTER", product_name="com")
        for action in pricing.actions:
            for product in action.products:
                for tier in product.prices:
                    print(f"   {tier.duration} {tier.duration_type}: {tier.your_price:.2f} {tier.currency}")

    except NamecheapConnectionError as e:
        print(f"\nConnection error: {e}")
        sys.exit(1)
    except NamecheapAPIError as e:
        print(f"\nAPI error: {e}")
        for number, text in e.errors:
            print(f"   {number}: {text}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
