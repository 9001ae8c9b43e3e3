"""
Namecheap CLI Main Entry Point

Command-line interface for Namecheap domain operations.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from namecheap_client import NamecheapClient, __version__
from namecheap_client.exceptions import NamecheapAPIError, NamecheapError
from namecheap_client.models import (
    DomainContactsRequest,
    DomainContactsResult,
    DomainCreateRequest,
    DomainPricingResult,
)
from namecheap_cli.config import (
    CLIConfig,
    create_sample_config,
    create_sample_contacts,
    load_contacts_file,
)
from namecheap_cli.output import OutputFormatter, print_error, print_info, print_success


API_KEY_ENV = "NAMECHEAP_API_KEY"


# Global state for the CLI session
class CLIState:
    config: Optional[CLIConfig] = None
    formatter: Optional[OutputFormatter] = None


state = CLIState()


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--profile", "-p", default="default", help="Config profile to use")
@click.option("--api-user", help="API user name")
@click.option("--api-key", help=f"API key (or use {API_KEY_ENV} env)")
@click.option("--username", help="Account the commands act on (default: API user)")
@click.option("--client-ip", help="Whitelisted client IP address")
@click.option("--sandbox", is_flag=True, help="Use the sandbox endpoint")
@click.option("--timeout", type=int, help="Request timeout in seconds")
@click.option("--format", "-f", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config, profile, api_user, api_key, username, client_ip, sandbox, timeout, format, quiet, debug):
    """
    Namecheap CLI - Domain Registrar Operations

    Check, register, renew and manage domains through the Namecheap API.

    \b
    Configuration:
      Use a config file at ~/.namecheap/config.yaml or specify options on command line.
      Run 'namecheap config init' to create a sample config file.
      Run 'namecheap config init-contacts' to create a sample contacts file.

    \b
    Examples:
      namecheap --api-user me --client-ip 203.0.113.10 domain check example.com
      namecheap -c config.yaml domain info example.com
      namecheap --profile sandbox domain create example.com --contacts-file contacts.yaml
    """
    # Setup logging
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    # Setup formatter
    state.formatter = OutputFormatter(format=format, quiet=quiet)

    # Load config
    try:
        if config:
            loaded_config = CLIConfig.from_file(Path(config), profile)
        else:
            loaded_config = CLIConfig.find_and_load(profile)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)

    state.config = loaded_config or CLIConfig(profile=profile)
    creds = state.config.credentials
    endpoint = state.config.endpoint

    # CLI options override config file
    ctx.ensure_object(dict)
    ctx.obj["api_user"] = api_user or creds.api_user
    ctx.obj["api_key"] = api_key or creds.api_key or os.environ.get(API_KEY_ENV)
    ctx.obj["username"] = username or creds.username
    ctx.obj["client_ip"] = client_ip or creds.client_ip
    ctx.obj["sandbox"] = sandbox or endpoint.sandbox
    ctx.obj["timeout"] = timeout if timeout is not None else endpoint.timeout
    ctx.obj["verify"] = endpoint.verify


def get_client(ctx) -> NamecheapClient:
    """
    Create a Namecheap client from the effective settings.

    Args:
        ctx: Click context

    Returns:
        Configured NamecheapClient
    """
    for key, option in (("api_user", "--api-user"), ("api_key", "--api-key"), ("client_ip", "--client-ip")):
        if not ctx.obj.get(key):
            print_error(f"No {key.replace('_', ' ')} specified. Use {option} or config file.")
            sys.exit(1)

    return NamecheapClient(
        api_user=ctx.obj["api_user"],
        api_key=ctx.obj["api_key"],
        client_ip=ctx.obj["client_ip"],
        username=ctx.obj.get("username"),
        sandbox=ctx.obj.get("sandbox", False),
        timeout=ctx.obj.get("timeout", 30),
        verify=ctx.obj.get("verify", True),
    )


def fail(e: NamecheapError) -> None:
    """Report a failed command and exit."""
    if isinstance(e, NamecheapAPIError):
        print_error(f"Command failed: {e}")
    else:
        print_error(str(e))
    sys.exit(1)


def _load_contacts(path: str) -> dict:
    try:
        return load_contacts_file(path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f"Invalid contacts file: {e}")
        sys.exit(1)


# =============================================================================
# Config Commands
# =============================================================================

@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option("--path", "-p", type=click.Path(), default="~/.namecheap/config.yaml", help="Config file path")
def config_init(path):
    """Create sample configuration file."""
    path = Path(path).expanduser()

    # Create parent directory
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    path.write_text(create_sample_config())

    print_success(f"Created config file: {path}")
    print_info("Edit the file to configure your API credentials.")


@config.command("init-contacts")
@click.option("--path", "-p", type=click.Path(), default="contacts.yaml", help="Contacts file path")
def config_init_contacts(path):
    """Create sample contacts file for domain create and set-contacts."""
    path = Path(path).expanduser()

    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(create_sample_contacts())

    print_success(f"Created contacts file: {path}")
    print_info(f"Use it with: namecheap domain create NAME --contacts-file {path}")


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    api_key = ctx.obj.get("api_key")
    info = {
        "Profile": state.config.profile if state.config else "default",
        "API User": ctx.obj.get("api_user") or "(not set)",
        "API Key": ("*" * 8 + api_key[-4:]) if api_key else "(not set)",
        "Username": ctx.obj.get("username") or "(API user)",
        "Client IP": ctx.obj.get("client_ip") or "(not set)",
        "Sandbox": ctx.obj.get("sandbox"),
        "Timeout": ctx.obj.get("timeout"),
        "Verify TLS": ctx.obj.get("verify"),
    }
    state.formatter.output(info)


# =============================================================================
# Domain Commands
# =============================================================================

@cli.group()
def domain():
    """Domain management commands."""
    pass


@domain.command("check")
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def domain_check(ctx, names):
    """
    Check domain availability.

    NAMES: One or more domain names to check (at most 50).
    """
    client = get_client(ctx)
    try:
        result = client.domain_check(list(names))
    except NamecheapError as e:
        fail(e)

    for name in result.invalid_names:
        state.formatter.warning(f"Skipped invalid domain name: {name}")
    state.formatter.output(result.results)


@domain.command("info")
@click.argument("name")
@click.pass_context
def domain_info(ctx, name):
    """
    Get domain information.

    NAME: Domain name to query.
    """
    client = get_client(ctx)
    try:
        result = client.domain_info(name)
    except NamecheapError as e:
        fail(e)

    state.formatter.output(result)


@domain.command("list")
@click.option("--list-type", type=click.Choice(["ALL", "EXPIRING", "EXPIRED"], case_sensitive=False), help="Domains to list")
@click.option("--search", "search_term", help="Keyword to filter domains")
@click.option("--page", type=int, help="Page to return")
@click.option("--page-size", type=int, help="Domains per page (10-100)")
@click.option("--sort-by", help="Sort column, e.g. NAME, EXPIREDATE_DESC")
@click.pass_context
def domain_list(ctx, list_type, search_term, page, page_size, sort_by):
    """List domains in the account."""
    client = get_client(ctx)
    try:
        result = client.domain_list(
            list_type=list_type.upper() if list_type else None,
            search_term=search_term,
            page=page,
            page_size=page_size,
            sort_by=sort_by,
        )
    except NamecheapError as e:
        fail(e)

    state.formatter.output(result.domains)
    state.formatter.info(
        f"Page {result.current_page}, {len(result.domains)} of {result.total_items} domain(s)"
    )


@domain.command("create")
@click.argument("name")
@click.option("--contacts-file", required=True, type=click.Path(exists=True), help="YAML file with contacts")
@click.option("--years", "-y", type=int, default=1, help="Registration period in years")
@click.option("--ns", "-n", multiple=True, help="Nameserver (can specify multiple)")
@click.option("--whoisguard/--no-whoisguard", default=True, help="Enable free WhoisGuard")
@click.option("--promotion-code", help="Promotional coupon code")
@click.pass_context
def domain_create(ctx, name, contacts_file, years, ns, whoisguard, promotion_code):
    """
    Register a new domain.

    NAME: Domain name to register.

    \b
    Examples:
      namecheap domain create example.com --contacts-file contacts.yaml
      namecheap domain create example.com --contacts-file contacts.yaml \\
          --years 2 --ns dns1.example.net --ns dns2.example.net
    """
    contacts = _load_contacts(contacts_file)
    request = DomainCreateRequest(
        domain_name=name,
        years=years,
        nameservers=list(ns),
        promotion_code=promotion_code,
        add_free_whoisguard=whoisguard,
        wg_enabled=whoisguard,
        **contacts,
    )

    client = get_client(ctx)
    try:
        result = client.domain_create(request)
    except NamecheapError as e:
        fail(e)

    state.formatter.output(result)
    if result.registered:
        state.formatter.success(f"Domain registered: {name}")


@domain.command("renew")
@click.argument("name")
@click.option("--years", "-y", type=int, default=1, help="Renewal period in years")
@click.option("--promotion-code", help="Promotional coupon code")
@click.pass_context
def domain_renew(ctx, name, years, promotion_code):
    """
    Renew a domain.

    NAME: Domain name to renew.
    """
    client = get_client(ctx)
    try:
        result = client.domain_renew(name, years=years, promotion_code=promotion_code)
    except NamecheapError as e:
        fail(e)

    state.formatter.output(result)
    if result.renewed:
        state.formatter.success(f"Domain renewed: {name}")


@domain.command("reactivate")
@click.argument("name")
@click.pass_context
def domain_reactivate(ctx, name):
    """
    Reactivate an expired domain.

    NAME: Domain name to reactivate.
    """
    client = get_client(ctx)
    try:
        result = client.domain_reactivate(name)
    except NamecheapError as e:
        fail(e)

    state.formatter.output(result)
    if result.is_success:
        state.formatter.success(f"Domain reactivated: {name}")


def _contact_rows(result: DomainContactsResult) -> list:
    rows = []
    for role in ("registrant", "tech", "admin", "aux_billing"):
        contact = getattr(result, role)
        if contact is None:
            continue
        rows.append({
            "role": role,
            "name": " ".join(filter(None, [contact.first_name, contact.last_name])),
            "organization": contact.organization_name,
            "email": contact.email_address,
            "phone": contact.phone,
            "country": contact.country,
        })
    return rows


@domain.command("contacts")
@click.argument("name")
@click.pass_context
def domain_contacts(ctx, name):
    """
    Get domain contacts.

    NAME: Domain name to query.
    """
    client = get_client(ctx)
    try:
        result = client.domain_get_contacts(name)
    except NamecheapError as e:
        fail(e)

    if state.formatter.format == "json":
        state.formatter.output(result)
    else:
        state.formatter.output(_contact_rows(result))


@domain.command("set-contacts")
@click.argument("name")
@click.option("--contacts-file", required=True, type=click.Path(exists=True), help="YAML file with contacts")
@click.pass_context
def domain_set_contacts(ctx, name, contacts_file):
    """
    Replace the contacts of a domain.

    NAME: Domain name to update.
    """
    contacts = _load_contacts(contacts_file)
    request = DomainContactsRequest(domain_name=name, **contacts)

    client = get_client(ctx)
    try:
        success = client.domain_set_contacts(request)
    except NamecheapError as e:
        fail(e)

    if not success:
        print_error(f"Contacts not updated: {name}")
        sys.exit(1)
    state.formatter.success(f"Contacts updated: {name}")


@domain.command("lock")
@click.argument("name")
@click.pass_context
def domain_lock(ctx, name):
    """
    Lock a domain against transfer.

    NAME: Domain name to lock.
    """
    client = get_client(ctx)
    try:
        success = client.domain_set_registrar_lock(name)
    except NamecheapError as e:
        fail(e)

    if not success:
        print_error(f"Lock not applied: {name}")
        sys.exit(1)
    state.formatter.success(f"Domain locked: {name}")


@domain.command("unlock")
@click.argument("name")
@click.pass_context
def domain_unlock(ctx, name):
    """
    Unlock a domain for transfer.

    NAME: Domain name to unlock.
    """
    client = get_client(ctx)
    try:
        success = client.domain_set_registrar_unlock(name)
    except NamecheapError as e:
        fail(e)

    if not success:
        print_error(f"Unlock not applied: {name}")
        sys.exit(1)
    state.formatter.success(f"Domain unlocked: {name}")


@domain.command("lock-status")
@click.argument("name")
@click.pass_context
def domain_lock_status(ctx, name):
    """
    Show registrar lock status.

    NAME: Domain name to query.
    """
    client = get_client(ctx)
    try:
        locked = client.domain_get_registrar_lock(name)
    except NamecheapError as e:
        fail(e)

    state.formatter.output({"Domain": name, "Locked": locked})


@domain.command("tlds")
@click.pass_context
def domain_tlds(ctx):
    """List TLDs supported by Namecheap."""
    client = get_client(ctx)
    try:
        result = client.domain_tld_list()
    except NamecheapError as e:
        fail(e)

    if state.formatter.format == "json":
        state.formatter.output(result.tlds)
        return

    state.formatter.output([
        {
            "name": tld.name,
            "type": tld.type,
            "register_years": f"{tld.min_register_years}-{tld.max_register_years}",
            "api_register": tld.is_api_registerable,
            "api_renew": tld.is_api_renewable,
            "api_transfer": tld.is_api_transferable,
        }
        for tld in result.tlds
    ])


# =============================================================================
# Pricing Commands
# =============================================================================

def _pricing_rows(result: DomainPricingResult) -> list:
    return [
        {
            "action": action.action_name,
            "product": product.product_name,
            "duration": f"{tier.duration} {tier.duration_type.lower()}",
            "price": tier.price,
            "regular_price": tier.regular_price,
            "your_price": tier.your_price,
            "currency": tier.currency,
        }
        for action in result.actions
        for product in action.products
        for tier in product.prices
    ]


@cli.command()
@click.option("--product-type", default="DOMAIN", help="Product type (DOMAIN, SSLCERTIFICATE, WHOISGUARD)")
@click.option("--category", "product_category", help="Product category, e.g. DOMAINS")
@click.option("--action", "action_name", help="Action, e.g. REGISTER, RENEW, TRANSFER")
@click.option("--product", "product_name", help="Product name, e.g. com")
@click.pass_context
def pricing(ctx, product_type, product_category, action_name, product_name):
    """Show the pricing catalog."""
    client = get_client(ctx)
    try:
        result = client.user_pricing(
            product_type=product_type,
            product_category=product_category,
            action_name=action_name,
            product_name=product_name,
        )
    except NamecheapError as e:
        fail(e)

    if state.formatter.format == "json":
        state.formatter.output(result)
    else:
        state.formatter.output(_pricing_rows(result))


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Main entry point."""
    try:
        cli()
    except NamecheapError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
