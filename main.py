#!/usr/bin/env python3
"""Wargaming API Client - Main Entry Point.

Small command-line front end showing how the client is used:
- Player search
- Player details
- Clan search

Usage:
    python main.py search <name> [region]
    python main.py info <account_id> [region]
    python main.py clans <search> [region]
"""

import os
import sys
from dataclasses import replace

from wgapi.api.config import ClientConfig, setup_logging
from wgapi.api.endpoints import API_WOT
from wgapi.api.exceptions import WGAPIError
from wgapi.api.wg_api import WGAPIClient
from wgapi.utils.formatters import OutputFormatter, decode_response


def show_help():
    """Display help information."""
    print("""
Wargaming API Client v1.0.0

USAGE:
    python main.py <command> [arguments]

COMMANDS:
    search <name> [region]
        Search for players whose nickname starts with <name>
        Example: python main.py search timroden na

    info <account_id> [region]
        Show a player's details
        Example: python main.py info 1001234567 eu

    clans <search> [region]
        Search for clans by name or tag
        Example: python main.py clans RDDT na

    help
        Show this help message

SETUP:
    1. Create a .env file in the project root
    2. Add your application id: WG_API_KEY=your_key_here
    3. Optionally set WG_REGION, WG_LANGUAGE, WG_METHOD, WG_USE_HTTPS
""")


def make_client(region: str = None) -> WGAPIClient:
    """Build a client from the environment, optionally overriding the region."""
    config = ClientConfig.from_env()
    if region:
        config = replace(config, region=region)
    return WGAPIClient(config=config)


def cmd_search(args):
    """Handle search command."""
    if not args:
        print("❌ Error: search requires a player name")
        print("Usage: python main.py search <name> [region]")
        return False

    region = args[1] if len(args) > 1 else None
    with make_client(region) as client:
        payload = decode_response(client.account_list(API_WOT, args[0]))
    print(OutputFormatter.format_account_list(payload.get('data') or []))
    return True


def cmd_info(args):
    """Handle info command."""
    if not args:
        print("❌ Error: info requires an account id")
        print("Usage: python main.py info <account_id> [region]")
        return False

    account_id = args[0]
    region = args[1] if len(args) > 1 else None
    with make_client(region) as client:
        payload = decode_response(client.account_info(API_WOT, account_id))

    account = (payload.get('data') or {}).get(str(account_id))
    if not account:
        print(OutputFormatter.format_error_message(f"Account not found: {account_id}"))
        return False
    print(OutputFormatter.format_account_info(account))
    return True


def cmd_clans(args):
    """Handle clans command."""
    if not args:
        print("❌ Error: clans requires a search string")
        print("Usage: python main.py clans <search> [region]")
        return False

    region = args[1] if len(args) > 1 else None
    with make_client(region) as client:
        payload = decode_response(client.clan_list(args[0]))
    print(OutputFormatter.format_clan_list(payload.get('data') or []))
    return True


COMMANDS = {
    'search': cmd_search,
    'info': cmd_info,
    'clans': cmd_clans,
}


def main(argv=None):
    """Main entry point."""
    setup_logging(level=os.getenv('LOG_LEVEL', 'WARNING'))

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        show_help()
        return 0

    command = argv[0].lower()
    args = argv[1:]

    if command in ['help', '-h', '--help']:
        show_help()
        return 0

    handler = COMMANDS.get(command)
    if handler is None:
        print(f"❌ Unknown command: {command}")
        print("Use 'python main.py help' for usage information")
        return 1

    try:
        success = handler(args)
    except WGAPIError as e:
        print(OutputFormatter.format_error_message(
            str(e),
            "Check WG_API_KEY and the region, then try again"
        ))
        success = False

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
