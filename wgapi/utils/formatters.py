"""Formatting utilities for displaying Wargaming API data."""

import json
from datetime import datetime, timezone
from typing import List, Dict, Any

from ..api.exceptions import ResponseError


def decode_response(body: str) -> Dict[str, Any]:
    """
    Decode a raw response body returned by the client.

    Args:
        body: Raw JSON text from the Wargaming API

    Returns:
        The decoded payload

    Raises:
        ResponseError: If the body is not JSON or carries an error status
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ResponseError(f"Invalid JSON in response: {e}") from e

    if not isinstance(payload, dict):
        raise ResponseError("Unexpected response payload", payload=None)

    if payload.get('status') == 'error':
        error = payload.get('error') or {}
        raise ResponseError(
            error.get('message', 'UNKNOWN_ERROR'),
            code=error.get('code'),
            field=error.get('field'),
            value=error.get('value'),
            payload=payload,
        )

    return payload


class OutputFormatter:
    """Handles formatting of various data types for console output."""

    @staticmethod
    def format_account_list(accounts: List[Dict[str, Any]]) -> str:
        """
        Format account search results for display.

        Args:
            accounts: The ``data`` list from an account list response

        Returns:
            Formatted search results string
        """
        if not accounts:
            return "\nACCOUNTS\n" + "=" * 50 + "\nNo accounts found!"

        lines = [
            "\nACCOUNTS",
            "=" * 50,
            f"Found {len(accounts)} accounts:",
        ]
        for i, account in enumerate(accounts, 1):
            lines.append(f"{i}. {account.get('nickname', 'N/A')} (ID: {account.get('account_id', 'N/A')})")

        return "\n".join(lines)

    @staticmethod
    def format_account_info(account: Dict[str, Any]) -> str:
        """
        Format account information for display.

        Args:
            account: A single player entry from an account info response

        Returns:
            Formatted account information string
        """
        lines = [
            "=" * 50,
            "ACCOUNT INFORMATION",
            "=" * 50,
            f"Nickname: {account.get('nickname', 'N/A')}",
            f"Account ID: {account.get('account_id', 'N/A')}",
            f"Global Rating: {account.get('global_rating', 'N/A')}",
            f"Clan ID: {account.get('clan_id') or 'None'}",
        ]

        created_at = account.get('created_at')
        if isinstance(created_at, int):
            created = datetime.fromtimestamp(created_at, tz=timezone.utc).strftime('%Y-%m-%d')
            lines.append(f"Created: {created}")

        battles = account.get('statistics', {}).get('all', {})
        if battles.get('battles'):
            winrate = round(battles.get('wins', 0) / battles['battles'] * 100, 2)
            lines.extend([
                f"Battles: {battles['battles']:,}",
                f"Win Rate: {winrate}%",
            ])

        return "\n".join(lines)

    @staticmethod
    def format_clan_list(clans: List[Dict[str, Any]]) -> str:
        """Format clan search results for display."""
        if not clans:
            return "\nCLANS\n" + "=" * 50 + "\nNo clans found!"

        lines = [
            "\nCLANS",
            "=" * 50,
            f"Found {len(clans)} clans:",
        ]
        for i, clan in enumerate(clans, 1):
            lines.append(
                f"{i}. [{clan.get('tag', '?')}] {clan.get('name', 'N/A')} "
                f"- {clan.get('members_count', 0)} members (ID: {clan.get('clan_id', 'N/A')})"
            )

        return "\n".join(lines)

    @staticmethod
    def format_error_message(error: str, suggestion: str = None) -> str:
        """
        Format error messages for display.

        Args:
            error: Error message
            suggestion: Optional suggestion for resolving the error

        Returns:
            Formatted error message
        """
        lines = [
            "❌ ERROR",
            "=" * 30,
            error
        ]

        if suggestion:
            lines.extend([
                "",
                "💡 Suggestion:",
                suggestion
            ])

        return "\n".join(lines)
