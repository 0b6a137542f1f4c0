"""Environment-driven settings for the ordering application."""

import os

DEFAULT_STORE_NAME = "Orderboard Burgers"


def store_name() -> str:
    return os.getenv("ORDERBOARD_STORE_NAME", DEFAULT_STORE_NAME)


def store_phone() -> str:
    """Destination number for order hand-offs (international format, no '+')."""
    return os.getenv("ORDERBOARD_STORE_PHONE", "5585999999999")


def currency_symbol() -> str:
    return os.getenv("ORDERBOARD_CURRENCY_SYMBOL", "$")


def handoff_adapter() -> str:
    return os.getenv("ORDERBOARD_HANDOFF", "fake").lower()


def menu_file() -> str | None:
    return os.getenv("ORDERBOARD_MENU_FILE") or None


def staff_tokens() -> dict[str, str]:
    """Parse ``ORDERBOARD_STAFF_TOKENS`` ("token:name,token:name") into a mapping."""
    raw = os.getenv("ORDERBOARD_STAFF_TOKENS", "")
    tokens = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        token, _, name = entry.partition(":")
        tokens[token.strip()] = name.strip() or "staff"
    return tokens


def environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()
