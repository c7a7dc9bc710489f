"""
Configuration
=============
Environment loading and the handful of settings the demos read.

Variables are read from the process environment after `.env.local` and
`.env` have been loaded (python-dotenv never overrides values that are
already set).

  Supabase
  ────────
  SUPABASE_URL  (fallback NEXT_PUBLIC_SUPABASE_URL)
  SUPABASE_KEY  (fallback NEXT_PUBLIC_SUPABASE_ANON_KEY, SUPABASE_ACCESS_TOKEN)

  Logging
  ───────
  LOG_LEVEL     (default INFO)

LLM provider and checkpoint variables are documented in providers.py and
checkpointing.py.
"""
import logging
import os

from dotenv import load_dotenv

ENV_FILES = (".env.local", ".env")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class ConfigError(RuntimeError):
    """A required setting is missing from the environment."""


def load_env() -> None:
    for path in ENV_FILES:
        load_dotenv(path, override=False)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL. Called by driver entry points only."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def get_supabase_url() -> str:
    url = _first_env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
    if not url:
        raise ConfigError("SUPABASE_URL is not set")
    return url


def get_supabase_key() -> str:
    key = _first_env(
        "SUPABASE_KEY",
        "NEXT_PUBLIC_SUPABASE_ANON_KEY",
        "SUPABASE_ACCESS_TOKEN",
    )
    if not key:
        raise ConfigError("SUPABASE_KEY is not set")
    return key
