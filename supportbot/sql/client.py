"""
Supabase Client
===============
Client construction and the table-listing helper used by the `tables` demo.
"""
import logging

from supabase import Client, create_client

from ..config import get_supabase_key, get_supabase_url

logger = logging.getLogger(__name__)


def create_supabase_client() -> Client:
    url = get_supabase_url()
    logger.info("[supabase] Connecting to %s", url)
    return create_client(url, get_supabase_key())


def list_public_tables(client: Client) -> list[str]:
    """
    Return the table names in the public schema.

    Tries the `get_tables` RPC first. If that fails (the function is not
    installed), queries pg_tables directly. An error from the fallback
    propagates.
    """
    try:
        response = client.rpc("get_tables").execute()
        return [row["table_name"] for row in response.data or []]
    except Exception as exc:
        logger.warning("[supabase] get_tables RPC failed, falling back to pg_tables: %s", exc)

    response = (
        client.table("pg_tables")
        .select("tablename")
        .eq("schemaname", "public")
        .execute()
    )
    return [row["tablename"] for row in response.data or []]
