"""Supabase connection management utilities."""

from typing import Any, Dict, Optional
from supabase import create_client, Client, ClientOptions
from postgrest.exceptions import APIError
import asyncio
import httpx

from ..config.settings import Settings, settings as default_settings
from .logging import get_logger

logger = get_logger(__name__)

class SupabaseManager:
    """Manager for one Supabase client connection.

    Each store gets its own manager, created from settings or handed an
    existing client.
    """

    def __init__(self, app_settings: Optional[Settings] = None, client: Optional[Client] = None):
        """Initialize the Supabase client unless one is supplied."""
        self.settings = app_settings or default_settings
        self._client = client
        if self._client is None:
            try:
                if not self.settings.supabase_configured:
                    raise ValueError(
                        "Supabase URL and Service Key must be set in environment variables:\n"
                        "- SUPABASE_URL\n"
                        "- SUPABASE_SERVICE_KEY"
                    )

                options = ClientOptions(
                    schema="public",
                    headers={
                        "X-Client-Info": "slotted-context",
                    },
                    postgrest_client_timeout=self.settings.supabase_timeout
                )

                self._client = create_client(
                    self.settings.supabase_url,
                    self.settings.supabase_service_key,
                    options=options
                )
                logger.info("Initialized Supabase client")

            except Exception as e:
                logger.error(f"Failed to initialize Supabase client: {str(e)}")
                raise

    @property
    def client(self) -> Client:
        """Get the Supabase client instance."""
        if self._client is None:
            raise RuntimeError("Supabase client not initialized")
        return self._client

    def _execute_operation(self, operation: str, table: str, data: dict):
        """Execute a single key-addressed operation."""
        if operation == "select":
            return (
                self.client.table(table)
                .select(data.get("select", "*"))
                .eq("key", data["key"])
                .limit(1)
                .execute()
            )
        elif operation == "upsert":
            return self.client.table(table).upsert(data, on_conflict="key").execute()
        elif operation == "delete":
            return self.client.table(table).delete().eq("key", data["key"]).execute()
        else:
            raise ValueError(f"Unsupported operation: {operation}")

    def _log_operation_error(self, operation: str, table: str, error, retries: int, max_retries: int):
        """Log a database operation error."""
        logger.error(
            f"Supabase {operation} operation failed",
            extra={
                "table": table,
                "operation": operation,
                "error_type": type(error).__name__,
                "error_code": getattr(error, "code", "unknown"),
                "error_message": str(error),
                "error_details": getattr(error, "details", "unknown"),
                "attempt": retries + 1,
                "max_retries": max_retries
            }
        )

    async def execute_with_retry(self, operation: str, table: str, data: Dict[str, Any], max_retries: Optional[int] = None) -> Any:
        """
        Execute a Supabase operation with retry logic.

        Args:
            operation (str): Operation type ('select', 'upsert', 'delete')
            table (str): Target table name
            data (dict): Row data; must include the 'key' column
            max_retries (Optional[int]): Maximum number of attempts. Defaults to settings value.

        Returns:
            Any: Operation response data

        Raises:
            APIError: If the operation fails after all retries
            httpx.HTTPError: If Supabase stays unreachable after all retries
            ValueError: If operation type is invalid
        """
        if max_retries is None:
            max_retries = self.settings.max_retries
        max_retries = max(1, max_retries)

        retries = 0
        last_error = None

        logger.debug(
            f"Executing Supabase {operation} operation",
            extra={"table": table, "operation": operation, "data_keys": list(data.keys())}
        )

        while retries < max_retries:
            try:
                response = self._execute_operation(operation, table, data)
                logger.debug(
                    f"Supabase {operation} operation succeeded",
                    extra={"table": table, "operation": operation, "status": "success"}
                )
                return response.data

            except (APIError, httpx.HTTPError) as e:
                last_error = e
                self._log_operation_error(operation, table, e, retries, max_retries)

                retries += 1
                if retries < max_retries:
                    wait_time = 2 ** retries * self.settings.retry_delay
                    logger.warning(
                        f"Retrying Supabase operation in {wait_time:.2f}s",
                        extra={
                            "attempt": retries,
                            "max_retries": max_retries,
                            "wait_time": wait_time,
                            "table": table
                        }
                    )
                    await asyncio.sleep(wait_time)
                    continue
                break

        logger.error(
            "Supabase operation failed after all retries",
            extra={
                "error": str(last_error),
                "operation": operation,
                "table": table,
                "attempts": retries
            }
        )
        raise last_error
