"""
Configuration management for Ticket Sales Service.
Reads settings from the environment first, then from Zero secrets when a
ZERO_TOKEN is available, then falls back to local defaults.
"""

import os
import asyncio
import concurrent.futures
from urllib.parse import quote_plus
from typing import Dict, Any, Optional
import logging
from zero_python_sdk import zero

logger = logging.getLogger(__name__)


class ZeroSecretsManager:
    """
    Zero secrets client using the official Zero Python SDK.
    Secrets are fetched once and cached for the process lifetime.
    """

    def __init__(self, zero_token: str, caller_name: str = "ticket-sales", pick: str = "ticket-sales"):
        self.zero_token = zero_token
        self.caller_name = caller_name
        self.pick = pick
        self._cache: Dict[str, Any] = {}
        self._secrets = None

    async def _fetch_secrets(self):
        """Fetch secrets from Zero if not already cached."""
        if self._secrets is None:
            try:
                loop = asyncio.get_running_loop()
                with concurrent.futures.ThreadPoolExecutor() as executor:
                    self._secrets = await loop.run_in_executor(
                        executor,
                        lambda: zero(
                            token=self.zero_token,
                            pick=[self.pick],
                            caller_name=self.caller_name
                        ).fetch()
                    )
                logger.info("Successfully fetched secrets from Zero")
            except Exception as e:
                logger.error(f"Failed to fetch secrets from Zero: {e}")
                self._secrets = {}

    def _normalize_key(self, key: str) -> str:
        """Normalize a key to lowercase and replace underscores with hyphens."""
        return key.lower().replace("_", "-")

    async def get_secret(self, key: str) -> Optional[str]:
        """
        Get a secret value by key.

        Args:
            key: The secret key to retrieve

        Returns:
            Secret value or None if not found
        """
        key = self._normalize_key(key)
        if key in self._cache:
            return self._cache[key]

        await self._fetch_secrets()
        secret_value = (self._secrets or {}).get(self.pick, {}).get(key)

        if secret_value:
            self._cache[key] = secret_value

        return secret_value

    async def close(self):
        """Drop cached secrets."""
        self._cache.clear()
        self._secrets = None


class TicketSalesConfig:
    """
    Ticket Sales Service configuration manager.

    Every getter resolves a key from the process environment, then Zero
    secrets (only when ZERO_TOKEN is set), then a built-in default.
    """

    def __init__(self):
        self.zero_token = os.getenv("ZERO_TOKEN")
        self.secrets_manager: Optional[ZeroSecretsManager] = None
        if self.zero_token:
            self.secrets_manager = ZeroSecretsManager(self.zero_token)

    async def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Resolve a single configuration value."""
        value = os.getenv(key)
        if value is not None and value != "":
            return value

        if self.secrets_manager:
            secret = await self.secrets_manager.get_secret(key)
            if secret:
                return secret

        return default

    async def _get_int(self, key: str, default: int) -> int:
        value = await self.get_value(key)
        return int(value) if value else default

    async def _get_float(self, key: str, default: float) -> float:
        value = await self.get_value(key)
        return float(value) if value else default

    async def _get_bool(self, key: str, default: bool) -> bool:
        value = await self.get_value(key)
        if value is None:
            return default
        return value.lower() == "true"

    async def get_database_url(self) -> str:
        """Get the async database connection URL."""
        url = await self.get_value("DATABASE_URL")
        if url:
            return url

        host = await self.get_value("DB_HOST", "localhost")
        port = await self.get_value("DB_PORT", "5432")
        name = await self.get_value("DB_NAME", "ticket_sales")
        user = await self.get_value("DB_USER", "ticket_sales")
        password = await self.get_value("DB_PASSWORD", "ticket_sales")

        return f"postgresql+asyncpg://{user}:{quote_plus(password)}@{host}:{port}/{name}"

    async def get_database_config(self) -> Dict[str, Any]:
        """Get connection pool settings."""
        return {
            "pool_size": await self._get_int("DB_POOL_SIZE", 20),
            "max_overflow": await self._get_int("DB_MAX_OVERFLOW", 30),
            "pool_timeout": await self._get_int("DB_POOL_TIMEOUT", 30),
            "pool_recycle": await self._get_int("DB_POOL_RECYCLE", 3600),
            "echo": await self._get_bool("DB_ECHO", False)
        }

    async def get_payment_config(self) -> Dict[str, Any]:
        """Get simulated payment gateway settings."""
        return {
            "enabled": await self._get_bool("PAYMENT_ENABLED", True),
            "failure_rate": await self._get_float("PAYMENT_FAILURE_RATE", 0.05),
            "min_delay_ms": await self._get_int("PAYMENT_MIN_DELAY_MS", 100),
            "max_delay_ms": await self._get_int("PAYMENT_MAX_DELAY_MS", 500),
            "currency": await self.get_value("CURRENCY", "USD")
        }

    async def get_server_config(self) -> Dict[str, Any]:
        """Get HTTP server settings."""
        return {
            "host": await self.get_value("HOST", "0.0.0.0"),
            "port": await self._get_int("PORT", 8000),
            "reload": await self._get_bool("RELOAD", False),
            "log_level": (await self.get_value("LOG_LEVEL", "info")).lower()
        }

    async def close(self):
        """Close the secrets manager."""
        if self.secrets_manager:
            await self.secrets_manager.close()


# Global config instance
config = TicketSalesConfig()
