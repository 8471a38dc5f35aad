import os
from typing import Any, Dict, List

from dotenv import load_dotenv

load_dotenv()

REQUIRED_VARIABLES = ['DATABASE_URL', 'API_KEY', 'SESSION_COOKIE']


class ConfigMissingError(ValueError):
    """Raised at startup when a required setting is absent."""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"FATAL ERROR: {', '.join(missing)} is not defined.")


class OnboardingConfig:
    """Centralized onboarding configuration management."""

    @staticmethod
    def get_config() -> Dict[str, Any]:
        """Get onboarding configuration from environment variables."""
        return {
            'database_url': os.getenv('DATABASE_URL'),
            'api_key': os.getenv('API_KEY'),
            'session_cookie': os.getenv('SESSION_COOKIE'),
            'tcsion_base_url': os.getenv('TCSION_BASE_URL', 'https://g91.tcsion.com'),
            'tcsion_timeout': float(os.getenv('TCSION_TIMEOUT', '30')),
            'member_page_limit': int(os.getenv('MEMBER_PAGE_LIMIT', '1000')),
            'allowed_origin': os.getenv('ALLOWED_ORIGIN', 'https://nimble-sunshine-294092.netlify.app'),
            'host': os.getenv('HOST', '0.0.0.0'),
            'port': int(os.getenv('PORT', '3000')),
            'db_pool_size': int(os.getenv('DB_POOL_SIZE', '5')),
            'db_max_overflow': int(os.getenv('DB_MAX_OVERFLOW', '10')),
            'log_level': os.getenv('LOG_LEVEL', 'INFO').upper(),
        }

    @staticmethod
    def validate(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check that every required credential is present.

        Args:
            config: Configuration as returned by ``get_config``.

        Returns:
            Dict[str, Any]: The same configuration, for chaining.

        Raises:
            ConfigMissingError: Naming every missing environment variable.
        """
        missing = [name for name in REQUIRED_VARIABLES if not config.get(name.lower())]
        if missing:
            raise ConfigMissingError(missing)
        return config

    @staticmethod
    def load() -> Dict[str, Any]:
        """Read and validate the configuration in one step."""
        return OnboardingConfig.validate(OnboardingConfig.get_config())
