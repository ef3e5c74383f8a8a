"""Configuration settings for mibot."""

import os
from typing import Optional


class Config:
    """Configuration class for mibot."""

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values."""
        slack_bot_token = os.getenv('SLACK_BOT_TOKEN') or os.getenv('SLACK_TOKEN', '')
        slack_app_token = os.getenv('SLACK_APP_TOKEN', '')

        required_fields = [
            ('SLACK_BOT_TOKEN', slack_bot_token),
            ('SLACK_APP_TOKEN', slack_app_token),
        ]

        missing_fields = [field for field, value in required_fields if not value]

        if missing_fields:
            raise ValueError(
                f"Missing required configuration fields: {', '.join(missing_fields)}. "
                "Please set these environment variables."
            )

    # Dynamic properties that read from environment at access time
    @property
    def SLACK_BOT_TOKEN(self) -> str:
        # SLACK_TOKEN is the name older deployments used
        return os.getenv('SLACK_BOT_TOKEN') or os.getenv('SLACK_TOKEN', '')

    @property
    def SLACK_APP_TOKEN(self) -> str:
        return os.getenv('SLACK_APP_TOKEN', '')

    @property
    def KUBECONFIG(self) -> str:
        return os.getenv('KUBECONFIG', '')

    @property
    def BOT_NAME(self) -> str:
        return os.getenv('BOT_NAME', 'mibot')

    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv('LOG_LEVEL', 'INFO').upper()

    @property
    def SLACK_DEBUG(self) -> bool:
        return os.getenv('SLACK_DEBUG', 'false').lower() == 'true'

    @property
    def KUBE_REQUEST_TIMEOUT(self) -> Optional[float]:
        value = os.getenv('KUBE_REQUEST_TIMEOUT', '')
        return float(value) if value else None


# Create a singleton instance for use throughout the app
Config = Config()
