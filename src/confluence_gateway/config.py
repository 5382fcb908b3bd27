"""Configuration for the Confluence gateway.

This module holds the immutable (host, token, account) triple that every
other component depends on. Values are passed explicitly or loaded from
environment variables using python-dotenv. Validation either reports all
problems (validate) or raises a single ConfigurationError (assert_valid).
"""

import os
from dataclasses import dataclass, field
from typing import List, NamedTuple
from urllib.parse import urlparse

from dotenv import load_dotenv

from .errors import ConfigurationError

ENV_HOST_URL = 'CONFLUENCE_HOST_URL'
ENV_API_TOKEN = 'CONFLUENCE_API_TOKEN'
ENV_USER_EMAIL = 'CONFLUENCE_USER_EMAIL'


class ConfigValidationResult(NamedTuple):
    """Outcome of GatewayConfig.validate()."""
    is_valid: bool
    errors: List[str]


@dataclass(frozen=True)
class GatewayConfig:
    """Confluence connection settings.

    Attributes:
        host_url: Confluence site URL (e.g., https://yourinstance.atlassian.net)
        access_token: Confluence API token
        account_id: Account the token belongs to (usually an email address)

    The access token is excluded from repr() so configs can be logged.

    Example:
        >>> config = GatewayConfig(
        ...     host_url="https://example.atlassian.net",
        ...     access_token="token",
        ...     account_id="me@example.com",
        ... )
        >>> config.validate().is_valid
        True
    """
    host_url: str
    access_token: str = field(repr=False)
    account_id: str

    @classmethod
    def from_env(cls) -> 'GatewayConfig':
        """Build a config from environment variables (after loading .env).

        Required environment variables:
            CONFLUENCE_HOST_URL: Confluence site URL
            CONFLUENCE_API_TOKEN: Confluence API token
            CONFLUENCE_USER_EMAIL: Account the token belongs to

        Returns:
            GatewayConfig: Config built from the environment

        Raises:
            ConfigurationError: If any required variable is missing; all
                missing names are listed in host, token, account order
        """
        load_dotenv()

        host_url = os.getenv(ENV_HOST_URL)
        access_token = os.getenv(ENV_API_TOKEN)
        account_id = os.getenv(ENV_USER_EMAIL)

        missing = []
        if not host_url:
            missing.append(ENV_HOST_URL)
        if not access_token:
            missing.append(ENV_API_TOKEN)
        if not account_id:
            missing.append(ENV_USER_EMAIL)

        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                config_key=missing[0],
            )

        return cls(
            host_url=host_url,  # type: ignore[arg-type]
            access_token=access_token,  # type: ignore[arg-type]
            account_id=account_id,  # type: ignore[arg-type]
        )

    def validate(self, strict: bool = True) -> ConfigValidationResult:
        """Check every field and collect one message per problem.

        Args:
            strict: Also require host_url to be an absolute http(s) URL

        Returns:
            ConfigValidationResult with is_valid and the list of messages
        """
        errors = []

        if not _is_present(self.host_url):
            errors.append("host_url is required")
        elif strict and not _is_valid_url(self.host_url):
            errors.append("host_url must be a valid URL")

        if not _is_present(self.access_token):
            errors.append("access_token is required")

        if not _is_present(self.account_id):
            errors.append("account_id is required")

        return ConfigValidationResult(is_valid=not errors, errors=errors)

    def assert_valid(self) -> None:
        """Raise ConfigurationError unless the config validates strictly.

        Raises:
            ConfigurationError: Lists every problem in host, token, account
                order; config_key names the first offending field
        """
        result = self.validate(strict=True)
        if result.is_valid:
            return

        raise ConfigurationError(
            f"Configuration validation failed: {', '.join(result.errors)}",
            config_key=result.errors[0].split(' ', 1)[0],
        )


def _is_present(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_valid_url(url: str) -> bool:
    parsed = urlparse(url.strip())
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)
