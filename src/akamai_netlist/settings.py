"""Configuration and EdgeGrid credential resolution.

Tool defaults come from the environment (``NETLIST_*``) or a ``.env`` file.
Credentials come from an edgerc file section or from ``AKAMAI_*``
environment variables, in the same way other Akamai tooling finds them.
"""

import logging
import re
from pathlib import Path

from akamai.edgegrid import EdgeRc
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from akamai_netlist.exceptions import CredentialsError

logger = logging.getLogger(__name__)

DEFAULT_EDGERC = Path("~/.edgerc")
DEFAULT_SECTION = "default"
DEFAULT_MAX_BODY = 131072

_CREDENTIAL_KEYS = ("host", "client_token", "client_secret", "access_token")


class NetlistSettings(BaseSettings):
    """Defaults for the akamai-netlist CLI.

    All settings can be configured via environment variables or .env file.

    Attributes:
        edgerc: Default edgerc path used when --config is not given
        section: Default edgerc section
        request_timeout: HTTP request timeout in seconds
        output_format: Output format for API results (json or yaml)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    edgerc: Path = Field(
        default=DEFAULT_EDGERC,
        alias="NETLIST_EDGERC",
        description="Default edgerc file",
    )
    section: str = Field(
        default=DEFAULT_SECTION,
        alias="NETLIST_SECTION",
        description="Default edgerc section",
    )
    request_timeout: int = Field(
        default=30,
        alias="NETLIST_REQUEST_TIMEOUT",
        description="HTTP request timeout in seconds",
    )
    output_format: str = Field(
        default="json",
        alias="NETLIST_OUTPUT",
        description="Output format (json, yaml)",
    )

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate the timeout is positive."""
        if v <= 0:
            msg = "request_timeout must be positive"
            raise ValueError(msg)
        return v

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format is a supported type."""
        valid_formats = {"json", "yaml"}
        if v.lower() not in valid_formats:
            msg = f"Invalid output format: {v}. Must be one of: {', '.join(sorted(valid_formats))}"
            raise ValueError(msg)
        return v.lower()


class EdgeGridCredentials(BaseModel):
    """A resolved set of EdgeGrid API client credentials.

    Attributes:
        host: API hostname (``akab-xxxx.luna.akamaiapis.net``)
        client_token: Client token
        client_secret: Client secret
        access_token: Access token
        max_body: Maximum body size included in the signature
    """

    host: str
    client_token: str
    client_secret: SecretStr
    access_token: SecretStr
    max_body: int = DEFAULT_MAX_BODY

    @field_validator("host")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        """Reduce host to a bare hostname."""
        v = re.sub(r"^https?://", "", v.strip())
        return v.rstrip("/")

    @property
    def base_url(self) -> str:
        """Base URL for API requests."""
        return f"https://{self.host}"


class EnvCredentials(BaseSettings):
    """EdgeGrid credentials from ``AKAMAI_[SECTION_]*`` variables.

    Construct with ``_env_prefix`` from :func:`env_prefix_for`.
    """

    model_config = SettingsConfigDict(
        env_prefix="AKAMAI_",
        extra="ignore",
        case_sensitive=False,
    )

    host: str | None = None
    client_token: str | None = None
    client_secret: str | None = None
    access_token: str | None = None
    max_body: int = DEFAULT_MAX_BODY

    def is_complete(self) -> bool:
        """Whether every required credential is present."""
        return all(getattr(self, key) for key in _CREDENTIAL_KEYS)


def env_prefix_for(section: str) -> str:
    """Environment variable prefix for an edgerc section.

    Args:
        section: Section name.

    Returns:
        ``AKAMAI_`` for the default section, else ``AKAMAI_<SECTION>_``.
    """
    if section.lower() == DEFAULT_SECTION:
        return "AKAMAI_"
    return "AKAMAI_" + re.sub(r"[^A-Za-z0-9]", "_", section).upper() + "_"


def credentials_from_env(section: str) -> EdgeGridCredentials | None:
    """Read credentials for a section from the environment.

    Args:
        section: Section name.

    Returns:
        Credentials if all variables are set, None otherwise.
    """
    env = EnvCredentials(_env_prefix=env_prefix_for(section))
    if not env.is_complete():
        return None
    logger.debug("Loaded credentials for section '%s' from environment", section)
    return EdgeGridCredentials(
        host=env.host,
        client_token=env.client_token,
        client_secret=env.client_secret,
        access_token=env.access_token,
        max_body=env.max_body,
    )


def credentials_from_file(path: str | Path, section: str) -> EdgeGridCredentials:
    """Read credentials from a section of an edgerc file.

    Args:
        path: Path to the edgerc file.
        section: Section name.

    Returns:
        Parsed credentials.

    Raises:
        CredentialsError: If the file, the section or a key is missing.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise CredentialsError(msg, details={"path": str(path)})

    edgerc = EdgeRc(str(path))
    if not edgerc.has_section(section):
        msg = f"Section '{section}' not found in {path}"
        raise CredentialsError(msg, details={"path": str(path), "section": section})

    values = {key: edgerc.get(section, key, fallback="") for key in _CREDENTIAL_KEYS}
    missing = [key for key, value in values.items() if not value]
    if missing:
        msg = f"Section '{section}' in {path} is missing: {', '.join(missing)}"
        raise CredentialsError(msg, details={"path": str(path), "section": section})

    max_body = edgerc.getint(section, "max_body", fallback=DEFAULT_MAX_BODY)
    logger.debug("Loaded credentials for section '%s' from %s", section, path)
    return EdgeGridCredentials(**values, max_body=max_body)


def load_credentials(
    config_path: str | Path | None,
    section: str = DEFAULT_SECTION,
    settings: NetlistSettings | None = None,
) -> EdgeGridCredentials:
    """Resolve EdgeGrid credentials.

    An explicit ``config_path`` is read as-is and bypasses auto-discovery.
    Otherwise the environment is tried first, then the default edgerc.

    Args:
        config_path: Explicit edgerc path, or None to auto-discover.
        section: Section name.
        settings: Optional settings. If not provided, reads from environment.

    Returns:
        Resolved credentials.

    Raises:
        CredentialsError: If no credentials can be resolved.
    """
    if config_path is not None:
        return credentials_from_file(config_path, section)

    creds = credentials_from_env(section)
    if creds is not None:
        return creds

    settings = settings or get_netlist_settings()
    try:
        return credentials_from_file(settings.edgerc, section)
    except CredentialsError as e:
        logger.debug("Auto-discovery failed: %s", e)
        raise CredentialsError(details={"section": section}) from e


_settings_instance: NetlistSettings | None = None


def get_netlist_settings() -> NetlistSettings:
    """Get default settings (singleton, reads from environment).

    Returns:
        NetlistSettings instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = NetlistSettings()
    return _settings_instance


def reset_settings() -> None:
    """Reset singleton (for testing)."""
    global _settings_instance
    _settings_instance = None
