"""Pydantic configuration model for the transport request handler."""

from pathlib import Path

from pydantic import BaseModel, Field


class HandlerConfig(BaseModel):
    """
    Defaults applied by TransportRequestHandler to every request.

    Example:
        config = HandlerConfig(connect_timeout=10)
        handler = TransportRequestHandler(config=config)

    YAML format:
        connect_timeout: 10
        verify_peer: true
        max_interim_responses: 5
    """

    connect_timeout: int = Field(30, ge=1, description="Connection timeout in seconds")
    follow_redirects: bool = Field(False, description="Follow Location headers of 3xx responses")
    verify_peer: bool = Field(True, description="Verify the server certificate")
    verify_host: bool = Field(True, description="Verify the certificate matches the host name")
    accept_encoding: str = Field(
        "",
        description="Accept-Encoding to advertise (empty = every encoding the transport supports)",
    )
    cookie_file_prefix: str = Field(
        "http-client-cookies-",
        min_length=1,
        description="Prefix of the temporary cookie file",
    )
    max_interim_responses: int = Field(
        10,
        ge=1,
        description="Maximum number of 100 Continue blocks skipped when parsing a response",
    )

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json"), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "HandlerConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "HandlerConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
