"""Client configuration."""

from credhub_client.config.settings import ClientSettings

__all__ = ["ClientSettings"]
