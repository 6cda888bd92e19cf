"""CLI commands for credhub-client."""
