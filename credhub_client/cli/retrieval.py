"""CLI commands for reading credentials.

Every command prints JSON on stdout. Library errors are reported on stderr
and exit with status 1.

Example:
    $ credhub-client --config credhub.yaml get /concourse/main/db-password --latest
    $ credhub-client find /concourse/main
"""

import json
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

import click

from credhub_client.client import CredHubClient
from credhub_client.decoder import decode
from credhub_client.exceptions import CredHubError, DecodeError
from credhub_client.models.credential import Credential
from credhub_client.models.values import TypedValue


def _json_default(obj: Any) -> Any:
    if isinstance(obj, TypedValue):
        return obj.model_dump()
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    raise TypeError(f"Cannot serialize {type(obj).__name__}")


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=_json_default))


def _credential_dict(credential: Credential, typed: bool) -> dict[str, Any]:
    data = asdict(credential)
    if typed:
        data["value"] = decode(credential)
    return data


@contextmanager
def _open_client(ctx: click.Context) -> Iterator[CredHubClient]:
    """Create a client from the group's settings, exiting on library errors."""
    try:
        with CredHubClient.from_settings(ctx.obj["settings"]) as client:
            yield client
    except DecodeError as e:
        click.echo(f"Error: {e.message} ({e.reason.value})", err=True)
        sys.exit(1)
    except CredHubError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _run(ctx: click.Context, action: Callable[[CredHubClient], Any]) -> None:
    with _open_client(ctx) as client:
        _echo_json(action(client))


@click.command(name="find")
@click.argument("path")
@click.pass_context
def find_command(ctx: click.Context, path: str) -> None:
    """List credential names stored under PATH."""
    _run(ctx, lambda client: [asdict(summary) for summary in client.find_by_path(path)])


@click.command(name="paths")
@click.pass_context
def paths_command(ctx: click.Context) -> None:
    """List every path known to the server."""
    _run(ctx, lambda client: client.list_all_paths())


@click.command(name="get")
@click.argument("name")
@click.option("--latest", is_flag=True, help="Only the newest version")
@click.option("--versions", type=int, default=0, help="Number of newest versions (0 = all)")
@click.option("--typed", is_flag=True, help="Decode values according to their type")
@click.pass_context
def get_command(ctx: click.Context, name: str, latest: bool, versions: int, typed: bool) -> None:
    """Show the versions of credential NAME, newest first."""

    def action(client: CredHubClient) -> Any:
        if latest:
            return _credential_dict(client.get_latest_by_name(name), typed)
        return [_credential_dict(c, typed) for c in client.get_versions_by_name(name, versions)]

    _run(ctx, action)


@click.command(name="get-id")
@click.argument("credential_id")
@click.option("--typed", is_flag=True, help="Decode the value according to its type")
@click.pass_context
def get_by_id_command(ctx: click.Context, credential_id: str, typed: bool) -> None:
    """Show the credential version with CREDENTIAL_ID."""
    _run(ctx, lambda client: _credential_dict(client.get_by_id(credential_id), typed))
