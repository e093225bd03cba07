"""CLI subcommands for the fleet management endpoint."""

from __future__ import annotations

import asyncio
import json

import click

from fandash.config import DashboardConfig
from fandash.core.registry import DeviceRegistry
from fandash.exceptions import FanDashError


def _run(ctx: click.Context, action):
    """Run *action(registry)* against a fresh registry, exiting 1 on failure."""
    from fandash.core.management import ManagementClient
    from fandash.core.poller import StatusPoller

    config: DashboardConfig = ctx.obj["config"]

    async def _main():
        management = ManagementClient(config.manager_url)
        poller = StatusPoller(timeout_s=config.request_timeout_s)
        try:
            registry = DeviceRegistry(management, prober=poller.probe)
            return await action(registry)
        finally:
            await poller.aclose()
            await management.aclose()

    try:
        return asyncio.run(_main())
    except FanDashError as exc:
        click.echo(f"ERROR: {exc}")
        ctx.exit(1)


@click.group()
def devices() -> None:
    """List and manage registered devices."""


@devices.command("list")
@click.pass_context
def list_devices(ctx: click.Context) -> None:
    """List registered devices."""
    found = _run(ctx, lambda registry: registry.load())
    if found is None:
        return
    if ctx.obj.get("json_output"):
        click.echo(json.dumps([d.to_wire() for d in found], indent=2))
        return
    if not found:
        click.echo("No devices registered.")
        return
    for i, d in enumerate(found):
        click.echo(f"  [{i}] {d.name} ({d.endpoint})")


@devices.command()
@click.argument("name")
@click.argument("address")
@click.argument("port")
@click.pass_context
def add(ctx: click.Context, name: str, address: str, port: str) -> None:
    """Register a device."""
    outcome = _run(ctx, lambda registry: registry.add(name, address, port))
    if outcome is None:
        return
    state = "reachable" if outcome.reachable else "not reachable"
    click.echo(f"Added {outcome.device.name} ({outcome.device.endpoint}), {state}.")


@devices.command()
@click.argument("original_address")
@click.argument("name")
@click.argument("address")
@click.argument("port")
@click.pass_context
def edit(ctx: click.Context, original_address: str, name: str, address: str, port: str) -> None:
    """Change a registered device's name, address or port."""
    outcome = _run(
        ctx, lambda registry: registry.edit(original_address, name, address, port),
    )
    if outcome is None:
        return
    state = "reachable" if outcome.reachable else "not reachable"
    click.echo(f"Updated {outcome.device.name} ({outcome.device.endpoint}), {state}.")


@devices.command()
@click.argument("address")
@click.pass_context
def remove(ctx: click.Context, address: str) -> None:
    """Remove a device by address."""

    async def _remove(registry: DeviceRegistry) -> bool:
        await registry.remove(address)
        return True

    if _run(ctx, _remove):
        click.echo(f"Removed {address}.")
