"""fandash CLI - serve the dashboard or poll the fleet from a terminal."""

from __future__ import annotations

import asyncio
import json

import click

from fandash.config import DashboardConfig
from fandash.exceptions import ConfigError, FanDashError
from fandash.utils.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--manager-url", default=None, help="Fleet management endpoint base URL")
@click.option("--timeout", "request_timeout_s", type=float, default=None,
              help="Per-device status timeout in seconds (default: 2)")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    json_output: bool,
    manager_url: str | None,
    request_timeout_s: float | None,
) -> None:
    """fandash - live fan and temperature dashboard for a device fleet."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    setup_logging(level="DEBUG" if debug else "INFO", json_output=json_output)
    try:
        ctx.obj["config"] = DashboardConfig.from_env(
            manager_url=manager_url, request_timeout_s=request_timeout_s,
        )
    except ConfigError as exc:
        click.echo(f"ERROR: {exc}")
        ctx.exit(2)


@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", type=int, default=None, help="HTTP port")
@click.option("--refresh-interval", type=int, default=None,
              help="Seconds between refresh passes (default: 10)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None,
          refresh_interval: int | None) -> None:
    """Start the web dashboard."""
    import uvicorn
    from fandash.api.app import create_app

    config: DashboardConfig = ctx.obj["config"]
    updates = {"host": host, "port": port, "refresh_interval_s": refresh_interval}
    config = config.model_copy(update={k: v for k, v in updates.items() if v is not None})

    app = create_app(config, configure_logging=False)
    uvicorn.run(app, host=config.host, port=config.port)


async def _poll_once(config: DashboardConfig) -> list:
    from fandash.core.management import ManagementClient
    from fandash.core.poller import StatusPoller

    management = ManagementClient(config.manager_url)
    poller = StatusPoller(timeout_s=config.request_timeout_s)
    try:
        devices = await management.list_devices()
        return await asyncio.gather(*(poller.fetch_status(d) for d in devices))
    finally:
        await poller.aclose()
        await management.aclose()


@cli.command()
@click.pass_context
def poll(ctx: click.Context) -> None:
    """Run one refresh pass over every registered device and print it."""
    config: DashboardConfig = ctx.obj["config"]
    try:
        results = asyncio.run(_poll_once(config))
    except FanDashError as exc:
        click.echo(f"ERROR: {exc}")
        ctx.exit(1)
        return

    online = sum(1 for r in results if r.online)
    if ctx.obj.get("json_output"):
        click.echo(json.dumps({
            "online": online,
            "offline": len(results) - online,
            "devices": [r.model_dump(mode="json", by_alias=True) for r in results],
        }, indent=2))
        return

    if not results:
        click.echo("No devices registered.")
        return
    click.echo(f"{'NAME':<20} {'ENDPOINT':<22} {'TEMP':>7} {'FAN':>5} {'CPU':>6} {'MEM':>6}")
    for r in results:
        d = r.device
        if r.online:
            s = r.sample
            click.echo(
                f"{d.name:<20} {d.endpoint:<22} {s.temperature:>6.1f}C {s.speed:>4}% "
                f"{s.cpu:>5.1f}% {s.memory:>5.1f}%"
            )
        else:
            click.echo(f"{d.name:<20} {d.endpoint:<22} {r.error}")
    click.echo(f"Online: {online}  Offline: {len(results) - online}")


# Register subcommand groups
from fandash.cli.devices import devices  # noqa: E402

cli.add_command(devices)


if __name__ == "__main__":
    cli()
