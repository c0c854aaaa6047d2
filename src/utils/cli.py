#!/usr/bin/env python3
"""Command-line interface for the network dashboard."""

import click
import json
import sys
import time
from tabulate import tabulate

from ..collectors import IpAddressSource, NetworkManagerClient, ProcNetDevSource
from ..collectors.exceptions import ConfigurationError
from ..engine.throughput import ThroughputTracker
from ..utils.logger import get_logger
from config.settings import settings

logger = get_logger(__name__)


def _check_settings():
    errors = settings.validate()
    if errors:
        raise ConfigurationError("; ".join(errors))


@click.group(invoke_without_command=True)
@click.option('--config', 'config_file', type=click.Path(dir_okay=False), help='Path to a YAML configuration file')
@click.option('--output', '-o', type=click.Choice(['json', 'table']), default='table', help='Output format')
@click.pass_context
def cli(ctx, config_file, output):
    """Live network interface throughput with VPN and Wi-Fi control."""
    ctx.ensure_object(dict)
    ctx.obj['output_format'] = output

    try:
        if config_file:
            settings.reload(config_file)
        _check_settings()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if ctx.invoked_subcommand is None:
        ctx.invoke(dashboard)


@cli.command()
@click.option('--interval', type=float, default=None, help='Seconds between counter polls')
def dashboard(interval):
    """Run the full-screen terminal dashboard."""
    if interval is not None and interval <= 0:
        click.echo("Error: --interval must be greater than 0", err=True)
        sys.exit(1)

    from ..dashboard.app import main
    main(interval)


@cli.command()
@click.option('--interval', type=float, default=None, help='Seconds between the two counter samples')
@click.pass_context
def interfaces(ctx, interval):
    """Sample interface throughput once and print it."""
    try:
        interval = interval or settings.get('dashboard.tick_interval', 0.5)
        source = ProcNetDevSource()
        tracker = ThroughputTracker(interval_seconds=interval)

        previous = source.snapshot()
        time.sleep(interval)
        samples = tracker.update(previous, source.snapshot(), 1)
        addresses = dict(IpAddressSource().active_addresses())

        rows = [
            {
                'name': name,
                'lane': sample.lane.value,
                'address': addresses.get(name, ''),
                'rx_mbps': round(sample.current_speed, 3),
                'tx_mbps': round(sample.tx_speed, 3),
            }
            for name, sample in sorted(samples.items())
        ]

        if ctx.obj['output_format'] == 'json':
            click.echo(json.dumps(rows, indent=2))
        elif rows:
            table_data = [[r['name'], r['lane'], r['address'] or '-', r['rx_mbps'], r['tx_mbps']] for r in rows]
            click.echo(tabulate(table_data, headers=['Interface', 'Lane', 'Address', 'RX Mb/s', 'TX Mb/s'], tablefmt='grid'))
        else:
            click.echo("No interfaces found")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def connections(ctx):
    """List configured tunnels and visible Wi-Fi networks."""
    try:
        nm = NetworkManagerClient()
        active_tunnels = nm.active_tunnels()
        active_ssid = nm.active_ssid()

        tunnels = [{'name': name, 'active': name in active_tunnels} for name in nm.list_tunnels()]
        networks = [{'ssid': ssid, 'active': ssid == active_ssid} for ssid in nm.list_wifi_networks()]

        if ctx.obj['output_format'] == 'json':
            click.echo(json.dumps({'tunnels': tunnels, 'wifi': networks}, indent=2))
            return

        click.echo("=== Tunnels ===")
        if tunnels:
            click.echo(tabulate([[t['name'], '●' if t['active'] else '○'] for t in tunnels],
                                headers=['Name', 'Active'], tablefmt='grid'))
        else:
            click.echo("No VPN or WireGuard connections configured")

        click.echo("\n=== Wi-Fi ===")
        if networks:
            click.echo(tabulate([[n['ssid'], '●' if n['active'] else '○'] for n in networks],
                                headers=['SSID', 'Associated'], tablefmt='grid'))
        else:
            click.echo("No Wi-Fi networks visible")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
