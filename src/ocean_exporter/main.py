import asyncio

import click

from ocean_exporter import settings
from ocean_exporter.logging_utils import setup_logging
from ocean_exporter.service import ExporterService


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--token",
    envvar="DIGITALOCEAN_TOKEN",
    default=settings.DIGITALOCEAN_TOKEN,
    show_envvar=True,
    help="DigitalOcean API token (read-only scope is enough).",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=1.0),
    default=settings.POLL_INTERVAL_SEC,
    show_default=True,
    help="Seconds between two polls of the API.",
)
@click.option("--host", default=settings.METRICS_HOST, show_default=True, help="Address to serve /metrics on.")
@click.option(
    "--port", type=click.IntRange(1, 65535), default=settings.METRICS_PORT, show_default=True, help="Port for /metrics."
)
@click.option("--log-level", default=settings.LOG_LEVEL, show_default=True, help="Minimum log level.")
@click.option("--json-logs/--plain-logs", default=settings.LOG_JSON, show_default=True, help="Log format.")
def main(token: str | None, interval: float, host: str, port: int, log_level: str, json_logs: bool) -> None:
    """Export DigitalOcean account, billing and inventory data as Prometheus metrics."""
    if not token:
        raise click.UsageError("A DigitalOcean API token is required (--token or DIGITALOCEAN_TOKEN).")

    setup_logging(level=log_level, json=json_logs)
    service = ExporterService(token=token, poll_interval_sec=interval, host=host, port=port)
    asyncio.run(service.run())


if __name__ == "__main__":
    main()
