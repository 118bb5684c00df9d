"""
KSUID Kit CLI

Command-line interface for generating and inspecting KSUIDs.

Usage:
    ksuid new
    ksuid new -n 10 --format raw
    ksuid inspect 0ujtsYcgvSTl8PAuAdqWYSMnLOv
"""

from enum import Enum
from typing import Callable, Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ksuid_kit.adapters.flags import parse_ksuid_flag
from ksuid_kit.kernel.errors import EntropyUnavailable
from ksuid_kit.kernel.ksuid import Ksuid, new_random
from ksuid_kit.kernel.logging import configure_logging, get_logger
from ksuid_kit.kernel.retry import retry_on_entropy_unavailable
from ksuid_kit.kernel.settings import KsuidSettings, load_settings

logger = get_logger(__name__)

app = typer.Typer(
    name="ksuid",
    help="KSUID Kit - K-Sortable Unique Identifiers",
    add_completion=False,
)


class OutputFormat(str, Enum):
    """How each KSUID is printed"""

    STRING = "string"
    INSPECT = "inspect"
    TIME = "time"
    TIMESTAMP = "timestamp"
    PAYLOAD = "payload"
    RAW = "raw"


def render(ksuid: Ksuid, fmt: OutputFormat) -> str:
    """Render a KSUID in the requested output format"""
    if fmt is OutputFormat.STRING:
        return str(ksuid)
    if fmt is OutputFormat.TIME:
        return ksuid.time.isoformat()
    if fmt is OutputFormat.TIMESTAMP:
        return str(ksuid.timestamp)
    if fmt is OutputFormat.PAYLOAD:
        return ksuid.payload.hex().upper()
    if fmt is OutputFormat.RAW:
        return bytes(ksuid).hex().upper()

    return "\n".join(
        [
            "REPRESENTATION:",
            "",
            f"  String: {ksuid}",
            f"     Raw: {bytes(ksuid).hex().upper()}",
            "",
            "COMPONENTS:",
            "",
            f"       Time: {ksuid.time.isoformat()}",
            f"  Timestamp: {ksuid.timestamp}",
            f"    Payload: {ksuid.payload.hex().upper()}",
            "",
        ]
    )


def build_generator(settings: KsuidSettings, retries: Optional[int]) -> Callable[[], Ksuid]:
    """Wrap new_random with the configured entropy retry policy"""
    attempts = retries if retries is not None else settings.entropy_retry_attempts
    if attempts <= 1:
        return new_random
    return retry_on_entropy_unavailable(
        max_attempts=attempts,
        min_wait_ms=settings.entropy_retry_min_wait_ms,
        max_wait_ms=settings.entropy_retry_max_wait_ms,
    )(new_random)


@app.callback()
def configure(ctx: typer.Context) -> None:
    """Generate and inspect K-Sortable Unique Identifiers"""
    try:
        settings = load_settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        typer.echo(f"Error: invalid KSUID settings in environment ({problems})", err=True)
        raise typer.Exit(1)
    configure_logging(json_output=settings.json_logs, log_level=settings.log_level)
    ctx.obj = settings


@app.command("new")
def new_command(
    ctx: typer.Context,
    count: Annotated[
        int,
        typer.Option("-n", "--count", min=1, help="Number of KSUIDs to generate"),
    ] = 1,
    fmt: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.STRING,
    retries: Annotated[
        Optional[int],
        typer.Option("--retries", min=1, max=10, help="Attempts per KSUID if entropy is unavailable"),
    ] = None,
) -> None:
    """Generate new KSUIDs"""
    settings: KsuidSettings = ctx.obj or load_settings()
    generate = build_generator(settings, retries)

    for _ in range(count):
        try:
            ksuid = generate()
        except EntropyUnavailable as e:
            logger.warning("KSUID generation failed", error=str(e))
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(render(ksuid, fmt))


@app.command("inspect")
def inspect_command(
    ksuids: Annotated[
        list[Ksuid],
        typer.Argument(parser=parse_ksuid_flag, help="KSUIDs to inspect"),
    ],
    fmt: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.INSPECT,
) -> None:
    """Show the components of existing KSUIDs"""
    for ksuid in ksuids:
        typer.echo(render(ksuid, fmt))


def main() -> None:
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
