"""
CLI integration tests

Exercises `ksuid new` and `ksuid inspect` through Typer's CliRunner.

Fun fact: The first command-line interface (CLI) was created in 1964 for the Dartmouth Time Sharing System.
It revolutionized computing by allowing users to interact with computers through text commands!
"""

import io

import pytest
from typer.testing import CliRunner

from ksuid_kit.cli.main import OutputFormat, app, render
from ksuid_kit.kernel.entropy import set_entropy_source
from ksuid_kit.kernel.ksuid import Ksuid


@pytest.fixture
def runner():
    """Typer CLI test runner"""
    return CliRunner()


# =============================================================================
# new
# =============================================================================


def test_new_prints_one_ksuid(runner):
    """Test new prints a single parseable KSUID by default"""
    result = runner.invoke(app, ["new"])

    assert result.exit_code == 0
    lines = result.stdout.split()
    assert len(lines) == 1
    assert not Ksuid.parse(lines[0]).is_nil


def test_new_count_produces_distinct_ids(runner):
    """Test -n generates the requested number of distinct KSUIDs"""
    result = runner.invoke(app, ["new", "-n", "5"])

    assert result.exit_code == 0
    lines = result.stdout.split()
    assert len(lines) == 5
    assert len({Ksuid.parse(line) for line in lines}) == 5


def test_new_raw_format(runner):
    """Test raw format prints 40 uppercase hex digits"""
    set_entropy_source(io.BytesIO(b"\xab" * 16))
    result = runner.invoke(app, ["new", "--format", "raw"])

    assert result.exit_code == 0
    raw = result.stdout.strip()
    assert len(raw) == 40
    assert raw.endswith("AB" * 16)


def test_new_rejects_zero_count(runner):
    """Test count must be positive"""
    result = runner.invoke(app, ["new", "-n", "0"])
    assert result.exit_code != 0


def test_new_reports_entropy_failure(runner):
    """Test an exhausted entropy source is reported with a non-zero exit"""
    set_entropy_source(io.BytesIO(bytes(4)))
    result = runner.invoke(app, ["new"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_new_retries_entropy(runner):
    """Test --retries keeps trying until the source recovers"""

    class RecoveringSource:
        def __init__(self) -> None:
            self.calls = 0

        def read(self, n: int) -> bytes:
            self.calls += 1
            if self.calls == 1:
                raise OSError("not ready")
            return b"\x01" * n

    source = RecoveringSource()
    set_entropy_source(source)
    result = runner.invoke(app, ["new", "--retries", "3", "-f", "payload"])

    assert result.exit_code == 0
    # Retry warnings may share the stream, the KSUID payload is the last line
    assert result.stdout.strip().splitlines()[-1] == "01" * 16
    assert source.calls == 2


def test_invalid_settings_are_reported_cleanly(runner, monkeypatch):
    """Test a bad environment variable gives a one-line error and exit 1"""
    monkeypatch.setenv("KSUID_LOG_LEVEL", "loud")
    result = runner.invoke(app, ["new"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error: invalid KSUID settings in environment (log_level:" in result.output


# =============================================================================
# inspect
# =============================================================================


def test_inspect_shows_components(runner, known_vector):
    """Test inspect prints representations and components"""
    result = runner.invoke(app, ["inspect", known_vector["string"]])

    assert result.exit_code == 0
    assert f"String: {known_vector['string']}" in result.stdout
    assert f"Raw: {known_vector['raw_hex']}" in result.stdout
    assert "Time: 2017-10-10T04:00:47+00:00" in result.stdout
    assert f"Timestamp: {known_vector['timestamp']}" in result.stdout
    assert f"Payload: {known_vector['payload_hex']}" in result.stdout


def test_inspect_multiple_with_format(runner, known_vector):
    """Test inspect accepts several KSUIDs and a format"""
    result = runner.invoke(
        app,
        ["inspect", known_vector["string"], "0" * 27, "--format", "timestamp"],
    )

    assert result.exit_code == 0
    assert result.stdout.split() == [str(known_vector["timestamp"]), "0"]


@pytest.mark.parametrize("value", ["not-a-ksuid", "!" * 27, "z" * 27])
def test_inspect_rejects_invalid_ksuid(runner, value):
    """Test malformed input is a usage error, not a crash"""
    result = runner.invoke(app, ["inspect", value])

    assert result.exit_code == 2
    assert "REPRESENTATION" not in result.stdout
    assert "Traceback" not in result.output


def test_render_formats(known_vector):
    """Test each output format renders the expected projection"""
    ksuid = Ksuid.parse(known_vector["string"])

    assert render(ksuid, OutputFormat.STRING) == known_vector["string"]
    assert render(ksuid, OutputFormat.TIME) == "2017-10-10T04:00:47+00:00"
    assert render(ksuid, OutputFormat.TIMESTAMP) == str(known_vector["timestamp"])
    assert render(ksuid, OutputFormat.PAYLOAD) == known_vector["payload_hex"]
    assert render(ksuid, OutputFormat.RAW) == known_vector["raw_hex"]
    assert render(ksuid, OutputFormat.INSPECT).startswith("REPRESENTATION:")
