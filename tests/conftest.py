"""
Shared pytest fixtures for zseeker-service tests.

Provides result CSV samples, service configurations, and a stand-in
ZSeeker executable so that pipeline and API tests can run a real child
process without the actual tool installed.
"""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from zseeker_service.external.base import ExternalTool
from zseeker_service.models.config import ServiceConfig

# =============================================================================
# Stand-in ZSeeker executable
# =============================================================================

# Behaviour is selected with FAKE_ZSEEKER_MODE:
#   ok        write a two-row result CSV and exit 0
#   fail      print an error on stderr and exit 2
#   binary    write bytes that are not UTF-8 and exit 3
#   no_output exit 0 without writing a result file
#   empty     write an empty result file and exit 0
#   sleep     sleep long enough to trip any test timeout
# FAKE_ZSEEKER_ARGV_FILE, when set, receives the arguments one per line.
_FAKE_ZSEEKER_SOURCE = r'''#!{python}
import os
import sys
import time
from pathlib import Path

args = sys.argv[1:]
opts = dict(zip(args[::2], args[1::2]))
mode = os.environ.get("FAKE_ZSEEKER_MODE", "ok")

argv_file = os.environ.get("FAKE_ZSEEKER_ARGV_FILE")
if argv_file:
    Path(argv_file).write_text("\n".join(args))

print("scanning " + opts["--fasta"], flush=True)
if mode == "fail":
    print("error: invalid FASTA header on line 1", file=sys.stderr, flush=True)
    sys.exit(2)
if mode == "binary":
    sys.stdout.buffer.write(b"bad \xff\xfe byte\n")
    sys.stdout.flush()
    sys.exit(3)
if mode == "sleep":
    time.sleep(30)

out = Path(opts["--output_dir"]) / (Path(opts["--fasta"]).stem + "_zdna_score.csv")
if mode == "empty":
    out.write_text("")
elif mode == "ok":
    out.write_text(
        "Chromosome,Start,End,Z-DNA Score,Sequence\n"
        "chr1,10,22,52.5,GCGCGCGCGCGC\n"
        'chr1,40,71,88.0,"CGCG,ACAC"\n'
    )
'''


@pytest.fixture(autouse=True)
def _reset_tool_lookup():
    """Ensure every test starts with the default executable resolver."""
    ExternalTool.reset_executable_resolver()
    yield
    ExternalTool.reset_executable_resolver()


@pytest.fixture
def fake_zseeker(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Install a stand-in ZSeeker script and point the resolver at it."""
    if os.name == "nt":
        pytest.skip("stand-in executable relies on a POSIX shebang")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "ZSeeker"
    script.write_text(_FAKE_ZSEEKER_SOURCE.replace("{python}", sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    monkeypatch.setenv("FAKE_ZSEEKER_MODE", "ok")
    ExternalTool.set_executable_resolver(
        lambda name: str(script) if name == "ZSeeker" else None
    )
    return script


@pytest.fixture
def missing_zseeker() -> None:
    """Make every executable lookup fail."""
    ExternalTool.set_executable_resolver(lambda name: None)


# =============================================================================
# Configuration and data fixtures
# =============================================================================


@pytest.fixture
def service_config(tmp_path: Path) -> ServiceConfig:
    """Service configuration with a work_dir inside tmp_path."""
    return ServiceConfig(work_dir=tmp_path / "jobs")


@pytest.fixture
def fasta_file(tmp_path: Path) -> Path:
    """Small FASTA file with one alternating purine/pyrimidine stretch."""
    path = tmp_path / "sample.fasta"
    path.write_text(">chr1 test\nATATGCGCGCGCGCGCATTTACACACACACGTAAA\n")
    return path


@pytest.fixture
def result_csv(tmp_path: Path) -> Path:
    """Result CSV with header a,b,c and two data rows."""
    path = tmp_path / "input_zdna_score.csv"
    path.write_text("a,b,c\n1,2,3\n4,5,6\n")
    return path
