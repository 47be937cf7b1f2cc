"""Tests for the notebake CLI."""

import json
import subprocess
import sys
import tempfile
from pathlib import Path


def _run(vault: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "notebake.cli", "--vault", str(vault), *args],
        capture_output=True,
        text=True,
        cwd=vault,
    )


def _make_vault(tmpdir: str) -> Path:
    vault = Path(tmpdir)
    (vault / "Main.md").write_text("""---
title: Main
---
# Main

![[Part]]

- ![[List]]

Inline [[Part|part]] mention.
""")
    (vault / "Part.md").write_text("""# Part

Part body %%hidden%%secret%%/hidden%%
""")
    (vault / "List.md").write_text("first\nsecond\n")
    return vault


def test_bake_prints_result():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        result = _run(vault, "bake", "Main")

        assert result.returncode == 0
        assert result.stdout == """---
title: Main
---
# Main

# Part

Part body %%hidden%%secret%%/hidden%%

- first
  second

Inline part mention.
"""


def test_bake_flags_override_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        result = _run(vault, "bake", "Main", "--no-hidden", "--no-in-list", "--no-links")

        assert result.returncode == 0
        assert "secret" not in result.stdout
        assert "Part body\n" in result.stdout
        assert "- List\n" in result.stdout
        assert "Inline [[Part|part]] mention." in result.stdout


def test_bake_reads_config_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        (vault / "notebake.toml").write_text("[bake]\nembeds = false\n")
        result = _run(vault, "bake", "Main")

        assert result.returncode == 0
        assert "![[Part]]" in result.stdout
        assert "Inline part mention." in result.stdout


def test_bake_subpath():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        (vault / "Sections.md").write_text("# A\nalpha\n# B\n![[List]]\n")
        result = _run(vault, "bake", "Sections#B")

        assert result.returncode == 0
        assert result.stdout == "# B\nfirst\nsecond\n"


def test_bake_missing_note():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        result = _run(vault, "bake", "Nope")

        assert result.returncode == 1
        assert "Note Nope not found" in result.stderr


def test_bake_to_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        out = Path(tmpdir) / "out" / "flat.md"
        result = _run(vault, "-q", "bake", "List", "-o", str(out))

        assert result.returncode == 0
        assert result.stdout == ""
        assert out.read_text() == "first\nsecond\n"


def test_bake_write_next_to_note():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        result = _run(vault, "bake", "Main", "--write")

        assert result.returncode == 0
        assert result.stdout.strip() == "Main.baked.md"
        written = (vault / "Main.baked.md").read_text()
        assert written.startswith("---\ntitle: Main\nbaked_from: Main.md\n---\n")
        assert "Part body" in written


def test_refs_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        (vault / "Refs.md").write_text("[[Part]] ![[gone]] ![[img.png]]\n")
        (vault / "img.png").write_bytes(b"\x89PNG")
        result = _run(vault, "--json", "refs", "Refs")

        assert result.returncode == 1
        rows = json.loads(result.stdout)
        assert [(r["link"], r["kind"], r["status"]) for r in rows] == [
            ("Part", "link", "ok"),
            ("gone", "embed", "missing"),
            ("img.png", "embed", "file"),
        ]
        assert rows[0]["start"] == 0
        assert rows[0]["end"] == 8


def test_verbose_bake_logs_to_stderr():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        (vault / "Loose.md").write_text("Intro\n[[Missing]]\n")
        result = _run(vault, "-v", "bake", "Loose")

        assert result.returncode == 0
        assert result.stdout == "Intro\n[[Missing]]\n"
        assert "Unresolved link 'Missing' in Loose.md" in result.stderr


def test_refs_text_reports_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = _make_vault(tmpdir)
        (vault / "Refs.md").write_text("[[Part]]\n[[Missing]]\n")
        result = _run(vault, "refs", "Refs")

        assert result.returncode == 1
        assert result.stdout.splitlines() == [
            "0\t8\tlink\tok\tPart",
            "9\t20\tlink\tmissing\tMissing",
        ]


def test_version_flag():
    result = subprocess.run(
        [sys.executable, "-m", "notebake.cli", "--version"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "notebake" in result.stdout
    assert "python" in result.stdout
