"""Tests for multi-file orchestration and the CLI."""
import json
from pathlib import Path

from sid_rewriter.core.collisions import CollisionRegistry
from sid_rewriter.core.hashing import djb2
from sid_rewriter.policy.profile import SidProfile
from sid_rewriter.runner import main, run_sid

from conftest import NO_MARKER_C, SIMPLE_C, SIMPLE_C_EXPECTED


class TestRunSid:
    """Integration tests via run_sid()."""

    def test_failures_are_per_file(self, source_tree: Path):
        """A malformed file does not stop the others from being rewritten."""
        report = run_sid([source_tree])
        by_name = {Path(f.path).name: f for f in report.files}

        assert by_name["simple.c"].status == "MODIFIED"
        assert by_name["plain.h"].status == "UNMODIFIED"
        assert by_name["plain.h"].reasons == ["NO_INVOCATIONS"]
        assert by_name["bad.cpp"].status == "FAILED"
        assert by_name["bad.cpp"].error.kind == "INVALID_INVOCATION"
        assert by_name["bad.cpp"].error.line == 2

        assert (source_tree / "simple.c").read_text() == SIMPLE_C_EXPECTED
        assert (source_tree / "lib" / "plain.h").read_bytes() == NO_MARKER_C.encode()
        # Hidden directories are never visited.
        assert (source_tree / ".git" / "hidden.c").read_text() == SIMPLE_C

    def test_counts(self, source_tree: Path):
        report = run_sid([source_tree])
        c = report.counts
        assert (c.total, c.modified, c.unmodified, c.failed, c.skipped) == (3, 1, 1, 1, 0)
        assert c.invocations == 1

    def test_unreadable_is_skipped(self, tmp_path: Path, simple_c_file: Path):
        report = run_sid([tmp_path / "missing.c", simple_c_file])
        assert [f.status for f in report.files] == ["SKIPPED", "MODIFIED"]
        assert report.files[0].error.kind == "SOURCE_UNREADABLE"
        assert report.counts.skipped == 1

    def test_dest_dir_mirrors_tree(self, source_tree: Path, tmp_path: Path):
        out = tmp_path / "out"
        report = run_sid([source_tree], dest_dir=out)
        assert (out / "simple.c").read_text() == SIMPLE_C_EXPECTED
        assert (source_tree / "simple.c").read_text() == SIMPLE_C
        # Unmodified and failed files are not copied.
        assert not (out / "lib").exists()
        modified = [f for f in report.files if f.status == "MODIFIED"]
        assert modified[0].destination == str(out / "simple.c")

    def test_dry_run(self, simple_c_file: Path):
        report = run_sid([simple_c_file], dry_run=True)
        f = report.files[0]
        assert f.status == "MODIFIED"
        assert "DRY_RUN" in f.reasons
        assert f.destination is None
        assert f.invocations[0].hash == "0x0f923099"
        assert simple_c_file.read_text() == SIMPLE_C

    def test_collisions_reported(self, colliding_c_file: Path):
        report = run_sid([colliding_c_file], detect_collisions=True)
        assert len(report.collisions) == 1
        c = report.collisions[0]
        assert (c.first_literal, c.literal) == ("stylist", "subgenera")
        assert c.location.endswith(":2")
        assert "HASH_COLLISION" in report.files[0].reasons
        # Collisions are warnings; the file is still rewritten.
        assert report.files[0].status == "MODIFIED"

    def test_caller_registry_collects_table(self, colliding_c_file: Path, simple_c_file: Path):
        """A caller-owned registry ends up holding every rewritten string."""
        registry = CollisionRegistry()
        report = run_sid([colliding_c_file, simple_c_file], dry_run=True, registry=registry)
        assert registry.table() == {
            djb2(b"stylist"): b"stylist",
            djb2(b"hello"): b"hello",
        }
        assert len(report.collisions) == 1

    def test_collisions_off_by_default(self, colliding_c_file: Path):
        report = run_sid([colliding_c_file])
        assert report.collisions == []

    def test_report_written(self, simple_c_file: Path, tmp_path: Path):
        out = tmp_path / "report"
        run_sid([simple_c_file], report_dir=out)
        data = json.loads((out / "sid_report.json").read_text())
        assert data["package_name"] == "sid_rewriter"
        assert data["profile_id"] == SidProfile.v0().profile_id
        assert data["hash_name"] == "djb2"
        assert data["counts"]["modified"] == 1

    def test_fnv_profile(self, simple_c_file: Path):
        profile = SidProfile.v0().with_overrides(hash_name="fnv1a")
        report = run_sid([simple_c_file], profile=profile, dry_run=True)
        assert report.hash_name == "fnv1a"
        assert report.files[0].invocations[0].hash == "0x4f9f2cab"


class TestCli:
    """main() exit codes and flags."""

    def test_success(self, simple_c_file: Path, capsys):
        assert main([str(simple_c_file)]) == 0
        assert "modified=1" in capsys.readouterr().out
        assert simple_c_file.read_text() == SIMPLE_C_EXPECTED

    def test_failure_exit_code(self, source_tree: Path):
        assert main([str(source_tree)]) == 1

    def test_check_flag(self, simple_c_file: Path):
        assert main(["--check", str(simple_c_file)]) == 0
        assert simple_c_file.read_text() == SIMPLE_C

    def test_marker_and_hash_flags(self, src_dir: Path):
        p = src_dir / "m.c"
        p.write_text('x = MARKER("a");')
        assert main(["--marker", "MARKER", "--hash", "fnv1a", str(p)]) == 0
        assert p.read_text() == 'x = 0xe40c292c /* "a" */;'

    def test_invalid_marker(self, simple_c_file: Path):
        assert main(["--marker", "_SID", str(simple_c_file)]) == 2

    def test_report_dir(self, simple_c_file: Path, tmp_path: Path):
        out = tmp_path / "r"
        main(["-o", str(out), str(simple_c_file)])
        assert (out / "sid_report.json").exists()
