"""Integration tests for the directory runner."""
import os
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from dirsum.core.config import Operation, RunConfig, MAX_WORKERS
from dirsum.core.errors import ConfigurationError, EnumerationError, FileOperationError
from dirsum.engines.digest import hash_file
from dirsum.services.runner import DirectoryRunner, run_directory
from dirsum.services.scanner import DirectoryScanner


SHA1_ABC = "a9993e364706816aba3e25717850c26c9cd0d89d"


def _lines(results) -> set[str]:
    return {r.format_line() for r in results}


@pytest.fixture
def source(tmp_path: Path) -> Path:
    """Create a flat source directory with assorted files."""
    root = tmp_path / "src"
    root.mkdir()
    for i in range(25):
        (root / f"file{i:02d}.dat").write_bytes(os.urandom(i * 997))
    (root / "empty").touch()
    (root / "sub").mkdir()
    (root / "sub" / "ignored.txt").write_text("nested")
    os.symlink(root / "file01.dat", root / "link")
    return root


class TestHashRuns:
    """Hash-only runs over real directories."""

    def test_abc_scenario(self, tmp_path: Path):
        """Test a.txt + sub/ + link yields one line with the SHA-1 of 'abc'."""
        root = tmp_path / "src"
        root.mkdir()
        (root / "a.txt").write_bytes(b"abc")
        (root / "sub").mkdir()
        os.symlink(root / "a.txt", root / "link")

        results = list(run_directory(root, workers=1))

        assert [r.format_line() for r in results] == [f"a.txt: {SHA1_ABC}"]

    def test_empty_directory(self, tmp_path: Path):
        """Test an empty directory yields nothing."""
        assert list(run_directory(tmp_path)) == []

    def test_names_match_regular_files(self, source: Path):
        """Test result names are exactly the top-level regular files."""
        results = list(run_directory(source, workers=4))

        expected = {p.name for p in source.iterdir() if p.is_file() and not p.is_symlink()}
        assert {r.name for r in results} == expected
        assert len(results) == len(expected)

    def test_digests_correct(self, source: Path):
        """Test each digest matches an independent hash of the file."""
        for result in run_directory(source, workers=3):
            assert result.digest == hash_file(source / result.name)

    def test_worker_count_independent(self, source: Path):
        """Test every worker count from 1 to 30 gives the same results."""
        baseline = _lines(run_directory(source, workers=1))

        for workers in range(2, MAX_WORKERS + 1):
            assert _lines(run_directory(source, workers=workers)) == baseline

    def test_above_cap_same_as_cap(self, source: Path):
        """Test asking for more than 30 workers behaves like 30."""
        config = RunConfig(source=source, workers=500)
        runner = DirectoryRunner(config)

        over = _lines(runner.run())
        assert runner.stats.workers == MAX_WORKERS
        assert over == _lines(run_directory(source, workers=MAX_WORKERS))

    def test_missing_source(self, tmp_path: Path):
        """Test a missing source directory is an enumeration error."""
        with pytest.raises(EnumerationError):
            list(run_directory(tmp_path / "missing"))

    def test_stats(self, source: Path):
        """Test run statistics after a run."""
        runner = DirectoryRunner(RunConfig(source=source, workers=5))
        results = list(runner.run())

        assert runner.stats.files_listed == len(results)
        assert runner.stats.processed == len(results)
        assert runner.stats.workers == 5
        assert runner.stats.elapsed_seconds >= 0

    def test_unreadable_file_aborts(self, tmp_path: Path, monkeypatch):
        """Test a failing file aborts the whole run."""
        (tmp_path / "a.txt").write_bytes(b"abc")
        (tmp_path / "b.txt").write_bytes(b"def")

        real_open = Path.open

        def failing_open(self, *args, **kwargs):
            if self.name == "b.txt":
                raise PermissionError("denied")
            return real_open(self, *args, **kwargs)

        monkeypatch.setattr(Path, "open", failing_open)
        with pytest.raises(FileOperationError, match="denied"):
            list(run_directory(tmp_path, workers=2))


class TestCopyRuns:
    """Copy-and-hash runs over real directories."""

    def test_copy_all(self, source: Path, tmp_path: Path):
        """Test every regular file is copied with its size and digest."""
        dest = tmp_path / "dst"
        dest.mkdir()

        results = list(run_directory(source, dest, workers=6))

        assert {r.name for r in results} == {p.name for p in dest.iterdir()}
        for result in results:
            copied = dest / result.name
            assert result.operation == Operation.COPY
            assert result.size == (source / result.name).stat().st_size
            assert result.digest == hash_file(copied)
            assert copied.read_bytes() == (source / result.name).read_bytes()

    def test_skips_non_regular(self, source: Path, tmp_path: Path):
        """Test subdirectories and symlinks are not copied."""
        dest = tmp_path / "dst"
        dest.mkdir()
        list(run_directory(source, dest))

        assert not (dest / "sub").exists()
        assert not (dest / "link").exists()

    def test_idempotent(self, source: Path, tmp_path: Path):
        """Test two copies into fresh destinations are identical."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()

        lines_one = _lines(run_directory(source, first, workers=4))
        lines_two = _lines(run_directory(source, second, workers=9))

        assert lines_one == lines_two
        for path in first.iterdir():
            assert path.read_bytes() == (second / path.name).read_bytes()

    def test_line_format(self, tmp_path: Path):
        """Test copy lines carry name, byte count and digest."""
        src = tmp_path / "src"
        dest = tmp_path / "dst"
        src.mkdir()
        dest.mkdir()
        (src / "a.txt").write_bytes(b"abc")

        results = list(run_directory(src, dest, workers=1))

        assert [r.format_line() for r in results] == [f"a.txt 3 {SHA1_ABC}"]

    def test_stats_bytes(self, source: Path, tmp_path: Path):
        """Test byte totals in copy mode."""
        dest = tmp_path / "dst"
        dest.mkdir()
        config = RunConfig(source=source, destination=dest, operation=Operation.COPY)
        runner = DirectoryRunner(config)
        list(runner.run())

        expected = sum(p.stat().st_size for p in dest.iterdir())
        assert runner.stats.bytes_processed == expected

    def test_missing_destination_aborts_before_dispatch(self, source: Path, tmp_path: Path):
        """Test a missing destination fails before listing or copying."""
        dest = tmp_path / "missing"
        config = RunConfig(source=source, destination=dest, operation=Operation.COPY)
        scanner = MagicMock(spec=DirectoryScanner)
        operation = MagicMock()
        runner = DirectoryRunner(config, scanner=scanner, operation=operation)

        with pytest.raises(ConfigurationError, match="Can't find directory"):
            list(runner.run())

        scanner.scan.assert_not_called()
        operation.assert_not_called()
        assert not dest.exists()

    def test_destination_is_file(self, source: Path, tmp_path: Path):
        """Test a destination that is not a directory fails the precondition."""
        dest = tmp_path / "afile"
        dest.write_text("x")
        config = RunConfig(source=source, destination=dest, operation=Operation.COPY)

        with pytest.raises(ConfigurationError):
            DirectoryRunner(config).check_preconditions()

    def test_destination_is_source(self, tmp_path: Path):
        """Test copying a directory onto itself is refused and leaves files intact."""
        (tmp_path / "a.txt").write_bytes(b"abc")

        with pytest.raises(ConfigurationError, match="source directory"):
            list(run_directory(tmp_path, destination=tmp_path, workers=1))

        assert (tmp_path / "a.txt").read_bytes() == b"abc"

    def test_destination_resolves_to_source(self, tmp_path: Path):
        """Test a destination path that resolves to the source is refused."""
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.txt").write_bytes(b"abc")
        alias = tmp_path / "alias"
        os.symlink(src, alias)

        with pytest.raises(ConfigurationError, match="source directory"):
            list(run_directory(src, destination=tmp_path / "src" / ".." / "alias", workers=1))

        assert (src / "a.txt").read_bytes() == b"abc"


class TestInjectedDependencies:
    """Tests with injected scanner and operation."""

    def test_uses_injected_scanner(self, tmp_path: Path):
        """Test the runner hashes what the scanner returns."""
        (tmp_path / "x").write_bytes(b"abc")
        scanner = MagicMock(spec=DirectoryScanner)
        scanner.scan.return_value = ["x"]

        runner = DirectoryRunner(RunConfig(source=tmp_path, workers=2), scanner=scanner)
        results = list(runner.run())

        scanner.scan.assert_called_once_with(tmp_path)
        assert [r.format_line() for r in results] == [f"x: {SHA1_ABC}"]

    def test_list_then_process(self, tmp_path: Path):
        """Test listing and processing can be driven separately."""
        (tmp_path / "a.txt").write_bytes(b"abc")
        runner = DirectoryRunner(RunConfig(source=tmp_path))

        names = runner.list_files()
        results = list(runner.process(names))

        assert names == ["a.txt"]
        assert results[0].digest == SHA1_ABC
