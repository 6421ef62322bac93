"""Unit tests for options resolution."""

import os
from pathlib import Path

import pytest
from leave.core.errors import EnvironmentSetupError, ErrorKind
from leave.pruning.resolver import build_run_config, resolve_working_directory


class TestResolveWorkingDirectory:
    """Tests for resolve_working_directory."""

    def test_defaults_to_base(self, tmp_path: Path) -> None:
        """Without an override the base directory is used."""
        assert resolve_working_directory(base=tmp_path) == tmp_path.resolve()

    def test_defaults_to_process_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without override and base the process cwd is used."""
        monkeypatch.chdir(tmp_path)
        assert resolve_working_directory() == tmp_path.resolve()

    def test_relative_override(self, tmp_path: Path) -> None:
        """A relative override is resolved against the base."""
        (tmp_path / "sub").mkdir()
        assert resolve_working_directory(Path("sub"), base=tmp_path) == (tmp_path / "sub").resolve()

    def test_absolute_override(self, tmp_path: Path) -> None:
        """An absolute override ignores the base."""
        target = tmp_path / "sub"
        target.mkdir()
        assert resolve_working_directory(target, base=Path("/")) == target.resolve()

    def test_symlinks_resolved(self, tmp_path: Path) -> None:
        """The resolved directory has symlinks resolved."""
        real = tmp_path / "real"
        real.mkdir()
        (tmp_path / "link").symlink_to(real)

        assert resolve_working_directory(Path("link"), base=tmp_path) == real.resolve()

    def test_does_not_change_process_cwd(self, tmp_path: Path) -> None:
        """Resolution never calls chdir."""
        (tmp_path / "sub").mkdir()
        before = os.getcwd()

        resolve_working_directory(Path("sub"), base=tmp_path)

        assert os.getcwd() == before

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A nonexistent directory is an environment error."""
        with pytest.raises(EnvironmentSetupError) as exc_info:
            resolve_working_directory(Path("nope"), base=tmp_path)

        error = exc_info.value
        assert error.kind == ErrorKind.ENVIRONMENT
        assert str(error) == "Can't chdir into nope: No such file or directory"

    def test_file_is_not_a_directory(self, tmp_path: Path) -> None:
        """A regular file cannot be the working directory."""
        (tmp_path / "file").write_text("")

        with pytest.raises(EnvironmentSetupError, match="Not a directory"):
            resolve_working_directory(Path("file"), base=tmp_path)

    @pytest.mark.skipif(os.geteuid() == 0, reason="root bypasses permission checks")
    def test_unsearchable_directory(self, tmp_path: Path) -> None:
        """A directory without search permission is rejected."""
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o600)
        try:
            with pytest.raises(EnvironmentSetupError, match="Permission denied"):
                resolve_working_directory(Path("locked"), base=tmp_path)
        finally:
            locked.chmod(0o700)


class TestBuildRunConfig:
    """Tests for build_run_config."""

    def test_builds_frozen_config(self, tmp_path: Path) -> None:
        """Options are carried over and targets kept as given."""
        config = build_run_config(
            ["./a", Path("b")],
            base=tmp_path,
            recursive=True,
            allow_empty_dir_deletion=True,
            force=True,
            dry_run=True,
        )

        assert config.working_directory == tmp_path.resolve()
        assert config.targets == ("./a", "b")
        assert config.recursive is True
        assert config.allow_empty_dir_deletion is True
        assert config.force is True
        assert config.dry_run is True

    def test_bad_chdir_raises(self, tmp_path: Path) -> None:
        """A bad override fails before any config is built."""
        with pytest.raises(EnvironmentSetupError):
            build_run_config(["a"], chdir=Path("missing"), base=tmp_path)
