"""Unit tests for tree CLI commands.

Tests for the scratchctl tree list and scratchctl tree delete commands.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from scratchctl.cli.main import app
from scratchctl.tree.models import DeletionFailure, DeletionReport, EntryKind
from typer.testing import CliRunner

runner = CliRunner()


class TestTreeList:
    """Tests for the tree list command."""

    def test_table_output(self, sample_tree: Path) -> None:
        """Table output shows counts."""
        result = runner.invoke(app, ["tree", "list", str(sample_tree)])

        assert result.exit_code == 0
        assert "3 files, 4 directories" in result.output

    def test_json_output(self, sample_tree: Path) -> None:
        """JSON output lists directories in post-order with root last."""
        result = runner.invoke(app, ["tree", "list", str(sample_tree), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["root"] == str(sample_tree)
        assert len(data["files"]) == 3
        assert data["directories"][-1] == str(sample_tree)

    def test_no_follow(self, tmp_path: Path) -> None:
        """--no-follow lists links as files."""
        root = tmp_path / "root"
        root.mkdir()
        (root / "dangling").symlink_to(tmp_path / "nowhere")

        followed = runner.invoke(app, ["tree", "list", str(root), "-f", "json"])
        not_followed = runner.invoke(
            app, ["tree", "list", str(root), "-f", "json", "--no-follow"]
        )

        assert json.loads(followed.output)["files"] == []
        assert json.loads(not_followed.output)["files"] == [str(root / "dangling")]

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing directory exits with an error."""
        result = runner.invoke(app, ["tree", "list", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Not a directory" in result.output


class TestTreeDelete:
    """Tests for the tree delete command."""

    def test_delete_with_yes(self, sample_tree: Path) -> None:
        """--yes deletes without prompting."""
        result = runner.invoke(app, ["tree", "delete", str(sample_tree), "--yes"])

        assert result.exit_code == 0
        assert "Deleted 3 files and 4 directories." in result.output
        assert not sample_tree.exists()

    def test_keep_root(self, sample_tree: Path) -> None:
        """--keep-root empties the directory."""
        result = runner.invoke(app, ["tree", "delete", str(sample_tree), "-y", "--keep-root"])

        assert result.exit_code == 0
        assert sample_tree.is_dir()
        assert list(sample_tree.iterdir()) == []

    def test_dry_run(self, sample_tree: Path) -> None:
        """--dry-run reports the plan and deletes nothing."""
        result = runner.invoke(app, ["tree", "delete", str(sample_tree), "--dry-run"])

        assert result.exit_code == 0
        assert "Dry-run: 3 files and 4 directories" in result.output
        assert (sample_tree / "a.txt").exists()

    def test_confirmation_declined(self, sample_tree: Path) -> None:
        """Declining the prompt aborts."""
        result = runner.invoke(app, ["tree", "delete", str(sample_tree)], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert sample_tree.exists()

    def test_confirmation_accepted(self, sample_tree: Path) -> None:
        """Accepting the prompt deletes."""
        result = runner.invoke(app, ["tree", "delete", str(sample_tree)], input="y\n")

        assert result.exit_code == 0
        assert not sample_tree.exists()

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path is nothing to do."""
        result = runner.invoke(app, ["tree", "delete", str(tmp_path / "missing"), "-y"])

        assert result.exit_code == 0
        assert "Nothing to delete" in result.output

    def test_file_path(self, tmp_path: Path) -> None:
        """A regular file is not a tree."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        result = runner.invoke(app, ["tree", "delete", str(target), "-y"])

        assert result.exit_code == 1
        assert target.exists()

    def test_invalid_workers(self, sample_tree: Path) -> None:
        """Zero workers is rejected by option validation."""
        result = runner.invoke(app, ["tree", "delete", str(sample_tree), "-y", "-w", "0"])

        assert result.exit_code == 2
        assert sample_tree.exists()

    @patch("scratchctl.cli.commands.tree.TreeDeleter")
    def test_failures_exit_nonzero(
        self, mock_deleter_cls: MagicMock, sample_tree: Path
    ) -> None:
        """Partial failures are listed and exit 1."""
        failure = DeletionFailure(path=sample_tree / "a.txt", kind=EntryKind.FILE, error="denied")
        mock_deleter_cls.return_value.delete.return_value = DeletionReport(
            root=sample_tree,
            files_deleted=2,
            directories_deleted=3,
            failures=(failure,),
        )

        result = runner.invoke(app, ["tree", "delete", str(sample_tree), "-y", "-w", "2"])

        assert result.exit_code == 1
        assert "Deletion Failures" in result.output
        assert "1 failed" in result.output
        mock_deleter_cls.assert_called_once_with(2, dry_run=False)
