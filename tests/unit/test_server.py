"""Unit tests for the MCP server tools in main.py.

The tool functions are called directly; FastMCP registration leaves
them as plain callables.
"""

import json
from datetime import datetime, timezone

import pytest

import main


@pytest.fixture
def repo(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    notes = tmp_path / "notes"
    notes.mkdir()
    monkeypatch.setattr("featuresync.workflow.run_command", lambda command, cwd: None)
    monkeypatch.setattr(main.SETTINGS, "notes_dir", "notes")
    return tmp_path


class TestListFeatureCandidates:
    """Test cases for the list_feature_candidates tool."""

    def test_reports_candidates_and_inference(self, repo):
        """Test candidates and the inferred file are returned."""
        (repo / "notes" / "journal.md").write_text("# Journal\n")
        (repo / "notes" / "roadmap.md").write_text("# Roadmap\n")

        result = main.list_feature_candidates(root=str(repo))

        assert result["notes_dir_exists"] is True
        assert {c["file"] for c in result["candidates"]} == {"journal.md", "roadmap.md"}
        assert result["inferred"] == "roadmap.md"

    def test_missing_notes_directory(self, tmp_path):
        """Test an absent notes directory is reported, not raised."""
        (tmp_path / ".git").mkdir()

        result = main.list_feature_candidates(root=str(tmp_path))

        assert result["notes_dir_exists"] is False
        assert result["candidates"] == []
        assert result["inferred"] is None

    def test_unknown_root(self, tmp_path):
        """Test a non-existent root is rejected."""
        with pytest.raises(ValueError, match="does not exist"):
            main.list_feature_candidates(root=str(tmp_path / "missing"))


class TestSyncFeature:
    """Test cases for the sync_feature tool."""

    def test_named_file(self, repo):
        """Test syncing an explicit file."""
        path = repo / "notes" / "plan.md"
        path.write_text("# Plan\n- [ ] ship\n")

        result = main.sync_feature(feature_file="plan", root=str(repo))

        assert result["status"] == "updated"
        assert result["message"].startswith("Updated feature file:")
        assert "- Branch: n/a" in path.read_text()

    def test_inference_requires_acceptance(self, repo):
        """Test inference without acceptance is an error result."""
        (repo / "notes" / "plan.md").write_text("# Plan\n")

        result = main.sync_feature(root=str(repo))

        assert result["error"] == "Aborted. Provide a file name. Candidates:"
        assert result["exit_code"] == 1
        assert result["candidates"] == ["plan.md"]
        assert "suggestion" in result

    def test_accepted_inference(self, repo):
        """Test accept_inferred answers the confirmation."""
        path = repo / "notes" / "plan.md"
        path.write_text("# Plan\n")

        result = main.sync_feature(accept_inferred=True, root=str(repo))

        assert result["status"] == "updated"
        assert "## Progress" in path.read_text()

    def test_duplicate(self, repo, monkeypatch):
        """Test a second call in the same window reports a duplicate."""
        monkeypatch.setattr("featuresync.workflow._utc_now", lambda: datetime(2024, 3, 9, 14, 5, 7, tzinfo=timezone.utc))
        (repo / "notes" / "plan.md").write_text("# Plan\n")
        main.sync_feature(feature_file="plan", root=str(repo))

        result = main.sync_feature(feature_file="plan", root=str(repo))

        assert result["status"] == "duplicate"
        assert result["message"] == "Similar block detected; not adding duplicate."

    def test_not_found(self, repo):
        """Test a missing file is an error result."""
        result = main.sync_feature(feature_file="missing", root=str(repo))

        assert result == {"error": "Specified feature file not found: missing.md", "exit_code": 1}


class TestInfoTools:
    """Test cases for project_info, diagnostics and the candidates resource."""

    def test_project_info(self, tmp_path):
        """Test project metadata for an explicit workspace."""
        (tmp_path / "package.json").write_text(json.dumps({"name": "demo", "version": "1.0.0"}))

        result = main.project_info(workspace=str(tmp_path))

        assert result["projectName"] == "demo"
        assert result["workspace"] == str(tmp_path)

    def test_diagnostics(self):
        """Test the diagnostic payload."""
        result = main.diagnostics()

        assert result["message"] == "Feature sync server is working"
        assert set(result["environment"]) == {"USER", "HOME", "WORKSPACE"}

    def test_candidates_resource(self, repo, monkeypatch):
        """Test the resource text lists candidates."""
        (repo / "notes" / "plan.md").write_text("# Plan\n")
        monkeypatch.chdir(repo)

        assert main.resource_candidates() == "Feature notes candidates\n- plan.md"
