"""
Tests for list, describe and run report formatting
"""

import pytest

from playbook_toolkit.playbook.exceptions import MissingNameFieldError
from playbook_toolkit.playbook.index import enumerate_playbooks
from playbook_toolkit.playbook.models import ExecutionOutcome, ExecutionStatus
from playbook_toolkit.playbook.reports import (
    DESCRIBE_RULE,
    format_describe,
    format_list,
    format_run_results,
)


class TestFormatList:
    """Tests for the list report"""

    def test_plain_list(self, playbook_dir):
        result = format_list(enumerate_playbooks(playbook_dir), playbook_dir)

        assert result.splitlines() == [
            "0: backup.yaml",
            "1: deploy.yaml",
            "2: install-nginx.yaml",
            "3: patch.yaml",
            "4: restart.yaml",
            "5: upgrade.yaml",
        ]

    def test_verbose_list_shows_names(self, playbook_dir):
        result = format_list(enumerate_playbooks(playbook_dir), playbook_dir, verbose=True)

        assert result.splitlines()[0] == "0: backup.yaml - Backup databases"
        assert result.splitlines()[2] == "2: install-nginx.yaml - Install nginx"

    def test_verbose_list_requires_names(self, playbook_dir):
        (playbook_dir / "unnamed.yaml").write_text("- hosts: all\n")

        with pytest.raises(MissingNameFieldError):
            format_list(enumerate_playbooks(playbook_dir), playbook_dir, verbose=True)


class TestFormatDescribe:
    """Tests for the describe report"""

    def test_summary_with_envs(self, playbook_dir):
        result = format_describe({1: "deploy.yaml"}, playbook_dir)

        assert result == "1: deploy.yaml - Deploy application Envs: release_tag, region\n"

    def test_summary_without_envs(self, playbook_dir):
        result = format_describe({3: "patch.yaml"}, playbook_dir)

        assert result == "3: patch.yaml - Patch hosts\n"

    def test_summary_sorted_by_ordinal(self, playbook_dir):
        result = format_describe({5: "upgrade.yaml", 0: "backup.yaml"}, playbook_dir)

        assert result.splitlines() == [
            "0: backup.yaml - Backup databases Envs: backup_target",
            "5: upgrade.yaml - Upgrade packages",
        ]

    def test_verbose_shows_contents(self, playbook_dir):
        result = format_describe({3: "patch.yaml"}, playbook_dir, verbose=True)

        contents = (playbook_dir / "patch.yaml").read_text()
        assert result == f"3: patch.yaml\n{DESCRIBE_RULE}\n{contents}"

    def test_verbose_adds_missing_newline(self, tmp_path):
        (tmp_path / "short.yaml").write_text("- name: x")

        result = format_describe({0: "short.yaml"}, tmp_path, verbose=True)

        assert result.endswith("- name: x\n")


class TestFormatRunResults:
    """Tests for the run report"""

    def test_success_and_failure_lines(self):
        outcomes = {
            2: ExecutionOutcome(2, "patch.yaml", ExecutionStatus.FAILED, 2),
            0: ExecutionOutcome(0, "backup.yaml", ExecutionStatus.SUCCEEDED, 0),
        }

        assert format_run_results(outcomes) == "0: backup.yaml - Success\n2: patch.yaml - Failed\n"

    def test_empty(self):
        assert format_run_results({}) == ""
