"""
Shared fixtures for playbook toolkit tests
"""

import stat
import sys
from pathlib import Path

import pytest

PLAYBOOK_FILES = {
    "backup.yaml": """
- name: Backup databases
  hosts: db
  vars:
    target: "{{ backup_target }}"
    retention: 7
""",
    "deploy.yaml": """
- name: Deploy application
  hosts: web
  vars:
    release: "{{ release_tag }}"
    region: "{{ region }}"
    strategy: rolling
""",
    "install-nginx.yaml": """
- name: Install nginx
  hosts: web
""",
    "patch.yaml": """
- name: Patch hosts
  hosts: all
""",
    "restart.yaml": """
- name: Restart services
  hosts: all
""",
    "upgrade.yaml": """
- name: Upgrade packages
  hosts: all
""",
}

FAKE_ENGINE = """#!/bin/sh
# Stand-in for ansible-playbook: -i <inventory> <playbook> [-e KEY=VALUE]...
echo "playbook $3"
for arg in "$@"; do
  case "$arg" in
    "-e "*) echo "extra $arg" ;;
  esac
done
echo "warning from $3" >&2
case "$(basename "$3")" in
  *fail*) exit 1 ;;
esac
exit 0
"""

SETTINGS_ENV_VARS = ["PLAYBOOK_DIR", "INVENTORY_DIR", "VERBOSE", "PLAYBOOK_COMMAND", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run each test from an empty directory with no settings cached"""
    from playbook_toolkit.core import config

    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in PLAYBOOK_FILES:
        monkeypatch.delenv(name, raising=False)

    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(config, "_settings", None)


@pytest.fixture
def playbook_dir(tmp_path) -> Path:
    """Directory with six playbooks plus files that must be ignored"""
    directory = tmp_path / "playbooks"
    directory.mkdir()
    for name, content in PLAYBOOK_FILES.items():
        (directory / name).write_text(content)
    (directory / "README.md").write_text("# not a playbook\n")
    (directory / "vars.yml").write_text("foo: bar\n")
    (directory / "roles.yaml").mkdir()
    return directory


@pytest.fixture
def fake_engine(tmp_path) -> Path:
    """Executable that echoes its arguments and fails for playbooks named *fail*"""
    if sys.platform == "win32":
        pytest.skip("fake engine is a POSIX shell script")
    engine = tmp_path / "fake-ansible-playbook"
    engine.write_text(FAKE_ENGINE)
    engine.chmod(engine.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return engine
