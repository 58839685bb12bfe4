"""
Playbook Toolkit

List, describe and run a directory of Ansible playbooks by index, range or name.
"""

__version__ = "0.2.0"
__license__ = "MIT"

from playbook_toolkit.playbook.index import PlaybookIndex, enumerate_playbooks
from playbook_toolkit.playbook.loader import PlaybookLoader
from playbook_toolkit.playbook.runner import PlaybookRunner
from playbook_toolkit.playbook.selector import resolve, resolve_with_env

__all__ = [
    "PlaybookIndex",
    "PlaybookLoader",
    "PlaybookRunner",
    "enumerate_playbooks",
    "resolve",
    "resolve_with_env",
]
