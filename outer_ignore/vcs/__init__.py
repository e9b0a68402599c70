from .command_runner import VcsCommandRunner, VcsRunError, VcsRunResult
from .git_ignore_support import GitIgnoreSupport
from .hg_ignore_support import MercurialIgnoreSupport, parse_ui_ignore_entries

__all__ = [
    "GitIgnoreSupport",
    "MercurialIgnoreSupport",
    "VcsCommandRunner",
    "VcsRunError",
    "VcsRunResult",
    "parse_ui_ignore_entries",
]
