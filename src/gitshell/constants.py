"""gitshell constants.

Single source of truth for executable locations, exit-status conventions
and the markers git prints in its porcelain-for-humans output.
"""

from __future__ import annotations

# =============================================================================
# Executable Location
# =============================================================================

#: Conventional absolute location of the git executable
DEFAULT_GIT_PATH: str = "/usr/bin/git"

#: Bare command name resolved through PATH when DEFAULT_GIT_PATH is missing
FALLBACK_GIT_COMMAND: str = "git"

#: Exit status shells and the runner report for a missing executable
COMMAND_NOT_FOUND_EXIT_CODE: int = 127

#: Exit status reported when the executable exists but cannot be run
PERMISSION_DENIED_EXIT_CODE: int = 126

#: Seconds allowed for the "is git runnable" check
RUNNABLE_CHECK_TIMEOUT: float = 5.0

# =============================================================================
# Output Handling
# =============================================================================

#: Default number of captured outputs kept per repository handle
DEFAULT_OUTPUT_HISTORY: int = 32

#: Prefix `git branch` puts in front of the checked-out branch
ACTIVE_BRANCH_MARKER: str = "*"

#: Marker plus separator stripped from the active branch entry
ACTIVE_BRANCH_PREFIX: str = "* "

#: Prefix git puts on branches checked out in another linked worktree
LINKED_WORKTREE_PREFIX: str = "+ "

#: Fragment of the symbolic remote HEAD line in `git branch -r`
REMOTE_HEAD_ALIAS: str = "HEAD -> "

# =============================================================================
# Repository Layout
# =============================================================================

#: Worktree metadata entry (directory, or pointer file for linked worktrees)
GIT_DIR_NAME: str = ".git"

#: Configuration file at the root of a bare repository
BARE_CONFIG_NAME: str = "config"

#: Description file inside the metadata directory
DESCRIPTION_FILE_NAME: str = "description"

#: Prefix of the pointer line in a linked worktree's `.git` file
GITDIR_POINTER_PREFIX: str = "gitdir:"

#: Spellings git accepts as a true boolean config value
GIT_TRUE_VALUES: frozenset[str] = frozenset({"true", "yes", "on", "1"})
