"""Subprocess-based repository operations for gitshell.

This module provides a repository handle that drives the ``git`` executable:
every operation builds an argument list, runs it in the repository root, and
post-processes the captured standard output.

Key features:
- Argument lists only; nothing is ever interpreted by a shell
- Bare and worktree repositories, including linked worktrees
- Per-handle environment overrides and a bounded history of captured output
- Optional per-command timeout and opt-in retries for network operations
- Both sync and async APIs (async via asyncio.to_thread)

Example:
    ```python
    from gitshell.git import AsyncGitRepository, GitRepository

    # Sync usage
    repo = GitRepository.create_new("/srv/project")
    repo.add(["README.md"])
    repo.commit("Initial commit")
    print(repo.active_branch())

    # Async usage
    async_repo = AsyncGitRepository("/srv/project")
    await async_repo.commit("Update docs")
    ```
"""

from __future__ import annotations

import asyncio
import re
import threading
from collections import deque
from collections.abc import Sequence
from pathlib import Path

from gitshell.binary import GitBinary
from gitshell.config import GitShellConfig, load_config
from gitshell.constants import (
    ACTIVE_BRANCH_MARKER,
    ACTIVE_BRANCH_PREFIX,
    COMMAND_NOT_FOUND_EXIT_CODE,
    GIT_DIR_NAME,
    LINKED_WORKTREE_PREFIX,
    REMOTE_HEAD_ALIAS,
)
from gitshell.exceptions import (
    AlreadyARepositoryError,
    BranchExistsError,
    CheckoutConflictError,
    GitCommandError,
    GitNotFoundError,
    GitTimeoutError,
    InvalidPathError,
    InvalidReferenceError,
    MergeConflictError,
    NotARepositoryError,
    NothingToCommitError,
    PushRejectedError,
)
from gitshell.git.metadata import (
    has_worktree_metadata,
    is_bare_repository,
    read_description,
    resolve_git_dir,
    write_description,
)
from gitshell.logging import bound_context, get_logger
from gitshell.runners.command import CommandRunner
from gitshell.runners.models import CommandResult

logger = get_logger(__name__)

__all__ = [
    "AsyncGitRepository",
    "GitRepository",
    "is_recoverable_error",
]

# =============================================================================
# Constants
# =============================================================================

#: Branch name validation pattern
_INVALID_BRANCH_CHARS = re.compile(r"[~^: ?*\[\]\\]")

#: Subcommands that talk to a remote and may be retried
NETWORK_OPERATIONS: frozenset[str] = frozenset({"clone", "fetch", "pull", "push"})

#: Patterns indicating recoverable errors
RECOVERABLE_ERROR_PATTERNS: tuple[str, ...] = (
    "dirty",
    "uncommitted changes",
    "not staged",
    "pre-commit hook",
    "hook failed",
    "lock file",
    "unable to create",
    ".git/index.lock",
    "cannot lock ref",
)

#: Patterns git prints when a commit finds nothing to record
_NOTHING_TO_COMMIT_PATTERNS: tuple[str, ...] = (
    "nothing to commit",
    "nothing added to commit",
    "no changes added to commit",
)


# =============================================================================
# Helper Functions
# =============================================================================


def _validate_branch_name(name: str) -> None:
    """Validate branch name according to git ref rules.

    Raises:
        ValueError: If branch name is invalid.
    """
    if not name or name.isspace():
        raise ValueError("Branch name cannot be empty")
    if name.startswith("-") or name.endswith("."):
        raise ValueError(f"Invalid branch name: {name}")
    if _INVALID_BRANCH_CHARS.search(name):
        raise ValueError(f"Branch name contains invalid characters: {name}")
    if ".." in name or name.endswith(".lock"):
        raise ValueError(f"Invalid branch name: {name}")


def _validate_ref(value: str, kind: str = "ref") -> None:
    """Reject values git would parse as an option instead of a name.

    Raises:
        ValueError: If the value is blank or starts with "-".
    """
    if not value or value.isspace():
        raise ValueError(f"{kind.capitalize()} cannot be empty")
    if value.startswith("-"):
        raise ValueError(f"Invalid {kind}: {value}")


def _validate_remote_and_branch(remote: str, branch: str | None) -> None:
    _validate_ref(remote, "remote")
    if branch:
        _validate_ref(branch, "branch")


def is_recoverable_error(error_message: str) -> bool:
    """Check if a git error is potentially recoverable.

    Args:
        error_message: Error message from git command.

    Returns:
        True if the error might be recoverable with retry or cleanup.
    """
    error_lower = error_message.lower()
    return any(pattern in error_lower for pattern in RECOVERABLE_ERROR_PATTERNS)


def _convert_command_error(result: CommandResult, operation: str | None) -> GitCommandError:
    """Convert a failed CommandResult to the matching gitshell exception.

    The message is stderr followed by stdout, because git splits its
    diagnostics between the two streams.
    """
    message = f"{result.stderr}\n{result.stdout}"
    text_lower = message.lower()
    kwargs = {
        "command": result.command,
        "returncode": result.returncode,
        "stdout": result.stdout,
        "stderr": result.stderr,
        "operation": operation,
    }

    if operation == "commit" and any(
        pattern in text_lower for pattern in _NOTHING_TO_COMMIT_PATTERNS
    ):
        return NothingToCommitError(message, **kwargs)

    if operation == "branch" and "already exists" in text_lower:
        return BranchExistsError(message, **kwargs)

    checkout_conflict = (
        "would be overwritten" in text_lower
        or "overwritten by checkout" in text_lower
    )
    if checkout_conflict:
        return CheckoutConflictError(message, recoverable=True, **kwargs)

    if operation == "push" and ("rejected" in text_lower or "failed to push" in text_lower):
        return PushRejectedError(message, recoverable=True, **kwargs)

    if operation in ("merge", "pull") and "conflict" in text_lower:
        return MergeConflictError(message, recoverable=True, **kwargs)

    return GitCommandError(message, recoverable=is_recoverable_error(message), **kwargs)


def _as_paths(files: str | Path | Sequence[str | Path]) -> list[str]:
    """Normalize a single path or a sequence of paths to argument strings."""
    if isinstance(files, (str, Path)):
        paths = [str(files)]
    else:
        paths = [str(f) for f in files]
    if not paths:
        raise ValueError("At least one path is required")
    return paths


def _clean_lines(output: str) -> list[str]:
    """Split output into trimmed, non-blank lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]


# =============================================================================
# Main Class: GitRepository
# =============================================================================


class GitRepository:
    """Handle on a bare or worktree repository that shells out to git.

    Thread-safe: command execution, the environment overrides and the output
    history are guarded by one re-entrant lock.

    Example:
        ```python
        repo = GitRepository("/path/to/repo")
        repo.setenv("GIT_AUTHOR_NAME", "Release Bot")
        repo.create_branch("feature-x")
        repo.checkout("feature-x")
        repo.commit("Add feature")
        repo.push("origin", "feature-x")
        ```
    """

    def __init__(
        self,
        path: Path | str,
        *,
        create_new: bool = False,
        init: bool = True,
        binary: GitBinary | None = None,
        config: GitShellConfig | None = None,
    ) -> None:
        """Initialize GitRepository.

        Args:
            path: Repository root.
            create_new: Allow turning a plain or missing directory into a
                repository.
            init: Run ``git init`` when a new repository root is claimed.
            binary: Executable locator. Defaults to one built from config.
            config: Shared settings. Defaults to environment/YAML settings.

        Raises:
            InvalidPathError: If the path is missing, is not a directory, or
                its parent does not exist when creating.
            NotARepositoryError: If the directory holds no repository and
                creation was not requested.
            ConfigError: If no config is given and the loaded settings are
                invalid.
        """
        self._config = config if config is not None else load_config()
        self._binary = binary if binary is not None else GitBinary.from_config(self._config)
        self._runner = CommandRunner(timeout=self._config.timeout)
        self._env: dict[str, str] = dict(self._config.env)
        self._history: deque[str] = deque(maxlen=self._config.output_history)
        self._lock = threading.RLock()
        self._bare = False
        self._path = Path()

        self._set_repo_path(Path(path).expanduser(), create_new=create_new, init=init)

    def _set_repo_path(self, requested: Path, *, create_new: bool, init: bool) -> None:
        """Validate the requested location and bind the handle to it."""
        if requested.exists():
            resolved = requested.resolve()
            if not resolved.is_dir():
                raise InvalidPathError(f'"{resolved}" is not a directory', path=resolved)

            if has_worktree_metadata(resolved):
                self._path = resolved
                self._bare = False
            elif is_bare_repository(resolved):
                self._path = resolved
                self._bare = True
            elif create_new:
                self._path = resolved
                if init:
                    self.run("init")
            else:
                raise NotARepositoryError(
                    f'"{resolved}" is not a git repository',
                    path=resolved,
                )
            logger.debug("repository_opened", path=str(self._path), bare=self._bare)
            return

        if not create_new:
            raise InvalidPathError(f'"{requested}" does not exist', path=requested)

        parent = requested.absolute().parent
        if not parent.is_dir():
            raise InvalidPathError(
                "cannot create repository in non-existent directory",
                path=requested,
            )

        target = parent.resolve() / requested.name
        target.mkdir()
        self._path = target
        if init:
            self.run("init")
        logger.info("repository_created", path=str(self._path))

    @classmethod
    def create_new(
        cls,
        path: Path | str,
        source: str | Path | None = None,
        remote_source: bool = False,
        reference: Path | str | None = None,
        *,
        binary: GitBinary | None = None,
        config: GitShellConfig | None = None,
    ) -> GitRepository:
        """Create a repository by initializing it or cloning into it.

        Args:
            path: Location of the new repository.
            source: Repository to clone from. None runs ``git init``.
            remote_source: Clone ``source`` as a remote URL instead of a
                local directory (``clone --local``).
            reference: Local repository passed as ``--reference`` to a
                remote clone. Must itself be a worktree repository.
            binary: Executable locator.
            config: Shared settings.

        Returns:
            Handle on the new repository.

        Raises:
            AlreadyARepositoryError: If ``path`` already holds a worktree.
            InvalidReferenceError: If ``reference`` is not a repository. No
                directory is created and no clone is attempted.
            GitCommandError: If ``git init`` or ``git clone`` fails.
        """
        target = Path(path).expanduser()
        if target.is_dir() and has_worktree_metadata(target):
            raise AlreadyARepositoryError(
                f'"{target}" is already a git repository',
                path=target,
            )

        reference_path: Path | None = None
        if source and remote_source and reference is not None:
            candidate = Path(reference).expanduser()
            if (
                not str(reference)
                or not candidate.is_dir()
                or not (candidate / GIT_DIR_NAME).is_dir()
            ):
                raise InvalidReferenceError(
                    f'"{reference}" is not a git repository. Cannot use as reference.',
                    reference=reference,
                )
            reference_path = candidate.resolve()

        repo = cls(target, create_new=True, init=False, binary=binary, config=config)
        if source:
            if remote_source:
                repo.clone_remote(str(source), reference_path)
            else:
                repo.clone_from(source)
        else:
            repo.run("init")
        return repo

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """Absolute path to the repository root."""
        return self._path

    @property
    def bare(self) -> bool:
        """True for a bare repository, False for a worktree."""
        return self._bare

    @property
    def binary(self) -> GitBinary:
        """Executable locator used by this handle."""
        return self._binary

    @property
    def env(self) -> dict[str, str]:
        """Copy of the environment overrides applied to every command."""
        with self._lock:
            return dict(self._env)

    @property
    def output_history(self) -> tuple[str, ...]:
        """Captured stdout of recent successful commands, oldest first.

        Holds at most ``GitShellConfig.output_history`` entries; older ones
        are discarded.
        """
        with self._lock:
            return tuple(self._history)

    @property
    def last_output_text(self) -> str:
        """Captured stdout of the most recent successful command, or ""."""
        with self._lock:
            return self._history[-1] if self._history else ""

    @property
    def last_output(self) -> list[str]:
        """Most recent captured stdout split into lines."""
        return self.last_output_text.splitlines()

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def setenv(self, key: str, value: str) -> None:
        """Set an environment variable for every later git invocation."""
        with self._lock:
            self._env[key] = value

    def test_git(self) -> bool:
        """Check that the configured git executable can be spawned."""
        return self._binary.is_runnable()

    def run(self, *args: str, timeout: float | None = None) -> bool:
        """Run a git subcommand in the repository root.

        Args:
            *args: Subcommand and its arguments, e.g. ``run("status", "-s")``.
            timeout: Seconds before the command is killed. Defaults to
                ``GitShellConfig.timeout``.

        Returns:
            True once the command exited with status 0.

        Raises:
            GitCommandError: If git exits with a non-zero status.
            GitTimeoutError: If the timeout expires.
            GitNotFoundError: If the executable cannot be spawned.
        """
        self._execute(args, timeout=timeout)
        return True

    def _execute(self, args: Sequence[str], *, timeout: float | None = None) -> str:
        """Run git and return its captured stdout.

        The stdout of a successful run is also appended to the output
        history. Failed runs leave the history untouched.
        """
        command = [self._binary.resolve(), *args]
        operation = args[0] if args else None
        max_retries = self._config.network_retries if operation in NETWORK_OPERATIONS else 0

        with self._lock, bound_context(repo=str(self._path), operation=operation):
            logger.debug("git_command_started", args=list(args))
            result = self._runner.run(
                command,
                cwd=self._path,
                timeout=timeout,
                env=self._env,
                max_retries=max_retries,
            )

            if result.timed_out:
                effective_timeout = timeout if timeout is not None else self._config.timeout
                logger.warning(
                    "git_command_timed_out",
                    args=list(args),
                    timeout=effective_timeout,
                )
                raise GitTimeoutError(
                    f"git {operation} timed out after {effective_timeout}s",
                    command=result.command,
                    timeout_seconds=effective_timeout,
                    operation=operation,
                )

            if result.returncode == COMMAND_NOT_FOUND_EXIT_CODE:
                raise GitNotFoundError(
                    f"Git CLI not found: {command[0]}",
                    binary=command[0],
                )

            if not result.success:
                logger.debug(
                    "git_command_failed",
                    args=list(args),
                    returncode=result.returncode,
                    duration_ms=result.duration_ms,
                )
                raise _convert_command_error(result, operation)

            self._history.append(result.stdout)
            return result.stdout

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def clone_remote(self, source: str, reference: Path | str | None = None) -> bool:
        """Clone a remote repository into this handle's directory.

        Args:
            source: URL or path of the remote.
            reference: Optional local repository to borrow objects from.
        """
        args = ["clone"]
        if reference is not None:
            args += ["--reference", str(reference)]
        args += ["--", source, str(self._path)]
        return self.run(*args)

    def clone_from(self, source: Path | str) -> bool:
        """Clone a local repository into this handle's directory."""
        return self.run("clone", "--local", "--", str(source), str(self._path))

    def clone_to(self, target: Path | str) -> bool:
        """Clone this repository into another local directory.

        A relative ``target`` is taken relative to the process working
        directory, not the repository root.
        """
        return self.run(
            "clone", "--local", "--", str(self._path), str(Path(target).absolute())
        )

    # -------------------------------------------------------------------------
    # Working Tree
    # -------------------------------------------------------------------------

    def status(self, html: bool = False) -> str:
        """Return the output of ``git status``.

        Args:
            html: Insert ``<br />`` before every line break.
        """
        message = "\n".join(self._execute(["status"]).splitlines())
        return message.replace("\n", "<br />\n") if html else message

    def add(self, files: str | Path | Sequence[str | Path] = "*") -> bool:
        """Stage files. A string is a single pathspec."""
        return self.run("add", "-v", "--", *_as_paths(files))

    def rm(
        self,
        files: str | Path | Sequence[str | Path] = "*",
        cached: bool = False,
    ) -> bool:
        """Remove files from the index, and from disk unless ``cached``."""
        args = ["rm"]
        if cached:
            args.append("--cached")
        return self.run(*args, "--", *_as_paths(files))

    def commit(self, message: str = "", commit_all: bool = True) -> bool:
        """Record a commit.

        Args:
            message: Commit message, passed as a single argument.
            commit_all: Stage modified tracked files first (``-a``).

        Raises:
            NothingToCommitError: If there is nothing to record.
        """
        flags = "-av" if commit_all else "-v"
        return self.run("commit", flags, "-m", message)

    def clean(self, dirs: bool = False, force: bool = False) -> bool:
        """Remove untracked files, and untracked directories with ``dirs``."""
        args = ["clean"]
        if force:
            args.append("-f")
        if dirs:
            args.append("-d")
        return self.run(*args)

    # -------------------------------------------------------------------------
    # Branch Management
    # -------------------------------------------------------------------------

    def create_branch(self, branch: str) -> bool:
        """Create a branch at HEAD without switching to it.

        Raises:
            ValueError: If branch name is invalid.
            BranchExistsError: If the branch already exists.
        """
        _validate_branch_name(branch)
        return self.run("branch", branch)

    def delete_branch(self, branch: str, force: bool = False) -> bool:
        """Delete a branch; ``force`` deletes it even when unmerged.

        Raises:
            ValueError: If branch is blank or starts with "-".
        """
        _validate_ref(branch, "branch")
        return self.run("branch", "-D" if force else "-d", branch)

    def list_branches(self, keep_asterisk: bool = False) -> list[str]:
        """List local branches.

        Args:
            keep_asterisk: Keep the ``* `` marker on the checked-out branch.
        """
        branches = [
            b.removeprefix(LINKED_WORKTREE_PREFIX)
            for b in _clean_lines(self._execute(["branch"]))
        ]
        if not keep_asterisk:
            branches = [b.removeprefix(ACTIVE_BRANCH_PREFIX) for b in branches]
        return branches

    def list_remote_branches(self) -> list[str]:
        """List remote-tracking branches, without the ``origin/HEAD -> ...`` alias."""
        return [
            branch
            for branch in _clean_lines(self._execute(["branch", "-r"]))
            if REMOTE_HEAD_ALIAS not in branch
        ]

    def active_branch(self, keep_asterisk: bool = False) -> str:
        """Return the checked-out branch.

        On an unborn branch ``git branch`` lists nothing, so the name is
        read from HEAD instead.

        Args:
            keep_asterisk: Return the entry with its ``* `` marker.
        """
        for branch in self.list_branches(keep_asterisk=True):
            if branch.startswith(ACTIVE_BRANCH_MARKER):
                return branch if keep_asterisk else branch.removeprefix(ACTIVE_BRANCH_PREFIX)

        name = self._execute(["symbolic-ref", "--short", "HEAD"]).strip()
        return f"{ACTIVE_BRANCH_PREFIX}{name}" if keep_asterisk else name

    def checkout(self, branch: str) -> bool:
        """Switch to a branch or other ref.

        Raises:
            ValueError: If branch is blank or starts with "-".
            CheckoutConflictError: If local changes would be overwritten.
        """
        _validate_ref(branch, "branch")
        return self.run("checkout", branch)

    def merge(self, branch: str) -> bool:
        """Merge a ref into the current branch, always creating a merge commit.

        Raises:
            ValueError: If branch is blank or starts with "-".
            MergeConflictError: If the merge stops on conflicts.
        """
        _validate_ref(branch, "branch")
        return self.run("merge", branch, "--no-ff")

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def add_tag(self, tag: str, message: str | None = None) -> bool:
        """Create an annotated tag at HEAD; the message defaults to the tag name."""
        _validate_ref(tag, "tag")
        return self.run("tag", "-a", tag, "-m", message if message is not None else tag)

    def list_tags(self, pattern: str | None = None) -> list[str]:
        """List tags, optionally only those matching a shell wildcard pattern."""
        args = ["tag", "-l"]
        if pattern:
            _validate_ref(pattern, "pattern")
            args.append(pattern)
        return _clean_lines(self._execute(args))

    # -------------------------------------------------------------------------
    # Remote Operations
    # -------------------------------------------------------------------------

    def fetch(self) -> bool:
        """Fetch from the default remote."""
        return self.run("fetch")

    def push(self, remote: str = "origin", branch: str | None = None) -> bool:
        """Push a branch, or let ``push.default`` decide when ``branch`` is None.

        Raises:
            PushRejectedError: If the remote rejects the push.
        """
        _validate_remote_and_branch(remote, branch)
        args = ["push", remote]
        if branch:
            args.append(branch)
        return self.run(*args)

    def pull(self, remote: str = "origin", branch: str | None = None) -> bool:
        """Pull a branch, or the configured upstream when ``branch`` is None.

        Raises:
            MergeConflictError: If the pull stops on conflicts.
        """
        _validate_remote_and_branch(remote, branch)
        args = ["pull", remote]
        if branch:
            args.append(branch)
        return self.run(*args)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def log(
        self,
        fmt: str | None = None,
        full_diff: bool = False,
        filepath: Path | str | None = None,
        follow: bool = False,
        return_string: bool = True,
    ) -> str | list[str]:
        """Return commit history.

        Args:
            fmt: Pretty format string (``--pretty=format:<fmt>``). None uses
                git's default format.
            full_diff: Include the full patch of each commit.
            filepath: Limit history to one path.
            follow: Follow renames of ``filepath``.
            return_string: Join lines into one string instead of a list.

        Raises:
            ValueError: If ``follow`` is combined with ``full_diff`` or used
                without ``filepath``.
        """
        if follow and full_diff:
            raise ValueError("follow cannot be combined with full_diff")
        if follow and filepath is None:
            raise ValueError("follow requires a filepath")

        args = ["log"]
        if fmt is not None:
            args.append(f"--pretty=format:{fmt}")
        if full_diff:
            args += ["--full-diff", "-p"]
        if follow:
            args.append("--follow")
        if filepath is not None:
            args += ["--", str(filepath)]

        lines = self._execute(args).splitlines()
        if return_string:
            return "\n".join(lines)
        return lines

    # -------------------------------------------------------------------------
    # Repository Metadata
    # -------------------------------------------------------------------------

    def git_directory_path(self) -> Path:
        """Return the metadata directory (the root of a bare repository).

        Raises:
            GitDirNotFoundError: If the metadata directory cannot be found.
        """
        return resolve_git_dir(self._path, bare=self._bare)

    def get_description(self) -> str:
        """Return the repository description verbatim."""
        return read_description(self.git_directory_path())

    def set_description(self, text: str) -> None:
        """Replace the repository description."""
        git_dir = self.git_directory_path()
        write_description(git_dir, text)
        logger.info("description_updated", path=str(git_dir))

    def __repr__(self) -> str:
        kind = "bare" if self._bare else "worktree"
        return f"GitRepository({str(self._path)!r}, {kind})"


# =============================================================================
# Async Wrapper
# =============================================================================


class AsyncGitRepository:
    """Async wrapper for GitRepository.

    Delegates all operations to a synchronous GitRepository running in
    a thread pool. Coroutines sharing one wrapper serialise on the
    underlying handle's lock.

    Example:
        ```python
        repo = await AsyncGitRepository.create_new("/path/to/new-repo")
        repo = AsyncGitRepository("/path/to/repo")
        branch = await repo.active_branch()
        await repo.commit("Add feature")
        await repo.push("origin", branch)
        ```
    """

    def __init__(
        self,
        repo: GitRepository | Path | str,
        *,
        binary: GitBinary | None = None,
        config: GitShellConfig | None = None,
    ) -> None:
        """Initialize AsyncGitRepository.

        Args:
            repo: An existing handle to wrap, or the path of an existing
                repository to open.
            binary: Executable locator, used only when opening a path.
            config: Shared settings, used only when opening a path.

        Raises:
            InvalidPathError: If path does not exist or is not a directory.
            NotARepositoryError: If path is not a git repository.
            ValueError: If a handle is given together with binary or config.
        """
        if isinstance(repo, GitRepository):
            if binary is not None or config is not None:
                raise ValueError("binary and config apply only when opening a path")
            self._sync = repo
        else:
            self._sync = GitRepository(repo, binary=binary, config=config)

    @classmethod
    def wrap(cls, repo: GitRepository) -> AsyncGitRepository:
        """Wrap an already constructed GitRepository."""
        return cls(repo)

    @classmethod
    async def create_new(
        cls,
        path: Path | str,
        source: str | Path | None = None,
        remote_source: bool = False,
        reference: Path | str | None = None,
        *,
        binary: GitBinary | None = None,
        config: GitShellConfig | None = None,
    ) -> AsyncGitRepository:
        """Create a repository off the event loop; see GitRepository.create_new."""
        repo = await asyncio.to_thread(
            GitRepository.create_new,
            path,
            source,
            remote_source,
            reference,
            binary=binary,
            config=config,
        )
        return cls(repo)

    @property
    def sync(self) -> GitRepository:
        """The wrapped synchronous handle."""
        return self._sync

    @property
    def path(self) -> Path:
        """Path to the repository root."""
        return self._sync.path

    @property
    def bare(self) -> bool:
        """True for a bare repository."""
        return self._sync.bare

    @property
    def env(self) -> dict[str, str]:
        """Copy of the environment overrides."""
        return self._sync.env

    @property
    def output_history(self) -> tuple[str, ...]:
        """Captured stdout of recent successful commands."""
        return self._sync.output_history

    @property
    def last_output(self) -> list[str]:
        """Most recent captured stdout split into lines."""
        return self._sync.last_output

    @property
    def last_output_text(self) -> str:
        """Most recent captured stdout."""
        return self._sync.last_output_text

    async def setenv(self, key: str, value: str) -> None:
        """Set an environment variable for later git invocations."""
        return await asyncio.to_thread(self._sync.setenv, key, value)

    async def clone_remote(self, source: str, reference: Path | str | None = None) -> bool:
        """Clone a remote repository into this handle's directory."""
        return await asyncio.to_thread(self._sync.clone_remote, source, reference)

    async def clone_from(self, source: Path | str) -> bool:
        """Clone a local repository into this handle's directory."""
        return await asyncio.to_thread(self._sync.clone_from, source)

    async def git_directory_path(self) -> Path:
        """Return the metadata directory."""
        return await asyncio.to_thread(self._sync.git_directory_path)

    async def run(self, *args: str, timeout: float | None = None) -> bool:
        """Run a git subcommand."""
        return await asyncio.to_thread(self._sync.run, *args, timeout=timeout)

    async def status(self, html: bool = False) -> str:
        """Return the output of ``git status``."""
        return await asyncio.to_thread(self._sync.status, html)

    async def add(self, files: str | Path | Sequence[str | Path] = "*") -> bool:
        """Stage files."""
        return await asyncio.to_thread(self._sync.add, files)

    async def rm(
        self,
        files: str | Path | Sequence[str | Path] = "*",
        cached: bool = False,
    ) -> bool:
        """Remove files."""
        return await asyncio.to_thread(self._sync.rm, files, cached)

    async def commit(self, message: str = "", commit_all: bool = True) -> bool:
        """Record a commit."""
        return await asyncio.to_thread(self._sync.commit, message, commit_all)

    async def clean(self, dirs: bool = False, force: bool = False) -> bool:
        """Remove untracked files."""
        return await asyncio.to_thread(self._sync.clean, dirs, force)

    async def clone_to(self, target: Path | str) -> bool:
        """Clone this repository into another local directory."""
        return await asyncio.to_thread(self._sync.clone_to, target)

    async def create_branch(self, branch: str) -> bool:
        """Create a branch."""
        return await asyncio.to_thread(self._sync.create_branch, branch)

    async def delete_branch(self, branch: str, force: bool = False) -> bool:
        """Delete a branch."""
        return await asyncio.to_thread(self._sync.delete_branch, branch, force)

    async def list_branches(self, keep_asterisk: bool = False) -> list[str]:
        """List local branches."""
        return await asyncio.to_thread(self._sync.list_branches, keep_asterisk)

    async def list_remote_branches(self) -> list[str]:
        """List remote-tracking branches."""
        return await asyncio.to_thread(self._sync.list_remote_branches)

    async def active_branch(self, keep_asterisk: bool = False) -> str:
        """Return the checked-out branch."""
        return await asyncio.to_thread(self._sync.active_branch, keep_asterisk)

    async def checkout(self, branch: str) -> bool:
        """Switch to a branch or other ref."""
        return await asyncio.to_thread(self._sync.checkout, branch)

    async def merge(self, branch: str) -> bool:
        """Merge a ref into the current branch."""
        return await asyncio.to_thread(self._sync.merge, branch)

    async def add_tag(self, tag: str, message: str | None = None) -> bool:
        """Create an annotated tag."""
        return await asyncio.to_thread(self._sync.add_tag, tag, message)

    async def list_tags(self, pattern: str | None = None) -> list[str]:
        """List tags."""
        return await asyncio.to_thread(self._sync.list_tags, pattern)

    async def fetch(self) -> bool:
        """Fetch from the default remote."""
        return await asyncio.to_thread(self._sync.fetch)

    async def push(self, remote: str = "origin", branch: str | None = None) -> bool:
        """Push to a remote."""
        return await asyncio.to_thread(self._sync.push, remote, branch)

    async def pull(self, remote: str = "origin", branch: str | None = None) -> bool:
        """Pull from a remote."""
        return await asyncio.to_thread(self._sync.pull, remote, branch)

    async def log(
        self,
        fmt: str | None = None,
        full_diff: bool = False,
        filepath: Path | str | None = None,
        follow: bool = False,
        return_string: bool = True,
    ) -> str | list[str]:
        """Return commit history."""
        return await asyncio.to_thread(
            self._sync.log, fmt, full_diff, filepath, follow, return_string
        )

    async def get_description(self) -> str:
        """Return the repository description."""
        return await asyncio.to_thread(self._sync.get_description)

    async def set_description(self, text: str) -> None:
        """Replace the repository description."""
        return await asyncio.to_thread(self._sync.set_description, text)

    async def test_git(self) -> bool:
        """Check that the git executable can be spawned."""
        return await asyncio.to_thread(self._sync.test_git)
