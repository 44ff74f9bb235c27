"""The ignorer: ordered exclude groups for one scan root."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from gitexclude.core.config import Config
from gitexclude.core.errors import PathResolutionError, SourceUnavailable
from gitexclude.core.group import ExcludeGroup, Verdict, PRECEDENCE_LAST
from gitexclude.core.pattern import CompiledPattern, ON_MALFORMED_SKIP
from gitexclude.utils.paths import PathLike, clean_base, is_within


@dataclass(frozen=True)
class IgnoreSource:
    """An ignore file to load, relative to the scan root."""
    path: str
    required: bool = True


DEFAULT_SOURCES = (
    IgnoreSource('.gitignore', required=True),
    IgnoreSource('.git/info/exclude', required=False),
)


class Ignorer:
    """
    Decides whether paths under a root are excluded.

    Groups are asked in the order they were added and the first one with an
    opinion (excluded or re-included) decides. A negation in one group
    never cancels an exclusion from another.
    """

    def __init__(self, root: PathLike, groups: Iterable[ExcludeGroup] = ()):
        """
        Initialize an ignorer.

        Args:
            root: Scan root; relative query paths are resolved against it
            groups: Exclude groups in evaluation order
        """
        self.root = clean_base(root)
        self.groups: List[ExcludeGroup] = list(groups)

    @classmethod
    def from_sources(cls, root: PathLike, sources: Sequence[IgnoreSource] = DEFAULT_SOURCES,
                     on_malformed: str = ON_MALFORMED_SKIP,
                     precedence: str = PRECEDENCE_LAST) -> 'Ignorer':
        """
        Load one exclude group per source, in order.

        Args:
            root: Scan root, also the base of every group
            sources: Ignore files relative to the root
            on_malformed: 'skip' or 'abort'
            precedence: 'last' or 'first'

        Raises:
            SourceUnavailable: If a required source cannot be read
        """
        ignorer = cls(root)

        for source in sources:
            try:
                ignorer.append_exclude_group(root, source.path, on_malformed, precedence)
            except SourceUnavailable:
                if source.required:
                    raise

        return ignorer

    def append_exclude_group(self, base_path: PathLike, file_path: str,
                             on_malformed: str = ON_MALFORMED_SKIP,
                             precedence: str = PRECEDENCE_LAST) -> ExcludeGroup:
        """
        Load an ignore file and append its group.

        The group list is unchanged if loading fails.
        """
        group = ExcludeGroup.from_file(base_path, file_path, on_malformed, precedence)
        self.groups.append(group)
        return group

    def add_group(self, group: ExcludeGroup) -> None:
        """Append an already-built group."""
        self.groups.append(group)

    def __len__(self) -> int:
        return len(self.groups)

    def __repr__(self) -> str:
        return f"Ignorer({self.root!r}, {len(self.groups)} groups)"

    def _absolute(self, path: PathLike) -> str:
        raw = os.fspath(path)
        if os.path.isabs(raw):
            return raw
        return os.path.join(self.root, raw)

    def explain(self, path: PathLike, is_dir: bool = False
                ) -> Optional[Tuple[ExcludeGroup, CompiledPattern]]:
        """
        Find the group and pattern that decide a path's verdict.

        Args:
            path: Absolute path, or path relative to the root
            is_dir: Whether the path is a directory

        Returns:
            (group, pattern), or None if no group has an opinion

        Raises:
            PathResolutionError: If no group's base contains the path
            PatternMatchError: If a glob is malformed
        """
        target = self._absolute(path)
        covered = False

        for group in self.groups:
            if not is_within(target, group.base_path):
                continue
            covered = True

            pattern = group.find_match(target, is_dir)
            if pattern is not None:
                return group, pattern

        if self.groups and not covered:
            raise PathResolutionError(os.fspath(path), self.root,
                                      "path is outside every exclude group")
        return None

    def verdict(self, path: PathLike, is_dir: bool = False) -> str:
        """Evaluate a path against every group; see :meth:`explain`."""
        decided = self.explain(path, is_dir)
        if decided is None:
            return Verdict.NO_OPINION
        _, pattern = decided
        return Verdict.INCLUDED if pattern.negated else Verdict.EXCLUDED

    def match(self, path: PathLike, is_dir: bool = False) -> bool:
        """
        Check if a path should be ignored.

        Args:
            path: Absolute path, or path relative to the root
            is_dir: Whether the path is a directory

        Returns:
            True if the path is excluded
        """
        return self.verdict(path, is_dir) == Verdict.EXCLUDED

    def filter_paths(self, paths: Iterable[PathLike],
                     is_dir_func: Optional[Callable[[PathLike], bool]] = None) -> List[PathLike]:
        """
        Filter a list of paths, removing ignored ones.

        Args:
            paths: Paths to filter
            is_dir_func: Optional function to check if a path is a directory

        Returns:
            Paths that are not excluded, in input order
        """
        result = []
        for path in paths:
            is_dir = is_dir_func(path) if is_dir_func else False
            if not self.match(path, is_dir):
                result.append(path)
        return result


def new_ignorer(root: PathLike, config: Optional[Config] = None) -> Ignorer:
    """
    Create the default ignorer for a working tree.

    Sources and policies come from configuration; without any
    configuration this loads the root ``.gitignore`` (required) and
    ``.git/info/exclude`` (optional).

    Args:
        root: Working tree root
        config: Config to use; defaults to the root's config files

    Returns:
        Configured Ignorer instance

    Raises:
        SourceUnavailable: If a required ignore file is missing
        ConfigError: If the configuration is invalid
    """
    if config is None:
        config = Config.for_root(Path(root))

    return Ignorer.from_sources(
        root,
        config.sources(),
        on_malformed=config.on_malformed,
        precedence=config.precedence,
    )
