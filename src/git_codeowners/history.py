from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Sequence, TextIO

from .git import commit_changed_files, walk_commits
from .models import CommitInfo, OwnerStats, Settings, Summary
from .owners import Owner, format_owners
from .ownership import Ruleset
from .render import commit_label, detail_line, example_for, summary_lines

Resolver = Callable[[str], Sequence[Owner] | None]
ChangedFiles = Callable[[CommitInfo], Iterable[str]]
Emit = Callable[[str], None]


class HistoryAggregator:
    """
    Single-pass accumulator of per-owner statistics over a commit walk.

    Each owner display string gets one OwnerStats, created on first reference.
    A file counts as unowned when the resolver itself yields no owners; display
    filtering never moves a file into the unowned bucket.
    """

    def __init__(self, *, resolve: Resolver, settings: Settings, emit: Emit) -> None:
        self._resolve = resolve
        self._settings = settings
        self._emit = emit
        self._stats: dict[str, OwnerStats] = {}
        self._unowned = OwnerStats()
        self._finished = False

    def _stats_for(self, owner: str) -> OwnerStats:
        st = self._stats.get(owner)
        if st is None:
            st = OwnerStats()
            self._stats[owner] = st
        return st

    def add_commit(self, commit: CommitInfo, files: Iterable[str]) -> None:
        if self._finished:
            raise RuntimeError("aggregator already finished")
        label = commit_label(commit)
        self._emit(label)

        owners_in_commit: set[str] = set()
        for path in sorted(set(files)):
            resolved = self._resolve(path)
            shown = format_owners(resolved, self._settings)
            self._emit(detail_line(path, shown))
            example = example_for(path, label)
            if not resolved:
                self._unowned.files += 1
                self._unowned.note_example(example)
                continue
            for owner in shown:
                st = self._stats_for(owner)
                st.files += 1
                st.note_example(example)
                owners_in_commit.add(owner)

        for owner in owners_in_commit:
            self._stats[owner].commits += 1
        self._emit("")

    def finish(self) -> Summary:
        self._finished = True
        owners = tuple((name, self._stats[name]) for name in sorted(self._stats))
        return Summary(owners=owners, unowned=self._unowned)


def _writer(out: TextIO) -> Emit:
    def emit(line: str) -> None:
        out.write(line + "\n")

    return emit


def annotate_history(
    commits: Iterable[CommitInfo],
    changed: ChangedFiles,
    resolve: Resolver,
    settings: Settings,
    out: TextIO,
) -> Summary:
    emit = _writer(out)
    agg = HistoryAggregator(resolve=resolve, settings=settings, emit=emit)
    for commit in commits:
        agg.add_commit(commit, changed(commit))
    summary = agg.finish()
    for line in summary_lines(summary):
        emit(line)
    return summary


def annotate_log(repo: Path, revspecs: Sequence[str], ruleset: Ruleset, settings: Settings, out: TextIO) -> Summary:
    return annotate_history(
        walk_commits(repo, revspecs),
        lambda commit: commit_changed_files(repo, commit),
        ruleset.resolve,
        settings,
        out,
    )
