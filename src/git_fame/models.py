from __future__ import annotations

import dataclasses

ORDER_KEYS = ("lines", "commits", "files")
FORMATS = ("tabular", "csv", "json", "json-lines")


@dataclasses.dataclass(frozen=True)
class AttributionRecord:
    name: str
    commit: str
    path: str
    counts_line: bool = True  # False for the synthetic record of an empty file


@dataclasses.dataclass
class ContributorStats:
    name: str = ""
    lines: int = 0
    commits: set[str] = dataclasses.field(default_factory=set)
    files: set[str] = dataclasses.field(default_factory=set)

    def add_record(self, record: AttributionRecord) -> None:
        if record.counts_line:
            self.lines += 1
        self.commits.add(record.commit)
        self.files.add(record.path)

    def merge(self, other: ContributorStats) -> None:
        self.lines += other.lines
        self.commits |= other.commits
        self.files |= other.files

    def copy(self) -> ContributorStats:
        return ContributorStats(name=self.name, lines=self.lines, commits=set(self.commits), files=set(self.files))


@dataclasses.dataclass(frozen=True)
class RankedEntry:
    name: str
    lines: int
    commits: int
    files: int

    @classmethod
    def from_stats(cls, stats: ContributorStats) -> RankedEntry:
        return cls(name=stats.name, lines=stats.lines, commits=len(stats.commits), files=len(stats.files))

    def as_dict(self) -> dict[str, object]:
        return {"name": self.name, "lines": self.lines, "commits": self.commits, "files": self.files}


@dataclasses.dataclass(frozen=True)
class TreeEntry:
    path: str
    size: int


@dataclasses.dataclass(frozen=True)
class CommitInfo:
    sha: str
    author_name: str
    committer_name: str

    def contributor(self, use_committer: bool) -> str:
        return self.committer_name if use_committer else self.author_name


@dataclasses.dataclass
class FameResult:
    entries: list[RankedEntry]
    files_analyzed: int
    errors: list[str]  # one warning per skipped file
