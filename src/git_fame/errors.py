from __future__ import annotations


class GitFameError(RuntimeError):
    pass


class ConfigError(GitFameError):
    pass


class InvalidRevision(GitFameError):
    pass


class RepositoryError(GitFameError):
    pass


class AttributionError(GitFameError):
    """Blame for a single file failed; the file is skipped."""


class HistoryLookupError(GitFameError):
    """No commit could be found for an (empty) file; the file is skipped."""


class AnalysisTimeout(GitFameError):
    pass


class SerializationError(GitFameError):
    pass
