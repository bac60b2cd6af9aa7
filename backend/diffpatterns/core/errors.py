class AnalyzerError(Exception):
    """Base error for everything outside the pure grouping core."""


class InvalidOptionsError(AnalyzerError, ValueError):
    """Analysis options rejected at the configuration boundary."""


class GitDiffError(AnalyzerError):
    """git could not produce the requested diff."""


class ManifestError(AnalyzerError, ValueError):
    """Input manifest does not match change_manifest.json."""
