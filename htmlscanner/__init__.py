from .errors import ConfigurationError, FileAccessWarning, OutputWriteError
from .report import MatchIndex, ScanResult
from .scanner import is_html_file, match_file, scan_directory

__all__ = [
    "ConfigurationError",
    "FileAccessWarning",
    "MatchIndex",
    "OutputWriteError",
    "ScanResult",
    "is_html_file",
    "match_file",
    "scan_directory",
]

__version__ = "1.0.0"
