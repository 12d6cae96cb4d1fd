"""Writing rendered citations and README sections."""

from cratecite.output.readme import citing_section, merge_section, wrap
from cratecite.output.sink import STDOUT, FileSink, OutputTarget, WriteMode

__all__ = [
    "STDOUT",
    "FileSink",
    "OutputTarget",
    "WriteMode",
    "citing_section",
    "merge_section",
    "wrap",
]
