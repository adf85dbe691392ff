"""
srtkit - SRT subtitle parsing and retiming.

Parses SubRip text into immutable entries, applies timing transforms
(shift, speed, minimum duration, overlap merge) and writes canonical SRT.
"""

__version__ = "0.1.0";
__author__ = "srtkit Project";
__license__ = "MIT";

from .entry import SubtitleEntry, format_duration, parse_time_string
from .errors import (
    EmptyInputError,
    FormatError,
    NetworkError,
    NoValidEntriesError,
    SubtitleError,
    SubtitleIOError,
)
from .parser import SubtitleParser, entries_to_string, parse_string
from .result import Result
from .storage import parse_file, parse_url, write_to_file
from .transforms import (
    adjust_speed,
    enforce_minimum_duration,
    merge_overlapping,
    reindex,
    shift_timings,
    summarize,
)
