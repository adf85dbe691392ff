"""
Subtitle entry value type and the HH:MM:SS,mmm time codec.
"""
from dataclasses import dataclass, replace
from datetime import timedelta

from .errors import FormatError


ONE_MILLISECOND = timedelta( milliseconds=1 );


@dataclass( frozen=True )
class SubtitleEntry:
    """
    One SRT block: display index, time range and text.
    
    Instances are immutable; transforms build new entries with copy_with()
    so a sequence handed to a transform is never seen to change.
    """
    index: int;                 # Display order number as written in the source
    start_time: timedelta;      # Offset from track start
    end_time: timedelta;
    text: str;                  # May span several lines
    
    @property
    def duration( self ) -> timedelta:
        return self.end_time - self.start_time;
    
    def copy_with( self, **overrides ) -> "SubtitleEntry":
        """Return a copy with the given fields replaced."""
        return replace( self, **overrides );
    
    def __repr__( self ):
        return f"SubtitleEntry(index={self.index}, {format_duration( self.start_time )} --> " \
               f"{format_duration( self.end_time )}, text='{self.text[:30]}')";


def to_milliseconds( value: timedelta ) -> int:
    """Whole milliseconds in a duration, rounded toward negative infinity."""
    return value // ONE_MILLISECOND;


def _parse_component( component: str, timestamp: str ) -> int:
    if not ( component.isascii() and component.isdigit() ):
        raise FormatError( f"Invalid timestamp format: {timestamp!r}" );
    return int( component );


def parse_time_string( timestamp: str ) -> timedelta:
    """
    Parse an SRT timestamp into a duration.
    
    Args:
        timestamp: String like "00:01:23,456"
        
    Returns:
        timedelta for the timestamp
        
    Raises:
        FormatError: If the structure is not HH:MM:SS,mmm or a component is not numeric
    """
    parts = timestamp.split( ":" );
    if len( parts ) != 3:
        raise FormatError( f"Invalid timestamp format: {timestamp!r}" );
    
    seconds_and_millis = parts[2].split( "," );
    if len( seconds_and_millis ) != 2:
        raise FormatError( f"Invalid timestamp format: {timestamp!r}" );
    
    hours = _parse_component( parts[0], timestamp );
    minutes = _parse_component( parts[1], timestamp );
    seconds = _parse_component( seconds_and_millis[0], timestamp );
    milliseconds = _parse_component( seconds_and_millis[1], timestamp );
    
    # Out-of-range fields (minutes > 59, ...) carry over through timedelta
    return timedelta( hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds );


def format_duration( duration: timedelta ) -> str:
    """
    Format a duration as an SRT timestamp ("01:02:03,456").
    
    Hours are padded to two digits but never truncated. Negative durations
    get a leading "-" before the formatted magnitude.
    """
    total_ms = to_milliseconds( duration );
    sign = "-" if total_ms < 0 else "";
    total_ms = abs( total_ms );
    
    hours, total_ms = divmod( total_ms, 3600000 );
    minutes, total_ms = divmod( total_ms, 60000 );
    seconds, milliseconds = divmod( total_ms, 1000 );
    
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}";
