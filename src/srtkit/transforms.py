"""
Timing transforms over subtitle entry sequences.

Every function here is pure: it returns a new list of new entries and
accepts any input, including an empty list, without raising.
"""
from decimal import ROUND_HALF_UP, Decimal
from datetime import timedelta
from typing import Dict, List, Optional

from .entry import SubtitleEntry, to_milliseconds
from .logging import get_logger


def reindex( entries: List[SubtitleEntry] ) -> List[SubtitleEntry]:
    """Renumber entries 1..N in list order."""
    return [ entry.copy_with( index=position ) for position, entry in enumerate( entries, 1 ) ];


def shift_timings( entries: List[SubtitleEntry], delta: timedelta ) -> List[SubtitleEntry]:
    """
    Move every entry by a signed offset.
    
    No clamping: a large negative delta yields negative times.
    """
    return [ 
        entry.copy_with( start_time=entry.start_time + delta, end_time=entry.end_time + delta )
        for entry in entries
    ];


def _round_half_away_from_zero( value: float ) -> int:
    # Decimal(float) is exact, so values just below .5 are not pushed up
    return int( Decimal( value ).quantize( Decimal( 1 ), rounding=ROUND_HALF_UP ) );


def _scale( value: timedelta, factor: float ) -> timedelta:
    return timedelta( milliseconds=_round_half_away_from_zero( to_milliseconds( value ) * factor ) );


def adjust_speed( entries: List[SubtitleEntry], factor: float ) -> List[SubtitleEntry]:
    """
    Scale start and end times by a speed factor.
    
    Times are multiplied in milliseconds and rounded half away from zero to
    the nearest millisecond, so 2.0 doubles every timestamp and 0.5 halves
    it. factor <= 0 is not rejected.
    
    Args:
        entries: Entries to rescale
        factor: Multiplier applied to every timestamp
        
    Returns:
        New entries with scaled times, same index and text
    """
    return [
        entry.copy_with( start_time=_scale( entry.start_time, factor ), end_time=_scale( entry.end_time, factor ) )
        for entry in entries
    ];


def enforce_minimum_duration( 
    entries: List[SubtitleEntry],
    min_duration: timedelta,
    subtitles_to_skip_limit: int = 3,
    remove_newlines: bool = True
) -> List[SubtitleEntry]:
    """
    Merge short subtitles forward until they last at least min_duration.
    
    A short entry absorbs up to subtitles_to_skip_limit following entries,
    stopping as soon as the merged span reaches min_duration. If the limit is
    hit first the entry is kept unchanged. The last entry is never merged,
    since there is nothing after it to merge with.
    
    Args:
        entries: Entries in display order
        min_duration: Shortest acceptable on-screen time
        subtitles_to_skip_limit: Maximum number of following entries to absorb
        remove_newlines: Join merged texts with a space instead of a newline
        
    Returns:
        Entries reindexed 1..N
    """
    separator = " " if remove_newlines else "\n";
    result = [];
    merges = 0;
    
    i = 0;
    while i < len( entries ):
        current = entries[i];
        
        if current.duration >= min_duration or i == len( entries ) - 1:
            result.append( current );
            i += 1;
            continue;
        
        merged_text = current.text;
        merged_end = current.end_time;
        absorbed = 0;
        long_enough = False;
        
        for j in range( i + 1, len( entries ) ):
            following = entries[j];
            merged_text = f"{merged_text}{separator}{following.text}";
            merged_end = following.end_time;
            absorbed = j - i;
            
            if merged_end - current.start_time >= min_duration:
                long_enough = True;
                break;
            
            if absorbed >= subtitles_to_skip_limit:
                break;
        
        if long_enough:
            result.append( current.copy_with( end_time=merged_end, text=merged_text ) );
            merges += 1;
            i += absorbed + 1;
        else:
            result.append( current );
            i += 1;
    
    get_logger().debug( f"Minimum duration: {merges} merges, {len( entries )} -> {len( result )} entries" );
    return reindex( result );


def merge_overlapping( entries: List[SubtitleEntry] ) -> List[SubtitleEntry]:
    """
    Merge entries whose time ranges overlap or touch.
    
    Single left-to-right pass: an entry starting at or before the end of the
    running group extends it, and its text is appended on a new line.
    
    Returns:
        Entries reindexed 1..N
    """
    if not entries:
        return [];
    
    merged = [];
    current = entries[0];
    
    for following in entries[1:]:
        if current.end_time >= following.start_time:
            current = current.copy_with( end_time=following.end_time, text=f"{current.text}\n{following.text}" );
        else:
            merged.append( current );
            current = following;
    
    merged.append( current );
    
    get_logger().debug( f"Overlap merge: {len( entries )} -> {len( merged )} entries" );
    return reindex( merged );


def summarize( entries: List[SubtitleEntry], min_duration: Optional[timedelta] = None ) -> Dict:
    """Get statistics about a sequence of entries."""
    if not entries:
        return {};
    
    durations = [ entry.duration for entry in entries ];
    overlaps = sum( 
        1 for previous, following in zip( entries, entries[1:] )
        if previous.end_time >= following.start_time
    );
    
    first_start = min( entry.start_time for entry in entries );
    last_end = max( entry.end_time for entry in entries );
    
    stats = {
        'total_entries': len( entries ),
        'first_start': first_start,
        'last_end': last_end,
        'span': last_end - first_start,
        'shortest': min( durations ),
        'longest': max( durations ),
        'overlaps': overlaps
    };
    
    if min_duration is not None:
        stats['below_min_duration'] = sum( 1 for duration in durations if duration < min_duration );
    
    return stats;
