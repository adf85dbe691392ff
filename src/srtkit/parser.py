"""
Tolerant SRT parser and canonical serializer.

The parser is a line-oriented state machine rather than a grammar: it
recovers from missing blank separators and stray blank lines, and drops
malformed timing lines instead of failing the whole document.
"""
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, Tuple

from .entry import SubtitleEntry, format_duration, parse_time_string
from .errors import EmptyInputError, FormatError, NoValidEntriesError
from .logging import get_logger
from .result import Result


TIME_SEPARATOR = " --> ";
INDEX_PATTERN = re.compile( r'^\+?\d+$', re.ASCII );
BYTE_ORDER_MARK = "\ufeff";


@dataclass
class PendingBlock:
    """
    Block being accumulated by the parser.
    
    Start and end are only ever set together, and text is only accepted
    once an index line has opened the block.
    """
    index: Optional[int] = None;
    timing: Optional[Tuple[timedelta, timedelta]] = None;
    lines: List[str] = field( default_factory=list );
    
    @property
    def is_open( self ) -> bool:
        return self.index is not None;
    
    @property
    def is_complete( self ) -> bool:
        return self.index is not None and self.timing is not None and bool( self.lines );
    
    def add_text( self, line: str ) -> bool:
        """Append a text line; returns False when no index is open."""
        if not self.is_open:
            return False;
        self.lines.append( line );
        return True;
    
    def to_entry( self ) -> SubtitleEntry:
        start_time, end_time = self.timing;
        return SubtitleEntry(
            index=self.index,
            start_time=start_time,
            end_time=end_time,
            text="\n".join( self.lines ).strip()
        );


class SubtitleParser:
    """
    SRT parser and serializer.
    
    parse_string() never raises for malformed input; it returns a Result
    that fails only when nothing usable could be recovered.
    """
    
    def __init__( self ):
        self.logger = get_logger();
    
    def parse_string( self, content: str ) -> Result[List[SubtitleEntry]]:
        """
        Parse SRT text into subtitle entries.
        
        Args:
            content: Raw SRT text
            
        Returns:
            Result holding the entries in source order, or EmptyInputError /
            NoValidEntriesError
        """
        content = content.lstrip( BYTE_ORDER_MARK );
        if not content.strip():
            return Result.failure( EmptyInputError() );
        
        entries = [];
        pending = PendingBlock();
        skipped_lines = 0;
        
        for line_number, raw_line in enumerate( content.strip().split( "\n" ), 1 ):
            line = raw_line.strip();
            
            # Blank line terminates a block
            if not line:
                if pending.is_complete:
                    entries.append( pending.to_entry() );
                    pending = PendingBlock();
                continue;
            
            # Index line opens a block, closing a complete one left without separator
            if INDEX_PATTERN.match( line ):
                if pending.is_complete:
                    entries.append( pending.to_entry() );
                    pending = PendingBlock( timing=pending.timing );
                pending.index = int( line );
                continue;
            
            if TIME_SEPARATOR in line:
                time_range = line.split( TIME_SEPARATOR );
                if len( time_range ) == 2:
                    try:
                        pending.timing = (
                            parse_time_string( time_range[0].strip() ),
                            parse_time_string( time_range[1].strip() )
                        );
                    except FormatError as e:
                        skipped_lines += 1;
                        self.logger.debug( f"Skipping malformed timing line {line_number}: {e}" );
                    continue;
            
            if not pending.add_text( line ):
                skipped_lines += 1;
                self.logger.debug( f"Dropping line {line_number} outside of a subtitle block" );
        
        if pending.is_complete:
            entries.append( pending.to_entry() );
        
        if not entries:
            return Result.failure( NoValidEntriesError() );
        
        self.logger.debug( f"Parsed {len( entries )} subtitle entries ({skipped_lines} lines skipped)" );
        return Result.success( entries );
    
    def entries_to_string( self, entries: List[SubtitleEntry] ) -> str:
        """
        Serialize entries as canonical SRT text.
        
        Blocks are separated by one blank line; the output ends with a single
        newline after the last block.
        """
        blocks = [];
        for entry in entries:
            blocks.append(
                f"{entry.index}\n"
                f"{format_duration( entry.start_time )}{TIME_SEPARATOR}{format_duration( entry.end_time )}\n"
                f"{entry.text}\n"
            );
        return "\n".join( blocks );


# Global parser instance
_parser = None;


def get_parser() -> SubtitleParser:
    """Get the global parser instance."""
    global _parser;
    if _parser is None:
        _parser = SubtitleParser();
    return _parser;


def parse_string( content: str ) -> Result[List[SubtitleEntry]]:
    """Convenience wrapper around SubtitleParser.parse_string()."""
    return get_parser().parse_string( content );


def entries_to_string( entries: List[SubtitleEntry] ) -> str:
    """Convenience wrapper around SubtitleParser.entries_to_string()."""
    return get_parser().entries_to_string( entries );
