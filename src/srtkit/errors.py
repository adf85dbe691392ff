"""
Error taxonomy for subtitle parsing, transformation and storage.
"""
from typing import Optional


class SubtitleError( Exception ):
    """Base class for every failure reported by srtkit."""
    
    def __init__( self, message: str ):
        super().__init__( message );
        self.message = message;


class EmptyInputError( SubtitleError ):
    """Input text is empty or whitespace only."""
    
    def __init__( self, message: str = "Empty content" ):
        super().__init__( message );


class NoValidEntriesError( SubtitleError ):
    """Input had content but no block could be recovered from it."""
    
    def __init__( self, message: str = "No valid subtitles found" ):
        super().__init__( message );


class FormatError( SubtitleError, ValueError ):
    """Malformed HH:MM:SS,mmm timestamp."""


class SubtitleIOError( SubtitleError ):
    """Reading or writing a subtitle file failed."""
    
    def __init__( self, message: str, cause: Optional[BaseException] = None ):
        super().__init__( message );
        self.cause = cause;


class NetworkError( SubtitleError ):
    """Downloading subtitle text failed."""
    
    def __init__( self, message: str, status_code: Optional[int] = None ):
        super().__init__( message );
        self.status_code = status_code;
