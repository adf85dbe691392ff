"""
Explicit success-or-failure value returned across the parsing boundary.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import SubtitleError


T = TypeVar( "T" );


@dataclass( frozen=True )
class Result( Generic[T] ):
    """
    Either a value or a SubtitleError, never both.
    
    Parser and storage functions hand one of these back instead of raising,
    so callers decide whether a failure is fatal.
    """
    value: Optional[T] = None;
    error: Optional[SubtitleError] = None;
    
    @classmethod
    def success( cls, value: T ) -> "Result[T]":
        return cls( value=value );
    
    @classmethod
    def failure( cls, error: SubtitleError ) -> "Result[T]":
        return cls( error=error );
    
    @property
    def ok( self ) -> bool:
        return self.error is None;
    
    def unwrap( self ) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error;
        return self.value;
    
    def __bool__( self ):
        return self.ok;
