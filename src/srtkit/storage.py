"""
File and network collaborators around the parser.

These hand raw text to the parser and serialized text to storage, reporting
every failure as a Result instead of raising.
"""
from pathlib import Path
from typing import List, Optional

import httpx

from .backup import BackupManager
from .entry import SubtitleEntry
from .errors import NetworkError, SubtitleIOError
from .logging import get_logger
from .parser import entries_to_string, parse_string
from .result import Result


DEFAULT_FETCH_TIMEOUT = 30.0;


def parse_file( path: Path ) -> Result[List[SubtitleEntry]]:
    """
    Read and parse an SRT file.
    
    Args:
        path: Path to the SRT file (UTF-8, optional byte order mark)
        
    Returns:
        Parsed entries, or SubtitleIOError / parse error
    """
    logger = get_logger();
    path = Path( path );
    
    if not path.exists():
        logger.error( f"Subtitle file not found: {path}" );
        return Result.failure( SubtitleIOError( f"File not found: {path}" ) );
    
    try:
        content = path.read_text( encoding="utf-8-sig" );
    except ( OSError, UnicodeDecodeError ) as e:
        logger.error( f"Failed to read subtitle file {path}: {e}" );
        return Result.failure( SubtitleIOError( f"Failed to read SRT file {path}: {e}", cause=e ) );
    
    logger.info( f"Parsing subtitle file: {path}" );
    return parse_string( content );


def write_to_file( 
    entries: List[SubtitleEntry],
    path: Path,
    backup: bool = True,
    backup_dir: Optional[Path] = None,
    max_backups: int = 25
) -> Result[Path]:
    """
    Serialize entries and write them as UTF-8.
    
    An existing file at path is copied to the backup directory first unless
    backup is False.
    
    Returns:
        The written path, or SubtitleIOError
    """
    logger = get_logger();
    path = Path( path );
    
    try:
        if backup and path.exists():
            BackupManager( backup_dir, max_backups=max_backups ).create_backup( path );
        path.write_text( entries_to_string( entries ), encoding="utf-8" );
    except OSError as e:
        logger.error( f"Failed to write subtitle file {path}: {e}" );
        return Result.failure( SubtitleIOError( f"Failed to write SRT file {path}: {e}", cause=e ) );
    
    logger.info( f"Wrote {len( entries )} subtitle entries to {path}" );
    return Result.success( path );


def parse_url( 
    url: str,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None
) -> Result[List[SubtitleEntry]]:
    """
    Download SRT text over HTTP and parse it.
    
    Args:
        url: Address of the subtitle file
        client: Client to use instead of a fresh one (tests pass one built on
                httpx.MockTransport)
        timeout: Request timeout in seconds for a fresh client
        
    Returns:
        Parsed entries, or NetworkError for non-200 responses and transport failures
    """
    logger = get_logger();
    logger.info( f"Downloading subtitles: {url}" );
    
    try:
        if client is not None:
            response = client.get( url );
        else:
            with httpx.Client( timeout=timeout or DEFAULT_FETCH_TIMEOUT, follow_redirects=True ) as fresh_client:
                response = fresh_client.get( url );
    except httpx.HTTPError as e:
        logger.error( f"Download failed for {url}: {e}" );
        return Result.failure( NetworkError( f"Failed to download subtitles: {e}" ) );
    
    if response.status_code != 200:
        logger.error( f"Download failed for {url}: HTTP {response.status_code}" );
        return Result.failure( 
            NetworkError( f"Failed to download subtitles: HTTP {response.status_code}", status_code=response.status_code )
        );
    
    try:
        content = response.content.decode( "utf-8" );
    except UnicodeDecodeError as e:
        return Result.failure( NetworkError( f"Failed to decode subtitles from {url}: {e}", status_code=200 ) );
    
    return parse_string( content );
