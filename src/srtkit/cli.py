"""
CLI entry point for srtkit: load, retime, normalize and write SRT subtitles.
"""
import argparse
import sys
from datetime import timedelta
from pathlib import Path
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_settings
from .entry import format_duration
from .logging import setup_logging
from .storage import parse_file, parse_url, write_to_file
from .parser import entries_to_string
from .transforms import adjust_speed, enforce_minimum_duration, merge_overlapping, shift_timings, summarize


def seconds_to_timedelta( seconds: float ) -> timedelta:
    """Convert a signed seconds value to a whole-millisecond timedelta."""
    return timedelta( milliseconds=round( seconds * 1000 ) );


class SrtKitCLI:
    """
    Command line interface for srtkit.
    
    Settings come from SRTKIT_* environment variables (and .env); command line
    flags override them.
    """
    
    def __init__( self ):
        self.parser = self._create_parser();
        self.args = None;
        self.logger = None;
        self.settings = None;
    
    def _create_parser( self ):
        """Create argument parser with all srtkit options."""
        parser = argparse.ArgumentParser(
            prog="srtkit",
            description="Parse, retime and normalize SRT subtitle files",
            epilog="Environment variables: SRTKIT_DEBUG, SRTKIT_LOG_DIR, SRTKIT_BACKUP_DIR, " \
                   "SRTKIT_MAX_BACKUPS, SRTKIT_FETCH_TIMEOUT, SRTKIT_SKIP_LIMIT"
        );
        
        parser.add_argument(
            "source",
            help="Path or http(s):// URL of an .srt file"
        );
        
        parser.add_argument(
            "--output", "-o",
            type=Path,
            help="Write the result to this file (default: print to stdout)"
        );
        
        # Transforms, applied in this order
        parser.add_argument(
            "--shift",
            type=float,
            metavar="SECONDS",
            help="Shift all timings by SECONDS (may be negative)"
        );
        
        parser.add_argument(
            "--speed",
            type=float,
            metavar="FACTOR",
            help="Multiply all timestamps by FACTOR"
        );
        
        parser.add_argument(
            "--min-duration",
            type=float,
            metavar="SECONDS",
            help="Merge subtitles shorter than SECONDS with the ones that follow"
        );
        
        parser.add_argument(
            "--skip-limit",
            type=int,
            help="Maximum subtitles absorbed by one minimum-duration merge (default: 3)"
        );
        
        parser.add_argument(
            "--keep-newlines",
            action="store_true",
            help="Join minimum-duration merges with newlines instead of spaces"
        );
        
        parser.add_argument(
            "--merge-overlaps",
            action="store_true",
            help="Merge subtitles whose time ranges overlap or touch"
        );
        
        # Mode flags
        parser.add_argument(
            "--list",
            action="store_true",
            help="Show the resulting subtitles as a table instead of SRT text"
        );
        
        parser.add_argument(
            "--no-backup",
            action="store_true",
            help="Do not back up an existing output file before overwriting it"
        );
        
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Run the pipeline without writing any output"
        );
        
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode with verbose output"
        );
        
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        );
        
        return parser;
    
    def _validate_arguments( self ):
        """Validate parsed arguments against each other and the settings."""
        errors = [];
        
        if self.args.min_duration is not None and self.args.min_duration <= 0:
            errors.append( "Minimum duration must be greater than 0" );
        
        if self.args.skip_limit is not None and self.args.skip_limit < 1:
            errors.append( "Skip limit must be at least 1" );
        
        if self.args.speed is not None and self.args.speed <= 0:
            errors.append( "Speed factor must be greater than 0" );
        
        if not self.is_url( self.args.source ) and not Path( self.args.source ).exists():
            errors.append( f"Subtitle file not found: {self.args.source}" );
        
        if self.args.output and self.args.output.suffix.lower() != ".srt":
            errors.append( f"Only .srt output files are supported, got: {self.args.output.suffix}" );
        
        if self.args.list and self.args.output:
            errors.append( "--list prints a table and cannot be combined with --output" );
        
        return errors;
    
    @staticmethod
    def is_url( source: str ) -> bool:
        return source.startswith( ( "http://", "https://" ) );
    
    def parse_args( self, argv=None ):
        """Parse command line arguments and validate configuration."""
        self.args = self.parser.parse_args( argv );
        
        try:
            self.settings = load_settings();
        except ValueError as e:
            self.logger = setup_logging( debug=self.args.debug );
            self.logger.error( f"Configuration error: {e}" );
            sys.exit( 1 );
        
        debug = self.args.debug or self.settings.debug;
        self.logger = setup_logging( debug=debug, log_dir=self.settings.log_dir );
        
        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Configuration errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            sys.exit( 1 );
        
        self.logger.debug( f"srtkit v{__version__} starting..." );
        self.logger.debug( f"Source: {self.args.source}" );
        
        return self.args;
    
    def load_entries( self ):
        """Load entries from the source path or URL."""
        if self.is_url( self.args.source ):
            return parse_url( self.args.source, timeout=self.settings.fetch_timeout );
        return parse_file( Path( self.args.source ) );
    
    def apply_transforms( self, entries ):
        """Apply the requested transforms in pipeline order."""
        if self.args.shift is not None:
            entries = shift_timings( entries, seconds_to_timedelta( self.args.shift ) );
            self.logger.info( f"Shifted timings by {self.args.shift:+.3f}s" );
        
        if self.args.speed is not None:
            entries = adjust_speed( entries, self.args.speed );
            self.logger.info( f"Scaled timings by {self.args.speed}x" );
        
        if self.args.min_duration is not None:
            skip_limit = self.args.skip_limit if self.args.skip_limit is not None else self.settings.skip_limit;
            before = len( entries );
            entries = enforce_minimum_duration( 
                entries,
                seconds_to_timedelta( self.args.min_duration ),
                subtitles_to_skip_limit=skip_limit,
                remove_newlines=not self.args.keep_newlines
            );
            self.logger.info( f"Minimum duration {self.args.min_duration}s: {before} -> {len( entries )} subtitles" );
        
        if self.args.merge_overlaps:
            before = len( entries );
            entries = merge_overlapping( entries );
            self.logger.info( f"Merged overlaps: {before} -> {len( entries )} subtitles" );
        
        return entries;
    
    def log_summary( self, entries ):
        """Log statistics about the resulting entries."""
        min_duration = seconds_to_timedelta( self.args.min_duration ) if self.args.min_duration else None;
        stats = summarize( entries, min_duration );
        if not stats:
            return;
        
        self.logger.info( f"{stats['total_entries']} subtitles spanning " \
                          f"{format_duration( stats['first_start'] )} - {format_duration( stats['last_end'] )}" );
        self.logger.info( f"Shortest: {stats['shortest'].total_seconds():.3f}s, " \
                          f"longest: {stats['longest'].total_seconds():.3f}s, overlaps: {stats['overlaps']}" );
        if 'below_min_duration' in stats:
            self.logger.info( f"Still below minimum duration: {stats['below_min_duration']}" );
    
    def show_table( self, entries, console: Console = None ):
        """Print entries as a Rich table."""
        table = Table( title=f"{len( entries )} subtitles" );
        table.add_column( "#", justify="right" );
        table.add_column( "Start" );
        table.add_column( "End" );
        table.add_column( "Duration", justify="right" );
        table.add_column( "Text" );
        
        for entry in entries:
            table.add_row(
                str( entry.index ),
                format_duration( entry.start_time ),
                format_duration( entry.end_time ),
                f"{entry.duration.total_seconds():.3f}s",
                entry.text
            );
        
        ( console or Console() ).print( table );
    
    def run( self ) -> bool:
        """
        Run the load/transform/write pipeline.
        
        Returns:
            True if successful, False if failed
        """
        result = self.load_entries();
        if not result.ok:
            self.logger.error( f"Could not load subtitles: {result.error}" );
            return False;
        
        entries = self.apply_transforms( result.value );
        self.log_summary( entries );
        
        if self.args.dry_run:
            self.logger.info( "Dry run: no output written" );
            return True;
        
        if self.args.list:
            self.show_table( entries );
            return True;
        
        if self.args.output is None:
            sys.stdout.write( entries_to_string( entries ) );
            return True;
        
        written = write_to_file(
            entries,
            self.args.output,
            backup=not self.args.no_backup,
            backup_dir=self.settings.backup_dir,
            max_backups=self.settings.max_backups
        );
        if not written.ok:
            self.logger.error( f"Could not write subtitles: {written.error}" );
            return False;
        
        return True;


def main( argv=None ):
    """Main entry point for the srtkit CLI."""
    cli = SrtKitCLI();
    args = cli.parse_args( argv );
    
    try:
        if not cli.run():
            sys.exit( 1 );
    except KeyboardInterrupt:
        cli.logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except Exception as e:
        cli.logger.error( f"Unexpected error: {e}" );
        if args.debug:
            raise;
        sys.exit( 1 );


if __name__ == "__main__":
    main();
