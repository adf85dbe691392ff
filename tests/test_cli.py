"""
Test cases for the srtkit CLI and settings loading.
"""
import pytest
from datetime import timedelta
from pathlib import Path
from unittest.mock import Mock, patch
import sys
import os

sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from srtkit.cli import SrtKitCLI, main, seconds_to_timedelta
from srtkit.config import Settings, load_settings
from srtkit.logging import get_logger, setup_logging
from srtkit.result import Result


SHORT_SRT = """1
00:00:01,000 --> 00:00:01,500
Short

2
00:00:01,500 --> 00:00:04,000
Touching

3
00:00:10,000 --> 00:00:12,000
Alone
""";


@pytest.fixture
def srt_file( tmp_path ):
    path = tmp_path / "input.srt";
    path.write_text( SHORT_SRT, encoding="utf-8" );
    return path;


class TestSrtKitCLI:
    """Test cases for srtkit CLI interface."""
    
    def test_cli_initialization( self ):
        cli = SrtKitCLI();
        assert cli.parser is not None;
        assert cli.args is None;
        assert cli.logger is None;
    
    def test_argument_parsing_missing_required( self ):
        cli = SrtKitCLI();
        
        with pytest.raises( SystemExit ):
            cli.parse_args( [] );
    
    def test_argument_parsing_valid( self, srt_file ):
        cli = SrtKitCLI();
        args = cli.parse_args( [ str( srt_file ), '--shift', '-1.5', '--min-duration', '2', '--debug' ] );
        
        assert args.source == str( srt_file );
        assert args.shift == -1.5;
        assert args.min_duration == 2.0;
        assert args.debug == True;
        assert args.merge_overlaps == False;
    
    def test_missing_source_file( self, tmp_path ):
        cli = SrtKitCLI();
        
        with pytest.raises( SystemExit ):
            cli.parse_args( [ str( tmp_path / "nonexistent.srt" ) ] );
    
    def test_url_source_skips_file_check( self ):
        cli = SrtKitCLI();
        args = cli.parse_args( [ 'https://example.com/movie.srt' ] );
        
        assert cli.is_url( args.source );
    
    def test_invalid_numeric_options( self, srt_file ):
        for bad_option in [ [ '--min-duration', '0' ], [ '--skip-limit', '0' ], [ '--speed', '-2' ] ]:
            cli = SrtKitCLI();
            with pytest.raises( SystemExit ):
                cli.parse_args( [ str( srt_file ) ] + bad_option );
    
    def test_output_must_be_srt( self, srt_file, tmp_path ):
        cli = SrtKitCLI();
        
        with pytest.raises( SystemExit ):
            cli.parse_args( [ str( srt_file ), '-o', str( tmp_path / "out.vtt" ) ] );
    
    def test_list_with_output_is_rejected( self, srt_file, tmp_path ):
        cli = SrtKitCLI();
        output = tmp_path / "out.srt";
        
        with pytest.raises( SystemExit ) as exc_info:
            cli.parse_args( [ str( srt_file ), '--list', '-o', str( output ) ] );
        
        assert exc_info.value.code == 1;
        assert not output.exists();
    
    def test_pipeline_to_stdout( self, srt_file, capsys ):
        main( [ str( srt_file ), '--shift', '1', '--merge-overlaps' ] );
        
        output = capsys.readouterr().out;
        
        assert output == (
            "1\n00:00:02,000 --> 00:00:05,000\nShort\nTouching\n"
            "\n"
            "2\n00:00:11,000 --> 00:00:13,000\nAlone\n"
        );
    
    def test_minimum_duration_to_file( self, srt_file, tmp_path ):
        output = tmp_path / "out.srt";
        
        main( [ str( srt_file ), '--min-duration', '2', '-o', str( output ) ] );
        
        content = output.read_text( encoding="utf-8" );
        assert "00:00:01,000 --> 00:00:04,000\nShort Touching" in content;
        assert content.count( " --> " ) == 2;
    
    def test_dry_run_writes_nothing( self, srt_file, tmp_path, capsys ):
        output = tmp_path / "out.srt";
        
        main( [ str( srt_file ), '--speed', '2', '-o', str( output ), '--dry-run' ] );
        
        assert not output.exists();
        assert capsys.readouterr().out == "";
    
    def test_unparsable_input_exits_non_zero( self, tmp_path ):
        path = tmp_path / "garbage.srt";
        path.write_text( "not a subtitle file", encoding="utf-8" );
        
        with pytest.raises( SystemExit ) as exc_info:
            main( [ str( path ) ] );
        
        assert exc_info.value.code == 1;
    
    def test_list_shows_table( self, srt_file ):
        cli = SrtKitCLI();
        cli.parse_args( [ str( srt_file ), '--list' ] );
        
        with patch.object( cli, 'show_table' ) as show_table:
            assert cli.run() == True;
        
        entries = show_table.call_args[0][0];
        assert [ entry.text for entry in entries ] == [ "Short", "Touching", "Alone" ];
    
    def test_url_source_uses_parse_url( self ):
        cli = SrtKitCLI();
        cli.parse_args( [ 'https://example.com/movie.srt' ] );
        
        with patch( 'srtkit.cli.parse_url', return_value=Result.success( [] ) ) as parse_url:
            cli.load_entries();
        
        parse_url.assert_called_once_with( 'https://example.com/movie.srt', timeout=cli.settings.fetch_timeout );
    
    def test_seconds_to_timedelta( self ):
        assert seconds_to_timedelta( 1.5 ) == timedelta( milliseconds=1500 );
        assert seconds_to_timedelta( -0.25 ) == timedelta( milliseconds=-250 );


class TestSettingsLoading:
    """Test settings loading from the environment."""
    
    @patch.dict( os.environ, {
        'SRTKIT_DEBUG': 'true',
        'SRTKIT_BACKUP_DIR': 'saved',
        'SRTKIT_MAX_BACKUPS': '7',
        'SRTKIT_FETCH_TIMEOUT': '2.5',
        'SRTKIT_SKIP_LIMIT': '5'
    } )
    def test_environment_variable_loading( self, tmp_path ):
        settings = load_settings( tmp_path / ".env" );
        
        assert settings.debug == True;
        assert settings.backup_dir == Path( 'saved' );
        assert settings.max_backups == 7;
        assert settings.fetch_timeout == 2.5;
        assert settings.skip_limit == 5;
    
    def test_defaults( self, tmp_path ):
        keys = [ 'SRTKIT_DEBUG', 'SRTKIT_BACKUP_DIR', 'SRTKIT_MAX_BACKUPS', 'SRTKIT_FETCH_TIMEOUT', 'SRTKIT_SKIP_LIMIT' ];
        with patch.dict( os.environ, {} ):
            for key in keys:
                os.environ.pop( key, None );
            settings = load_settings( tmp_path / ".env" );
        
        assert settings.debug == False;
        assert settings.max_backups == Settings().max_backups;
        assert settings.skip_limit == 3;
    
    def test_env_file_is_loaded( self, tmp_path ):
        env_file = tmp_path / ".env";
        env_file.write_text( "SRTKIT_SKIP_LIMIT=9\n", encoding="utf-8" );
        
        with patch.dict( os.environ, {} ):
            os.environ.pop( 'SRTKIT_SKIP_LIMIT', None );
            settings = load_settings( env_file );
        
        assert settings.skip_limit == 9;
    
    @patch.dict( os.environ, { 'SRTKIT_MAX_BACKUPS': 'many' } )
    def test_invalid_number( self, tmp_path ):
        with pytest.raises( ValueError, match="SRTKIT_MAX_BACKUPS" ):
            load_settings( tmp_path / ".env" );
    
    @patch.dict( os.environ, { 'SRTKIT_SKIP_LIMIT': 'x' } )
    def test_cli_reports_bad_settings( self, srt_file ):
        cli = SrtKitCLI();
        
        with pytest.raises( SystemExit ):
            cli.parse_args( [ str( srt_file ) ] );



class TestLoggingSetup:
    """Test that handlers are attached only by setup_logging."""
    
    def test_setup_logging_writes_to_log_dir( self, tmp_path ):
        logger = setup_logging( log_dir=tmp_path / "logs" );
        logger.info( "hello from the test" );
        
        assert logger is get_logger();
        assert len( logger.handlers ) == 2;
        for handler in logger.handlers:
            handler.flush();
        assert "hello from the test" in ( tmp_path / "logs" / "srtkit.log" ).read_text( encoding="utf-8" );
    
    def test_reconfiguring_does_not_stack_handlers( self, tmp_path ):
        setup_logging( log_dir=tmp_path );
        logger = setup_logging( debug=True, log_dir=tmp_path );
        
        assert len( logger.handlers ) == 2;


if __name__ == '__main__':
    pytest.main( [ __file__ ] );
