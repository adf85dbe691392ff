"""
Settings loaded from the environment and an optional .env file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv


_TRUE_VALUES = { "1", "true", "yes", "on" };


@dataclass
class Settings:
    """Runtime settings; CLI flags take precedence over these."""
    debug: bool = False;
    log_dir: Path = Path( "logs" );
    backup_dir: Path = Path( "backup" );
    max_backups: int = 25;          # Copies kept per subtitle file
    fetch_timeout: float = 30.0;    # Seconds
    skip_limit: int = 3;            # Lookahead for minimum-duration merges


def _get_int( name: str, default: int ) -> int:
    raw = os.getenv( name );
    if raw is None or not raw.strip():
        return default;
    try:
        return int( raw );
    except ValueError:
        raise ValueError( f"{name} must be an integer, got: {raw!r}" );


def _get_float( name: str, default: float ) -> float:
    raw = os.getenv( name );
    if raw is None or not raw.strip():
        return default;
    try:
        return float( raw );
    except ValueError:
        raise ValueError( f"{name} must be a number, got: {raw!r}" );


def load_settings( env_file: Optional[Path] = None ) -> Settings:
    """
    Build Settings from SRTKIT_* environment variables.
    
    Args:
        env_file: .env file to load first (defaults to ./.env when it exists);
                  variables already in the environment win
        
    Returns:
        Populated Settings
        
    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    env_file = Path( env_file ) if env_file else Path( ".env" );
    if env_file.exists():
        load_dotenv( env_file );
    
    defaults = Settings();
    
    return Settings(
        debug=os.getenv( "SRTKIT_DEBUG", "" ).strip().lower() in _TRUE_VALUES,
        log_dir=Path( os.getenv( "SRTKIT_LOG_DIR" ) or defaults.log_dir ),
        backup_dir=Path( os.getenv( "SRTKIT_BACKUP_DIR" ) or defaults.backup_dir ),
        max_backups=_get_int( "SRTKIT_MAX_BACKUPS", defaults.max_backups ),
        fetch_timeout=_get_float( "SRTKIT_FETCH_TIMEOUT", defaults.fetch_timeout ),
        skip_limit=_get_int( "SRTKIT_SKIP_LIMIT", defaults.skip_limit )
    );
