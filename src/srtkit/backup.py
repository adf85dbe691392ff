"""
Timestamped backups of subtitle files that are about to be overwritten.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .logging import get_logger


TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S-%f";


class BackupManager:
    """
    Keeps ISO-8601 timestamped copies of files in a backup directory.
    
    Only the newest max_backups copies of each file are retained.
    """
    
    def __init__( self, backup_dir: Optional[Path] = None, max_backups: int = 25 ):
        self.logger = get_logger();
        self.backup_dir = Path( backup_dir ) if backup_dir else Path( "backup" );
        self.max_backups = max( 1, max_backups );
    
    def get_backup_filename( self, original_file: Path ) -> str:
        timestamp = datetime.now().strftime( TIMESTAMP_FORMAT );
        return f"{original_file.stem}.{timestamp}{original_file.suffix}";
    
    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        List backups of a file, oldest first.
        
        Returns:
            List of (backup_path, timestamp) tuples
        """
        if not self.backup_dir.exists():
            return [];
        
        backups = [];
        for backup_path in self.backup_dir.glob( f"{original_file.stem}.*{original_file.suffix}" ):
            timestamp_str = backup_path.name[ len( original_file.stem ) + 1 : len( backup_path.name ) - len( original_file.suffix ) ];
            try:
                timestamp = datetime.strptime( timestamp_str, TIMESTAMP_FORMAT );
            except ValueError:
                self.logger.debug( f"Skipping unrelated file in backup directory: {backup_path.name}" );
                continue;
            backups.append( ( backup_path, timestamp ) );
        
        backups.sort( key=lambda item: item[1] );
        return backups;
    
    def apply_retention_policy( self, original_file: Path ):
        """Remove the oldest backups beyond max_backups."""
        backups = self.get_existing_backups( original_file );
        if len( backups ) <= self.max_backups:
            return;
        
        backups_to_remove = backups[:-self.max_backups];
        for backup_path, _ in backups_to_remove:
            try:
                backup_path.unlink();
                self.logger.debug( f"Removed old backup: {backup_path.name}" );
            except OSError as e:
                self.logger.warning( f"Could not remove backup {backup_path}: {e}" );
        
        self.logger.info( f"Removed {len( backups_to_remove )} old backup(s) of {original_file.name}" );
    
    def create_backup( self, file_path: Path ) -> Path:
        """
        Copy a file into the backup directory and apply the retention policy.
        
        Args:
            file_path: File about to be modified
            
        Returns:
            Path to the created backup
            
        Raises:
            FileNotFoundError: If file_path does not exist
            OSError: If the copy fails
        """
        file_path = Path( file_path );
        if not file_path.exists():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );
        
        self.backup_dir.mkdir( parents=True, exist_ok=True );
        backup_path = self.backup_dir / self.get_backup_filename( file_path );
        
        shutil.copy2( file_path, backup_path );
        self.logger.info( f"Created backup: {backup_path}" );
        
        self.apply_retention_policy( file_path );
        
        return backup_path;
