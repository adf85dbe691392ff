"""
Shared fixtures for srtkit tests.
"""
import os
import sys
from pathlib import Path

import pytest

sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );


@pytest.fixture( autouse=True, scope="session" )
def isolated_log_dir( tmp_path_factory ):
    """Keep log files out of the working tree."""
    log_dir = tmp_path_factory.mktemp( "logs" );
    previous = os.environ.get( "SRTKIT_LOG_DIR" );
    os.environ["SRTKIT_LOG_DIR"] = str( log_dir );
    
    yield log_dir;
    
    if previous is None:
        os.environ.pop( "SRTKIT_LOG_DIR", None );
    else:
        os.environ["SRTKIT_LOG_DIR"] = previous;


SAMPLE_SRT = """1
00:00:01,000 --> 00:00:04,000
Hello world!

2
00:00:05,000 --> 00:00:08,000
Line one
Line two""";


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT;
