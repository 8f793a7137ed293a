import sys
from pathlib import Path


def get_program_name() -> str:
    """Get the base name of the running program, as invoked."""
    return Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "server"


def get_script_dir() -> Path:
    """Get the directory holding the running program's entry script."""
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent
    return Path.cwd()
