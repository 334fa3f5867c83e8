import sys

# Verbose mode (disabled by default, enabled with --verbose)
VERBOSE = False


def set_verbose(flag: bool):
    global VERBOSE
    VERBOSE = bool(flag)


def log_info(msg: str):
    """Print info message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[INFO] {msg}", file=sys.stderr)


def log_warn(msg: str):
    """Print warning message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[WARN] {msg}", file=sys.stderr)
