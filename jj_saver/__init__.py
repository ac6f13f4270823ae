import os

__version__ = "0.4.0"


def data_dir() -> str:
    """Return the jj-saver data directory (for DB, config, logs).

    Uses %APPDATA%/jj-saver on Windows, ~/.jj-saver on Unix.
    """
    if os.name == "nt":
        appdata = os.environ.get(
            "APPDATA", os.path.join(os.path.expanduser("~"), "AppData", "Roaming")
        )
        return os.path.join(appdata, "jj-saver")
    return os.path.join(os.path.expanduser("~"), ".jj-saver")
