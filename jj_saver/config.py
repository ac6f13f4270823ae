"""Configuration system for jj-saver.

All thresholds and settings can be overridden via environment variables
or a JSON config file at ~/.jj-saver/config.json.
"""

import contextlib
import json
import os

_DEFAULTS = {
    "enabled": True,
    "jj_binary": "jj",
    "process_timeout": 0,
    "max_log_entries": 5,
    "max_op_log_entries": 5,
    "description_width": 50,
    "op_description_width": 30,
    "diff_line_width": 100,
    "max_diff_hunk_lines": 100,
    "show_header_lines": 5,
    "tracking_enabled": True,
    "db_prune_days": 90,
    "session_idle_minutes": 30,
    "chars_per_token": 4,
    "debug": False,
}

ENV_PREFIX = "JJ_SAVER_"

_config: dict | None = None


def _load_config() -> dict:
    """Load config from file, then overlay env vars."""
    config = dict(_DEFAULTS)

    from jj_saver import data_dir  # noqa: PLC0415

    config_path = os.environ.get(ENV_PREFIX + "CONFIG") or os.path.join(
        data_dir(), "config.json"
    )
    if os.path.exists(config_path):
        try:
            with open(config_path) as f:
                user_config = json.load(f)
            if isinstance(user_config, dict):
                config.update(user_config)
        except (json.JSONDecodeError, OSError):
            pass

    # Environment variable overrides
    for key, default_val in _DEFAULTS.items():
        env_key = ENV_PREFIX + key.upper()
        env_val = os.environ.get(env_key)
        if env_val is not None:
            if isinstance(default_val, bool):
                config[key] = env_val.lower() in ("1", "true", "yes")
            elif isinstance(default_val, int):
                with contextlib.suppress(ValueError):
                    config[key] = int(env_val)
            elif isinstance(default_val, float):
                with contextlib.suppress(ValueError):
                    config[key] = float(env_val)
            else:
                config[key] = env_val

    return config


def get(key: str):
    """Get a config value."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = _load_config()
    return _config.get(key, _DEFAULTS.get(key))


def reload():
    """Force reload of configuration."""
    global _config  # noqa: PLW0603
    _config = None
