from __future__ import annotations

import logging
import os
import pathlib
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import orjson
import tomli

from ..logging_setup import get_log_path

HOME_ENV = "REVERSI_ALPHABETA_HOME"
DEFAULTS_PATH = pathlib.Path(__file__).resolve().parents[1] / "config" / "defaults.toml"


def config_home() -> pathlib.Path:
    return pathlib.Path(os.environ.get(HOME_ENV) or os.path.expanduser("~/.reversi_alphabeta"))


def config_path() -> pathlib.Path:
    return config_home() / "config.toml"


@dataclass
class InitResult:
    config_created: bool
    config_path: pathlib.Path


def ensure_config() -> bool:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text(DEFAULTS_PATH.read_text(encoding="utf-8"), encoding="utf-8")
        return True
    return False


def install_and_init() -> InitResult:
    created = ensure_config()
    if created:
        logging.getLogger(__name__).info("Initialised configuration at %s", config_path())
    return InitResult(created, config_path())


def load_config(path: Optional[pathlib.Path] = None) -> Dict[str, Any]:
    """Load the TOML config, seeding the user copy from defaults if needed."""
    if path is None:
        install_and_init()
        path = config_path()
    with open(path, "rb") as f:
        return tomli.load(f)


def load_defaults() -> Dict[str, Any]:
    with open(DEFAULTS_PATH, "rb") as f:
        return tomli.load(f)


def log_event(module: str, event: str, **kwargs) -> None:
    """Structured event logging through the central logger.

    Emits a single JSON line via the Python logging system so it reaches the
    central log file configured by logging_setup.setup_logging().
    """
    payload = {"ts": time.time(), "module": module, "event": event}
    payload.update(kwargs)
    try:
        line = orjson.dumps(payload).decode("utf-8")
    except TypeError:
        logging.getLogger("event").exception("failed to log event: %s", {"module": module, "event": event})
        return
    logging.getLogger(f"event.{module}").info(line)


def main(argv=None) -> None:
    import argparse
    import zipfile
    import datetime as dt

    parser = argparse.ArgumentParser(prog="reversi-diag")
    parser.add_argument("--bundle", required=True)
    args = parser.parse_args(argv)

    logger = logging.getLogger(__name__)
    try:
        install_and_init()

        bundle_path = pathlib.Path(args.bundle)
        log_path = get_log_path()
        with zipfile.ZipFile(bundle_path, "w", compression=zipfile.ZIP_DEFLATED) as z:
            z.writestr("config.toml", config_path().read_text(encoding="utf-8"))
            if log_path.exists():
                z.write(log_path, arcname=log_path.name)
            z.writestr("env.txt", f"python={sys.version}\nplatform={sys.platform}\n")
            z.writestr("timestamp.txt", dt.datetime.now(dt.timezone.utc).isoformat())
        logger.info("Diagnostics bundle written to %s", bundle_path)
    except Exception as e:
        logger.exception("Error writing diagnostics bundle: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
