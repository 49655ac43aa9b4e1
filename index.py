import argparse
import faulthandler
import logging.config
import os
import sys
import timeit
from pathlib import Path
from typing import Optional

import sentry_sdk
import yaml
from sentry_sdk.integrations.logging import LoggingIntegration

from marc_indexer.helpers.solr import commit_changes, empty_solr_core, reload_core, submit_to_solr, swap_cores
from marc_indexer.helpers.utilities import elapsedtime
from marc_indexer.index_records import index_records

faulthandler.enable()

DEFAULT_CONFIG: str = "./index_config.yml"
PID_FILE: Path = Path("/tmp", "marc_indexer.pid")

with open("logging.yml", "r") as log_cfg_file:
    logging.config.dictConfig(yaml.full_load(log_cfg_file))

log = logging.getLogger("marc_indexer")


def load_config(filename: Optional[str]) -> Optional[dict]:
    cfg_path: Path = Path(filename or DEFAULT_CONFIG)
    log.info("Reading the index configuration from %s.", cfg_path)

    if not cfg_path.exists():
        log.fatal("The configuration file %s does not exist.", cfg_path)
        return None

    with cfg_path.open("r") as cfg_file:
        return yaml.full_load(cfg_file)


def init_error_reporting(cfg: dict) -> None:
    """Errors are sent to Sentry, unless the configuration is in debug mode."""
    if cfg["common"]["debug"]:
        log.debug("Debug mode; errors will not be reported to Sentry.")
        return

    version: str = cfg["common"]["version"]
    sentry_sdk.init(
        dsn=cfg["sentry"]["dsn"],
        environment=cfg["sentry"]["environment"],
        # Errors are sent as events; lower levels are ignored.
        integrations=[LoggingIntegration(level=logging.ERROR, event_level=logging.ERROR)],
        release=f"marc_indexer@{version.removeprefix('v')}",
    )


def index_indexer(cfg: dict, start: float, end: float) -> bool:
    # Solr adds the 'id' and 'indexed' fields.
    run_record: dict = {
        "type": "indexer",
        "indexer_version_sni": cfg["common"]["version"],
        "index_start_fp": start,
        "index_end_fp": end,
    }

    return submit_to_solr([run_record], cfg)


def finalize_core(cfg: dict, start: float, end: float) -> bool:
    """
    Records this run in the index, commits the documents, and reloads the indexing core. If every
    step succeeds and swapping is enabled, the indexing core then replaces the live core.
    """
    server: str = cfg["solr"]["server"]
    indexing_core: str = cfg["solr"]["indexing_core"]

    log.info("Adding the indexer record.")
    res: bool = index_indexer(cfg, start, end)
    res &= commit_changes(cfg)
    res &= reload_core(server, indexing_core)

    if res and cfg["swap_cores"]:
        res &= swap_cores(server, indexing_core, cfg["solr"]["live_core"])

    return res


@elapsedtime
def main(args: argparse.Namespace) -> bool:
    idx_start: float = timeit.default_timer()

    if args.verbose:
        log.setLevel(logging.DEBUG)

    idx_config: Optional[dict] = load_config(args.config)
    if idx_config is None:
        return False

    if missing := [f for f in args.files if not os.path.exists(f)]:
        log.fatal("Could not find the MARC files %s.", ", ".join(missing))
        return False

    init_error_reporting(idx_config)

    idx_config["dry"] = args.dry
    idx_config["swap_cores"] = args.swap_cores
    if args.only_id:
        idx_config["id"] = args.only_id

    # Each step is combined with &=, so a single failure fails the run.
    res: bool = True

    if args.empty and not args.dry:
        log.info("Emptying the Solr indexing core.")
        res &= empty_solr_core(idx_config)

    res &= index_records(args.files, idx_config)
    idx_end: float = timeit.default_timer()
    log.info("Finished indexing %s file(s).", len(args.files))

    # A dry run never touches Solr, and a failed run leaves the live core alone.
    if res and not args.dry:
        res &= finalize_core(idx_config, idx_start, idx_end)

    if res:
        log.info("Indexing successful.")
    else:
        log.error("Indexing failed.")

    return res


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index MARC bibliographic records into Solr.")
    parser.add_argument("files", nargs="+", help="MARC files to index: binary (.mrc), MARCXML (.xml) or mnemonic (.mrk)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("-e", "--empty", dest="empty", action="store_true", help="Empty the core prior to indexing")
    parser.add_argument("-s", "--no-swap", dest="swap_cores", action="store_false",
                        help="Do not swap cores (default is to swap)")
    parser.add_argument("-c", "--config", dest="config",
                        help=f"Path to an index config file; default is {DEFAULT_CONFIG}.")
    parser.add_argument("-d", "--dry-run", dest="dry", action="store_true",
                        help="Perform a dry run; documents are written to stdout as JSON lines, not sent to Solr.")
    parser.add_argument("--id", dest="only_id", help="Only index the record with this 001")

    return parser.parse_args()


if __name__ == "__main__":
    if PID_FILE.exists():
        log.critical("The indexer is already running (%s exists). Exiting.", PID_FILE)
        sys.exit(1)

    PID_FILE.write_text(str(os.getpid()))

    try:
        success: bool = main(parse_args())
    except Exception as e:
        log.critical("Indexing stopped with an unhandled exception: %s", e)
        success = False
    finally:
        PID_FILE.unlink()

    if not success:
        sys.exit(1)

    faulthandler.disable()
    sys.exit()
