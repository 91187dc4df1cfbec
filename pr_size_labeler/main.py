"""Command line entry point for the PR size labeler."""

import os
import sys
import logging

import requests
from dotenv import load_dotenv

from .actions import set_output
from .api_client import GitHubAPIClient
from .config import DEFAULT_CONFIG_PATH, load_config
from .events import load_event
from .exceptions import LabelerError
from .file_filters import load_gitattributes_filter
from .filesystem import FileSystem, LocalFileSystem
from .labeler import PRSizeLabeler


def configure_logging():
    """Configure logging (can be overridden by LOG_LEVEL environment variable)."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def get_input(name: str, default: str = None) -> str:
    """Read an action input, passed by the runner as INPUT_<NAME>."""
    value = os.environ.get(f"INPUT_{name.upper()}", '').strip()
    return value or default


def run(fs: FileSystem = None) -> int:
    """Label the pull request described by the Actions environment.

    Returns:
        Process exit status
    """
    fs = fs or LocalFileSystem()

    token = get_input('repo-token', os.environ.get('GITHUB_TOKEN'))
    if not token:
        logging.error("missing required input: repo-token")
        return 1

    config_path = get_input('config-path', DEFAULT_CONFIG_PATH)
    event_name = os.environ.get('GITHUB_EVENT_NAME')
    event_path = os.environ.get('GITHUB_EVENT_PATH')
    if not event_name or not event_path:
        logging.error("GITHUB_EVENT_NAME and GITHUB_EVENT_PATH must be set")
        return 1

    try:
        config = load_config(config_path, fs)
        event = load_event(event_name, event_path, fs)
        if config.ignore_linguist_generated:
            logging.debug("ignore-linguist-generated is set; exclusion follows the .gitattributes file")
        file_filter = load_gitattributes_filter(fs)

        labeler = PRSizeLabeler(GitHubAPIClient(token), event, config.labels, file_filter)
        labeler.create_size_labels()
        result = labeler.add_size_label()

        set_output('size-label', result.label or '')
        set_output('lines-changed', result.lines_changed)
    except (LabelerError, requests.RequestException, OSError) as e:
        logging.error(f"{e}")
        return 1

    return 0


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
