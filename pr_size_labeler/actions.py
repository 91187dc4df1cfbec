"""Helpers for running inside a GitHub Actions job."""

import logging
import os
from contextlib import contextmanager


def running_in_actions() -> bool:
    return os.environ.get('GITHUB_ACTIONS', '').lower() == 'true'


@contextmanager
def log_group(title: str):
    """Group the log lines emitted inside the block.

    Under GitHub Actions the lines are folded in the job log with the
    ::group:: workflow command; elsewhere the title is logged as a heading.
    """
    if running_in_actions():
        print(f"::group::{title}", flush=True)
        try:
            yield
        finally:
            print("::endgroup::", flush=True)
    else:
        logging.info(f"== {title}")
        yield


def set_output(name: str, value) -> bool:
    """Write a step output to the $GITHUB_OUTPUT file.

    Returns:
        True if the output was written, False if GITHUB_OUTPUT is not set
    """
    output_file = os.environ.get('GITHUB_OUTPUT')
    if not output_file:
        logging.debug(f"GITHUB_OUTPUT not set, not writing output {name}")
        return False

    with open(output_file, 'a', encoding='utf-8') as f:
        f.write(f"{name}={value}\n")
    logging.debug(f"Wrote to GITHUB_OUTPUT: {name}={value}")
    return True
