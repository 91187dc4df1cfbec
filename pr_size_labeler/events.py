"""Pull request events that can trigger labeling."""

import json
import logging
from typing import Dict, List

from .exceptions import EventError
from .filesystem import FileSystem, LocalFileSystem


class LabelEvent:
    """A GitHub webhook event that identifies a pull request to label."""

    event_name = None

    def __init__(self, payload: Dict):
        """Initialize the event.

        Args:
            payload: Decoded webhook payload

        Raises:
            EventError: If the payload does not describe a pull request
        """
        pull_request = payload.get('pull_request')
        if not isinstance(pull_request, dict):
            raise EventError(f"{self.event_name} payload has no pull_request")
        try:
            base_repo = pull_request['base']['repo']
            self._repo_owner = base_repo['owner']['login']
            self._repo_name = base_repo['name']
            self._pr_number = int(pull_request['number'])
            self._pr_labels = [label['name'] for label in pull_request.get('labels') or []]
        except (KeyError, TypeError, ValueError) as e:
            raise EventError(f"{self.event_name} payload is missing pull request field: {e}") from e
        self.payload = payload

    @property
    def repo_owner(self) -> str:
        return self._repo_owner

    @property
    def repo_name(self) -> str:
        return self._repo_name

    @property
    def pr_number(self) -> int:
        return self._pr_number

    @property
    def pr_labels(self) -> List[str]:
        """Labels on the pull request when the event fired."""
        return list(self._pr_labels)


class PullRequestEvent(LabelEvent):
    event_name = 'pull_request'


class PullRequestTargetEvent(LabelEvent):
    event_name = 'pull_request_target'


EVENT_TYPES = {cls.event_name: cls for cls in (PullRequestEvent, PullRequestTargetEvent)}


def unsupported_event_error(event_name: str) -> EventError:
    supported = ', '.join(sorted(EVENT_TYPES))
    return EventError(f"Event '{event_name}' is not a pull request event (supported: {supported})")


def parse_event(event_name: str, payload: Dict) -> LabelEvent:
    """Wrap a decoded payload in the event class for its trigger.

    Raises:
        EventError: If the trigger is not a supported pull request event
    """
    event_cls = EVENT_TYPES.get(event_name)
    if event_cls is None:
        raise unsupported_event_error(event_name)
    if not isinstance(payload, dict):
        raise EventError("Event payload must be a JSON object")
    return event_cls(payload)


def load_event(event_name: str, event_path: str, fs: FileSystem = None) -> LabelEvent:
    """Read the webhook payload written by the Actions runner.

    Args:
        event_name: Value of GITHUB_EVENT_NAME
        event_path: Value of GITHUB_EVENT_PATH
        fs: File access to read through

    Returns:
        The pull request event

    Raises:
        EventError: If the payload cannot be read or is not a supported event
    """
    if event_name not in EVENT_TYPES:
        # Reject unsupported triggers before touching the payload file
        raise unsupported_event_error(event_name)

    fs = fs or LocalFileSystem()
    try:
        payload = json.loads(fs.read_file(event_path))
    except OSError as e:
        raise EventError(f"Could not read event payload from {event_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise EventError(f"Event payload {event_path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise EventError(f"Invalid JSON in event payload {event_path}: {e}") from e

    event = parse_event(event_name, payload)
    logging.debug(f"Loaded {event_name} event for {event.repo_owner}/{event.repo_name}#{event.pr_number}")
    return event
