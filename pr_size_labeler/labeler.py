"""Size labeling for a single pull request."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import requests

from .actions import log_group
from .api_client import GitHubAPIClient
from .events import LabelEvent
from .file_filters import GitAttributesFilter
from .models import ChangedFile, RemoteLabel, SizeLabel, sort_by_min_lines


@dataclass
class ReconcileResult:
    """Names of the size labels created, updated or left alone on the repository."""
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)


@dataclass
class SizeResult:
    """Outcome of labeling the pull request."""
    lines_changed: int = 0
    label: Optional[str] = None  # selected size label, None if no tier matched
    added: bool = False
    removed: List[str] = field(default_factory=list)


class PRSizeLabeler:
    """Keeps a repository's size labels up to date and applies one to a pull request."""

    def __init__(
        self,
        client: GitHubAPIClient,
        event: LabelEvent,
        labels: List[SizeLabel],
        file_filter: GitAttributesFilter = None
    ):
        """Initialize the labeler.

        Args:
            client: API client (or any object with the same label and file methods)
            event: Pull request event that triggered the run
            labels: Configured size labels, in configuration order
            file_filter: Generated-file filter, None to count every file
        """
        self.client = client
        self.event = event
        self.labels = list(labels)
        self.file_filter = file_filter

        # Snapshot of the PR labels, updated locally as labels are added and removed
        self.pr_labels: List[str] = event.pr_labels

    @property
    def repo_owner(self) -> str:
        return self.event.repo_owner

    @property
    def repo_name(self) -> str:
        return self.event.repo_name

    @property
    def pr_number(self) -> int:
        return self.event.pr_number

    def pr_has_label(self, name: str) -> bool:
        return name in self.pr_labels

    def get_all_labels(self) -> Dict[str, RemoteLabel]:
        """Fetch every label on the repository keyed by name."""
        logging.info("Getting all labels for repository")
        labels = {}
        for item in self.client.list_labels(self.repo_owner, self.repo_name):
            label = RemoteLabel.from_api(item)
            labels[label.name] = label
        logging.info(f"Found {len(labels)} labels")
        return labels

    def create_size_labels(self) -> ReconcileResult:
        """Create or update the configured size labels on the repository.

        Labels are handled in configuration order. The first failing create or
        edit stops the pass and its error propagates. Labels that are not
        configured are never touched.

        Returns:
            Which labels were created, updated or already up to date
        """
        result = ReconcileResult()
        with log_group("Creating or updating configured size labels for repository"):
            remote_labels = self.get_all_labels()

            for label in self.labels:
                remote = remote_labels.get(label.name)
                if remote is None:
                    logging.info(f"Creating label {label.name}")
                    self.client.create_label(self.repo_owner, self.repo_name, label.to_payload())
                    result.created.append(label.name)
                    continue

                if not label.matches(remote):
                    logging.info(f"Label {label.name} exists but is out of date, updating")
                    self.client.edit_label(self.repo_owner, self.repo_name, label.name, label.to_payload())
                    result.updated.append(label.name)
                    continue

                logging.info(f"Label {label.name} already exists and is up to date")
                result.unchanged.append(label.name)

        return result

    def get_pr_files_changed(self) -> List[ChangedFile]:
        """Fetch the files changed by the pull request, flagging generated ones."""
        logging.info(f"Getting files changed in pr #{self.pr_number}")
        files = []
        for item in self.client.list_pull_request_files(self.repo_owner, self.repo_name, self.pr_number):
            changed = ChangedFile.from_api(item)
            if self.file_filter is not None and self.file_filter.is_generated(changed.filename):
                changed = ChangedFile(changed.filename, changed.additions, changed.deletions, generated=True)
            files.append(changed)
        logging.info(f"Found {len(files)} files changed in pr")
        return files

    @staticmethod
    def count_lines_changed(files: List[ChangedFile]) -> int:
        """Sum additions and deletions over the files that are not generated."""
        lines_changed = 0
        for changed in files:
            if changed.generated:
                logging.debug(f"Skipping linguist generated file {changed.filename} "
                              f"(+{changed.additions}/-{changed.deletions})")
                continue
            lines_changed += changed.lines_changed
        return lines_changed

    @staticmethod
    def select_size_label(labels: List[SizeLabel],
                          lines_changed: int) -> Tuple[Optional[SizeLabel], List[SizeLabel]]:
        """Pick the size label for a line count.

        Labels are scanned from the largest threshold down; the first one whose
        threshold the count reaches is selected. Labels scanned before it are
        kept. Labels scanned after it are stale, as is every label when none
        is selected.

        Args:
            labels: Configured size labels (not modified)
            lines_changed: Counted lines

        Returns:
            Tuple of (selected label or None, stale labels in scan order)
        """
        ordered = sort_by_min_lines(labels)
        for index, label in enumerate(ordered):
            if lines_changed >= label.min_lines:
                return label, ordered[index + 1:]
        return None, ordered

    def add_label(self, name: str):
        logging.info(f"Adding label {name} to pr")
        self.client.add_labels(self.repo_owner, self.repo_name, self.pr_number, [name])
        self.pr_labels.append(name)

    def remove_label(self, name: str):
        logging.info(f"Removing label {name} from pr")
        self.client.remove_label(self.repo_owner, self.repo_name, self.pr_number, name)
        self.pr_labels.remove(name)

    def add_size_label(self) -> SizeResult:
        """Apply the size label matching the pull request's line count.

        Size labels below the selected one are removed if present; a failed
        removal is logged and skipped. A failed add propagates.

        Returns:
            The line count, the selected label and the changes made
        """
        with log_group("Adding/Updating size label for PR"):
            files = self.get_pr_files_changed()
            lines_changed = self.count_lines_changed(files)
            logging.info(f"Calculated PR {self.pr_number} has {lines_changed} lines changed")

            selected, stale = self.select_size_label(self.labels, lines_changed)
            result = SizeResult(lines_changed=lines_changed, label=selected.name if selected else None)

            for label in stale:
                if not self.pr_has_label(label.name):
                    continue
                try:
                    self.remove_label(label.name)
                    result.removed.append(label.name)
                except requests.RequestException as e:
                    logging.warning(f"Failed to remove label {label.name}: {e}")

            if selected is None:
                logging.info(f"No size label applies to {lines_changed} lines changed")
                return result

            if self.pr_has_label(selected.name):
                logging.info(f"PR already has label {selected.name}, skipping")
                return result

            self.add_label(selected.name)
            result.added = True
            return result
