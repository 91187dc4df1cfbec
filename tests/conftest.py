"""
Shared fixtures for PR size labeler tests
"""

import pytest
import requests

from pr_size_labeler.events import PullRequestEvent
from pr_size_labeler.models import SizeLabel


class FakeGitHubClient:
    """In-memory stand-in for GitHubAPIClient that records every write."""

    def __init__(self, labels=None, files=None):
        self.labels = {label['name']: dict(label) for label in labels or []}
        self.files = list(files or [])
        self.created_labels = []
        self.edited_labels = []
        self.added_labels = []
        self.removed_labels = []
        self.create_label_error = None
        self.edit_label_error = None
        self.add_labels_error = None
        self.remove_label_error = None

    def list_labels(self, owner, repo):
        return list(self.labels.values())

    def create_label(self, owner, repo, label):
        if self.create_label_error:
            raise self.create_label_error
        self.created_labels.append(label)
        self.labels[label['name']] = dict(label)
        return label

    def edit_label(self, owner, repo, name, label):
        if self.edit_label_error:
            raise self.edit_label_error
        self.edited_labels.append(label)
        self.labels[name] = dict(label, name=name)
        return label

    def add_labels(self, owner, repo, number, labels):
        if self.add_labels_error:
            raise self.add_labels_error
        self.added_labels.extend(labels)
        return [{'name': name} for name in labels]

    def remove_label(self, owner, repo, number, name):
        if self.remove_label_error:
            raise self.remove_label_error
        self.removed_labels.append(name)

    def list_pull_request_files(self, owner, repo, number):
        return list(self.files)


def make_payload(number=1, repo_name='test-repo', repo_owner='test-owner', labels=()):
    """Build a minimal pull_request webhook payload."""
    return {
        'action': 'synchronize',
        'pull_request': {
            'number': number,
            'labels': [{'name': name} for name in labels],
            'base': {
                'repo': {
                    'name': repo_name,
                    'owner': {'login': repo_owner},
                },
            },
        },
    }


def make_event(labels=()):
    return PullRequestEvent(make_payload(labels=labels))


def http_error(status=422):
    response = requests.Response()
    response.status_code = status
    return requests.exceptions.HTTPError(f"{status} Client Error", response=response)


@pytest.fixture
def size_labels():
    """The XS/S/M tiers used throughout the tests."""
    return [
        SizeLabel(name='size/XS', color='00ff00', min_lines=0, description='Less than 10 lines'),
        SizeLabel(name='size/S', color='00ff11', min_lines=10, description='Less than 100 lines'),
        SizeLabel(name='size/M', color='00ff22', min_lines=100, description='100 lines or more'),
    ]


@pytest.fixture
def fake_client():
    return FakeGitHubClient()
