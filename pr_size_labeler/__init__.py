"""PR Size Labeler - labels pull requests by the number of lines they change."""

from .models import ChangedFile, RemoteLabel, SizeLabel
from .api_client import GitHubAPIClient
from .config import LabelerConfig, load_config
from .events import LabelEvent, PullRequestEvent, PullRequestTargetEvent, load_event
from .exceptions import ConfigError, EventError, LabelerError
from .file_filters import GitAttributesFilter, load_gitattributes_filter
from .filesystem import LocalFileSystem, MemoryFileSystem
from .labeler import PRSizeLabeler

__all__ = [
    'ChangedFile',
    'RemoteLabel',
    'SizeLabel',
    'GitHubAPIClient',
    'LabelerConfig',
    'load_config',
    'LabelEvent',
    'PullRequestEvent',
    'PullRequestTargetEvent',
    'load_event',
    'ConfigError',
    'EventError',
    'LabelerError',
    'GitAttributesFilter',
    'load_gitattributes_filter',
    'LocalFileSystem',
    'MemoryFileSystem',
    'PRSizeLabeler',
]
