"""Data models for size labels, remote labels and changed files."""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class RemoteLabel:
    """A label definition as it exists on the repository."""
    name: str
    color: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict) -> 'RemoteLabel':
        return cls(
            name=data['name'],
            color=data.get('color'),
            description=data.get('description'),
        )


@dataclass(frozen=True)
class SizeLabel:
    """A configured size tier."""
    name: str
    color: str
    min_lines: int
    description: str = ''

    def matches(self, remote: RemoteLabel) -> bool:
        """Check if a remote label is identical to this size label.

        Args:
            remote: Label definition reported by the repository

        Returns:
            True if name, color and description are all equal, False otherwise
        """
        return (
            remote.name == self.name
            and remote.color is not None and remote.color == self.color
            and remote.description is not None and remote.description == self.description
        )

    def to_payload(self) -> Dict[str, str]:
        """Build the request body used to create or edit this label."""
        return {
            'name': self.name,
            'color': self.color,
            'description': self.description,
        }


@dataclass(frozen=True)
class ChangedFile:
    """A file changed by a pull request."""
    filename: str
    additions: int = 0
    deletions: int = 0
    generated: bool = False  # excluded from the line count when True

    @property
    def lines_changed(self) -> int:
        return self.additions + self.deletions

    @classmethod
    def from_api(cls, data: Dict) -> 'ChangedFile':
        return cls(
            filename=data['filename'],
            additions=data.get('additions', 0),
            deletions=data.get('deletions', 0),
        )


def sort_by_min_lines(labels: List[SizeLabel]) -> List[SizeLabel]:
    """Return a copy of the labels ordered from largest to smallest threshold.

    The sort is stable, so labels sharing a threshold keep their configured order.
    """
    return sorted(labels, key=lambda label: label.min_lines, reverse=True)
