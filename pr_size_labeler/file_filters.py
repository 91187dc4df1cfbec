"""File filtering utilities for excluding linguist-generated files from the line count."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .filesystem import FileSystem

GITATTRIBUTES_PATH = '.gitattributes'
GENERATED_ATTRIBUTE = 'linguist-generated'


def translate_pattern(pattern: str) -> re.Pattern:
    """Compile a gitattributes pattern into a regular expression.

    `*`, `?` and bracket expressions never match `/`. A leading `**/`, a trailing
    `/**` and an inner `/**/` match across any number of directories.

    Args:
        pattern: Pattern with any leading `/` already removed

    Returns:
        Compiled expression matching the whole path
    """
    parts = []
    i, n = 0, len(pattern)
    while i < n:
        if pattern.startswith('**/', i) and (i == 0 or pattern[i - 1] == '/'):
            parts.append('(?:.*/)?')
            i += 3
            continue
        if pattern.startswith('/**', i) and i + 3 == n:
            parts.append('/.*')
            i += 3
            continue

        c = pattern[i]
        if c == '*':
            while i < n and pattern[i] == '*':
                i += 1
            parts.append('[^/]*')
            continue
        if c == '?':
            parts.append('[^/]')
        elif c == '[':
            end = pattern.find(']', i + 2)
            if end == -1:
                parts.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                if body.startswith('!'):
                    body = '^' + body[1:]
                parts.append(f'[{body}]')
                i = end
        elif c == '\\' and i + 1 < n:
            i += 1
            parts.append(re.escape(pattern[i]))
        else:
            parts.append(re.escape(c))
        i += 1

    return re.compile('(?s:' + ''.join(parts) + r')\Z')


@dataclass(frozen=True)
class AttributeRule:
    """One `.gitattributes` line that sets or clears linguist-generated."""
    pattern: str
    regex: re.Pattern
    anchored: bool  # matched against the full path instead of the basename
    generated: bool

    def matches(self, path: str) -> bool:
        if self.anchored:
            return self.regex.match(path) is not None
        return self.regex.match(path.rsplit('/', 1)[-1]) is not None


def _generated_value(attribute: str) -> Optional[bool]:
    """Interpret one attribute token, returning None if it is not linguist-generated."""
    if attribute == GENERATED_ATTRIBUTE:
        return True
    if attribute in ('-' + GENERATED_ATTRIBUTE, '!' + GENERATED_ATTRIBUTE):
        return False
    name, sep, value = attribute.partition('=')
    if sep and name == GENERATED_ATTRIBUTE:
        return value.lower() == 'true'
    return None


class GitAttributesFilter:
    """Flags files marked `linguist-generated` by a repository's `.gitattributes`."""

    def __init__(self, rules: List[AttributeRule] = None):
        """Initialize the filter.

        Args:
            rules: Parsed rules in file order
        """
        self.rules = rules or []

    @classmethod
    def parse(cls, content: str) -> 'GitAttributesFilter':
        """Parse `.gitattributes` content.

        Only lines mentioning linguist-generated are kept. Quoted patterns and
        `[attr]` macro definitions are not supported and are skipped.

        Args:
            content: Text of the `.gitattributes` file

        Returns:
            A filter holding the parsed rules
        """
        rules = []
        for line_no, line in enumerate(content.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            if line.startswith('"') or line.startswith('[attr]'):
                logging.debug(f".gitattributes line {line_no} is not supported, skipping: {line}")
                continue

            pattern, *attributes = line.split()
            values = [_generated_value(attr) for attr in attributes]
            values = [v for v in values if v is not None]
            if not values:
                continue
            # attributes never apply to directories themselves
            if pattern.endswith('/'):
                continue

            anchored = '/' in pattern
            rules.append(AttributeRule(
                pattern=pattern,
                regex=translate_pattern(pattern.lstrip('/')),
                anchored=anchored,
                generated=values[-1],
            ))

        logging.debug(f"Parsed {len(rules)} linguist-generated rule(s) from .gitattributes")
        return cls(rules)

    def match_pattern(self, filename: str, pattern: str) -> bool:
        """Check if a filename matches a single gitattributes pattern.

        Args:
            filename: Repository-relative path
            pattern: The pattern to match against

        Returns:
            True if the filename matches the pattern, False otherwise
        """
        rule = AttributeRule(pattern, translate_pattern(pattern.lstrip('/')), '/' in pattern, True)
        return rule.matches(filename)

    def is_generated(self, filename: str) -> bool:
        """Check if a file is linguist-generated. The last matching rule wins.

        Args:
            filename: Repository-relative path

        Returns:
            True if the file should be excluded from the line count, False otherwise
        """
        generated = False
        for rule in self.rules:
            if rule.matches(filename):
                generated = rule.generated
        return generated


def load_gitattributes_filter(fs: FileSystem, path: str = GITATTRIBUTES_PATH) -> Optional[GitAttributesFilter]:
    """Load the generated-file filter if the repository has a `.gitattributes` file.

    Args:
        fs: File access rooted at the repository checkout
        path: Location of the attributes file

    Returns:
        The filter, or None when there is no attributes file
    """
    if not fs.exists(path):
        logging.info(f"No {path} file found, skipping linguist generated file checks")
        return None

    # only linguist-generated lines matter, so undecodable bytes elsewhere are tolerated
    file_filter = GitAttributesFilter.parse(fs.read_file(path, errors='replace'))
    logging.info(f"Ignoring linguist generated files based on {path} file")
    return file_filter
