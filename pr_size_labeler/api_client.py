"""GitHub API client for label and pull request file requests."""

import os
import logging
from typing import Dict, List
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

DEFAULT_API_URL = 'https://api.github.com'


class GitHubAPIClient:
    """Handles GitHub REST API requests with retry logic and pagination."""

    def __init__(self, token: str = None, api_url: str = None):
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication
            api_url: REST API base URL (GitHub Enterprise servers use their own)
        """
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.api_url = (api_url or os.environ.get('GITHUB_API_URL') or DEFAULT_API_URL).rstrip('/')
        self.session = requests.Session()

        # urllib3 retries server errors on idempotent methods only
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28'
        })

        if self.token:
            self.session.headers['Authorization'] = f'token {self.token}'
            logging.debug("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Label changes will be rejected.")

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    def _check(self, response: requests.Response) -> requests.Response:
        """Raise for error responses, logging rate limit details first."""
        if response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0':
            logging.error(f"Rate limit exceeded. Response: {response.text}")
        response.raise_for_status()
        return response

    def get_paginated(self, url: str, params: Dict = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Pages are requested until a response carries no `next` link.

        Args:
            url: The API endpoint URL
            params: Query parameters

        Returns:
            List of all items from all pages
        """
        results = []
        page = 1
        per_page = 100

        params = params or {}

        while True:
            page_params = dict(params, per_page=per_page, page=page)
            logging.debug(f"Fetching page {page} from {url}")
            response = self._check(self.session.get(url, params=page_params))
            data = response.json()

            if not data:
                break

            results.extend(data)

            if 'next' not in response.links:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results

    def list_labels(self, owner: str, repo: str) -> List[Dict]:
        """List every label defined on a repository."""
        return self.get_paginated(f"{self._repo_url(owner, repo)}/labels")

    def create_label(self, owner: str, repo: str, label: Dict) -> Dict:
        """Create a repository label.

        Args:
            owner: Repository owner
            repo: Repository name
            label: Body with name, color and description

        Returns:
            The created label
        """
        url = f"{self._repo_url(owner, repo)}/labels"
        return self._check(self.session.post(url, json=label)).json()

    def edit_label(self, owner: str, repo: str, name: str, label: Dict) -> Dict:
        """Update the color and description of an existing repository label.

        Args:
            owner: Repository owner
            repo: Repository name
            name: Current name of the label
            label: Body with the new color and description

        Returns:
            The updated label
        """
        url = f"{self._repo_url(owner, repo)}/labels/{quote(name, safe='')}"
        body = {key: label[key] for key in ('color', 'description') if key in label}
        return self._check(self.session.patch(url, json=body)).json()

    def add_labels(self, owner: str, repo: str, number: int, labels: List[str]) -> List[Dict]:
        """Add labels to an issue or pull request."""
        url = f"{self._repo_url(owner, repo)}/issues/{number}/labels"
        return self._check(self.session.post(url, json={'labels': labels})).json()

    def remove_label(self, owner: str, repo: str, number: int, name: str):
        """Remove a label from an issue or pull request."""
        url = f"{self._repo_url(owner, repo)}/issues/{number}/labels/{quote(name, safe='')}"
        self._check(self.session.delete(url))

    def list_pull_request_files(self, owner: str, repo: str, number: int) -> List[Dict]:
        """List the files changed by a pull request."""
        return self.get_paginated(f"{self._repo_url(owner, repo)}/pulls/{number}/files")
