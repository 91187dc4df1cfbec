"""
Unit tests for the command line entry point
"""

import json

import pytest
from unittest.mock import patch
from conftest import FakeGitHubClient, http_error, make_payload
from pr_size_labeler import main as main_module
from pr_size_labeler.filesystem import LocalFileSystem

CONFIG = """
labels:
- name: size/XS
  color: 00ff00
  min-lines: 0
  description: "Less than 10 lines"
- name: size/S
  color: 00ff11
  min-lines: 10
  description: "Less than 100 lines"
- name: size/M
  color: 00ff22
  min-lines: 100
  description: "100 lines or more"
"""


class TestRun:
    """Test cases for running both labeling phases from the environment."""

    @pytest.fixture
    def workspace(self, tmp_path, monkeypatch):
        """Checkout with a config file and a pull_request event payload."""
        (tmp_path / '.github').mkdir()
        (tmp_path / '.github' / 'pr-size-labeler.yml').write_text(CONFIG, encoding='utf-8')
        (tmp_path / 'event.json').write_text(json.dumps(make_payload(labels=['size/S'])), encoding='utf-8')

        for name in ('INPUT_CONFIG-PATH', 'GITHUB_OUTPUT', 'GITHUB_ACTIONS'):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv('INPUT_REPO-TOKEN', 'test_token')
        monkeypatch.setenv('GITHUB_EVENT_NAME', 'pull_request')
        monkeypatch.setenv('GITHUB_EVENT_PATH', 'event.json')
        return tmp_path

    @pytest.fixture
    def client(self):
        client = FakeGitHubClient(files=[{'filename': 'main.go', 'additions': 75, 'deletions': 30}])
        with patch.object(main_module, 'GitHubAPIClient', return_value=client) as client_cls:
            client.client_cls = client_cls
            yield client

    def test_reconciles_then_labels(self, workspace, client):
        status = main_module.run(LocalFileSystem(str(workspace)))

        assert status == 0
        client.client_cls.assert_called_once_with('test_token')
        assert [l['name'] for l in client.created_labels] == ['size/XS', 'size/S', 'size/M']
        assert client.added_labels == ['size/M']
        assert client.removed_labels == ['size/S']

    def test_gitattributes_excludes_generated_files(self, workspace, client):
        (workspace / '.gitattributes').write_text("*.go linguist-generated\n", encoding='utf-8')
        client.files.append({'filename': 'README.md', 'additions': 2, 'deletions': 1})

        status = main_module.run(LocalFileSystem(str(workspace)))

        assert status == 0
        assert client.added_labels == ['size/XS']

    def test_writes_step_outputs(self, workspace, client, monkeypatch):
        output_file = workspace / 'output.txt'
        monkeypatch.setenv('GITHUB_OUTPUT', str(output_file))

        main_module.run(LocalFileSystem(str(workspace)))

        assert output_file.read_text(encoding='utf-8') == "size-label=size/M\nlines-changed=105\n"

    def test_token_falls_back_to_github_token(self, workspace, client, monkeypatch):
        monkeypatch.delenv('INPUT_REPO-TOKEN')
        monkeypatch.setenv('GITHUB_TOKEN', 'fallback_token')

        assert main_module.run(LocalFileSystem(str(workspace))) == 0
        client.client_cls.assert_called_once_with('fallback_token')

    def test_missing_token(self, workspace, client, monkeypatch):
        monkeypatch.delenv('INPUT_REPO-TOKEN')
        monkeypatch.delenv('GITHUB_TOKEN', raising=False)

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        client.client_cls.assert_not_called()

    def test_missing_config_fails_before_remote_calls(self, workspace, client, monkeypatch):
        monkeypatch.setenv('INPUT_CONFIG-PATH', 'missing.yml')

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        client.client_cls.assert_not_called()

    def test_unsupported_event(self, workspace, client, monkeypatch):
        monkeypatch.setenv('GITHUB_EVENT_NAME', 'push')

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        client.client_cls.assert_not_called()

    def test_reconciliation_failure_skips_labeling(self, workspace, client):
        client.create_label_error = http_error(422)

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        assert client.added_labels == []

    def test_non_utf8_gitattributes(self, workspace, client):
        (workspace / '.gitattributes').write_bytes(b"# g\xe9n\xe9r\xe9\n*.go linguist-generated\n")
        client.files.append({'filename': 'README.md', 'additions': 2, 'deletions': 1})

        assert main_module.run(LocalFileSystem(str(workspace))) == 0
        assert client.added_labels == ['size/XS']

    def test_non_utf8_config(self, workspace, client):
        (workspace / '.github' / 'pr-size-labeler.yml').write_bytes(b"# \xe9tiquettes\nlabels: []\n")

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        client.client_cls.assert_not_called()

    def test_non_utf8_event_payload(self, workspace, client):
        (workspace / 'event.json').write_bytes(b'{"pull_request": {"title": "caf\xe9"}}')

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        client.client_cls.assert_not_called()

    def test_unwritable_output_file(self, workspace, client, monkeypatch):
        # a directory cannot be opened for appending
        monkeypatch.setenv('GITHUB_OUTPUT', str(workspace / '.github'))

        assert main_module.run(LocalFileSystem(str(workspace))) == 1
        assert client.added_labels == ['size/M']

    def test_add_failure(self, workspace, client):
        client.add_labels_error = http_error(403)

        assert main_module.run(LocalFileSystem(str(workspace))) == 1


class TestGetInput:
    """Test cases for reading action inputs."""

    def test_reads_input(self, monkeypatch):
        monkeypatch.setenv('INPUT_CONFIG-PATH', ' custom.yml ')
        assert main_module.get_input('config-path') == 'custom.yml'

    def test_default_when_empty(self, monkeypatch):
        monkeypatch.setenv('INPUT_CONFIG-PATH', '')
        assert main_module.get_input('config-path', 'default.yml') == 'default.yml'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
