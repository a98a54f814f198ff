import unittest
from unittest import mock

from gitlab_scaler.config import load_config
from gitlab_scaler.gitlab.client import GitLabClient
from gitlab_scaler.main import create_client, get_pending_jobs, metrics_handler
from gitlab_scaler.models import MetricSample

from fakes import FakeGitLabClient, make_jobs


class TestMetricsHandler(unittest.TestCase):
    """Tests for the per-request metrics pipeline."""

    def test_returns_single_sample(self):
        """Test that one desired_runners sample is produced."""
        config = load_config({'GITLAB_RUNNER_TAG': 'shared'})
        fake = FakeGitLabClient({1: make_jobs(*[['shared']] * 25)})

        samples = metrics_handler(config, fake)

        self.assertEqual(samples, [MetricSample(value=3)])
        self.assertEqual(samples[0].to_dict(), {'metricName': 'desired_runners', 'metricValue': 3})

    def test_logs_pending_and_desired(self):
        """Test that the pending and desired counts are logged."""
        config = load_config({'GITLAB_RUNNER_TAG': 'shared'})
        fake = FakeGitLabClient({1: make_jobs(*[['shared']] * 4)})

        with self.assertLogs(level='INFO') as logs:
            metrics_handler(config, fake)

        self.assertTrue(any('Pending jobs: 4, Desired runners: 1' in line for line in logs.output))

    def test_empty_tag_counts_nothing(self):
        """Test that an empty tag filter matches no job."""
        config = load_config({})
        fake = FakeGitLabClient({1: make_jobs(['shared'], ['docker'])})

        self.assertEqual(metrics_handler(config, fake), [MetricSample(value=1)])

    def test_partial_count_is_logged(self):
        """Test that skipped runners are reported in a warning."""
        config = load_config({'GITLAB_RUNNER_TAG': 'shared'})
        fake = FakeGitLabClient({1: [], 2: [], 3: []}, failing_runners={2, 3})

        with self.assertLogs(level='WARNING') as logs:
            result = get_pending_jobs(fake, config)

        self.assertEqual(result.count, 0)
        self.assertTrue(any('skipped runners: 2, 3' in line for line in logs.output))

    @mock.patch('gitlab_scaler.main.count_matching_pending_jobs')
    @mock.patch('gitlab_scaler.main.count_pinned_runner_jobs')
    def test_pinned_runner_skips_listing(self, mock_pinned, mock_all):
        """Test that a configured runner id bypasses the runner listing."""
        config = load_config({'GITLAB_RUNNER_ID': '12', 'GITLAB_RUNNER_TAG': 'shared'})
        client = mock.MagicMock()
        mock_pinned.return_value = mock.MagicMock(count=0, skipped=[])

        get_pending_jobs(client, config)

        mock_pinned.assert_called_once_with(client, 12, 'shared')
        mock_all.assert_not_called()


class TestCreateClient(unittest.TestCase):

    @mock.patch('gitlab_scaler.gitlab.client.requests.get')
    def test_client_uses_config(self, mock_get):
        """Test that the client is built from the configured URL and token."""
        mock_get.return_value = mock.MagicMock(status_code=200, links={}, json=mock.MagicMock(return_value=[]))
        config = load_config({'GITLAB_URL': 'https://gitlab.example.com', 'GITLAB_TOKEN': 'abc'})

        client = create_client(config)
        client.list_runners()

        self.assertIsInstance(client, GitLabClient)
        mock_get.assert_called_once_with(
            'https://gitlab.example.com/api/v4/runners',
            headers={'PRIVATE-TOKEN': 'abc'},
            timeout=10
        )


if __name__ == '__main__':
    unittest.main()
