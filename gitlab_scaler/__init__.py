"""
GitLab runner scaler for external autoscaling controllers.

This package polls the GitLab runner API, counts pending jobs matching a
configured runner tag and exposes the desired number of runners as a metric
that an external autoscaler (e.g. KEDA's metrics-api scaler) can consume.
"""

__version__ = "0.1.0"
