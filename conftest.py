"""
Shared pytest configuration.
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (spawn the notifier process)"
    )
