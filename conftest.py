"""
Global pytest configuration for the fuzzinfer project.
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that build complete engines from descriptions"
    )
    config.addinivalue_line("markers", "cli: marks tests that invoke the command line")
