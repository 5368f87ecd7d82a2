"""
Test suite for the mongoconn connection layer.

Test Structure:
    - conftest.py: Shared fixtures and mock driver objects
    - test_options.py: Tests for configuration and option translation
    - test_connection.py: Tests for ConnectionBuilder and Connection
    - test_indexes.py: Tests for index provisioning
    - test_settings.py: Tests for environment-driven settings
    - test_integration.py: Tests against a live server (TEST_MONGO_URI)

Running Tests:
    pytest                          # Run all tests
    pytest -v                       # Verbose output
    pytest --cov=mongoconn          # With coverage
    pytest tests/test_indexes.py    # Run specific test file
"""
