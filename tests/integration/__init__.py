"""Integration tests running the sync workflow against real git repositories.

Use pytest marks to run only these tests:
    pytest -m integration
"""
