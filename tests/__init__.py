"""
Test Suite for Bookgraph

Test Organization:
- conftest.py: Shared fixtures (in-memory REST store, REST client, test client)
- json_server.py: In-memory stand-in for the REST store
- test_query.py / test_pagination.py: query-string and PageInfo translation
- test_rest_client.py: HTTP adapter and failure mapping
- test_security.py / test_auth.py / test_permissions.py: sessions and access
- test_catalog.py / test_reviews.py / test_library.py / test_search.py:
  mediation operations
- test_graphql.py: end-to-end tests through the /graphql endpoint

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_graphql.py

    # Run with verbose output
    pytest -v
"""
