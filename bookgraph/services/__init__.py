"""
Services Package

The data-source mediation layer: everything that turns a GraphQL field into
REST calls against the resource store and back into plain records.

Current services:
- rest_client.py: httpx adapter returning body + pagination headers per call
- query.py: query-string builder (_limit/_page/_sort/_order + filters)
- pagination.py: Link / X-Total-Count headers to PageInfo
- catalog.py: authors and books (get, list, relations, create)
- reviews.py: reviews (get, list, create with uniqueness check, update, delete)
- library.py: a user's personal library (list, add, remove)
- search.py: merged author/book/user search
- auth.py: user lookup, sign-up and login
- security.py: password hashing and session tokens
"""
