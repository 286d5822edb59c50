"""
catering_service tests

Unit tests for the pagination helper, sanitizers, log redaction, the search
clause builder and the tag resolver, plus service tests against SQLite and
end-to-end HTTP tests through the FastAPI ``TestClient``.
"""
