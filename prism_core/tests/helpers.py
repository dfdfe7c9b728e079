# prism_core/tests/helpers.py

def visit_key(visit, **extra):
    """Request body fields identifying a visit."""
    body = {"record_number": visit.record_number, "visit_id": visit.visit_id}
    body.update(extra)
    return body


def error_of(res):
    """The error object of an enveloped error response."""
    body = res.json()
    assert "error" in body, body
    return body["error"]
