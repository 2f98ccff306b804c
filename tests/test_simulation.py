"""
Tests for controlspec.simulation - TestRequest and TestResponse.
"""

from controlspec.simulation import TestRequest, TestResponse


class TestRequestObject:

    def test_defaults(self):
        request = TestRequest()
        assert request.method == "GET"
        assert request.action == "index"
        assert request.params == {}
        assert request.session == {}
        assert not request.is_xhr

    def test_params_as_wire_strings(self):
        request = TestRequest("post", "create", {"id": 1, "tags": ["a"], "note": None})
        assert request.method == "POST"
        assert request.params == {"id": "1", "tags": ["a"], "note": None}

    def test_headers_lower_cased(self):
        request = TestRequest(headers={"X-Requested-With": "XMLHttpRequest"})
        assert request.headers == {"x-requested-with": "XMLHttpRequest"}
        assert request.is_xhr

    def test_shared_session(self):
        session = {"user": "alice"}
        assert TestRequest(session=session).session is session


class TestResponseObject:

    def test_defaults(self):
        response = TestResponse()
        assert response.status_code == 200
        assert response.is_success
        assert response.text == ""
        assert response.location is None
        assert response.template is None

    def test_redirect(self):
        response = TestResponse()
        response.redirect_to("/things")
        assert response.is_redirect
        assert response.status_code == 302
        assert response.location == "/things"
        assert response.header("Location") == "/things"

    def test_status_classes(self):
        response = TestResponse()
        response.status_code = 404
        assert response.is_client_error
        response.status_code = 503
        assert response.is_server_error
        assert not response.is_success

    def test_repr(self):
        response = TestResponse()
        response.body = "hello"
        assert repr(response) == "<TestResponse [200] 5 chars>"
