import unittest

from authed_fetch.options import AUTHORIZATION_HEADER, RequestOptions, with_auth
from authed_fetch.session import Session, access_token_of, refresh_token_of, session_to_dict


class RequestOptionsTest(unittest.TestCase):
    def test_defaults(self):
        options = RequestOptions()
        self.assertEqual(options.method, "GET")
        self.assertEqual(dict(options.headers), {})
        self.assertIsNone(options.credentials)
        self.assertIsNone(options.body)

    def test_with_header_returns_copy(self):
        options = RequestOptions(headers={"Accept": "application/json"})
        updated = options.with_header("X-Id", "1")
        self.assertEqual(dict(options.headers), {"Accept": "application/json"})
        self.assertEqual(dict(updated.headers), {"Accept": "application/json", "X-Id": "1"})

    def test_headers_not_shared_with_caller(self):
        headers = {"Accept": "application/json"}
        options = RequestOptions(headers=headers)
        headers["Accept"] = "text/plain"
        self.assertEqual(options.headers["Accept"], "application/json")

    def test_headers_are_read_only(self):
        options = RequestOptions(headers={"Accept": "application/json"})
        with self.assertRaises(TypeError):
            options.headers["Accept"] = "text/plain"

    def test_header_keys_keep_case(self):
        options = RequestOptions(headers={"authorization": "Basic x"}).with_bearer_token("tok")
        self.assertEqual(options.headers["authorization"], "Basic x")
        self.assertEqual(options.headers[AUTHORIZATION_HEADER], "Bearer tok")


class WithAuthTest(unittest.TestCase):
    def test_no_token_returns_same_object(self):
        options = RequestOptions(method="POST")
        self.assertIs(with_auth(options, None), options)
        self.assertIs(with_auth(options, ""), options)
        self.assertIsNone(with_auth(None, None))

    def test_token_on_missing_options(self):
        self.assertEqual(with_auth(None, "tok"), RequestOptions(headers={"Authorization": "Bearer tok"}))


class SessionHelpersTest(unittest.TestCase):
    def test_access_token_of(self):
        self.assertEqual(access_token_of(Session(access_token="a")), "a")
        self.assertEqual(access_token_of({"access_token": "b"}), "b")
        self.assertIsNone(access_token_of({"access_token": ""}))
        self.assertIsNone(access_token_of(Session()))
        self.assertIsNone(access_token_of(None))

    def test_refresh_token_of(self):
        self.assertEqual(refresh_token_of(Session(refresh_token="r")), "r")
        self.assertEqual(refresh_token_of({"refresh_token": "r"}), "r")
        self.assertIsNone(refresh_token_of({}))

    def test_session_to_dict(self):
        session = Session(access_token="a", refresh_token="r", extra={"expires_in": 3600})
        self.assertEqual(session_to_dict(session), {"access_token": "a", "refresh_token": "r", "expires_in": 3600})

    def test_session_to_dict_rejects_unknown_types(self):
        with self.assertRaises(TypeError):
            session_to_dict("token")


if __name__ == "__main__":
    unittest.main()
