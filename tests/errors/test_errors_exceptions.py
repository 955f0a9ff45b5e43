import unittest

from gdrivecli.errors.exceptions import (
    AuthError,
    BadRequestError,
    ConflictError,
    FolderNotFoundError,
    GDriveCliError,
    HttpErrorInfo,
    InvalidSizeFormatError,
    LocalIOError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteServiceError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = GDriveCliError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_details_default_to_empty_dict(self) -> None:
        err = FolderNotFoundError("Folder not found: A/B")
        self.assertEqual(err.details, {})
        self.assertIsNone(err.cause)

    def test_remote_errors_share_catch_all_base(self) -> None:
        for cls in (
            BadRequestError,
            PermissionError,
            QuotaExceededError,
            NotFoundError,
            ConflictError,
            RateLimitError,
            NetworkError,
        ):
            self.assertTrue(issubclass(cls, RemoteServiceError), cls)

        self.assertFalse(issubclass(InvalidSizeFormatError, RemoteServiceError))
        self.assertFalse(issubclass(AuthError, RemoteServiceError))
        self.assertFalse(issubclass(LocalIOError, RemoteServiceError))
        self.assertTrue(issubclass(LocalIOError, GDriveCliError))

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)
        self.assertEqual(str(err), "not found")
        self.assertEqual(err.details["status_code"], 404)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, BadRequestError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=409, message="conflict"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_403_quota_vs_permission(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="quotaExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientPermissions", message="x")
        )
        self.assertIsInstance(err, PermissionError)

    def test_map_http_error_5xx_is_catch_all(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIs(type(err), RemoteServiceError)

    def test_map_http_error_default_message(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418))
        self.assertIs(type(err), RemoteServiceError)
        self.assertEqual(str(err), "HTTP error 418")


if __name__ == "__main__":
    unittest.main()
