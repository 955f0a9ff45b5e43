import errno
import json
import os
import stat
import tempfile
import unittest
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from googleapiclient.errors import HttpError

from gdrivecli.controller.drive_controller import (
    GoogleDriveController,
    _file_dict_to_entry,
    _LocalSink,
)
from gdrivecli.errors import (
    LocalIOError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RemoteServiceError,
)
from gdrivecli.util.time import to_rfc3339

MODULE = "gdrivecli.controller.drive_controller"


def _http_error(status: int, reason: str, body: dict | None = None) -> HttpError:
    resp = Mock()
    resp.status = status
    resp.reason = reason
    content = json.dumps(body).encode("utf-8") if body is not None else b"{}"
    return HttpError(resp=resp, content=content)


class FakeDownloader:
    """Stands in for MediaIoBaseDownload: writes `chunks` to the fd one per call."""

    chunks: list = [b"hello ", b"world"]

    def __init__(self, fd, request, chunksize=None) -> None:
        self.fd = fd
        self.request = request
        self._remaining = list(self.chunks)

    def next_chunk(self):
        chunk = self._remaining.pop(0)
        if isinstance(chunk, Exception):
            raise chunk
        self.fd.write(chunk)
        return None, not self._remaining


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_entry_parses_fields(self) -> None:
        dt = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        data = {
            "id": "F1",
            "name": "n",
            "mimeType": "text/plain",
            "parents": ["P1"],
            "trashed": False,
            "starred": True,
            "modifiedTime": to_rfc3339(dt),
            "size": "123",
            "webViewLink": "https://drive.google.com/file/d/F1/view",
            "owners": [{"emailAddress": "me@example.com"}],
        }
        entry = _file_dict_to_entry(data)
        self.assertEqual(entry.file_id, "F1")
        self.assertEqual(entry.size, 123)
        self.assertEqual(entry.modified_time, dt)
        self.assertEqual(entry.parents, ["P1"])
        self.assertTrue(entry.starred)
        self.assertEqual(entry.owners, ["me@example.com"])
        self.assertEqual(entry.web_view_link, "https://drive.google.com/file/d/F1/view")

    def test_file_dict_to_entry_tolerates_missing_fields(self) -> None:
        entry = _file_dict_to_entry(
            {"id": "D1", "name": "Doc", "mimeType": "application/vnd.google-apps.folder",
             "modifiedTime": "not-a-date"}
        )
        self.assertIsNone(entry.size)
        self.assertIsNone(entry.modified_time)
        self.assertIsNone(entry.web_view_link)
        self.assertEqual(entry.parents, [])


class ControllerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.files = Mock()
        self.service.files.return_value = self.files
        self.controller = GoogleDriveController.from_service(self.service)

    def _list_returns(self, *pages: dict) -> Mock:
        request = Mock()
        request.execute.side_effect = list(pages)
        self.files.list.return_value = request
        return request


class TestDriveControllerListing(ControllerTestCase):
    def test_list_children_pages_and_kwargs(self) -> None:
        self._list_returns(
            {"files": [{"id": "A", "name": "a", "mimeType": "text/plain"}],
             "nextPageToken": "t1"},
            {"files": [{"id": "B", "name": "b", "mimeType": "text/plain"}]},
        )

        entries = self.controller.list_children("P1")

        self.assertEqual([e.file_id for e in entries], ["A", "B"])
        first, second = self.files.list.call_args_list
        self.assertEqual(first.kwargs["q"], "'P1' in parents and trashed = false")
        self.assertEqual(first.kwargs["orderBy"], "name")
        self.assertEqual(first.kwargs["pageSize"], 100)
        self.assertTrue(first.kwargs["supportsAllDrives"])
        self.assertTrue(first.kwargs["includeItemsFromAllDrives"])
        self.assertNotIn("pageToken", first.kwargs)
        self.assertEqual(second.kwargs["pageToken"], "t1")

    def test_list_page_caps_page_size_and_returns_token(self) -> None:
        self._list_returns({"files": [], "nextPageToken": "next"})

        entries, token = self.controller.list_page(
            "trashed = false", page_size=500, order_by="modifiedTime desc"
        )

        self.assertEqual(entries, [])
        self.assertEqual(token, "next")
        kwargs = self.files.list.call_args.kwargs
        self.assertEqual(kwargs["pageSize"], 100)
        self.assertEqual(kwargs["orderBy"], "modifiedTime desc")

    def test_supports_all_drives_can_be_disabled(self) -> None:
        controller = GoogleDriveController.from_service(self.service, supports_all_drives=False)
        self._list_returns({"files": []})

        controller.list_page("trashed = false")

        kwargs = self.files.list.call_args.kwargs
        self.assertNotIn("supportsAllDrives", kwargs)
        self.assertNotIn("includeItemsFromAllDrives", kwargs)

    def test_find_child_returns_first_match(self) -> None:
        self._list_returns(
            {"files": [
                {"id": "X1", "name": "Work", "mimeType": "application/vnd.google-apps.folder"},
                {"id": "X2", "name": "Work", "mimeType": "application/vnd.google-apps.folder"},
            ]}
        )

        entry = self.controller.find_child("root", "Work", folder_only=True)

        self.assertEqual(entry.file_id, "X1")
        q = self.files.list.call_args.kwargs["q"]
        self.assertIn("'root' in parents", q)
        self.assertIn("name = 'Work'", q)
        self.assertIn("mimeType = 'application/vnd.google-apps.folder'", q)
        self.assertIn("trashed = false", q)

    def test_find_child_none(self) -> None:
        self._list_returns({"files": []})
        self.assertIsNone(self.controller.find_child("root", "Nope"))


class TestDriveControllerErrors(ControllerTestCase):
    def test_get_maps_http_404_to_not_found(self) -> None:
        req = Mock()
        self.files.get.return_value = req
        req.execute.side_effect = _http_error(404, "Not Found")

        with self.assertRaises(NotFoundError):
            self.controller.get("X")

    def test_429_is_not_retried(self) -> None:
        req = Mock()
        self.files.get.return_value = req
        body = {
            "error": {
                "message": "rate limited",
                "errors": [{"reason": "rateLimitExceeded"}],
            }
        }
        req.execute.side_effect = [
            _http_error(429, "rateLimitExceeded", body),
            {"id": "F1", "name": "n", "mimeType": "text/plain"},
        ]

        with self.assertRaises(RateLimitError) as cm:
            self.controller.get("F1")

        self.assertEqual(str(cm.exception), "rate limited")
        self.assertEqual(req.execute.call_count, 1)

    def test_os_error_maps_to_network_error(self) -> None:
        req = Mock()
        self.files.get.return_value = req
        req.execute.side_effect = ConnectionResetError("reset")

        with self.assertRaises(NetworkError):
            self.controller.get("X")

    def test_unexpected_error_maps_to_remote_service_error(self) -> None:
        req = Mock()
        self.files.get.return_value = req
        req.execute.side_effect = RuntimeError("boom")

        with self.assertRaises(RemoteServiceError):
            self.controller.get("X")


class TestDriveControllerTransfers(ControllerTestCase):
    def setUp(self) -> None:
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_upload_file(self) -> None:
        req = Mock()
        req.execute.return_value = {
            "id": "NEW",
            "name": "report.pdf",
            "mimeType": "application/pdf",
            "size": "8",
            "webViewLink": "https://drive.google.com/file/d/NEW/view",
        }
        self.files.create.return_value = req

        with patch(f"{MODULE}.MediaFileUpload") as media_cls:
            entry = self.controller.upload_file(
                "/tmp/report.pdf", "P1", mime_type="application/pdf"
            )

        media_cls.assert_called_once_with(
            "/tmp/report.pdf", mimetype="application/pdf", resumable=False
        )
        kwargs = self.files.create.call_args.kwargs
        self.assertEqual(kwargs["body"], {"name": "report.pdf", "parents": ["P1"]})
        self.assertIs(kwargs["media_body"], media_cls.return_value)
        self.assertEqual(entry.file_id, "NEW")
        self.assertEqual(entry.size, 8)

    def test_download_media_writes_file(self) -> None:
        dest = os.path.join(self.tmp, "out.bin")

        with patch(f"{MODULE}.MediaIoBaseDownload", FakeDownloader):
            self.controller.download_media("F1", dest)

        with open(dest, "rb") as f:
            self.assertEqual(f.read(), b"hello world")
        self.assertEqual(os.listdir(self.tmp), ["out.bin"])
        self.files.get_media.assert_called_once_with(fileId="F1", supportsAllDrives=True)

    def test_download_failure_leaves_no_partial_file(self) -> None:
        dest = os.path.join(self.tmp, "out.bin")

        class FailingDownloader(FakeDownloader):
            chunks = [b"partial", _http_error(500, "backendError")]

        with patch(f"{MODULE}.MediaIoBaseDownload", FailingDownloader):
            with self.assertRaises(RemoteServiceError):
                self.controller.download_media("F1", dest)

        self.assertEqual(os.listdir(self.tmp), [])

    def test_download_failure_keeps_existing_destination(self) -> None:
        dest = os.path.join(self.tmp, "out.bin")
        with open(dest, "wb") as f:
            f.write(b"previous")

        class FailingDownloader(FakeDownloader):
            chunks = [ConnectionResetError("reset")]

        with patch(f"{MODULE}.MediaIoBaseDownload", FailingDownloader):
            with self.assertRaises(NetworkError):
                self.controller.download_media("F1", dest)

        with open(dest, "rb") as f:
            self.assertEqual(f.read(), b"previous")
        self.assertEqual(os.listdir(self.tmp), ["out.bin"])

    def test_export_media(self) -> None:
        dest = os.path.join(self.tmp, "sub", "doc.pdf")

        with patch(f"{MODULE}.MediaIoBaseDownload", FakeDownloader):
            self.controller.export_media("D1", "application/pdf", dest)

        self.files.export_media.assert_called_once_with(
            fileId="D1", mimeType="application/pdf"
        )
        with open(dest, "rb") as f:
            self.assertEqual(f.read(), b"hello world")

    def test_upload_unreadable_source_is_local_error(self) -> None:
        with patch(f"{MODULE}.MediaFileUpload",
                   side_effect=PermissionError(errno.EACCES, "Permission denied")):
            with self.assertRaises(LocalIOError) as cm:
                self.controller.upload_file("/tmp/secret.bin", "P1")

        self.assertIn("Permission denied", str(cm.exception))
        self.files.create.assert_not_called()

    def test_destination_under_a_file_is_local_error(self) -> None:
        blocker = os.path.join(self.tmp, "blocker")
        with open(blocker, "wb") as f:
            f.write(b"x")

        with patch(f"{MODULE}.MediaIoBaseDownload", FakeDownloader):
            with self.assertRaises(LocalIOError) as cm:
                self.controller.download_media("F1", os.path.join(blocker, "out.bin"))

        self.assertEqual(cm.exception.details["local_path"], os.path.join(blocker, "out.bin"))
        self.assertEqual(os.listdir(self.tmp), ["blocker"])

    def test_local_write_failure_is_not_network_error(self) -> None:
        dest = os.path.join(self.tmp, "out.bin")

        class DiskFullDownloader(FakeDownloader):
            chunks = [LocalIOError("Cannot write to out.bin: No space left on device")]

        with patch(f"{MODULE}.MediaIoBaseDownload", DiskFullDownloader):
            with self.assertRaises(LocalIOError):
                self.controller.download_media("F1", dest)

        self.assertEqual(os.listdir(self.tmp), [])

    def test_local_sink_maps_write_errors(self) -> None:
        f = Mock()
        f.write.side_effect = OSError(errno.ENOSPC, "No space left on device")
        sink = _LocalSink(f, "/data/out.bin")

        with self.assertRaises(LocalIOError) as cm:
            sink.write(b"abc")

        self.assertEqual(str(cm.exception), "Cannot write to /data/out.bin: No space left on device")
        self.assertEqual(cm.exception.details["errno"], errno.ENOSPC)

    @unittest.skipIf(os.name == "nt", "POSIX file modes")
    def test_new_file_follows_umask(self) -> None:
        dest = os.path.join(self.tmp, "out.bin")
        old_umask = os.umask(0o022)
        try:
            with patch(f"{MODULE}.MediaIoBaseDownload", FakeDownloader):
                self.controller.download_media("F1", dest)
        finally:
            os.umask(old_umask)

        self.assertEqual(stat.S_IMODE(os.stat(dest).st_mode), 0o644)

    @unittest.skipIf(os.name == "nt", "POSIX file modes")
    def test_overwrite_keeps_existing_mode(self) -> None:
        dest = os.path.join(self.tmp, "out.bin")
        with open(dest, "wb") as f:
            f.write(b"previous")
        os.chmod(dest, 0o640)

        with patch(f"{MODULE}.MediaIoBaseDownload", FakeDownloader):
            self.controller.download_media("F1", dest)

        self.assertEqual(stat.S_IMODE(os.stat(dest).st_mode), 0o640)
        with open(dest, "rb") as f:
            self.assertEqual(f.read(), b"hello world")


if __name__ == "__main__":
    unittest.main()
