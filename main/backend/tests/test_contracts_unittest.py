from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from channelsync.contracts import ApiMetaModel, ErrorCode, fail, http_status_for, map_exception_to_error, ok, ok_page
from channelsync.services.channels.errors import FetchError, NotFoundInPage, PersistenceError
from channelsync.services.channels.types import Page


class ContractTestCase(unittest.TestCase):
    def test_ok_envelope_helper_shape(self):
        payload = ok({"hello": "world"}, meta=ApiMetaModel(channel="characters"))
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["data"]["hello"], "world")
        self.assertIsNone(payload["error"])
        self.assertEqual(payload["meta"]["channel"], "characters")

    def test_fail_envelope_helper_shape(self):
        payload = fail(ErrorCode.INVALID_INPUT, "bad request", details={"field": "page"})
        self.assertEqual(payload["status"], "error")
        self.assertIsNone(payload["data"])
        self.assertEqual(payload["error"]["code"], ErrorCode.INVALID_INPUT.value)
        self.assertEqual(payload["error"]["details"]["field"], "page")

    def test_ok_page_reports_page_count(self):
        payload = ok_page(Page(total=145, count=20, limit=20), page_number=2, page_size=20)
        pagination = payload["meta"]["pagination"]
        self.assertEqual(pagination["page"], 2)
        self.assertEqual(pagination["total"], 145)
        self.assertEqual(pagination["total_pages"], 8)
        self.assertEqual(payload["data"]["count"], 20)

    def test_empty_page_has_no_pages(self):
        payload = ok_page(Page(), page_number=1, page_size=20)
        self.assertEqual(payload["meta"]["pagination"]["total_pages"], 0)

    def test_channel_errors_map_to_codes(self):
        code, _, details = map_exception_to_error(FetchError("HTTP 503", status_code=503, url="https://api/characters"))
        self.assertEqual(code, ErrorCode.UPSTREAM_ERROR)
        self.assertEqual(details["status_code"], 503)
        self.assertEqual(http_status_for(code), 502)

        code, _, details = map_exception_to_error(PersistenceError("write failed", key="@ns:characters"))
        self.assertEqual(code, ErrorCode.STORAGE_ERROR)
        self.assertEqual(details, {"key": "@ns:characters"})

        code, _, details = map_exception_to_error(NotFoundInPage("characters", 7))
        self.assertEqual(code, ErrorCode.STALE_PAGE)
        self.assertEqual(http_status_for(code), 409)

        code, _, details = map_exception_to_error(RuntimeError("boom"))
        self.assertEqual(code, ErrorCode.INTERNAL_ERROR)
        self.assertEqual(details["exception_type"], "RuntimeError")


if __name__ == "__main__":
    unittest.main()
