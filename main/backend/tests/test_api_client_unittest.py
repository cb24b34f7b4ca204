from __future__ import annotations

import hashlib
import sys
import unittest
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from channelsync.services.channels.errors import FetchError
from channelsync.services.http.client import ApiClient


ENVELOPE = {
    "code": 200,
    "status": "Ok",
    "attributionText": "Data provided by Marvel.",
    "etag": "abc",
    "data": {
        "offset": 0,
        "limit": 20,
        "total": 145,
        "count": 1,
        "results": [
            {
                "id": 1011334,
                "name": "3-D Man",
                "description": "",
                "modified": "2014-04-29T14:18:17-0400",
                "resourceURI": "http://gateway.marvel.com/v1/public/characters/1011334",
                "thumbnail": {"path": "http://i.annihil.us/u/prod/marvel/i/mg/c/e0/535fecbbb9784", "extension": "jpg"},
                "comics": {
                    "available": 1,
                    "returned": 1,
                    "collectionURI": "http://gateway.marvel.com/v1/public/characters/1011334/comics",
                    "items": [{"resourceURI": "http://gateway.marvel.com/v1/public/comics/21366", "name": "Avengers: The Initiative (2007) #14"}],
                },
                "urls": [{"type": "detail", "url": "http://marvel.com"}],
            }
        ],
    },
}


class ApiClientTestCase(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler, **kwargs) -> ApiClient:
        return ApiClient(
            base_url="https://api.test/v1/public",
            transport=httpx.MockTransport(handler),
            clock=lambda: 1000,
            **kwargs,
        )

    async def test_fetch_page_signs_request_and_parses_envelope(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=ENVELOPE)

        client = self._client(handler, public_key="pub", private_key="priv")
        page = await client.fetch_page("characters", {"orderBy": "name", "limit": 20, "offset": 0})
        await client.aclose()

        self.assertEqual(seen["path"], "/v1/public/characters")
        self.assertEqual(seen["params"]["orderBy"], "name")
        self.assertEqual(seen["params"]["ts"], "1000")
        self.assertEqual(seen["params"]["apikey"], "pub")
        self.assertEqual(seen["params"]["hash"], hashlib.md5(b"1000privpub").hexdigest())
        self.assertEqual(page.total, 145)
        entity = page.results[0]
        self.assertEqual(entity.display_name(), "3-D Man")
        self.assertEqual(entity.comics.items[0].name, "Avengers: The Initiative (2007) #14")
        self.assertEqual(entity.thumbnail_url(), "http://i.annihil.us/u/prod/marvel/i/mg/c/e0/535fecbbb9784/landscape_xlarge.jpg")
        self.assertFalse(entity.active)

    async def test_unsigned_without_keys(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=ENVELOPE)

        client = self._client(handler)
        await client.fetch_page("characters", {"limit": 20})
        await client.aclose()
        self.assertNotIn("hash", seen["params"])

    async def test_error_status_raises_fetch_error(self):
        client = self._client(lambda request: httpx.Response(409, json={"code": 409, "status": "Limit greater than 100."}))
        with self.assertRaises(FetchError) as ctx:
            await client.fetch_page("characters", {"limit": 200})
        await client.aclose()
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertTrue(ctx.exception.url.endswith("/characters"))

    async def test_transport_error_raises_fetch_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = self._client(handler)
        with self.assertRaises(FetchError) as ctx:
            await client.fetch_page("creators", {})
        await client.aclose()
        self.assertIsNone(ctx.exception.status_code)

    async def test_malformed_envelope_raises_fetch_error(self):
        client = self._client(lambda request: httpx.Response(200, json={"data": {"results": [{"name": "no id"}]}}))
        with self.assertRaises(FetchError):
            await client.fetch_page("characters", {})
        await client.aclose()

    async def test_non_json_body_raises_fetch_error(self):
        client = self._client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with self.assertRaises(FetchError):
            await client.fetch_page("characters", {})
        await client.aclose()


if __name__ == "__main__":
    unittest.main()
