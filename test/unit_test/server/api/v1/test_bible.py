"""Unit tests for the Bible text endpoints over a mocked upstream."""

from __future__ import annotations

from bibliafs.bible.books import BIBLE_BOOKS


def _chapter(text: str) -> dict:
    return {
        "book": {"abbrev": {"pt": "jo"}, "name": "João"},
        "chapter": {"number": 3, "verses": 1},
        "verses": [{"number": 16, "text": text}],
    }


class TestBooks:
    async def test_book_list_falls_back_to_catalogue(self, client):
        response = await client.get("/api/bible/books")

        assert response.status_code == 200
        assert len(response.json()) == len(BIBLE_BOOKS) == 66

    async def test_book_info(self, client):
        response = await client.get("/api/bible/book-info/gn")

        assert response.status_code == 200
        assert response.json()["name"] == "Gênesis"
        assert (await client.get("/api/bible/book-info/xyz")).status_code == 404


class TestChapters:
    async def test_chapter_from_upstream(self, client, bible_upstream):
        bible_upstream.responses["/verses/nvi/jo/3"] = _chapter("Porque Deus tanto amou o mundo")

        response = await client.get("/api/bible/nvi/jo/3")

        assert response.status_code == 200
        assert response.json()["verses"][0]["text"] == "Porque Deus tanto amou o mundo"

    async def test_chapter_falls_back_to_bundled_copy(self, client):
        response = await client.get("/api/bible/nvi/gn/1")

        assert response.status_code == 200
        assert response.json()["verses"]

    async def test_unavailable_chapter_answers_503(self, client):
        response = await client.get("/api/bible/nvi/ob/1")

        assert response.status_code == 503
        assert response.json()["upstream_status"] == 503

    async def test_verse_has_no_fallback(self, client):
        assert (await client.get("/api/bible/nvi/gn/1/1")).status_code == 503

    async def test_compare_omits_versions_that_fail(self, client, bible_upstream):
        bible_upstream.responses["/verses/acf/jo/3"] = _chapter("Porque Deus amou o mundo de tal maneira")

        response = await client.get("/api/bible/compare/jo/3", params={"versions": "acf, ra"})

        assert response.status_code == 200
        body = response.json()
        assert body["book"] == "jo"
        assert list(body["versions"]) == ["acf"]


class TestSearch:
    async def test_search_requires_query(self, client):
        assert (await client.get("/api/bible/search", params={"query": "  "})).status_code == 400

    async def test_search_passes_through_upstream(self, client, bible_upstream):
        bible_upstream.responses["/verses/nvi/search/amor"] = {"occurrence": 1, "verses": [{"number": 16}]}

        response = await client.get("/api/bible/search", params={"query": "amor"})

        assert response.status_code == 200
        assert response.json()["occurrence"] == 1
