import asyncio
import json
from pathlib import Path

from link_catalog.storage.catalog_store import load_catalog, save_catalog
from link_catalog.storage.models import Link


def test_missing_or_corrupt_catalog_starts_fresh(tmp_path: Path) -> None:
    assert asyncio.run(load_catalog(str(tmp_path / "absent.json"))) == {}

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("[1, 2, 3]", encoding="utf-8")
    assert asyncio.run(load_catalog(str(corrupt))) == {}


def test_save_writes_pretty_json_and_keeps_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "links-data.json"
    path.write_text(json.dumps({
        "https://youtu.be/dQw4w9WgXcQ": {
            "url": "https://youtu.be/dQw4w9WgXcQ",
            "title": "Song",
            "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
            "author": "Rick",
            "type": "video",
            "fetchedAt": "2024-05-01T00:00:00.000Z",
            "tags": ["music"],
        },
    }), encoding="utf-8")

    catalog = asyncio.run(load_catalog(str(path)))
    link = catalog["https://youtu.be/dQw4w9WgXcQ"]
    assert link.author == "Rick"
    assert link.extra == {"tags": ["music"]}

    catalog["https://example.com"] = Link(url="https://example.com", type="website", title="example.com",
                                          fetched_at="2024-05-02T00:00:00.000Z")
    asyncio.run(save_catalog(str(path), catalog))

    raw = path.read_text(encoding="utf-8")
    assert raw.startswith('{\n  "https://youtu.be/dQw4w9WgXcQ": {')
    saved = json.loads(raw)
    assert list(saved) == ["https://youtu.be/dQw4w9WgXcQ", "https://example.com"]
    assert saved["https://youtu.be/dQw4w9WgXcQ"]["tags"] == ["music"]
    assert saved["https://example.com"] == {
        "url": "https://example.com",
        "title": "example.com",
        "image": None,
        "description": "",
        "type": "website",
        "fetchedAt": "2024-05-02T00:00:00.000Z",
    }
    assert not (tmp_path / "links-data.json.tmp").exists()
