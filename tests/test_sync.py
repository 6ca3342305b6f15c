"""Disk → DB template sync tests."""

from pathlib import Path

import pytest
from httpx import AsyncClient

from template_generator.config import settings

BUNDLED = Path(__file__).resolve().parents[1] / "templates"

GOOD = """\
---
name: Redis Cache
variables:
  - name: tag
    defaultValue: "7"
---
services:
  cache:
    image: redis:{{ tag }}
"""


@pytest.mark.asyncio
async def test_sync_bundled_templates(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "templates_dir", BUNDLED)

    resp = await client.post("/api/templates/sync")
    assert resp.status_code == 200
    assert sorted(resp.json()["created"]) == ["database/postgres", "web/nginx"]
    assert resp.json()["skipped"] == []

    resp = await client.post(
        "/api/templates/web/nginx/generate", json={"variables": {"port": 8080}}
    )
    assert resp.status_code == 200
    compose = resp.json()["dockerCompose"]
    assert "image: nginx:latest" in compose
    assert '"8080:80"' in compose

    resp = await client.post(
        "/api/templates/database/postgres/generate",
        json={"variables": {"database": "app", "password": "s3cretpass"}},
    )
    assert resp.status_code == 200
    assert "image: postgres:16" in resp.json()["dockerCompose"]
    assert '"5432:5432"' in resp.json()["dockerCompose"]


@pytest.mark.asyncio
async def test_sync_upserts_and_skips_broken_files(client: AsyncClient, monkeypatch, tmp_path):
    (tmp_path / "messaging").mkdir()
    (tmp_path / "redis.yml.tmpl").write_text(GOOD)
    (tmp_path / "messaging" / "broken.yml.tmpl").write_text("services:\n  q:\n    image: {{ tag\n")
    monkeypatch.setattr(settings, "templates_dir", tmp_path)

    resp = await client.post("/api/templates/sync")
    assert resp.json()["created"] == ["redis"]
    assert resp.json()["skipped"] == ["messaging/broken"]

    resp = await client.get("/api/templates/redis")
    assert resp.json()["name"] == "Redis Cache"
    assert resp.json()["category"] == "other"

    # Unchanged files are not reported again; edited ones are updated
    resp = await client.post("/api/templates/sync")
    assert resp.json()["created"] == [] and resp.json()["updated"] == []

    (tmp_path / "redis.yml.tmpl").write_text(GOOD.replace("Redis Cache", "Redis"))
    resp = await client.post("/api/templates/sync")
    assert resp.json()["updated"] == ["redis"]


@pytest.mark.asyncio
async def test_sync_missing_directory(client: AsyncClient, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "templates_dir", tmp_path / "absent")
    resp = await client.post("/api/templates/sync")
    assert resp.json()["created"] == []


@pytest.mark.asyncio
async def test_sync_skips_non_utf8_file(client: AsyncClient, monkeypatch, tmp_path):
    (tmp_path / "redis.yml.tmpl").write_text(GOOD)
    (tmp_path / "latin1.yml.tmpl").write_bytes(b"services:\n  app:\n    image: \xff\xfe\n")
    monkeypatch.setattr(settings, "templates_dir", tmp_path)

    resp = await client.post("/api/templates/sync")
    assert resp.status_code == 200
    assert resp.json()["created"] == ["redis"]
    assert resp.json()["skipped"] == ["latin1"]

    assert (await client.get("/api/templates/redis")).status_code == 200
