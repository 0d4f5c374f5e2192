import json

from core.poet_config import (
    PoetConfig,
    load_bio,
    load_poet_config,
    merge_request,
    save_poet_config,
)


def test_missing_config_is_none(tmp_path):
    assert load_poet_config(tmp_path) is None


def test_save_then_load(tmp_path):
    path = save_poet_config(PoetConfig(model="llama3:8b", seed_line="Begin.", style="Haiku"), tmp_path)

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"model": "llama3:8b", "seedLine": "Begin.", "style": "Haiku"}

    loaded = load_poet_config(tmp_path)
    assert loaded.model == "llama3:8b"
    assert loaded.seed_line == "Begin."
    assert loaded.theme is None


def test_invalid_config_is_ignored(tmp_path):
    (tmp_path / ".poet").write_text("{not json", encoding="utf-8")
    assert load_poet_config(tmp_path) is None


def test_snake_case_keys_accepted(tmp_path):
    (tmp_path / ".poet").write_text('{"seed_line": "Hello"}', encoding="utf-8")
    assert load_poet_config(tmp_path).seed_line == "Hello"


def test_bio_is_trimmed(tmp_path):
    (tmp_path / ".me.toon").write_text("\n  a night-shift nurse  \n", encoding="utf-8")
    assert load_bio(tmp_path) == "a night-shift nurse"


def test_missing_or_empty_bio(tmp_path):
    assert load_bio(tmp_path) is None
    (tmp_path / ".me.toon").write_text("   \n", encoding="utf-8")
    assert load_bio(tmp_path) is None


def test_merge_precedence():
    saved = PoetConfig(title="Saved", theme="Love", style="Sonnet")
    req = merge_request({"title": "Explicit", "theme": None, "style": ""}, saved, user_bio="me")

    assert req.title == "Explicit"
    assert req.theme == "Love"
    assert req.style == "Sonnet"
    assert req.seed_line is None
    assert req.user_bio == "me"
    assert req.guidance is None


def test_merge_without_saved_config():
    req = merge_request({"style": "random"}, None, guidance="  6 lines long ")
    assert req.style is None
    assert req.guidance == "6 lines long"


def test_config_that_is_not_utf8_is_ignored(tmp_path):
    (tmp_path / ".poet").write_bytes(b'{"theme": "caf\xe9"}')
    assert load_poet_config(tmp_path) is None


def test_bio_that_is_not_utf8_is_ignored(tmp_path):
    (tmp_path / ".me.toon").write_bytes(b"un po\xe8te")
    assert load_bio(tmp_path) is None
