from __future__ import annotations

from geipan import cli


def test_flags_override_project_settings(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SCRAPY_SETTINGS_MODULE", "geipan.settings")
    args = cli.parse_args([
        "--output-dir", str(tmp_path), "--start-page", "4", "--threshold", "50",
        "--discard-on-flush", "--loglevel", "debug",
    ])

    settings = cli.build_settings(args)

    assert settings.get("GEIPAN_OUTPUT_DIR") == str(tmp_path)
    assert settings.getint("GEIPAN_START_PAGE") == 4
    assert settings.getint("GEIPAN_BATCH_THRESHOLD") == 50
    assert settings.getbool("GEIPAN_DISCARD_ON_FLUSH") is True
    assert settings.get("LOG_LEVEL") == "DEBUG"
    assert "geipan.pipelines.JsonBatchPipeline" in settings.getdict("ITEM_PIPELINES")


def test_defaults_come_from_settings_module(monkeypatch) -> None:
    monkeypatch.setenv("SCRAPY_SETTINGS_MODULE", "geipan.settings")

    settings = cli.build_settings(cli.parse_args([]))

    assert settings.get("GEIPAN_FILE_PREFIX") == "geipan"
    assert settings.getbool("ROBOTSTXT_OBEY") is False
    assert settings.getbool("RETRY_ENABLED") is False
