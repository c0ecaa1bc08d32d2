"""
Tests for the menu-studio CLI.
"""

import httpx
import pytest
from sqlalchemy import func, select
from typer.testing import CliRunner

import cli
from rest_api.main import app
from rest_api.models import (
    ItemAllergenTranslation,
    ItemIngredientTranslation,
    MenuItemTranslation,
    MenuSectionTranslation,
)

runner = CliRunner()


@pytest.fixture
def local_api(client, monkeypatch):
    """Route the CLI's HTTP client into the app in-process."""
    real_client = httpx.AsyncClient

    def in_process_client(*args, **kwargs):
        if kwargs.get("transport") is None:
            kwargs["transport"] = httpx.ASGITransport(app=app)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(cli.httpx, "AsyncClient", in_process_client)


class TestInfoCommands:
    def test_languages(self):
        result = runner.invoke(cli.app, ["languages"])
        assert result.exit_code == 0
        assert "Japanese" in result.output

    def test_presets(self):
        result = runner.invoke(cli.app, ["presets", "pizzeria"])
        assert result.exit_code == 0
        assert "Pizze Rosse" in result.output

    def test_unknown_preset_type(self):
        result = runner.invoke(cli.app, ["presets", "discoteca"])
        assert result.exit_code == 1

    def test_version(self):
        result = runner.invoke(cli.app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestTranslateMenu:
    def _invoke(self, menu_id, *extra):
        return runner.invoke(
            cli.app,
            [
                "translate-menu",
                menu_id,
                "--email", "owner@test.com",
                "--password", "testpass123",
                "--api-url", "http://testserver",
                *extra,
            ],
        )

    def _stored(self, db_session):
        return sum(
            db_session.scalar(select(func.count()).select_from(model))
            for model in (
                MenuSectionTranslation,
                MenuItemTranslation,
                ItemIngredientTranslation,
                ItemAllergenTranslation,
            )
        )

    def test_default_selection(self, local_api, owner, menu_tree, fake_llm, db_session):
        result = self._invoke(menu_tree["menu"].id, "-l", "de")

        assert result.exit_code == 0, result.output
        # section description, item description, two ingredients, one allergen
        assert len(fake_llm.chat_calls) == 5
        assert self._stored(db_session) == 5

    def test_include_names(self, local_api, owner, menu_tree, fake_llm, db_session):
        result = self._invoke(menu_tree["menu"].id, "-l", "en", "-l", "fr", "--include-names")

        assert result.exit_code == 0, result.output
        # plus two section names and two item names
        assert self._stored(db_session) == 18

    def test_dry_run_sends_nothing(self, local_api, owner, menu_tree, fake_llm):
        result = self._invoke(menu_tree["menu"].id, "--dry-run")

        assert result.exit_code == 0, result.output
        assert "5 translations" in result.output
        assert fake_llm.chat_calls == []

    def test_partial_failure_exit_code(self, local_api, owner, menu_tree, fake_llm):
        fake_llm.chat_status = 500
        result = self._invoke(menu_tree["menu"].id)

        assert result.exit_code == 1
        assert "0 completed, 5 failed" in result.output

    def test_bad_credentials(self, local_api, owner, menu_tree):
        result = runner.invoke(
            cli.app,
            [
                "translate-menu", menu_tree["menu"].id,
                "--email", "owner@test.com",
                "--password", "wrong",
                "--api-url", "http://testserver",
            ],
        )
        assert result.exit_code == 1

    def test_unsupported_language(self, menu_tree):
        result = self._invoke(menu_tree["menu"].id, "-l", "it")
        assert result.exit_code == 1
        assert "Unsupported language" in result.output
