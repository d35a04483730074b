from __future__ import annotations

import json

import pytest

from tests.support.threads import assistant, message, thread_json, user
from threadclean.compaction import compact_thread, extract_user_question, html_to_plain_text
from threadclean.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(compaction_user_max_chars=20, compaction_assistant_max_chars=30)


def _texts(compacted: str) -> list[str]:
    messages = json.loads(compacted)["storeState"]["messages"]
    return [content["text"] for m in messages for content in m.get("contents", [])]


# =============================================================================
# USER QUESTIONS
# =============================================================================


@pytest.mark.unit
def test_user_question_cut_at_context_marker(settings):
    text = "¿Cuántas calorías llevo? (Contexto adicional: perfil, dieta, historial...)"
    assert extract_user_question(text, settings) == "¿Cuántas calorías llevo?"


@pytest.mark.unit
def test_user_question_after_question_marker(settings):
    text = "CONTEXTO NUTRICIONAL\nAvena 150 kcal\n\n? PREGUNTA DEL USUARIO: ¿Voy bien?\n\nInstrucciones"
    assert extract_user_question(text, settings) == "¿Voy bien?"


@pytest.mark.unit
def test_user_question_after_question_marker_without_blank_line(settings):
    text = "PREGUNTA DEL USUARIO:  ¿Qué ceno?  "
    assert extract_user_question(text, settings) == "¿Qué ceno?"


@pytest.mark.unit
def test_user_question_marker_at_start_is_not_a_cut(settings):
    text = "(Contexto adicional: x)"
    assert extract_user_question(text, settings) == "(Contexto adicional:..."


@pytest.mark.unit
def test_long_user_message_truncated(settings):
    assert extract_user_question("a" * 25, settings) == "a" * 20 + "..."


@pytest.mark.unit
def test_short_user_message_trimmed(settings):
    assert extract_user_question("  hola  ", settings) == "hola"


# =============================================================================
# ASSISTANT TEXT
# =============================================================================


@pytest.mark.unit
def test_assistant_text_without_markup_is_unchanged(settings):
    assert html_to_plain_text("  hola\nmundo  ", settings) == "  hola\nmundo  "


@pytest.mark.unit
def test_assistant_markup_converted_to_plain_text():
    settings = Settings()
    html = (
        "<?xml version='1.0'?><!DOCTYPE html><html><head><script>x()</script>"
        "<style>p{}</style></head><body><h1>Hola</h1><p>Tom &amp; Jerry&nbsp;&lt;3</p></body></html>"
    )
    assert html_to_plain_text(html, settings) == "Hola Tom & Jerry <3"


@pytest.mark.unit
def test_assistant_plain_text_truncated(settings):
    html = "<p>" + "b" * 40 + "</p>"
    assert html_to_plain_text(html, settings) == "b" * 30 + "..."


# =============================================================================
# THREAD
# =============================================================================


@pytest.mark.unit
def test_compact_thread_applies_role_policies(settings):
    raw = thread_json(
        user("¿Y hoy? (Contexto adicional: muchos datos)", author_name="Ana", message_id="m1"),
        assistant("<p>Vas bien</p>", message_id="m2"),
        message("system", "<b>reglas</b>"),
    )
    compacted = compact_thread(raw, settings)

    messages = json.loads(compacted)["storeState"]["messages"]
    assert messages[0] == {
        "role": "user",
        "authorName": "Ana",
        "messageId": "m1",
        "contents": [{"$type": "text", "text": "¿Y hoy?"}],
    }
    assert _texts(compacted) == ["¿Y hoy?", "Vas bien", "<b>reglas</b>"]


@pytest.mark.unit
def test_compact_thread_drops_textless_contents_and_roleless_messages(settings):
    raw = json.dumps(
        {
            "storeState": {
                "messages": [
                    {"contents": [{"text": "sin rol"}]},
                    {"role": "assistant", "contents": [{"$type": "image"}, {"contentType": "text", "text": "ok"}]},
                ]
            }
        }
    )
    messages = json.loads(compact_thread(raw, settings))["storeState"]["messages"]
    assert messages == [{"role": "assistant", "contents": [{"contentType": "text", "text": "ok"}]}]


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", "{not json", "[]", '{"storeState": {"messages": null}}'])
def test_compact_thread_returns_non_threads_unchanged(raw, settings):
    assert compact_thread(raw, settings) == raw


@pytest.mark.unit
def test_compact_thread_returns_original_on_bad_text(settings):
    raw = json.dumps({"storeState": {"messages": [{"role": "user", "contents": [{"text": 42}]}]}})
    assert compact_thread(raw, settings) == raw


@pytest.mark.unit
def test_compact_thread_uses_env_settings_by_default(monkeypatch):
    monkeypatch.setenv("THREADCLEAN_COMPACTION_USER_MAX_CHARS", "3")
    compacted = compact_thread(thread_json(user("abcdef")))
    assert _texts(compacted) == ["abc..."]


@pytest.mark.unit
def test_compact_thread_returns_deeply_nested_input_unchanged(settings):
    raw = "[" * 100000 + "]" * 100000
    assert compact_thread(raw, settings) == raw
