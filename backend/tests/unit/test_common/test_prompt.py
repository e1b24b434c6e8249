"""
Prompt Extraction Unit Tests
"""

import json

import pytest

from hermes_proxy.common.prompt import (
    ContentKind,
    classify_content,
    detect_tool_name,
    extract_prompt_text,
)


class TestExtractPromptText:
    """Prompt flattening"""

    def test_string_contents_joined_by_newline(self):
        body = {
            "messages": [
                {"role": "system", "content": "You are helpful."},
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": "Hello!"},
            ]
        }
        assert extract_prompt_text(body) == "You are helpful.\nhi\nHello!"

    def test_single_message(self):
        body = {"messages": [{"role": "user", "content": "hi"}]}
        assert extract_prompt_text(body) == "hi"

    def test_content_parts_joined_by_space(self):
        body = {"messages": [{"role": "user", "content": [{"text": "a"}, {"text": "b"}]}]}
        assert extract_prompt_text(body) == "a b"

    def test_part_without_text_uses_json(self):
        image = {"type": "image_url", "image_url": {"url": "https://x/y.png"}}
        body = {
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": "look"}, image]}
            ]
        }
        assert extract_prompt_text(body) == "look " + json.dumps(image, separators=(",", ":"))

    def test_unknown_content_uses_message_json(self):
        message = {"role": "assistant", "content": None, "tool_calls": [{"id": "1"}]}
        body = {"messages": [message, {"role": "user", "content": "next"}]}
        expected = json.dumps(message, separators=(",", ":")) + "\nnext"
        assert extract_prompt_text(body) == expected

    def test_non_dict_message(self):
        assert extract_prompt_text({"messages": ["raw"]}) == '"raw"'

    def test_null_message_logs_whole_body(self):
        body = {"messages": [{"role": "user", "content": "hi"}, None]}
        assert extract_prompt_text(body) == json.dumps(body, separators=(",", ":"))

    def test_null_content_part_logs_whole_body(self):
        body = {"messages": [{"role": "user", "content": [{"text": "a"}, None]}]}
        assert extract_prompt_text(body) == json.dumps(body, separators=(",", ":"))

    def test_without_messages_uses_body_json(self):
        body = {"model": "gpt-4", "prompt": "hi"}
        assert extract_prompt_text(body) == '{"model":"gpt-4","prompt":"hi"}'

    def test_messages_not_a_list(self):
        body = {"messages": "hi"}
        assert extract_prompt_text(body) == '{"messages":"hi"}'

    def test_non_ascii_preserved(self):
        body = {"model": "x", "note": "héllo"}
        assert "héllo" in extract_prompt_text(body)

    def test_never_raises(self):
        class Exploding(dict):
            def get(self, *args, **kwargs):
                raise RuntimeError("boom")

        body = Exploding(messages=[])
        assert extract_prompt_text(body) == '{"messages":[]}'


def test_classify_content():
    assert classify_content("hi") is ContentKind.TEXT
    assert classify_content([{"text": "a"}]) is ContentKind.PARTS
    assert classify_content(None) is ContentKind.UNKNOWN
    assert classify_content({"text": "a"}) is ContentKind.UNKNOWN


class TestDetectToolName:
    """User-Agent fingerprinting"""

    @pytest.mark.parametrize(
        "user_agent,expected",
        [
            ("Mozilla/5.0 (Macintosh) Cursor/0.42.3 Chrome/124.0", "Cursor"),
            ("continue/0.9.1 node", "Continue.dev"),
            ("Sourcegraph-Cody/1.2", "Cody"),
            ("VSCode/1.90 extension", "VS Code"),
            ("OpenAI/Python 1.30.1", "OpenAI"),
            ("curl/8.4.0", "Unknown"),
            ("", "Unknown"),
            (None, "Unknown"),
        ],
    )
    def test_known_tools(self, user_agent, expected):
        assert detect_tool_name(user_agent) == expected

    def test_first_signature_wins(self):
        assert detect_tool_name("cursor-openai-bridge") == "Cursor"
