"""Tests for the per-language message tables."""

from __future__ import annotations

import pytest

from labelreader.domain.models import Language
from labelreader.narration.messages import MESSAGES, MessageKey, message


class TestMessageTables:
    def test_every_language_has_a_table(self) -> None:
        assert set(MESSAGES) == set(Language)

    @pytest.mark.parametrize("language", list(Language))
    def test_tables_share_the_key_set(self, language: Language) -> None:
        """Narration and display can look up any key in any language."""
        assert set(MESSAGES[language]) == set(MessageKey)

    @pytest.mark.parametrize("language", list(Language))
    def test_no_empty_messages(self, language: Language) -> None:
        assert all(text.strip() for text in MESSAGES[language].values())

    def test_lookup(self) -> None:
        assert message(MessageKey.NONE, Language.ENGLISH) == "None"
        assert message(MessageKey.NONE, Language.HINDI) == "कोई नहीं"
