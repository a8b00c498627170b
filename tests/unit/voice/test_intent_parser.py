"""Tests for voice command intent detection.

Verifies rule precedence (phrases, then keywords in intent order, then the
quantity heuristic) and the search-term / suggestion helpers.
"""

import pytest

from stockvoice.voice.models import CommandIntent
from stockvoice.voice.parser.intent_parser import (
    detect_command_intent,
    extract_search_term,
    parse_intent,
    suggest_command,
)


# =============================================================================
# Intent Detection
# =============================================================================


class TestPhraseIntents:
    """Multi-word phrases beat single keywords."""

    @pytest.mark.parametrize("text", [
        "generate bill",
        "make a bill",
        "create the bill",
        "please prepare new bill",
    ])
    def test_generate_bill(self, text: str):
        intent, confidence = parse_intent(text)
        assert intent == CommandIntent.GENERATE_BILL
        assert confidence == 0.95

    @pytest.mark.parametrize("text", [
        "remove product",
        "delete this product",
        "take out the product",
    ])
    def test_remove_product(self, text: str):
        assert detect_command_intent(text) == CommandIntent.REMOVE_PRODUCT


class TestKeywordIntents:
    @pytest.mark.parametrize("text,expected", [
        ("add 2 kg rice", CommandIntent.ADD_PRODUCT),
        ("ADD Rice", CommandIntent.ADD_PRODUCT),
        ("put sugar on shelf 3", CommandIntent.ADD_PRODUCT),
        ("stock 10 bottles of oil", CommandIntent.ADD_PRODUCT),
        ("update rice price", CommandIntent.UPDATE_PRODUCT),
        ("change the quantity of sugar", CommandIntent.UPDATE_PRODUCT),
        ("search for dal", CommandIntent.SEARCH_PRODUCT),
        ("where is the oil", CommandIntent.SEARCH_PRODUCT),
        ("find sugar", CommandIntent.SEARCH_PRODUCT),
        ("delete rice", CommandIntent.DELETE_PRODUCT),
        ("remove expired milk", CommandIntent.DELETE_PRODUCT),
        ("get rid of old bread", CommandIntent.DELETE_PRODUCT),
        ("bill", CommandIntent.CREATE_BILL),
        ("print the invoice", CommandIntent.CREATE_BILL),
        ("checkout", CommandIntent.CREATE_BILL),
    ])
    def test_keyword(self, text: str, expected: CommandIntent):
        intent, confidence = parse_intent(text)
        assert intent == expected
        assert confidence == 0.85

    @pytest.mark.parametrize("text,expected", [
        # ADD is checked before CREATE_BILL
        ("add to bill", CommandIntent.ADD_PRODUCT),
        # DELETE is checked before CREATE_BILL
        ("remove rice from bill", CommandIntent.DELETE_PRODUCT),
        # SEARCH is checked before CREATE_BILL
        ("show the bill", CommandIntent.SEARCH_PRODUCT),
    ])
    def test_declaration_order_precedence(self, text: str, expected: CommandIntent):
        assert detect_command_intent(text) == expected

    def test_keywords_match_whole_words(self):
        assert detect_command_intent("address book") == CommandIntent.UNKNOWN


class TestQuantityFallback:
    @pytest.mark.parametrize("text", [
        "2 kg rice",
        "5 bottles oil",
        "3 packets of sugar",
        "1.5 l milk",
    ])
    def test_quantity_means_add(self, text: str):
        intent, confidence = parse_intent(text)
        assert intent == CommandIntent.ADD_PRODUCT
        assert confidence == 0.6


class TestUnknown:
    @pytest.mark.parametrize("text", ["", "   ", "hello there", "rice"])
    def test_unknown(self, text: str):
        intent, confidence = parse_intent(text)
        assert intent == CommandIntent.UNKNOWN
        assert confidence == 0.0

    def test_suggestions(self):
        assert "bill" in suggest_command("what's the total")
        assert "where is" in suggest_command("which rack")
        assert suggest_command("hello").startswith("Try:")


# =============================================================================
# Search Term Extraction
# =============================================================================


class TestSearchTerm:
    @pytest.mark.parametrize("text,intent,expected", [
        ("where is the basmati rice on shelf 2", CommandIntent.SEARCH_PRODUCT, "basmati rice"),
        ("search for sugar", CommandIntent.SEARCH_PRODUCT, "sugar"),
        ("find toor dal?", CommandIntent.SEARCH_PRODUCT, "toor dal"),
        ("show me the rice", CommandIntent.SEARCH_PRODUCT, "rice"),
        ("update sugar price", CommandIntent.UPDATE_PRODUCT, "sugar price"),
        ("delete the old bread", CommandIntent.DELETE_PRODUCT, "old bread"),
    ])
    def test_extracts_target(self, text: str, intent: CommandIntent, expected: str):
        assert extract_search_term(text, intent) == expected

    def test_not_for_add(self):
        assert extract_search_term("add rice", CommandIntent.ADD_PRODUCT) is None
