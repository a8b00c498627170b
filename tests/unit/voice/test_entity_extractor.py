"""Tests for entity extraction.

Verifies the entity families (products incl. Hindi transliterations,
quantities, positions, money, dates, command verbs) and the greedy
overlap resolution.
"""

from datetime import date

import pytest

from stockvoice.voice.models import Entity, EntityKind
from stockvoice.voice.parser.entity_extractor import (
    DEFAULT_ENTITY_COLOR,
    collect_entities,
    extract_entities,
    get_entity_color,
    get_entity_spans,
    resolve_overlaps,
)


def _labels(entities: list[Entity]) -> list[EntityKind]:
    return [e.label for e in entities]


def _entity(start: int, end: int, label: EntityKind = EntityKind.PRODUCT) -> Entity:
    return Entity(text="x" * (end - start), label=label, start=start, end=end)


class TestFamilies:
    def test_full_command(self):
        entities = extract_entities("add 2 kg rice on rack 3")
        assert _labels(entities) == [
            EntityKind.COMMAND,
            EntityKind.QUANTITY,
            EntityKind.PRODUCT,
            EntityKind.POSITION,
        ]
        assert [e.text for e in entities] == ["add", "2 kg", "rice", "rack 3"]
        assert entities[3].value == "Rack 3"

    @pytest.mark.parametrize("term,expected", [
        ("chawal", "rice"),
        ("chini", "sugar"),
        ("atta", "flour"),
        ("doodh", "milk"),
        ("namak", "salt"),
        ("Basmati Rice", "rice"),
    ])
    def test_product_transliterations(self, term: str, expected: str):
        entities = extract_entities(f"2 kg {term}")
        products = [e for e in entities if e.label == EntityKind.PRODUCT]
        assert len(products) == 1
        assert products[0].value == expected

    def test_product_requires_whole_word(self):
        # "tel" is oil, but not inside "hotel"
        assert extract_entities("hotel") == []

    @pytest.mark.parametrize("text,expected", [
        ("2 kg", "2 kg"),
        ("3 packets", "3 packet"),
        ("1.5 litres", "1.5 l"),
        ("6 pcs", "6 piece"),
    ])
    def test_quantity_normalized(self, text: str, expected: str):
        entities = extract_entities(text)
        assert _labels(entities) == [EntityKind.QUANTITY]
        assert entities[0].value == expected

    @pytest.mark.parametrize("text,expected", [
        ("drawer 2", "Drawer 2"),
        ("shelf two", "Shelf 2"),
        ("aisle no 4", "Aisle 4"),
    ])
    def test_position(self, text: str, expected: str):
        entities = extract_entities(text)
        assert _labels(entities) == [EntityKind.POSITION]
        assert entities[0].value == expected

    @pytest.mark.parametrize("text,amount", [
        ("₹45", "45"),
        ("rs. 50", "50"),
        ("40 rupees", "40"),
        ("$3.50", "3.50"),
    ])
    def test_money(self, text: str, amount: str):
        entities = extract_entities(text)
        assert _labels(entities) == [EntityKind.MONEY]
        assert entities[0].value == amount

    def test_expiry_phrase_is_one_date_entity(self):
        entities = extract_entities("expiring next week")
        assert _labels(entities) == [EntityKind.DATE]
        assert entities[0].text == "expiring next week"
        assert (entities[0].start, entities[0].end) == (0, 18)
        # resolved against the current date; only the format is stable
        assert date.fromisoformat(entities[0].value)

    def test_mixed_utterance(self):
        entities = extract_entities("2 kg chini for ₹45")
        assert _labels(entities) == [EntityKind.QUANTITY, EntityKind.PRODUCT, EntityKind.MONEY]

    def test_empty_is_valid(self):
        assert extract_entities("") == []
        assert extract_entities("hello there") == []


class TestInvariants:
    @pytest.mark.parametrize("text", [
        "add 2 kg rice on rack 3 and 3 packets chini for ₹45",
        "milk expiring next week, bread best before 12/03/2026",
        "put 5 bottles of tel in aisle two",
    ])
    def test_sorted_disjoint_and_in_bounds(self, text: str):
        entities = extract_entities(text)
        for entity in entities:
            assert 0 <= entity.start < entity.end <= len(text)
            assert text[entity.start:entity.end] == entity.text
        for left, right in zip(entities, entities[1:]):
            assert left.end <= right.start

    def test_idempotent(self):
        text = "add 2 kg rice on rack 3"
        assert extract_entities(text) == extract_entities(text)

    def test_collect_keeps_overlaps(self):
        # compound expiry phrase and the bare "next week" both collected
        collected = collect_entities("expiring next week")
        assert len(collected) == 2
        assert [e.start for e in collected] == sorted(e.start for e in collected)


class TestResolveOverlaps:
    def test_longer_candidate_replaces(self):
        first, longer = _entity(0, 4), _entity(2, 10)
        assert resolve_overlaps([first, longer]) == [longer]

    def test_tie_keeps_first_seen(self):
        first, same = _entity(0, 4), _entity(2, 6)
        assert resolve_overlaps([first, same]) == [first]

    def test_disjoint_kept(self):
        a, b = _entity(0, 3), _entity(3, 6)
        assert resolve_overlaps([a, b]) == [a, b]

    def test_greedy_sweep(self):
        a, b, c = _entity(0, 4), _entity(2, 10), _entity(5, 7)
        assert resolve_overlaps([a, b, c]) == [b]

    def test_empty(self):
        assert resolve_overlaps([]) == []

    def test_spans_are_half_open(self):
        assert _entity(0, 4).overlaps(_entity(3, 6))
        assert not _entity(0, 3).overlaps(_entity(3, 6))


class TestEntityModel:
    @pytest.mark.parametrize("start,end", [(3, 3), (5, 2), (-1, 2)])
    def test_invalid_span_rejected(self, start: int, end: int):
        with pytest.raises(ValueError):
            Entity(text="x", label=EntityKind.MISC, start=start, end=end)

    def test_to_dict(self):
        entity = Entity(text="rice", label=EntityKind.PRODUCT, start=0, end=4, value="rice")
        assert entity.to_dict()["label"] == "PRODUCT"


class TestDisplayHelpers:
    def test_colors(self):
        assert get_entity_color(EntityKind.PERSON) == "#ff5e5e"
        assert get_entity_color("MONEY") == "#98fb98"
        assert get_entity_color(EntityKind.MISC) == DEFAULT_ENTITY_COLOR
        assert get_entity_color("NOPE") == "#cccccc"

    def test_spans(self):
        rice = Entity(text="rice", label=EntityKind.PRODUCT, start=4, end=8)
        assert get_entity_spans("add rice now", [rice]) == [
            ("add ", None),
            ("rice", rice),
            (" now", None),
        ]

    def test_spans_without_entities(self):
        assert get_entity_spans("hello", []) == [("hello", None)]
